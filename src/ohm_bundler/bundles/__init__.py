"""Bundle generation for `.ohm` grammar files."""
from .banner import create_banner
from .extension import OHM_FILE_EXT, assert_file_extension_equals
from .generate import GenerateOptions, expand_patterns, generate_bundles
from .recipe import generate_recipe, render_recipe_module
from .typedecls import generate_types_with_writer
from .writers import DiskWriter, Plan, Writer

__all__ = [
    "OHM_FILE_EXT",
    "DiskWriter",
    "GenerateOptions",
    "Plan",
    "Writer",
    "assert_file_extension_equals",
    "create_banner",
    "expand_patterns",
    "generate_bundles",
    "generate_recipe",
    "generate_types_with_writer",
    "render_recipe_module",
]
