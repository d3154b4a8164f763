"""Command-line entrypoint for ohm-bundler (`ohm_bundler.cli.main`)."""
