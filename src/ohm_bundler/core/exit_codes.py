from __future__ import annotations

OK = 0
ERR_USAGE = 2
ERR_CONFIG = 3
ERR_VALIDATION = 4
ERR_COMPILE = 5
ERR_IO = 6
ERR_PREREQ = 7
ERR_TIMEOUT = 8
ERR_INTERNAL = 99
