# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from enum import IntEnum

CLI_NAME = "protomatter"
PACKAGE_NAME = "protomatter"

LOG_LEVELS = ["quiet", "normal", "verbose", "debug"]


class ExitCode(IntEnum):
    """Exit codes following BSD sysexits.h where one fits."""

    SUCCESS = 0
    USAGE = 64        # EX_USAGE
    DATAERR = 65      # EX_DATAERR
    SOFTWARE = 70     # EX_SOFTWARE
    CONFIG = 78       # EX_CONFIG
    INTERRUPTED = 130
