"""Standard exit codes for the vizier-tap CLI.

Exit codes follow Unix conventions; 0-7 keep their usual meaning and
8-10 cover failures specific to talking to a TAP service.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for vizier-tap commands."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    USAGE_ERROR = 2
    INPUT_ERROR = 3
    OUTPUT_ERROR = 4
    NETWORK_ERROR = 5
    TIMEOUT = 6
    CONFIG_ERROR = 7
    SERVICE_ERROR = 8
    SCHEMA_ERROR = 9
    DECODE_ERROR = 10
