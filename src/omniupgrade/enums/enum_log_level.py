# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Log level enum for CLI and settings."""

import logging
from enum import StrEnum


class EnumLogLevel(StrEnum):
    """Log level enumeration for runtime configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Return the numeric ``logging`` level for this value."""
        return logging.getLevelName(self.value)


__all__ = ["EnumLogLevel"]
