# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Upgrade engine enums.

    from omniupgrade.enums import (
        EnumLogLevel,
        EnumUpgradeErrorCode,
        EnumUpgradeRunOutcome,
        EnumUpgradeStepStatus,
    )
"""

from omniupgrade.enums.enum_log_level import EnumLogLevel
from omniupgrade.enums.enum_run_outcome import EnumUpgradeRunOutcome
from omniupgrade.enums.enum_step_status import EnumUpgradeStepStatus
from omniupgrade.enums.enum_upgrade_error_code import EnumUpgradeErrorCode

__all__ = [
    "EnumLogLevel",
    "EnumUpgradeErrorCode",
    "EnumUpgradeRunOutcome",
    "EnumUpgradeStepStatus",
]
