# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Readiness checks: verify a project can be upgraded before mutating it."""

from omniupgrade.readiness.checker import ReadinessChecker
from omniupgrade.readiness.checks import (
    CENTRAL_PACKAGE_MANAGEMENT_FILE,
    CheckCentralPackageManagement,
    CheckProjectFileExists,
    CheckProjectWellFormed,
    CheckReferenceMapAvailable,
)
from omniupgrade.readiness.protocols import ProtocolReadinessCheck

__all__ = [
    "CENTRAL_PACKAGE_MANAGEMENT_FILE",
    "CheckCentralPackageManagement",
    "CheckProjectFileExists",
    "CheckProjectWellFormed",
    "CheckReferenceMapAvailable",
    "ProtocolReadinessCheck",
    "ReadinessChecker",
]
