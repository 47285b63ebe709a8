# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Project model capability and the shipped MSBuild-style implementation."""

from omniupgrade.project.model_msbuild import (
    PACKAGE_REFERENCE_ITEM_TYPE,
    VERSION_METADATA_NAME,
    ProjectModelMsBuild,
)
from omniupgrade.project.protocols import (
    ProtocolProjectModel,
    ProtocolProjectModelFactory,
)

__all__ = [
    "PACKAGE_REFERENCE_ITEM_TYPE",
    "VERSION_METADATA_NAME",
    "ProjectModelMsBuild",
    "ProtocolProjectModel",
    "ProtocolProjectModelFactory",
]
