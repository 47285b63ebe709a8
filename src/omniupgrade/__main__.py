# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Allow ``python -m omniupgrade``."""

import sys

from omniupgrade.cli import main

sys.exit(main())
