# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Reference rewriter: applies the reference map to declared references."""

from omniupgrade.rewriter.rewriter import apply_plan_to_references, rewrite

__all__ = ["apply_plan_to_references", "rewrite"]
