# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Command line entry point.

Usage:
    omniupgrade App/App.csproj
    omniupgrade App/App.csproj --map reference_map.yaml --dry-run
    omniupgrade App/App.csproj --interactive --skip backup-project

Exit codes:
    0   every step complete or skipped
    1   at least one step failed
    2   steps left blocked or incomplete (dry run, operator exit)
    3   fatal configuration error (step graph, settings, reference map)
    130 cancelled
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from pydantic_settings import SettingsError

from omniupgrade.cancellation import CancellationToken
from omniupgrade.config import UpgradeSettings
from omniupgrade.enums import EnumLogLevel, EnumUpgradeRunOutcome
from omniupgrade.errors import ConfigMalformedError, UpgradeError
from omniupgrade.models import ModelUpgradeRunResult
from omniupgrade.orchestrator import (
    ApplyAllCommandSelector,
    ConsoleCommandSelector,
    ProtocolCommandSelector,
    UpgradeOrchestrator,
)
from omniupgrade.steps import build_default_steps

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BLOCKED = 2
EXIT_FATAL = 3
EXIT_CANCELLED = 130

_OUTCOME_EXIT_CODES = {
    EnumUpgradeRunOutcome.ALL_COMPLETE: EXIT_OK,
    EnumUpgradeRunOutcome.SOME_FAILED: EXIT_FAILED,
    EnumUpgradeRunOutcome.BLOCKED: EXIT_BLOCKED,
    EnumUpgradeRunOutcome.CANCELLED: EXIT_CANCELLED,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omniupgrade",
        description="Upgrade a project's package references step by step",
    )
    parser.add_argument("project", type=Path, help="Project file to upgrade")
    parser.add_argument(
        "--map",
        dest="reference_map_path",
        type=Path,
        default=None,
        help="Reference map file (YAML or JSON)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (YAML); UPGRADE_* environment variables apply otherwise",
    )
    parser.add_argument(
        "--skip",
        dest="skip_steps",
        action="append",
        default=[],
        metavar="STEP_ID",
        help="Skip a step by id (repeatable)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Inspect the project without changing it",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Ask before applying each step",
    )
    parser.add_argument(
        "--ignore-unsupported",
        action="store_true",
        help="Continue even if the project uses unsupported features",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=[level.value for level in EnumLogLevel],
        default=None,
        help="Logging level (default: INFO or UPGRADE_LOG_LEVEL)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> UpgradeSettings:
    """Build settings from flags, an optional settings file and the environment.

    Raises:
        ConfigNotFoundError: If ``--config`` names a missing file.
        ConfigMalformedError: If the settings are invalid.
    """
    overrides: dict[str, Any] = {}
    if args.reference_map_path is not None:
        overrides["reference_map_path"] = args.reference_map_path
    if args.skip_steps:
        overrides["skip_steps"] = tuple(args.skip_steps)
    if args.ignore_unsupported:
        overrides["ignore_unsupported_features"] = True
    if args.log_level is not None:
        overrides["log_level"] = args.log_level

    if args.config is not None:
        return UpgradeSettings.from_yaml(args.config, **overrides)
    try:
        return UpgradeSettings(**overrides)
    except (ValidationError, SettingsError) as exc:
        raise ConfigMalformedError("<environment>", str(exc)) from exc


def print_result(result: ModelUpgradeRunResult) -> None:
    for report in result.steps:
        print(f"[{report.status.value:>10}] {report.title}: {report.details}")
    print(f"Upgrade {result.outcome.value}")


async def run_upgrade(
    project: Path,
    settings: UpgradeSettings,
    *,
    dry_run: bool = False,
    command_selector: ProtocolCommandSelector | None = None,
) -> ModelUpgradeRunResult:
    """Run the default steps with SIGINT/SIGTERM wired to cancellation."""
    token = CancellationToken()
    loop = asyncio.get_running_loop()

    def handle_signal(sig_name: str) -> None:
        logger.info("Received %s, cancelling upgrade", sig_name)
        token.cancel(f"Upgrade cancelled by {sig_name}")

    installed: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handle_signal, sig.name)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handler for %s unavailable", sig.name)

    orchestrator = UpgradeOrchestrator(
        build_default_steps(settings),
        settings=settings,
        command_selector=command_selector or ApplyAllCommandSelector(),
    )
    try:
        return await orchestrator.run(project, token=token, dry_run=dry_run)
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the upgrade and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except UpgradeError as exc:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        logger.error("[%s] %s", exc.error_code.value, exc.message)
        return EXIT_FATAL

    logging.basicConfig(
        level=settings.log_level.to_logging_level(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    selector = ConsoleCommandSelector() if args.interactive else None
    try:
        result = asyncio.run(
            run_upgrade(
                args.project,
                settings,
                dry_run=args.dry_run,
                command_selector=selector,
            )
        )
    except UpgradeError as exc:
        logger.error("[%s] %s", exc.error_code.value, exc.message)
        return EXIT_FATAL
    except KeyboardInterrupt:
        logger.warning("Upgrade interrupted")
        return EXIT_CANCELLED

    print_result(result)
    return _OUTCOME_EXIT_CODES[result.outcome]


if __name__ == "__main__":
    sys.exit(main())
