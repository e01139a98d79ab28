"""Command-line entry point: ``funcapp-provision``.

Loads settings (environment, seeded from a ``.env`` file), runs the
provisioning sequence and exits ``0`` on success or ``1`` after logging a
single fatal message for the first failure.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from funcapp_provisioner import __version__
from funcapp_provisioner.core.config import ProvisionConfig, load_settings_file
from funcapp_provisioner.core.exceptions import ProvisioningError
from funcapp_provisioner.orchestrators.provision import new_report, run_provisioning

if TYPE_CHECKING:
    from collections.abc import Sequence

    from funcapp_provisioner.models.report import ProvisioningReport

logger = logging.getLogger("funcapp_provisioner.cli")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="funcapp-provision",
        description=(
            "Provision a resource group and storage account, scaffold and publish "
            "an Azure Function App, then delete the resource group unless told to keep it."
        ),
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Settings file to load (default: nearest .env)",
    )
    parser.add_argument(
        "--project-dir",
        default=None,
        help="Local Functions project directory (overrides FUNCTION_PROJECT_DIR)",
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep the resource group after publishing (same as KEEP_RESOURCE=1)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON run report to this path",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(args: argparse.Namespace) -> ProvisionConfig:
    """Load settings and apply command-line overrides.

    Raises:
        ConfigValidationError: If required settings are missing.
    """
    load_settings_file(args.env_file)
    config = ProvisionConfig.from_env()

    overrides: dict[str, str] = {}
    if args.project_dir:
        overrides["project_dir"] = args.project_dir
    if args.keep:
        overrides["keep_resource"] = "1"
    return replace(config, **overrides) if overrides else config


def write_report(report: ProvisioningReport, path: Path) -> None:
    """Write *report* as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.to_json(), encoding="utf-8")
    logger.info("Run report written | path=%s", path)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the provisioning workflow and return the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    report: ProvisioningReport | None = None
    exit_code = 0
    try:
        config = load_config(args)
        report = new_report(config)
        run_provisioning(config, report=report)
    except ProvisioningError as exc:
        logger.critical("Provisioning failed | error=%s", exc.to_error_dict())
        exit_code = 1

    if report is not None and args.report is not None:
        try:
            write_report(report, args.report)
        except OSError as exc:
            logger.critical("Failed to write run report | path=%s | error=%s", args.report, exc)
            return 1

    if exit_code == 0:
        logger.info("Provisioning completed successfully | run_id=%s", report.run_id)
    return exit_code
