"""
sysfetch System Fetcher

Main entry point: detects the configured modules, aggregates their results
and prints them next to the distribution logo.

Features:
    - Concurrent or sequential module detection
    - Partial results when individual modules fail
    - Distribution logo auto-detection with generic fallback
    - Values-only and no-logo display modes
    - YAML settings file with command-line overrides

Usage:
    sysfetch [--modules os,kernel,memory] [--values-only] [--no-parallel]
"""

import sys
import argparse
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from . import __version__
from .aggregator import AggregateResult, DisplayRow, ModuleFailure, aggregate
from .config import Config
from .detectors import DetectionOutcome, ModuleKind, OsInfo
from .errors import ConfigurationError
from .formatter import OutputFormatter
from .logo import LogoDefinition, custom_logo, logo_for, lookup_logo
from .platform_probes import SystemContext
from .registry import available_modules, create_detector
from .scheduler import ModuleScheduler
from .utils import load_settings, setup_logging

# Module logger
logger = logging.getLogger("sysfetch.fetcher")

EXIT_OK = 0
EXIT_NO_OUTPUT = 1
EXIT_CONFIG_ERROR = 2


@dataclass
class FetchReport:
    """Everything one run produced."""
    outcomes: List[DetectionOutcome]
    rows: List[DisplayRow]
    failures: List[ModuleFailure]
    lines: List[Text] = field(default_factory=list)

    def plain_lines(self) -> List[str]:
        return [line.plain.rstrip() for line in self.lines]


class SystemFetcher:
    """
    Orchestrates one report.

    Runs detection through the scheduler, aggregates outcomes into rows,
    selects a logo and formats the final lines.
    """

    def __init__(self, config: Config, context: Optional[SystemContext] = None):
        """
        Initialize the fetcher.

        Args:
            config: Immutable run configuration
            context: System access for detectors; the real system if omitted
        """
        self.config = config
        self._context = context
        self._scheduler = ModuleScheduler(
            parallel=config.parallel,
            max_workers=config.max_workers,
            context=context,
        )

    def detect(self) -> List[DetectionOutcome]:
        """Run every configured detector, in configured order."""
        return self._scheduler.run(self.config.modules)

    def run(self) -> FetchReport:
        """Detect, aggregate and format."""
        outcomes = self.detect()
        result: AggregateResult = aggregate(outcomes)

        formatter = OutputFormatter(
            values_only=self.config.values_only,
            logo=self.select_logo(outcomes),
        )
        return FetchReport(
            outcomes=outcomes,
            rows=result.rows,
            failures=result.failures,
            lines=formatter.format(result.rows),
        )

    def select_logo(self, outcomes: Sequence[DetectionOutcome]) -> Optional[LogoDefinition]:
        """
        Choose the logo for this run.

        Priority: disabled, custom art, forced name, then the detected OS.
        When the OS module was not requested it is detected here for the
        logo alone.
        """
        if not self.config.logo_enabled:
            return None
        if self.config.custom_logo:
            return custom_logo(self.config.custom_logo)
        if self.config.logo_name:
            return lookup_logo(self.config.logo_name)
        return logo_for(self._os_identity(outcomes))

    def _os_identity(self, outcomes: Sequence[DetectionOutcome]) -> Optional[OsInfo]:
        for outcome in outcomes:
            if outcome.kind is ModuleKind.OS:
                return outcome.info if outcome.is_present else None

        outcome = create_detector(ModuleKind.OS, self._context).detect()
        if not outcome.is_present:
            logger.debug(f"OS identity unavailable for logo: {outcome.error}")
            return None
        return outcome.info


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysfetch",
        description="sysfetch - System information at a glance",
    )
    parser.add_argument(
        "-m", "--modules",
        type=str,
        default=None,
        help=(
            "Comma-separated, ordered list of modules to display "
            f"(default: {','.join(kind.identifier for kind in available_modules())})"
        ),
    )
    parser.add_argument(
        "--values-only",
        action="store_true",
        help="Show only module values without labels",
    )
    parser.add_argument(
        "--no-parallel",
        action="store_true",
        help="Detect modules one at a time",
    )
    parser.add_argument(
        "--list-modules",
        action="store_true",
        help="List all available modules and exit",
    )
    parser.add_argument(
        "--no-logo",
        action="store_true",
        help="Do not print the distribution logo",
    )
    parser.add_argument(
        "--logo",
        type=str,
        default=None,
        help="Use the named built-in logo instead of the detected one",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to settings file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def list_modules() -> None:
    print("Available modules:")
    for kind in available_modules():
        print(f"  - {kind.identifier} ({kind.label})")


def build_config(args: argparse.Namespace, settings: dict) -> Config:
    """
    Build the run configuration: settings first, then command-line flags.

    Raises:
        ConfigurationError: On unknown modules or invalid settings
    """
    builder = Config.builder().from_settings(settings)
    if args.modules is not None:
        builder.with_module_names(args.modules)
    if args.no_parallel:
        builder.parallel(False)
    if args.values_only:
        builder.values_only(True)
    if args.logo:
        builder.with_logo(True).with_logo_name(args.logo)
    # --no-logo wins over --logo and the settings file
    if args.no_logo:
        builder.without_logo()
    if args.no_color:
        builder.color(False)
    return builder.build()


def print_report(report: FetchReport, color: bool = True) -> None:
    if not color:
        for line in report.plain_lines():
            print(line)
        return

    console = Console(highlight=False, soft_wrap=True)
    for line in report.lines:
        console.print(line)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for sysfetch."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_modules:
        list_modules()
        return EXIT_OK

    try:
        settings = load_settings(args.config)
        config = build_config(args, settings)
        if args.verbose:
            settings["debug"] = {**(settings.get("debug") or {}), "verbose": True}
        setup_logging(settings)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    report = SystemFetcher(config).run()

    for failure in report.failures:
        print(f"Warning: {failure.describe()}", file=sys.stderr)

    if not report.rows:
        print("Error: No module produced any output", file=sys.stderr)
        return EXIT_NO_OUTPUT

    print_report(report, color=config.color)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
