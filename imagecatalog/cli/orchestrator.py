"""
CLI workflow orchestration for Image Catalog.

Provides the CLIOrchestrator class that coordinates the CLI workflow from
argument parsing through scanning and reporting.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..catalog import CatalogStore
from ..exceptions import CatalogError
from ..user_config import get_user_config
from ..utils import validators
from .arg_parser import parse_arguments
from .reporting import print_duplicate_report, print_scan_summary


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI scanning workflow.

    Manages the lifecycle from argument parsing through reconciliation,
    duplicate detection and reporting.
    """

    def __init__(self, argv: Optional[list[str]] = None):
        """
        Initialize the orchestrator.

        Args:
            argv: Argument list (default: sys.argv)
        """
        self.argv = argv
        self.logger = None
        self.args = None
        self.store: Optional[CatalogStore] = None
        self.scan_stats = None
        self.groups = []
        self.similar_pairs = None

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error)

        Workflow phases:
        1. Setup & argument parsing
        2. Validation
        3. Scan (reconcile catalog with the directory)
        4. Detection
        5. Reporting
        """
        # Phase 1: Setup
        self._setup_phase()

        # Phase 2: Validation
        exit_code = self._validate_phase()
        if exit_code != 0:
            return exit_code

        # Phase 3: Scanning
        exit_code = self._scan_phase()
        if exit_code != 0:
            return exit_code

        # Phase 4: Detection
        exit_code = self._detect_phase()
        if exit_code != 0:
            return exit_code

        # Phase 5: Reporting
        self._report_phase()
        return 0

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)
        if self.args.directory is None:
            self.args.directory = get_user_config().media_dir

    def _validate_phase(self) -> int:
        """
        Phase 2: Validate arguments.

        Returns:
            0 for success, 1 for validation error
        """
        is_valid, error = validators.validate_directory(str(self.args.directory))
        if not is_valid:
            self.logger.error(error)
            return 1

        if self.args.similar:
            is_valid, error = validators.validate_threshold(self.args.threshold)
            if not is_valid:
                self.logger.error(error)
                return 1
            if self.args.limit < 2:
                self.logger.error("--limit must be at least 2")
                return 1

        if self.args.workers < 1:
            self.logger.error("--workers must be at least 1")
            return 1

        return 0

    def _scan_phase(self) -> int:
        """
        Phase 3: Reconcile the catalog with the directory.

        Returns:
            0 for success, 1 if the scan failed
        """
        self.store = CatalogStore(
            self.args.directory,
            max_workers=self.args.workers,
            show_progress=not self.args.no_progress,
        )
        try:
            self.scan_stats = self.store.scan()
        except CatalogError as e:
            self.logger.error(f"Scan failed: {e}")
            return 1
        return 0

    def _detect_phase(self) -> int:
        """
        Phase 4: Collect exact duplicates and, if requested, similar pairs.

        Returns:
            0 for success, 1 if fingerprints are inconsistent
        """
        self.groups = self.store.duplicate_groups()
        self.logger.info(f"Found {len(self.groups):,} exact duplicate groups")

        if self.args.similar:
            self.logger.info(f"Finding similar images (threshold={self.args.threshold})...")
            try:
                self.similar_pairs = self.store.similar_pairs(
                    threshold=self.args.threshold,
                    limit=self.args.limit,
                )
            except CatalogError as e:
                self.logger.error(f"Similarity sweep failed: {e}")
                return 1
            self.logger.info(f"Found {len(self.similar_pairs):,} similar pairs")
        return 0

    def _report_phase(self) -> None:
        """Phase 5: Print scan summary and duplicate report."""
        print_scan_summary(self.scan_stats)
        print_duplicate_report(self.groups, self.similar_pairs)


__all__ = ['CLIOrchestrator', 'setup_logging']
