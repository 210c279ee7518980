"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
catalog command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..user_config import get_user_config


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance

    Notes:
        - Threshold, limit and worker defaults come from the user
          configuration (environment or config.json)
    """
    config = get_user_config()
    threshold = config.similarity_threshold
    limit = config.similarity_sample_limit
    workers = config.default_workers

    parser = argparse.ArgumentParser(
        description='Catalog a directory of images and report duplicates',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /path/to/downloads
      Reconcile the catalog (info.json) and report exact duplicates

  %(prog)s /path/to/downloads --similar --threshold 5
      Also report visually similar pairs below distance 5

  %(prog)s
      Scan the media directory from the user configuration
        """
    )

    # Positional argument
    parser.add_argument(
        'directory',
        type=Path,
        nargs='?',
        default=None,
        help='Directory to catalog (default: media_dir from user config)'
    )

    # Similarity sweep
    parser.add_argument(
        '-s', '--similar',
        action='store_true',
        help='Report near-duplicate pairs across the catalog'
    )

    parser.add_argument(
        '-t', '--threshold',
        type=int,
        default=threshold,
        help=f'Report pairs with distance below this (0-64). Default: {threshold}'
    )

    parser.add_argument(
        '--limit',
        type=int,
        default=limit,
        help=f'Compare at most this many images. Default: {limit}'
    )

    # Performance options
    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=workers,
        help=f'Number of parallel workers. Default: {workers}'
    )

    # Output options
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/downloads', '--threshold', '3'])
        >>> args.directory
        PosixPath('/path/to/downloads')
        >>> args.threshold
        3
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
