"""
Report formatting and display for the CLI interface.

Provides functions to print scan statistics, exact duplicate groups and
near-duplicate pairs in a human-readable format.
"""

from __future__ import annotations

from ..models import DuplicateGroup, ScanStats, SimilarPair, format_size
from ..utils.formatters import format_number, format_elapsed


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def _calculate_statistics(groups: list[DuplicateGroup]) -> dict[str, int]:
    """
    Calculate statistics for duplicate groups.

    Returns:
        Dictionary with:
        - total_duplicates: Redundant copies (excludes one per group)
        - total_groups: Number of groups
        - total_waste: Bytes taken by redundant copies
    """
    return {
        'total_duplicates': sum(g.image_count - 1 for g in groups),
        'total_groups': len(groups),
        'total_waste': sum(g.potential_savings for g in groups),
    }


def print_scan_summary(stats: ScanStats) -> None:
    """Print what a scan changed in the catalog."""
    print(f"\nDirectory entries: {format_number(stats.total_entries)}, "
          f"images: {format_number(stats.images)}")
    print(f"Added: {format_number(stats.added)} | "
          f"Fingerprints backfilled: {format_number(stats.backfilled)} | "
          f"Removed: {format_number(stats.removed)}")
    if stats.errors:
        print(f"Unreadable files skipped: {format_number(stats.errors)}")
    print(f"Named by content hash: {format_number(stats.equal_hash)}")
    print(f"Catalog {'saved' if stats.saved else 'unchanged'} "
          f"(scan took {format_elapsed(stats.elapsed_seconds)})")


def print_duplicate_report(
    groups: list[DuplicateGroup],
    similar_pairs: list[SimilarPair] | None = None,
) -> None:
    """
    Print a report of exact duplicates and, if given, near-duplicate pairs.

    Notes:
        - The first record of each group is the one registered first and
          is marked [FIRST]; later copies are marked [DUPE]
    """
    print("\n" + "=" * 70)
    print("DUPLICATE IMAGE REPORT")
    print("=" * 70)

    stats = _calculate_statistics(groups)
    print(f"\nExact duplicates found: {stats['total_duplicates']} files in "
          f"{stats['total_groups']} groups")
    if similar_pairs is not None:
        print(f"Similar pairs found: {len(similar_pairs)}")

    if groups:
        _print_section_header("EXACT DUPLICATES (identical files)")
        for i, group in enumerate(groups, 1):
            print(f"\nGroup {i} ({group.image_count} files) {group.content_hash}:")
            for j, record in enumerate(group.records):
                marker = "  [FIRST]" if j == 0 else "  [DUPE] "
                print(f"{marker} {record.name} | {format_size(record.size)}")

    if similar_pairs:
        _print_section_header("SIMILAR IMAGES (perceptual distance)")
        for pair in similar_pairs:
            print(f"  SIM {pair.distance:2d}: {pair.first.name}, {pair.second.name}")

    print("\n" + "=" * 70)
    print(f"Total space recoverable: {format_size(stats['total_waste'])}")
    print("=" * 70)


__all__ = ['print_scan_summary', 'print_duplicate_report']
