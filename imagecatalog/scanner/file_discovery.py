"""
File discovery module for the scanner package.

Enumerates the image files directly inside a catalogued directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..config import IMAGE_EXTENSIONS


@dataclass
class DirectoryListing:
    """Image file names found in a directory plus the raw entry count."""
    images: list[str] = field(default_factory=list)
    total_entries: int = 0


def is_image_name(name: str) -> bool:
    """Return True if the name carries a recognised image extension."""
    return os.path.splitext(name)[1].lower() in IMAGE_EXTENSIONS


def find_image_files(root_path: str | Path) -> DirectoryListing:
    """
    Find all image files directly inside the given directory.

    Args:
        root_path: Directory to list

    Returns:
        DirectoryListing with image file names (no path component) sorted
        by name, and the number of directory entries visited

    Notes:
        - Not recursive: the catalog is keyed by bare file name
        - Non-files and unknown extensions are skipped silently
    """
    listing = DirectoryListing()

    with os.scandir(root_path) as entries:
        for entry in entries:
            listing.total_entries += 1
            if entry.is_file() and is_image_name(entry.name):
                listing.images.append(entry.name)

    listing.images.sort()
    return listing


__all__ = ['DirectoryListing', 'find_image_files', 'is_image_name']
