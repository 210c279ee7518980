"""
Data models for Image Catalog.

Contains dataclasses for catalog records, duplicate groups, near-duplicate
pairs and scan statistics.
"""

from dataclasses import dataclass, field
from typing import Optional


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


@dataclass
class ImageRecord:
    """
    One known image file in a catalogued directory.

    Attributes:
        name: File name including extension, unique within the directory
        content_hash: Hex digest of the file bytes (exact-duplicate key)
        fingerprint: 64-bit perceptual hash as a '0'/'1' string, or None
            if it has not been computed yet
        size: File size in bytes
    """
    name: str
    content_hash: str
    fingerprint: Optional[str] = None
    size: int = 0

    @property
    def has_fingerprint(self) -> bool:
        """True if a perceptual fingerprint is attached."""
        return bool(self.fingerprint)

    @property
    def base_name(self) -> str:
        """File name up to the first dot."""
        return self.name.split('.')[0]

    @property
    def size_formatted(self) -> str:
        """Return human-readable file size."""
        return format_size(self.size)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses (fingerprint as hex)."""
        from .scanner.hashing import bitstring_to_hex

        return {
            'name': self.name,
            'content_hash': self.content_hash,
            'fingerprint': bitstring_to_hex(self.fingerprint) if self.fingerprint else None,
            'size': self.size,
            'size_formatted': self.size_formatted,
        }


@dataclass
class DuplicateGroup:
    """
    Records sharing one content hash.

    Attributes:
        content_hash: The shared content hash
        records: ImageRecords with that hash (always 2 or more)
    """
    content_hash: str
    records: list = field(default_factory=list)

    @property
    def image_count(self) -> int:
        """Number of records in this group."""
        return len(self.records)

    @property
    def potential_savings(self) -> int:
        """Bytes that could be saved by keeping a single copy."""
        if len(self.records) > 1:
            return sum(r.size for r in self.records[1:])
        return 0

    @property
    def potential_savings_formatted(self) -> str:
        """Human-readable potential savings."""
        return format_size(self.potential_savings)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'content_hash': self.content_hash,
            'image_count': self.image_count,
            'names': [r.name for r in self.records],
            'potential_savings': self.potential_savings,
            'potential_savings_formatted': self.potential_savings_formatted,
        }


@dataclass
class SimilarPair:
    """Two fingerprinted records whose Hamming distance is below a threshold."""
    first: ImageRecord
    second: ImageRecord
    distance: int

    def to_dict(self) -> dict:
        return {
            'first': self.first.name,
            'second': self.second.name,
            'distance': self.distance,
        }


@dataclass
class ScanStats:
    """Statistics collected while reconciling a directory."""
    total_entries: int = 0
    images: int = 0
    added: int = 0
    backfilled: int = 0
    removed: int = 0
    equal_hash: int = 0
    errors: int = 0
    changes: int = 0
    saved: bool = False
    duplicate_groups: int = 0
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict:
        return {
            'total_entries': self.total_entries,
            'images': self.images,
            'added': self.added,
            'backfilled': self.backfilled,
            'removed': self.removed,
            'equal_hash': self.equal_hash,
            'errors': self.errors,
            'changes': self.changes,
            'saved': self.saved,
            'duplicate_groups': self.duplicate_groups,
            'elapsed_seconds': round(self.elapsed_seconds, 3),
        }
