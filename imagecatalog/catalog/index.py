"""
Content-hash index for exact duplicate detection.

Each content hash maps to a bucket that is either a single owner or a group
of records. A bucket is promoted to a group only on the first collision, so
the common non-duplicate case never allocates a list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..models import ImageRecord


@dataclass
class Unique:
    """Bucket holding the only record with a given hash."""
    record: ImageRecord


@dataclass
class Group:
    """Bucket holding two or more records sharing a hash."""
    records: list = field(default_factory=list)


Bucket = Union[Unique, Group]


class DuplicateIndex:
    """
    Mapping of content hash to the records that share it.

    Usage:
        index = DuplicateIndex()
        index.add(record)
        for content_hash, records in index.groups().items():
            ...
    """

    def __init__(self):
        self._buckets: dict[str, Bucket] = {}
        self._group_count = 0

    def add(self, record: ImageRecord) -> None:
        """Index a record, promoting its bucket to a group on collision."""
        bucket = self._buckets.get(record.content_hash)
        if bucket is None:
            self._buckets[record.content_hash] = Unique(record)
        elif isinstance(bucket, Unique):
            # First collision: seed the group with the prior owner
            self._buckets[record.content_hash] = Group([bucket.record, record])
            self._group_count += 1
        else:
            bucket.records.append(record)

    def remove(self, record: ImageRecord) -> bool:
        """
        Remove a record from the index.

        A group left with one member is demoted back to a unique bucket.

        Returns:
            True if the record was indexed
        """
        bucket = self._buckets.get(record.content_hash)
        if bucket is None:
            return False

        if isinstance(bucket, Unique):
            if bucket.record is not record:
                return False
            del self._buckets[record.content_hash]
            return True

        for i, member in enumerate(bucket.records):
            if member is record:
                del bucket.records[i]
                break
        else:
            return False

        if len(bucket.records) == 1:
            self._buckets[record.content_hash] = Unique(bucket.records[0])
            self._group_count -= 1
        return True

    def clear(self) -> None:
        self._buckets.clear()
        self._group_count = 0

    def owner(self, content_hash: str) -> Optional[ImageRecord]:
        """First record registered with this hash, or None."""
        bucket = self._buckets.get(content_hash)
        if bucket is None:
            return None
        if isinstance(bucket, Unique):
            return bucket.record
        return bucket.records[0]

    def groups(self) -> dict[str, list[ImageRecord]]:
        """Hashes shared by two or more records, with their records."""
        return {
            content_hash: list(bucket.records)
            for content_hash, bucket in self._buckets.items()
            if isinstance(bucket, Group)
        }

    @property
    def group_count(self) -> int:
        """Number of duplicate groups."""
        return self._group_count

    def __contains__(self, content_hash: str) -> bool:
        return content_hash in self._buckets

    def __len__(self) -> int:
        """Number of distinct content hashes."""
        return len(self._buckets)


__all__ = ['Unique', 'Group', 'Bucket', 'DuplicateIndex']
