"""
Snapshot persistence for the catalog.

The snapshot is a JSON document stored in the catalogued directory:

    {"imageInfo": [{"name": ..., "hash": ..., "phash": ..., "size": ...}]}

Fingerprints are bit-strings in memory and hex in the snapshot. Writes go to
a temporary file in the same directory which is then renamed over the
snapshot, so readers never observe a half-written catalog.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from ..config import FINGERPRINT_BITS
from ..exceptions import CatalogIOError, ConfigLoadError
from ..models import ImageRecord
from ..scanner.hashing import bitstring_to_hex, hex_to_bitstring

# Top-level key holding the list of entries
SNAPSHOT_KEY = 'imageInfo'

logger = logging.getLogger(__name__)


def entry_to_record(entry: dict) -> ImageRecord:
    """
    Convert a snapshot entry to an ImageRecord.

    Args:
        entry: Dict with name, hash, optional phash (hex) and size

    Returns:
        ImageRecord with the fingerprint decoded to a bit-string. A
        fingerprint of the wrong width is dropped so the next scan
        recomputes it.

    Raises:
        ConfigLoadError: If a required field is missing or malformed
    """
    try:
        name = entry['name']
        content_hash = entry['hash']
        phash = entry.get('phash')
        fingerprint = hex_to_bitstring(phash) if phash else None
        size = int(entry.get('size', 0))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigLoadError(f"Malformed catalog entry {entry!r}: {e}") from e

    if not isinstance(name, str) or not isinstance(content_hash, str):
        raise ConfigLoadError(f"Malformed catalog entry {entry!r}")

    if fingerprint is not None and len(fingerprint) != FINGERPRINT_BITS:
        logger.warning(
            f"Dropping {len(fingerprint)}-bit fingerprint of {name}, "
            f"expected {FINGERPRINT_BITS} bits"
        )
        fingerprint = None

    return ImageRecord(
        name=name,
        content_hash=content_hash,
        fingerprint=fingerprint,
        size=size,
    )


def record_to_entry(record: ImageRecord) -> dict:
    """Convert an ImageRecord to its snapshot entry."""
    entry = {
        'name': record.name,
        'hash': record.content_hash,
    }
    if record.fingerprint:
        entry['phash'] = bitstring_to_hex(record.fingerprint)
    entry['size'] = record.size
    return entry


def read_snapshot(path: str | Path) -> list[ImageRecord]:
    """
    Read all records from a snapshot file.

    Raises:
        ConfigLoadError: If the file is missing, unreadable or malformed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigLoadError(f"Cannot read catalog {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get(SNAPSHOT_KEY), list):
        raise ConfigLoadError(f"Catalog {path} has no '{SNAPSHOT_KEY}' list")

    return [entry_to_record(entry) for entry in data[SNAPSHOT_KEY]]


def write_snapshot(path: str | Path, records: Iterable[ImageRecord]) -> int:
    """
    Atomically write records to a snapshot file.

    Args:
        path: Snapshot file path
        records: Records to persist, in order

    Returns:
        Number of records written

    Raises:
        CatalogIOError: If the file cannot be written; the previous snapshot
            is left untouched
    """
    path = Path(path)
    entries = [record_to_entry(r) for r in records]
    document = json.dumps({SNAPSHOT_KEY: entries}, indent=2)

    write_atomic(path, document.encode('utf-8'))
    return len(entries)


def write_atomic(path: str | Path, data: bytes) -> None:
    """
    Write bytes to ``path`` via a temporary file and rename.

    Raises:
        CatalogIOError: If writing or renaming fails
    """
    path = Path(path)
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix='.tmp'
        )
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise CatalogIOError(f"Cannot write {path}: {e}") from e


__all__ = [
    'SNAPSHOT_KEY',
    'entry_to_record',
    'record_to_entry',
    'read_snapshot',
    'write_snapshot',
    'write_atomic',
]
