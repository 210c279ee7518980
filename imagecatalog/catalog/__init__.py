"""
Catalog package for Image Catalog.

Maintains the authoritative record set of a media directory:
- Incremental reconciliation against the filesystem
- Exact duplicate index keyed by content hash
- Atomic JSON snapshot persistence (info.json)
- Nearest-neighbour fingerprint distance queries

Public API:
- CatalogStore: Catalog of one directory
- DuplicateIndex: Content-hash index with lazy group promotion
- read_snapshot / write_snapshot: Snapshot file I/O
- get_store(): Shared store per directory
- reset_stores(): Drop shared stores (testing)
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from .index import DuplicateIndex, Unique, Group
from .persistence import read_snapshot, write_snapshot, SNAPSHOT_KEY
from .store import CatalogStore


# One store per directory: a directory has a single logical owner
_stores: dict[str, CatalogStore] = {}
_stores_lock = threading.Lock()


def get_store(directory: str | Path, **kwargs) -> CatalogStore:
    """
    Get or create the shared store for a directory (thread-safe).

    Args:
        directory: Media directory
        **kwargs: Passed to CatalogStore when it is created

    Example:
        store = get_store('/path/to/media')
        store.scan()
    """
    key = os.path.realpath(directory)
    with _stores_lock:
        store = _stores.get(key)
        if store is None:
            store = CatalogStore(directory, **kwargs)
            _stores[key] = store
    return store


def reset_stores():
    """
    Forget all shared stores (mainly for testing).

    Example:
        reset_stores()  # Clear registry for next test
    """
    with _stores_lock:
        _stores.clear()


__all__ = [
    'CatalogStore',
    'DuplicateIndex',
    'Unique',
    'Group',
    'read_snapshot',
    'write_snapshot',
    'SNAPSHOT_KEY',
    'get_store',
    'reset_stores',
]
