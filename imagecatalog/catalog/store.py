"""
CatalogStore: the authoritative catalog of one media directory.

Keeps the name-keyed record map and the content-hash index consistent with
the filesystem, persists them to the directory's snapshot file, and answers
duplicate and similarity queries.

Thread safety:
- One scan at a time per store (scan lock)
- Register, prune, save and min_distance run under one exclusive lock;
  file reads and hashing during a scan happen outside it
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Generator, Optional

from ..config import (
    DEFAULT_WORKERS,
    FINGERPRINT_BITS,
    INFO_NAME,
    NO_MATCH_DISTANCE,
    PROGRESS_INTERVAL,
    SIMILARITY_SAMPLE_LIMIT,
    SIMILARITY_THRESHOLD,
)
from ..exceptions import (
    CatalogIOError,
    ConfigLoadError,
    DecodeError,
    InvalidFingerprintError,
    InvalidImageNameError,
    WidthMismatchError,
)
from ..models import DuplicateGroup, ImageRecord, ScanStats, SimilarPair
from ..scanner import (
    content_hash,
    digest_files_parallel,
    find_image_files,
    find_similar_pairs,
    hamming_distance,
    perceptual_fingerprint,
)
from ..utils.validators import validate_image_name
from .index import DuplicateIndex
from .persistence import read_snapshot, write_atomic, write_snapshot


logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Catalog of the image files in one directory.

    Usage:
        store = CatalogStore('/path/to/media')
        stats = store.scan()

        distance = store.min_distance(fingerprint)
        store.add_image('cat.jpg', data, fingerprint)

        store.flush()  # before exit
    """

    def __init__(
        self,
        directory: str | Path,
        max_workers: int = DEFAULT_WORKERS,
        show_progress: bool = False,
    ):
        """
        Initialize an empty catalog for a directory.

        Args:
            directory: Directory holding the images and the snapshot file
            max_workers: Parallel workers used to hash files during a scan
            show_progress: Whether to show tqdm progress bars during a scan
        """
        self.directory = Path(directory)
        self.info_path = self.directory / INFO_NAME
        self.max_workers = max_workers
        self.show_progress = show_progress

        # Unsaved modifications since the last successful save
        self.changes = 0
        # Records whose content hash equals their base name (last scan)
        self.equal_hash = 0

        self._records: dict[str, ImageRecord] = {}
        self._index = DuplicateIndex()
        self._loaded = False

        self._lock = threading.RLock()
        self._scan_lock = threading.Lock()

    @contextmanager
    def exclusive(self) -> Generator[None, None, None]:
        """
        Context manager granting exclusive access to the record set.

        Example:
            with store.exclusive():
                names = [r.name for r in store.records()]
        """
        with self._lock:
            yield

    # ------------------------------------------------------------------
    # Loading and registration
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """
        Replace the in-memory catalog with the persisted snapshot.

        A missing or corrupt snapshot is not an error: the catalog starts
        empty and the next save writes a fresh snapshot.

        Returns:
            True if a snapshot was loaded
        """
        try:
            records = read_snapshot(self.info_path)
            loaded = True
        except ConfigLoadError as e:
            if self.info_path.exists():
                logger.warning(f"Catalog file incorrect, starting a new one: {e}")
            else:
                logger.info(f"Catalog file not present, starting a new one: {self.info_path}")
            records = []
            loaded = False

        with self._lock:
            self._records.clear()
            self._index.clear()
            for record in records:
                self.register(record)
            self.changes = 0
            self._loaded = True

        logger.debug(f"Loaded {len(records)} records from {self.info_path}")
        return loaded

    def register(self, record: ImageRecord) -> None:
        """
        Insert a record into the name map and the content-hash index.

        An existing record of the same name is replaced and dropped from
        the index.
        """
        with self._lock:
            previous = self._records.get(record.name)
            if previous is not None:
                self._index.remove(previous)
            self._records[record.name] = record
            self._index.add(record)

    def _rebuild_index(self) -> None:
        self._index.clear()
        for record in self._records.values():
            self._index.add(record)

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def scan(
        self,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> ScanStats:
        """
        Reconcile the catalog with the directory contents.

        New image files are hashed and registered, existing records without
        a fingerprint are backfilled, and records whose file disappeared are
        removed. The catalog is saved if anything changed.

        The change counter is not reset when the scan starts: changes made
        since the last save (for example by add_image) are kept and written
        with this scan.

        Args:
            progress_callback: Optional callback(current, total) while hashing

        Returns:
            ScanStats for this scan

        Raises:
            CatalogIOError: If the directory cannot be listed or the
                snapshot cannot be saved
        """
        with self._scan_lock:
            logger.info(f"Directory set to {self.directory}")
            logger.info("Collecting file info...")
            stats = ScanStats()
            start_time = time.time()

            with self._lock:
                if not self._loaded:
                    self.load()
                else:
                    self._rebuild_index()
                self.equal_hash = 0
                known = dict(self._records)

            try:
                listing = find_image_files(self.directory)
            except OSError as e:
                raise CatalogIOError(f"Cannot list {self.directory}: {e}") from e

            stats.total_entries = listing.total_entries
            stats.images = len(listing.images)

            # Hash outside the lock: only files that need work are read
            jobs = []
            for name in listing.images:
                record = known.get(name)
                if record is None:
                    jobs.append((name, True))
                elif not record.has_fingerprint:
                    jobs.append((name, False))

            digests = digest_files_parallel(
                self.directory,
                jobs,
                max_workers=self.max_workers,
                progress_callback=progress_callback,
                show_progress=self.show_progress,
            )

            with self._lock:
                present: set[str] = set()

                for position, name in enumerate(listing.images, 1):
                    record = self._records.get(name)
                    digest = digests.get(name)

                    if record is not None:
                        if not record.has_fingerprint and digest is not None:
                            if not digest.readable:
                                stats.errors += 1
                                logger.warning(f"Cannot read {name}: {digest.error}")
                            elif digest.fingerprint:
                                record.fingerprint = digest.fingerprint
                                self.changes += 1
                                stats.backfilled += 1
                                logger.info(f"Adding phash to {name}")
                    else:
                        if digest is None or not digest.readable:
                            stats.errors += 1
                            error = digest.error if digest is not None else "not hashed"
                            logger.warning(f"Skipping {name}: {error}")
                            continue
                        record = ImageRecord(
                            name=name,
                            content_hash=digest.content_hash,
                            fingerprint=digest.fingerprint,
                            size=digest.size,
                        )
                        self.register(record)
                        self.changes += 1
                        stats.added += 1

                    present.add(name)
                    if record.content_hash == record.base_name:
                        self.equal_hash += 1

                    if position % PROGRESS_INTERVAL == 0:
                        self._log_progress()

                self._log_progress()

                # Prune only after every entry was visited. Records registered
                # by add_image while this scan was hashing are left alone.
                missing = [
                    name for name, record in known.items()
                    if name not in present and self._records.get(name) is record
                ]
                for name in missing:
                    self._index.remove(self._records.pop(name))
                    self.changes += 1
                stats.removed = len(missing)
                if missing:
                    logger.info(f"Removed {len(missing)} missing files")

                logger.info(
                    f"Total number of files: {stats.total_entries}, "
                    f"images: {self.equal_hash}/{len(self._records)} equal to hash"
                )
                logger.info(f"Added {stats.added} images")

                stats.equal_hash = self.equal_hash
                stats.duplicate_groups = self._index.group_count
                stats.changes = self.changes

                if self.changes > 0:
                    logger.info(f"{self.changes} changes: saving info")
                    self.save()
                    stats.saved = True

            stats.elapsed_seconds = time.time() - start_time
            logger.info("Scanned all files and updated info")
            return stats

    def _log_progress(self) -> None:
        logger.info(
            f"{len(self._records)} files, {self._index.group_count} duplicate entries, "
            f"{self.changes} changes"
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> int:
        """
        Persist all records and reset the change counter.

        The counter is only reset after the snapshot has been written.

        Returns:
            Number of records written

        Raises:
            CatalogIOError: If the snapshot cannot be written
        """
        with self._lock:
            count = write_snapshot(self.info_path, self._records.values())
            self.changes = 0
        logger.info(f"Saved {count} images to {self.info_path}")
        return count

    def flush(self) -> bool:
        """
        Save if there are unsaved changes.

        Returns:
            True if a save was performed
        """
        with self._lock:
            if self.changes > 0:
                self.save()
                return True
        return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def min_distance(self, fingerprint: str) -> int:
        """
        Smallest Hamming distance from a fingerprint to any catalog record.

        Args:
            fingerprint: Bit-string fingerprint of the observed image

        Returns:
            Minimum distance, or NO_MATCH_DISTANCE if no record carries a
            fingerprint

        Raises:
            WidthMismatchError: If the fingerprint width does not match
        """
        best = NO_MATCH_DISTANCE
        with self._lock:
            for record in self._records.values():
                if record.fingerprint:
                    distance = hamming_distance(fingerprint, record.fingerprint)
                    if distance < best:
                        best = distance
                        if best == 0:
                            break
        return best

    def similar_pairs(
        self,
        threshold: int = SIMILARITY_THRESHOLD,
        limit: int = SIMILARITY_SAMPLE_LIMIT,
    ) -> list[SimilarPair]:
        """Near-duplicate sweep over the first ``limit`` records."""
        with self._lock:
            records = list(self._records.values())
        return find_similar_pairs(
            records,
            threshold=threshold,
            limit=limit,
            show_progress=self.show_progress,
        )

    def duplicate_groups(self) -> list[DuplicateGroup]:
        """Exact duplicate groups (records sharing a content hash)."""
        with self._lock:
            return [
                DuplicateGroup(content_hash=h, records=records)
                for h, records in self._index.groups().items()
            ]

    def records(self) -> list[ImageRecord]:
        """All records in catalog order."""
        with self._lock:
            return list(self._records.values())

    def get(self, name: str) -> Optional[ImageRecord]:
        with self._lock:
            return self._records.get(name)

    def stats(self) -> dict:
        """Summary of the catalog for status reporting."""
        with self._lock:
            return {
                'directory': str(self.directory),
                'images': len(self._records),
                'fingerprinted': sum(1 for r in self._records.values() if r.has_fingerprint),
                'duplicate_groups': self._index.group_count,
                'changes': self.changes,
                'equal_hash': self.equal_hash,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._records

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def add_image(
        self,
        name: str,
        data: bytes,
        fingerprint: Optional[str] = None,
    ) -> ImageRecord:
        """
        Store a new image in the directory and register it.

        Args:
            name: File name (no path component)
            data: Encoded image bytes
            fingerprint: Bit-string fingerprint already computed by the
                caller; computed here if None

        Returns:
            The registered ImageRecord

        Raises:
            InvalidImageNameError: If the name is not a bare image file name
            WidthMismatchError: If the supplied fingerprint is not 64 bits
            InvalidFingerprintError: If the supplied fingerprint holds
                characters other than 0 and 1
            CatalogIOError: If the file or the snapshot cannot be written;
                the record is only registered after the file was written
        """
        is_valid, error = validate_image_name(name)
        if not is_valid:
            raise InvalidImageNameError(error)

        if fingerprint is None:
            try:
                fingerprint = perceptual_fingerprint(data)
            except DecodeError as e:
                logger.warning(f"Cannot fingerprint {name}: {e}")
        elif len(fingerprint) != FINGERPRINT_BITS:
            raise WidthMismatchError(FINGERPRINT_BITS, len(fingerprint))
        elif not set(fingerprint) <= {'0', '1'}:
            raise InvalidFingerprintError(f"Fingerprint of {name} is not a bit-string")

        record = ImageRecord(
            name=name,
            content_hash=content_hash(data),
            fingerprint=fingerprint,
            size=len(data),
        )

        with self._lock:
            write_atomic(self.directory / name, data)
            logger.info(f"Saved image {name}, {len(data)} bytes")
            self.register(record)
            self.changes += 1
            self.save()

        return record


__all__ = ['CatalogStore']
