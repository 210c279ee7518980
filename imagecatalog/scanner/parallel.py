"""
Parallel processing module for the scanner package.

Reads files and computes their hashes in a thread pool. Workers only touch
their own file and return a FileDigest; nothing here mutates catalog state,
so results can be handed back to the store for sequential registration.
"""

from __future__ import annotations

import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable, Any

from ..config import DEFAULT_WORKERS
from ..exceptions import DecodeError
from .dependencies import HAS_TQDM, _tqdm_class, _logger
from .hashing import content_hash, perceptual_fingerprint


@dataclass
class FileDigest:
    """
    Hashing result for a single file.

    Attributes:
        name: File name inside the directory
        size: File size in bytes (0 if the read failed)
        content_hash: Hex digest, or None if not requested or unreadable
        fingerprint: Bit-string fingerprint, or None if undecodable
        error: Read error message, None on success
    """
    name: str
    size: int = 0
    content_hash: Optional[str] = None
    fingerprint: Optional[str] = None
    error: Optional[str] = None

    @property
    def readable(self) -> bool:
        return self.error is None


def digest_file(
    directory: str | Path,
    name: str,
    calculate_hash: bool = True,
) -> FileDigest:
    """
    Read one file once and compute its hashes.

    Args:
        directory: Directory containing the file
        name: File name
        calculate_hash: Whether to compute the content hash; existing
            records reuse their stored hash and only need a fingerprint

    Returns:
        FileDigest; read failures are reported in ``error``, decode
        failures leave ``fingerprint`` as None
    """
    digest = FileDigest(name=name)
    try:
        with open(os.path.join(directory, name), 'rb') as f:
            data = f.read()
    except OSError as e:
        digest.error = str(e)
        return digest

    digest.size = len(data)
    if calculate_hash:
        digest.content_hash = content_hash(data)

    try:
        digest.fingerprint = perceptual_fingerprint(data)
    except DecodeError as e:
        _logger.warning(f"Cannot fingerprint {name}: {e}")

    return digest


def digest_files_parallel(
    directory: str | Path,
    jobs: list[tuple[str, bool]],
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
) -> dict[str, FileDigest]:
    """
    Digest multiple files in parallel.

    Args:
        directory: Directory containing the files
        jobs: List of (name, calculate_hash) pairs
        max_workers: Number of parallel workers
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show tqdm progress bar

    Returns:
        Dict mapping file name to FileDigest
    """
    results: dict[str, FileDigest] = {}
    if not jobs:
        return results

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(
            total=len(jobs),
            desc="Hashing images",
            unit="img",
            ncols=80,
        )

    # Batch progress callbacks to reduce overhead (every 100 files or 1 second)
    last_callback_time = time.time()
    callback_batch_size = 100
    callback_interval = 1.0  # seconds

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = {
            executor.submit(digest_file, directory, name, calculate_hash): name
            for name, calculate_hash in jobs
        }

        for i, future in enumerate(as_completed(futures)):
            name = futures[future]
            try:
                results[name] = future.result()
            except Exception as e:
                _logger.warning(f"Unexpected error hashing {name}: {e}")
                results[name] = FileDigest(name=name, error=str(e))

            if pbar is not None:
                pbar.update(1)

            if progress_callback:
                current_time = time.time()
                should_callback = (
                    (i + 1) % callback_batch_size == 0 or
                    current_time - last_callback_time >= callback_interval or
                    i == len(jobs) - 1  # Always callback on last item
                )
                if should_callback:
                    progress_callback(i + 1, len(jobs))
                    last_callback_time = current_time

    if pbar is not None:
        pbar.close()

    return results


__all__ = ['FileDigest', 'digest_file', 'digest_files_parallel']
