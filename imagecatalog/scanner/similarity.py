"""
Similarity module for the scanner package.

Batch near-duplicate sweep across a set of catalog records: every pair of
fingerprints closer than a small threshold is reported. This is an O(n^2)
diagnostic, bounded by a sample limit to stay tractable on large catalogs.
"""

from __future__ import annotations

from typing import Optional, Callable, Any

import numpy as np

from ..config import SIMILARITY_THRESHOLD, SIMILARITY_SAMPLE_LIMIT
from ..exceptions import WidthMismatchError
from ..models import ImageRecord, SimilarPair
from .dependencies import HAS_TQDM, _tqdm_class


def _fingerprint_matrix(records: list[ImageRecord]) -> np.ndarray:
    """Stack record fingerprints into an (n, bits) boolean matrix."""
    width = len(records[0].fingerprint)
    for record in records:
        if len(record.fingerprint) != width:
            raise WidthMismatchError(width, len(record.fingerprint))
    return np.array(
        [[bit == '1' for bit in record.fingerprint] for record in records],
        dtype=bool,
    )


def find_similar_pairs(
    records: list[ImageRecord],
    threshold: int = SIMILARITY_THRESHOLD,
    limit: int = SIMILARITY_SAMPLE_LIMIT,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
) -> list[SimilarPair]:
    """
    Find perceptually similar record pairs.

    Args:
        records: Catalog records, in catalog order
        threshold: Report pairs with Hamming distance strictly below this
        limit: Only the first ``limit`` records are compared
        progress_callback: Optional callback(current, total) for progress
        show_progress: Whether to show tqdm progress bar

    Returns:
        List of SimilarPair, ordered by first then second record position
    """
    candidates = [r for r in records[:limit] if r.has_fingerprint]
    if len(candidates) < 2:
        return []

    matrix = _fingerprint_matrix(candidates)
    n = len(candidates)

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and n > 1000 and _tqdm_class is not None:
        pbar = _tqdm_class(total=n - 1, desc="Comparing images", unit="img", ncols=80)

    pairs: list[SimilarPair] = []
    for i in range(n - 1):
        # Distances from record i to every later record in one vector op
        distances = np.count_nonzero(matrix[i + 1:] != matrix[i], axis=1)
        for offset in np.nonzero(distances < threshold)[0]:
            pairs.append(SimilarPair(
                first=candidates[i],
                second=candidates[i + 1 + int(offset)],
                distance=int(distances[offset]),
            ))

        if pbar is not None:
            pbar.update(1)
        if progress_callback and (i + 1) % 1000 == 0:
            progress_callback(i + 1, n - 1)

    if pbar is not None:
        pbar.close()

    return pairs


__all__ = ['find_similar_pairs']
