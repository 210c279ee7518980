"""
Scanner package for Image Catalog.

Provides the hash primitives, directory enumeration, parallel file hashing
and the near-duplicate sweep used by the catalog store.

Public API:
- content_hash: Content digest of raw bytes
- perceptual_fingerprint: 64-bit pHash of encoded image bytes
- hamming_distance: Bit difference between two fingerprints
- bitstring_to_hex / hex_to_bitstring: Persisted fingerprint encoding
- classify_distance: Map a min-distance to duplicate/similar/new
- find_image_files: List image files in a directory
- digest_files_parallel: Read and hash files in a thread pool
- find_similar_pairs: Pairwise near-duplicate sweep
"""

from __future__ import annotations

from .file_discovery import DirectoryListing, find_image_files, is_image_name
from .hashing import (
    content_hash,
    perceptual_fingerprint,
    hamming_distance,
    bitstring_to_hex,
    hex_to_bitstring,
    classify_distance,
)
from .parallel import FileDigest, digest_file, digest_files_parallel
from .similarity import find_similar_pairs


# Public API exports
__all__ = [
    # File discovery
    'DirectoryListing',
    'find_image_files',
    'is_image_name',
    # Hash primitives
    'content_hash',
    'perceptual_fingerprint',
    'hamming_distance',
    'bitstring_to_hex',
    'hex_to_bitstring',
    'classify_distance',
    # Parallel hashing
    'FileDigest',
    'digest_file',
    'digest_files_parallel',
    # Near-duplicate sweep
    'find_similar_pairs',
]
