"""
Image Catalog
=============
Catalogs the image files of a directory and detects exact and
near-duplicate images.

Features:
- Dual-hash duplicate model: MD5 content hash + 64-bit perceptual hash
- Incremental reconciliation with the directory (add, backfill, prune)
- Durable JSON catalog (info.json) written atomically
- Real-time nearest-neighbour distance for freshly observed images
- HTTP interface for a browser-automation collaborator
- CLI for one-off scans and duplicate reports
"""

__version__ = "1.0.0"

from .models import ImageRecord, DuplicateGroup, SimilarPair, ScanStats
from .config import IMAGE_EXTENSIONS, FINGERPRINT_BITS, NO_MATCH_DISTANCE
from .exceptions import (
    CatalogError,
    ConfigLoadError,
    DecodeError,
    WidthMismatchError,
    CatalogIOError,
    InvalidFingerprintError,
    InvalidImageNameError,
)
from .scanner import (
    content_hash,
    perceptual_fingerprint,
    hamming_distance,
    bitstring_to_hex,
    hex_to_bitstring,
    classify_distance,
    find_image_files,
    find_similar_pairs,
)
from .catalog import CatalogStore, DuplicateIndex, get_store

__all__ = [
    "ImageRecord",
    "DuplicateGroup",
    "SimilarPair",
    "ScanStats",
    "IMAGE_EXTENSIONS",
    "FINGERPRINT_BITS",
    "NO_MATCH_DISTANCE",
    "CatalogError",
    "ConfigLoadError",
    "DecodeError",
    "WidthMismatchError",
    "CatalogIOError",
    "InvalidFingerprintError",
    "InvalidImageNameError",
    "content_hash",
    "perceptual_fingerprint",
    "hamming_distance",
    "bitstring_to_hex",
    "hex_to_bitstring",
    "classify_distance",
    "find_image_files",
    "find_similar_pairs",
    "CatalogStore",
    "DuplicateIndex",
    "get_store",
]
