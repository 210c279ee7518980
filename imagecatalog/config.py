"""
Configuration constants for Image Catalog.

This module contains all configurable settings including:
- Supported image extensions
- Catalog file name and fingerprint width
- Distance thresholds used to classify near duplicates
"""

import os

# Image extensions the catalog recognises (compared lower-case)
IMAGE_EXTENSIONS = {'.jpeg', '.jpg', '.png', '.webp', '.gif'}

# Catalog snapshot stored inside each managed directory
INFO_NAME = 'info.json'

# Perceptual fingerprint width in bits (pHash with hash_size=8)
FINGERPRINT_BITS = 64
FINGERPRINT_HASH_SIZE = 8

# Content hash algorithm (equality testing only, not security)
CONTENT_HASH_ALGORITHM = 'md5'

# Returned by min_distance when the catalog has no fingerprints yet.
# Larger than any realistic threshold (max real distance is FINGERPRINT_BITS)
NO_MATCH_DISTANCE = 1000

# Distance classification for freshly observed images
# < DUPLICATE_DISTANCE: almost certainly already in the catalog
# < SIMILAR_DISTANCE: visually similar to a catalogued image
DUPLICATE_DISTANCE = 5
SIMILAR_DISTANCE = 11

# Near-duplicate sweep across the whole catalog
# Pairs strictly below the threshold are reported; sample is capped
SIMILARITY_THRESHOLD = 5
SIMILARITY_SAMPLE_LIMIT = 10000

# Emit a progress summary every N image files during a scan
PROGRESS_INTERVAL = 100

# Default number of parallel workers for hashing
DEFAULT_WORKERS = 4

# Media directory (relative paths resolve against the working directory)
DEFAULT_MEDIA_DIR = 'downloads'

# HTTP interface for the browser collaborator
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 5000

# Decompression bomb limit for decoding untrusted image bytes
MAX_IMAGE_PIXELS = 200_000_000

# User configuration location
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.imagecatalog')
