"""
Hashing module for the scanner package.

Provides the hash primitives the catalog is built on: a content hash for
exact-duplicate detection, a 64-bit perceptual fingerprint for similarity,
Hamming distance between fingerprints, and the bit-string/hex conversion
used when fingerprints are persisted.
"""

from __future__ import annotations

import hashlib
import io
import string

from ..config import (
    CONTENT_HASH_ALGORITHM,
    DUPLICATE_DISTANCE,
    FINGERPRINT_HASH_SIZE,
    SIMILAR_DISTANCE,
)
from ..exceptions import DecodeError, WidthMismatchError
from .dependencies import Image, imagehash, _logger

_HEX_DIGITS = frozenset(string.hexdigits)


def content_hash(data: bytes, algorithm: str = CONTENT_HASH_ALGORITHM) -> str:
    """
    Calculate the content hash of raw file bytes.

    Args:
        data: File contents
        algorithm: Hash algorithm to use (default: md5)

    Returns:
        Hex digest of the contents
    """
    hasher = hashlib.new(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def perceptual_fingerprint(data: bytes, hash_size: int = FINGERPRINT_HASH_SIZE) -> str:
    """
    Calculate the perceptual fingerprint of encoded image bytes.

    Uses the pHash algorithm. With the default hash_size of 8 the result is
    a 64-character string of '0'/'1', row-major over the hash matrix.

    Args:
        data: Encoded image bytes (JPEG, PNG, WebP, GIF)
        hash_size: Size of the hash matrix side

    Returns:
        Bit-string fingerprint

    Raises:
        DecodeError: If the bytes cannot be decoded as an image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            # Force load to detect truncated/corrupt images early
            img.load()

            # Convert to RGB if necessary (handles palettes, transparency)
            if img.mode not in ('RGB', 'L'):
                img = img.convert('RGB')

            phash = imagehash.phash(img, hash_size=hash_size)
    except Exception as e:
        _logger.debug(f"Perceptual hash calculation failed: {e}")
        raise DecodeError(f"Cannot decode image: {e}") from e

    return ''.join('1' if bit else '0' for bit in phash.hash.flatten())


def hamming_distance(a: str, b: str) -> int:
    """
    Count the differing bits between two fingerprints.

    Raises:
        WidthMismatchError: If the fingerprints differ in width
    """
    if len(a) != len(b):
        raise WidthMismatchError(len(a), len(b))
    return sum(1 for x, y in zip(a, b) if x != y)


def bitstring_to_hex(bits: str) -> str:
    """
    Encode a bit-string fingerprint as lowercase hex.

    Each group of 8 bits maps to 2 hex characters.

    Examples:
        >>> bitstring_to_hex('0000111110100000')
        '0fa0'
    """
    if len(bits) % 8 != 0:
        raise ValueError(f"Bit-string width {len(bits)} is not a multiple of 8")
    if not set(bits) <= {'0', '1'}:
        raise ValueError("Bit-string may only contain '0' and '1'")
    return ''.join(
        format(int(bits[i:i + 8], 2), '02x')
        for i in range(0, len(bits), 8)
    )


def hex_to_bitstring(hex_str: str) -> str:
    """
    Decode a hex-encoded fingerprint back into its bit-string.

    Examples:
        >>> hex_to_bitstring('0fa0')
        '0000111110100000'
    """
    if len(hex_str) % 2 != 0:
        raise ValueError(f"Hex fingerprint has odd length {len(hex_str)}")
    if not set(hex_str) <= _HEX_DIGITS:
        raise ValueError(f"Invalid hex fingerprint: {hex_str!r}")
    return ''.join(
        format(int(hex_str[i:i + 2], 16), '08b')
        for i in range(0, len(hex_str), 2)
    )


def classify_distance(distance: int) -> str:
    """
    Classify a min-distance result for display.

    Returns:
        'duplicate', 'similar' or 'new'
    """
    if distance < DUPLICATE_DISTANCE:
        return 'duplicate'
    if distance < SIMILAR_DISTANCE:
        return 'similar'
    return 'new'


__all__ = [
    'content_hash',
    'perceptual_fingerprint',
    'hamming_distance',
    'bitstring_to_hex',
    'hex_to_bitstring',
    'classify_distance',
]
