"""
Input validation and security checks for Image Catalog.

Provides validators for image names supplied by the browser collaborator
(path traversal prevention), directories and query parameters.
"""

from __future__ import annotations

import os
import string

from ..config import FINGERPRINT_BITS, IMAGE_EXTENSIONS


def validate_image_name(name: str) -> tuple[bool, str]:
    """
    Validate a file name for storage in a catalogued directory.

    Names are catalog keys, so they must be bare file names: no directory
    component, no parent references and a recognised image extension.

    Args:
        name: Proposed file name

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_image_name('cat.jpg')
        (True, '')
        >>> validate_image_name('../etc/passwd.jpg')
        (False, 'Image name must not contain a path component')
    """
    if not name or not isinstance(name, str):
        return False, "Image name is required"

    if '/' in name or '\\' in name or os.path.basename(name) != name:
        return False, "Image name must not contain a path component"

    if name in ('.', '..') or '\x00' in name:
        return False, f"Invalid image name: {name!r}"

    ext = os.path.splitext(name)[1].lower()
    if ext not in IMAGE_EXTENSIONS:
        return False, f"Unsupported image extension: {ext or '(none)'}"

    return True, ""


def validate_directory(directory: str) -> tuple[bool, str]:
    """
    Validate that a directory exists and is accessible.

    Args:
        directory: Directory path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, 'Directory not found: /nonexistent/directory')
    """
    if not directory:
        return False, "Directory path is required"

    if not os.path.exists(directory):
        return False, f"Directory not found: {directory}"

    if not os.path.isdir(directory):
        return False, f"Path is not a directory: {directory}"

    if not os.access(directory, os.R_OK | os.W_OK):
        return False, f"Cannot access directory (permission denied): {directory}"

    return True, ""


def validate_threshold(threshold: int) -> tuple[bool, str]:
    """
    Validate that a threshold value is within acceptable range.

    Args:
        threshold: Threshold value to validate (0-64 for a 64-bit pHash)

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_threshold(5)
        (True, '')
        >>> validate_threshold(100)
        (False, 'Threshold must be between 0 and 64')
    """
    try:
        threshold = int(threshold)
        if not 0 <= threshold <= FINGERPRINT_BITS:
            return False, f"Threshold must be between 0 and {FINGERPRINT_BITS}"
        return True, ""
    except (ValueError, TypeError):
        return False, "Threshold must be an integer"


def validate_fingerprint_hex(value: str) -> tuple[bool, str]:
    """
    Validate a hex-encoded fingerprint received over the wire.

    Examples:
        >>> validate_fingerprint_hex('ffffffff00000000')
        (True, '')
        >>> validate_fingerprint_hex('abc')
        (False, 'Fingerprint must be 16 hex characters')
    """
    expected = FINGERPRINT_BITS // 4
    if not isinstance(value, str) or len(value) != expected:
        return False, f"Fingerprint must be {expected} hex characters"
    if not all(c in string.hexdigits for c in value):
        return False, "Fingerprint must be hexadecimal"
    return True, ""


__all__ = [
    'validate_image_name',
    'validate_directory',
    'validate_threshold',
    'validate_fingerprint_hex',
]
