"""
Utilities package for Image Catalog.

Provides:
- formatters: Human-readable numbers, durations and file sizes
- validators: Input validation for file names, directories and parameters
"""

from __future__ import annotations

# Import submodules for convenient access
from . import formatters
from . import validators

# Export commonly used functions
from .formatters import format_number, format_elapsed, format_size
from .validators import (
    validate_image_name,
    validate_directory,
    validate_threshold,
    validate_fingerprint_hex,
)

__all__ = [
    # Submodules
    'formatters',
    'validators',
    # Formatters
    'format_number',
    'format_elapsed',
    'format_size',
    # Validators
    'validate_image_name',
    'validate_directory',
    'validate_threshold',
    'validate_fingerprint_hex',
]
