"""
Custom exception hierarchy for Image Catalog.

Per-file problems during a scan are absorbed by the scanner; the types below
are what callers of the catalog store and the hash primitives may see.
"""


class CatalogError(Exception):
    """Base exception for all catalog errors."""
    pass


class ConfigLoadError(CatalogError):
    """Raised when the persisted catalog snapshot is missing or malformed."""
    pass


class DecodeError(CatalogError):
    """Raised when image bytes cannot be decoded for fingerprinting."""
    pass


class WidthMismatchError(CatalogError, ValueError):
    """Raised when comparing fingerprints of different bit widths."""

    def __init__(self, width_a: int, width_b: int):
        super().__init__(f"Fingerprint width mismatch: {width_a} != {width_b}")
        self.width_a = width_a
        self.width_b = width_b


class CatalogIOError(CatalogError, OSError):
    """Raised when writing the catalog or an image file fails."""
    pass


class InvalidImageNameError(CatalogError, ValueError):
    """Raised when an image name has a path component or unknown extension."""
    pass


class InvalidFingerprintError(CatalogError, ValueError):
    """Raised when a supplied fingerprint is not a string of '0' and '1' bits."""
    pass
