"""
Third-party imaging dependencies for the scanner package.

Pillow decodes image bytes and imagehash computes the perceptual hash;
both are required. tqdm is optional and only drives progress bars.
"""

from __future__ import annotations

import warnings
import logging
from typing import Optional, Any

from ..config import MAX_IMAGE_PIXELS

# Module-level logger
_logger = logging.getLogger(__name__)

try:
    from PIL import Image
    import imagehash
except ImportError as e:
    raise ImportError(
        f"Image Catalog needs Pillow and imagehash ({e}).\n"
        "Install with: pip install Pillow imagehash"
    ) from e

# Bytes posted by the collaborator come from arbitrary pages. Pillow raises
# DecompressionBombError past twice this limit; the warning below it is noise
Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)

HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_class
    HAS_TQDM = True
except ImportError:
    _logger.debug("tqdm not installed, progress bars disabled")


__all__ = [
    'Image',
    'imagehash',
    'HAS_TQDM',
    '_tqdm_class',
    '_logger',
]
