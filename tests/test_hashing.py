"""
Unit tests for hash primitives: content hash, perceptual fingerprint,
Hamming distance and fingerprint hex encoding.
"""

import io

import pytest
from PIL import Image

from imagecatalog.exceptions import DecodeError, WidthMismatchError
from imagecatalog.scanner import (
    bitstring_to_hex,
    classify_distance,
    content_hash,
    hamming_distance,
    hex_to_bitstring,
    perceptual_fingerprint,
)


class TestContentHash:
    """Test content_hash function."""

    def test_known_digests(self):
        assert content_hash(b'') == 'd41d8cd98f00b204e9800998ecf8427e'
        assert content_hash(b'abc') == '900150983cd24fb0d6963f7d28e17f72'

    def test_identical_bytes_same_hash(self, image_bytes):
        assert content_hash(image_bytes) == content_hash(bytes(image_bytes))

    def test_different_bytes_different_hash(self, image_bytes, other_image_bytes):
        assert content_hash(image_bytes) != content_hash(other_image_bytes)

    def test_lowercase_hex(self, image_bytes):
        digest = content_hash(image_bytes)
        assert len(digest) == 32
        assert digest == digest.lower()


class TestPerceptualFingerprint:
    """Test perceptual_fingerprint function."""

    def test_width_and_alphabet(self, image_bytes):
        fingerprint = perceptual_fingerprint(image_bytes)
        assert len(fingerprint) == 64
        assert set(fingerprint) <= {'0', '1'}

    def test_deterministic(self, image_bytes):
        assert perceptual_fingerprint(image_bytes) == perceptual_fingerprint(image_bytes)

    def test_same_pixels_different_format(self, make_image_bytes):
        """Lossless encodings of the same pixels share a fingerprint."""
        png = make_image_bytes(5, 'PNG')
        bmp = make_image_bytes(5, 'BMP')
        assert png != bmp
        assert perceptual_fingerprint(png) == perceptual_fingerprint(bmp)

    def test_unrelated_images_differ(self, image_bytes, other_image_bytes):
        a = perceptual_fingerprint(image_bytes)
        b = perceptual_fingerprint(other_image_bytes)
        assert hamming_distance(a, b) > 0

    def test_rgba_image(self):
        img = Image.new('RGBA', (64, 64), (255, 0, 0, 128))
        buffer = io.BytesIO()
        img.save(buffer, 'PNG')
        assert len(perceptual_fingerprint(buffer.getvalue())) == 64

    def test_garbage_raises_decode_error(self):
        with pytest.raises(DecodeError):
            perceptual_fingerprint(b'definitely not an image')

    def test_empty_raises_decode_error(self):
        with pytest.raises(DecodeError):
            perceptual_fingerprint(b'')


class TestHammingDistance:
    """Test hamming_distance function."""

    def test_identical(self):
        assert hamming_distance('0101', '0101') == 0

    def test_all_different(self):
        assert hamming_distance('0000', '1111') == 4

    def test_symmetric(self):
        a = '0110' * 16
        b = '1110' * 16
        assert hamming_distance(a, b) == hamming_distance(b, a) == 16

    def test_width_mismatch(self):
        with pytest.raises(WidthMismatchError):
            hamming_distance('0' * 64, '0' * 63)

    def test_width_mismatch_is_value_error(self):
        """Callers that only know about ValueError still catch it."""
        with pytest.raises(ValueError):
            hamming_distance('01', '011')


class TestFingerprintHex:
    """Test bit-string/hex conversion."""

    def test_bitstring_to_hex(self):
        assert bitstring_to_hex('0000111110100000') == '0fa0'

    def test_all_ones(self):
        assert bitstring_to_hex('1' * 64) == 'f' * 16

    def test_hex_to_bitstring(self):
        assert hex_to_bitstring('0fa0') == '0000111110100000'

    def test_uppercase_hex_accepted(self):
        assert hex_to_bitstring('FF') == '11111111'

    def test_image_fingerprint_round_trip(self, image_bytes):
        fingerprint = perceptual_fingerprint(image_bytes)
        encoded = bitstring_to_hex(fingerprint)
        assert len(encoded) == 16
        assert hex_to_bitstring(encoded) == fingerprint

    def test_bitstring_not_multiple_of_eight(self):
        with pytest.raises(ValueError):
            bitstring_to_hex('101')

    def test_bitstring_bad_characters(self):
        with pytest.raises(ValueError):
            bitstring_to_hex('0120' * 2)

    def test_hex_odd_length(self):
        with pytest.raises(ValueError):
            hex_to_bitstring('abc')

    def test_hex_bad_characters(self):
        with pytest.raises(ValueError):
            hex_to_bitstring('0fz0')


class TestClassifyDistance:
    """Test classify_distance thresholds."""

    @pytest.mark.parametrize('distance,expected', [
        (0, 'duplicate'),
        (4, 'duplicate'),
        (5, 'similar'),
        (10, 'similar'),
        (11, 'new'),
        (1000, 'new'),
    ])
    def test_classification(self, distance, expected):
        assert classify_distance(distance) == expected
