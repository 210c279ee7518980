"""
Unit tests for input validators.
"""

import pytest

from imagecatalog.utils.validators import (
    validate_directory,
    validate_fingerprint_hex,
    validate_image_name,
    validate_threshold,
)


class TestValidateImageName:
    """Test validate_image_name function."""

    @pytest.mark.parametrize('name', ["cat.jpg", "CAT.JPEG", "a.b.png", "x.webp", "y.gif"])
    def test_valid_names(self, name):
        assert validate_image_name(name) == (True, "")

    @pytest.mark.parametrize('name', [
        "",
        "../cat.jpg",
        "dir/cat.jpg",
        "dir\\cat.jpg",
        "/etc/cat.jpg",
        "..",
        "cat\x00.jpg",
        "cat.txt",
        "cat",
    ])
    def test_invalid_names(self, name):
        is_valid, error = validate_image_name(name)
        assert not is_valid
        assert error

    def test_non_string(self):
        assert validate_image_name(None)[0] is False


class TestValidateDirectory:
    """Test validate_directory function."""

    def test_existing_directory(self, temp_dir):
        assert validate_directory(str(temp_dir)) == (True, "")

    def test_missing_directory(self, temp_dir):
        is_valid, error = validate_directory(str(temp_dir / "missing"))
        assert not is_valid
        assert "not found" in error

    def test_file_not_directory(self, temp_dir):
        path = temp_dir / "file.txt"
        path.write_text("x")
        is_valid, error = validate_directory(str(path))
        assert not is_valid
        assert "not a directory" in error

    def test_empty(self):
        assert validate_directory("")[0] is False


class TestValidateThreshold:
    """Test validate_threshold function."""

    @pytest.mark.parametrize('value', [0, 5, 64, "10"])
    def test_valid(self, value):
        assert validate_threshold(value) == (True, "")

    @pytest.mark.parametrize('value', [-1, 65, "abc", None])
    def test_invalid(self, value):
        assert validate_threshold(value)[0] is False


class TestValidateFingerprintHex:
    """Test validate_fingerprint_hex function."""

    def test_valid(self):
        assert validate_fingerprint_hex("0123456789abcdef") == (True, "")
        assert validate_fingerprint_hex("0123456789ABCDEF") == (True, "")

    @pytest.mark.parametrize('value', ["", "abc", "0123456789abcdeg", "+123456789abcdef", " 123456789abcdef"])
    def test_invalid(self, value):
        assert validate_fingerprint_hex(value)[0] is False
