"""
Unit tests for scanner file discovery and parallel hashing.
"""

from imagecatalog.scanner import (
    digest_file,
    digest_files_parallel,
    find_image_files,
    is_image_name,
)
from imagecatalog.scanner.hashing import content_hash, perceptual_fingerprint


class TestIsImageName:
    """Test is_image_name function."""

    def test_recognised_extensions(self):
        for name in ("a.jpg", "a.jpeg", "a.png", "a.webp", "a.gif"):
            assert is_image_name(name)

    def test_case_insensitive(self):
        assert is_image_name("PHOTO.JPG")

    def test_other_files(self):
        for name in ("info.json", "notes.txt", "a.heic", "jpg", "archive.jpg.zip"):
            assert not is_image_name(name)


class TestFindImageFiles:
    """Test find_image_files function."""

    def test_lists_images_sorted(self, duplicate_media_dir):
        listing = find_image_files(duplicate_media_dir)
        assert listing.images == ["abc123.jpg", "other.png", "xyz789.jpg"]
        assert listing.total_entries == 4

    def test_not_recursive(self, media_dir, image_bytes):
        subdir = media_dir / "subdir"
        subdir.mkdir()
        (subdir / "nested.png").write_bytes(image_bytes)

        listing = find_image_files(media_dir)
        assert listing.images == []
        assert listing.total_entries == 1

    def test_empty_directory(self, media_dir):
        listing = find_image_files(media_dir)
        assert listing.images == []
        assert listing.total_entries == 0


class TestDigestFile:
    """Test digest_file function."""

    def test_full_digest(self, media_dir, image_bytes):
        (media_dir / "cat.png").write_bytes(image_bytes)
        digest = digest_file(media_dir, "cat.png")

        assert digest.readable
        assert digest.size == len(image_bytes)
        assert digest.content_hash == content_hash(image_bytes)
        assert digest.fingerprint == perceptual_fingerprint(image_bytes)

    def test_fingerprint_only(self, media_dir, image_bytes):
        (media_dir / "cat.png").write_bytes(image_bytes)
        digest = digest_file(media_dir, "cat.png", calculate_hash=False)
        assert digest.content_hash is None
        assert digest.fingerprint is not None

    def test_undecodable_file(self, media_dir):
        (media_dir / "broken.jpg").write_bytes(b"garbage")
        digest = digest_file(media_dir, "broken.jpg")
        assert digest.readable
        assert digest.content_hash == content_hash(b"garbage")
        assert digest.fingerprint is None

    def test_missing_file(self, media_dir):
        digest = digest_file(media_dir, "missing.jpg")
        assert not digest.readable
        assert digest.content_hash is None


class TestDigestFilesParallel:
    """Test digest_files_parallel function."""

    def test_digests_all_jobs(self, duplicate_media_dir):
        jobs = [("abc123.jpg", True), ("xyz789.jpg", True), ("other.png", False)]
        results = digest_files_parallel(duplicate_media_dir, jobs, max_workers=2, show_progress=False)

        assert set(results) == {"abc123.jpg", "xyz789.jpg", "other.png"}
        assert results["abc123.jpg"].content_hash == results["xyz789.jpg"].content_hash
        assert results["other.png"].content_hash is None

    def test_no_jobs(self, media_dir):
        assert digest_files_parallel(media_dir, [], show_progress=False) == {}

    def test_progress_callback_reaches_total(self, duplicate_media_dir):
        calls = []
        digest_files_parallel(
            duplicate_media_dir,
            [("abc123.jpg", True), ("other.png", True)],
            progress_callback=lambda current, total: calls.append((current, total)),
            show_progress=False,
        )
        assert calls[-1] == (2, 2)
