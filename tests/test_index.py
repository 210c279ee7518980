"""
Unit tests for the content-hash duplicate index.
"""

from imagecatalog.catalog import DuplicateIndex, Group, Unique
from imagecatalog.models import ImageRecord


def _record(name, content_hash):
    return ImageRecord(name=name, content_hash=content_hash)


class TestDuplicateIndex:
    """Test DuplicateIndex promotion and demotion."""

    def test_unique_bucket(self):
        index = DuplicateIndex()
        a = _record("a.jpg", "A")
        index.add(a)
        assert "A" in index
        assert index.owner("A") is a
        assert index.groups() == {}
        assert index.group_count == 0
        assert isinstance(index._buckets["A"], Unique)

    def test_collision_promotes_to_group(self):
        """{A, A, B} yields exactly one group holding the A records in order."""
        index = DuplicateIndex()
        a1, a2, b = _record("1.jpg", "A"), _record("2.jpg", "A"), _record("3.jpg", "B")
        for record in (a1, a2, b):
            index.add(record)

        groups = index.groups()
        assert list(groups) == ["A"]
        assert groups["A"] == [a1, a2]
        assert groups["A"][0] is a1
        assert index.group_count == 1
        assert len(index) == 2
        assert isinstance(index._buckets["A"], Group)
        assert isinstance(index._buckets["B"], Unique)

    def test_third_member_appended(self):
        index = DuplicateIndex()
        records = [_record(f"{i}.jpg", "A") for i in range(3)]
        for record in records:
            index.add(record)
        assert index.groups()["A"] == records
        assert index.group_count == 1

    def test_remove_demotes_group(self):
        index = DuplicateIndex()
        a1, a2 = _record("1.jpg", "A"), _record("2.jpg", "A")
        index.add(a1)
        index.add(a2)

        assert index.remove(a1) is True
        assert index.groups() == {}
        assert index.group_count == 0
        assert index.owner("A") is a2

    def test_remove_from_large_group_keeps_group(self):
        index = DuplicateIndex()
        records = [_record(f"{i}.jpg", "A") for i in range(3)]
        for record in records:
            index.add(record)
        index.remove(records[1])
        assert index.groups()["A"] == [records[0], records[2]]
        assert index.group_count == 1

    def test_remove_last_record_drops_hash(self):
        index = DuplicateIndex()
        a = _record("a.jpg", "A")
        index.add(a)
        assert index.remove(a) is True
        assert "A" not in index
        assert index.owner("A") is None

    def test_remove_matches_identity_not_equality(self):
        index = DuplicateIndex()
        index.add(_record("a.jpg", "A"))
        assert index.remove(_record("a.jpg", "A")) is False
        assert "A" in index

    def test_remove_unknown_hash(self):
        assert DuplicateIndex().remove(_record("a.jpg", "A")) is False

    def test_clear(self):
        index = DuplicateIndex()
        index.add(_record("1.jpg", "A"))
        index.add(_record("2.jpg", "A"))
        index.clear()
        assert len(index) == 0
        assert index.group_count == 0
