# ABOUTME: Unit tests for the BookRecord dataclass and its JSON mapping.
# ABOUTME: Validates display title fallbacks, key naming, timestamps, and legacy keys.

from datetime import datetime, timedelta, timezone

import pytest

from audshelf.store.mapping import (
    BookRecord,
    dict_to_record,
    parse_timestamp,
    record_to_dict,
)


@pytest.fixture()
def record() -> BookRecord:
    return BookRecord(
        id="6f1c2a4e-0000-4000-8000-000000000001",
        title="The Name of the Rose",
        author="Umberto Eco",
        source_file_path="/library/EPUBs/rose.epub",
        import_timestamp=datetime(2026, 2, 17, 9, 30, tzinfo=timezone.utc),
    )


class TestDisplayTitle:
    """Tests for BookRecord.display_title."""

    def test_custom_title_wins(self, record: BookRecord) -> None:
        record.custom_title = "Il Nome della Rosa"
        assert record.display_title == "Il Nome della Rosa"

    def test_empty_custom_title_falls_back_to_title(self, record: BookRecord) -> None:
        record.custom_title = ""
        assert record.display_title == "The Name of the Rose"

    def test_empty_title_falls_back_to_filename(self, record: BookRecord) -> None:
        record.title = ""
        assert record.display_title == "rose"

    def test_filename_is_stem(self, record: BookRecord) -> None:
        assert record.filename == "rose"


class TestNewRecord:
    """Defaults assigned when a record is created."""

    def test_ids_are_unique(self) -> None:
        a = BookRecord(title="A", source_file_path="/a.epub")
        b = BookRecord(title="B", source_file_path="/b.epub")
        assert a.id != b.id

    def test_timestamp_is_utc_aware(self) -> None:
        rec = BookRecord(title="A", source_file_path="/a.epub")
        assert rec.import_timestamp.tzinfo is not None
        assert rec.cover_image_path is None


class TestRecordToDict:
    """Tests for record_to_dict."""

    def test_uses_camel_case_keys(self, record: BookRecord) -> None:
        record.custom_title = "Custom"
        record.cover_image_path = "/library/Covers/x.jpg"
        row = record_to_dict(record)
        assert set(row) == {
            "id", "title", "author", "customTitle",
            "sourceFilePath", "coverImagePath", "importTimestamp",
        }

    def test_omits_none_fields(self, record: BookRecord) -> None:
        record.author = None
        row = record_to_dict(record)
        assert "author" not in row
        assert "customTitle" not in row
        assert "coverImagePath" not in row

    def test_roundtrip(self, record: BookRecord) -> None:
        record.cover_image_path = "/library/Covers/x.jpg"
        assert dict_to_record(record_to_dict(record)) == record


class TestDictToRecord:
    """Tests for dict_to_record."""

    def test_accepts_legacy_keys(self) -> None:
        rec = dict_to_record({
            "id": "abc",
            "title": "Old Book",
            "filePath": "/old/EPUBs/old.epub",
            "importDate": "2026-02-17T10:00:00Z",
        })
        assert rec.source_file_path == "/old/EPUBs/old.epub"
        assert rec.import_timestamp == datetime(2026, 2, 17, 10, 0, tzinfo=timezone.utc)

    def test_missing_required_field_raises(self) -> None:
        with pytest.raises(ValueError, match="sourceFilePath"):
            dict_to_record({"id": "abc", "title": "x", "importTimestamp": "2026-01-01T00:00:00"})

    def test_wrong_type_raises(self) -> None:
        with pytest.raises(ValueError):
            dict_to_record({
                "id": 5, "title": "x", "sourceFilePath": "/x.epub",
                "importTimestamp": "2026-01-01T00:00:00",
            })

    def test_non_object_raises(self) -> None:
        with pytest.raises(ValueError):
            dict_to_record(["not", "an", "object"])


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_naive_is_utc(self) -> None:
        parsed = parse_timestamp("2026-02-17T10:00:00")
        assert parsed.tzinfo == timezone.utc

    def test_keeps_offset(self) -> None:
        parsed = parse_timestamp("2026-02-17T10:00:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")
