"""Tests for the durable cutoff store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from supplierworker.harvester.state import CutoffStore, parse_timestamp


class TestParseTimestamp:
    def test_offset_preserved(self):
        parsed = parse_timestamp("2024-03-01T12:00:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-03-01T12:00:00").tzinfo == timezone.utc

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_timestamp("last tuesday")


class TestCutoffStore:
    """Test reading and writing the cutoff file."""

    def test_missing_file_means_no_cutoff(self, tmp_path):
        assert CutoffStore(tmp_path / "lastuploadtime.txt").read() is None

    def test_write_then_read(self, tmp_path):
        store = CutoffStore(tmp_path / "lastuploadtime.txt")
        cutoff = datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc)

        store.write(cutoff)

        assert store.read() == cutoff
        assert not (tmp_path / "lastuploadtime.txt.tmp").exists()

    def test_overwrites_previous_value(self, tmp_path):
        store = CutoffStore(tmp_path / "lastuploadtime.txt")
        store.write(datetime(2024, 1, 1, tzinfo=timezone.utc))
        store.write(datetime(2024, 2, 1, tzinfo=timezone.utc))
        assert store.read() == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_naive_write_stored_as_utc(self, tmp_path):
        path = tmp_path / "lastuploadtime.txt"
        CutoffStore(path).write(datetime(2024, 3, 1))
        assert path.read_text(encoding="utf-8") == "2024-03-01T00:00:00+00:00"

    def test_unreadable_file_means_no_cutoff(self, tmp_path):
        path = tmp_path / "lastuploadtime.txt"
        path.write_text("garbage", encoding="utf-8")
        assert CutoffStore(path).read() is None

    def test_undecodable_file_means_no_cutoff(self, tmp_path):
        path = tmp_path / "lastuploadtime.txt"
        path.write_bytes(b"\xff\xfe2024")
        assert CutoffStore(path).read() is None

    def test_directory_in_place_of_file_means_no_cutoff(self, tmp_path):
        path = tmp_path / "lastuploadtime.txt"
        path.mkdir()
        assert CutoffStore(path).read() is None

    def test_creates_parent_directory(self, tmp_path):
        store = CutoffStore(tmp_path / "state" / "cutoff.txt")
        store.write(datetime(2024, 3, 1, tzinfo=timezone.utc))
        assert store.read() is not None
