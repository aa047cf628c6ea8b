"""
Tests for id and timestamp auto-fill values.
"""

from csvstore.engine.stamps import format_timestamp, new_record_id, now_timestamp


class TestStamps:
    """Tests for stamps."""

    def test_format_trims_trailing_zeros(self):
        assert format_timestamp(1_700_000_000_123_450_000) == "2023-11-14T22:13:20.12345Z"

    def test_format_whole_second(self):
        assert format_timestamp(1_700_000_000_000_000_000) == "2023-11-14T22:13:20Z"

    def test_format_keeps_nanoseconds(self):
        assert format_timestamp(1_700_000_000_000_000_001) == "2023-11-14T22:13:20.000000001Z"

    def test_record_id_is_numeric(self):
        assert new_record_id().isdigit()

    def test_now_is_utc(self):
        assert now_timestamp().endswith("Z")
