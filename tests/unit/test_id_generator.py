"""Tests for rs_common.id_generator and rs_common.datetime_utils."""

from datetime import UTC, datetime, timedelta

import pytest

from src.rs_common.datetime_utils import elapsed_days, utc_now, utc_today
from src.rs_common.id_generator import (
    SnowflakeIdGenerator,
    generate_comment_id,
    generate_order_id,
)


class TestSnowflakeIdGenerator:
    def test_returns_str(self) -> None:
        gen = SnowflakeIdGenerator(machine_id=1)
        assert isinstance(gen.next_id(), str)

    def test_unique_ids(self) -> None:
        gen = SnowflakeIdGenerator(machine_id=1)
        ids = {gen.next_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_monotonically_increasing(self) -> None:
        gen = SnowflakeIdGenerator(machine_id=1)
        prev = gen.next_int()
        for _ in range(100):
            current = gen.next_int()
            assert current > prev
            prev = current

    def test_invalid_machine_id(self) -> None:
        with pytest.raises(ValueError):
            SnowflakeIdGenerator(machine_id=1024)

    def test_prefixes(self) -> None:
        assert generate_order_id().startswith("ord_")
        assert generate_comment_id().startswith("cmt_")


class TestUtcNow:
    def test_returns_aware_datetime(self) -> None:
        now = utc_now()
        assert isinstance(now, datetime)
        assert now.tzinfo is not None

    def test_is_utc(self) -> None:
        assert utc_now().tzinfo == UTC

    def test_today_is_date(self) -> None:
        assert utc_today() == utc_now().date()


class TestElapsedDays:
    def test_truncates(self) -> None:
        start = datetime(2026, 1, 1, tzinfo=UTC)
        assert elapsed_days(start, start + timedelta(days=7, hours=23)) == 7

    def test_same_instant(self) -> None:
        start = datetime(2026, 1, 1, tzinfo=UTC)
        assert elapsed_days(start, start) == 0

    def test_future_is_negative(self) -> None:
        start = datetime(2026, 1, 10, tzinfo=UTC)
        assert elapsed_days(start, start - timedelta(days=2, hours=1)) == -2
