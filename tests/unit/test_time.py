from __future__ import annotations

from datetime import UTC, datetime

import pytest

from nodecred.core.time import from_unix_seconds, in_int64_range, unix_seconds, utc_now


def test_utc_now_is_aware_and_utc() -> None:
    now = utc_now()
    assert now.tzinfo is not None
    assert now.tzinfo == UTC


def test_unix_seconds_passes_ints_through() -> None:
    assert unix_seconds(1_700_000_000) == 1_700_000_000
    assert unix_seconds(-3) == -3


def test_unix_seconds_assumes_naive_is_utc() -> None:
    assert unix_seconds(datetime(1970, 1, 1, 0, 0, 1)) == 1


def test_unix_seconds_floors_before_epoch() -> None:
    assert unix_seconds(datetime(1969, 12, 31, 23, 59, 59, 500_000, tzinfo=UTC)) == -1


@pytest.mark.parametrize("bad", [True, 1.5, "1700000000", None])
def test_unix_seconds_rejects_other_types(bad: object) -> None:
    with pytest.raises(TypeError):
        unix_seconds(bad)  # type: ignore[arg-type]


def test_int64_bounds() -> None:
    assert in_int64_range(2**63 - 1)
    assert in_int64_range(-(2**63))
    assert not in_int64_range(2**63)


def test_from_unix_seconds() -> None:
    assert from_unix_seconds(1_700_000_000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
