"""任职时间区间重叠判断的单元测试。"""

from datetime import datetime, timedelta, timezone

import pytest

from app.packages.kangalos.utils.intervals import Interval, has_overlap

JAN_1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
JUN_1 = datetime(2024, 6, 1, tzinfo=timezone.utc)
JUL_1 = datetime(2024, 7, 1, tzinfo=timezone.utc)
DEC_31 = datetime(2024, 12, 31, tzinfo=timezone.utc)
JAN_1_2025 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_touching_intervals_overlap():
    assert has_overlap([Interval(JAN_1, JUN_1)], Interval(JUN_1, DEC_31)) is True


def test_open_ended_existing_overlaps_later_start():
    assert has_overlap([Interval(JAN_1, None)], Interval(JAN_1_2025, None)) is True


def test_open_ended_candidate_overlaps_later_existing():
    assert has_overlap([Interval(JUL_1, DEC_31)], Interval(JAN_1, None)) is True


def test_disjoint_intervals_do_not_overlap():
    assert has_overlap([Interval(JAN_1, JUN_1)], Interval(JUL_1, DEC_31)) is False


def test_no_existing_intervals():
    assert has_overlap([], Interval(JAN_1)) is False


def test_overlap_is_symmetric():
    a = Interval(JAN_1, JUL_1)
    b = Interval(JUN_1, DEC_31)
    assert a.overlaps(b) is b.overlaps(a) is True


def test_naive_values_are_treated_as_utc():
    naive = Interval(datetime(2024, 1, 1), datetime(2024, 6, 1))
    assert naive.start == JAN_1
    assert naive.overlaps(Interval(JUN_1, DEC_31))


def test_offset_values_are_normalised():
    plus_two = timezone(timedelta(hours=2))
    local = Interval(datetime(2024, 6, 1, 2, 0, tzinfo=plus_two))
    assert local.start == JUN_1
    assert local.end is None


def test_end_before_start_rejected():
    with pytest.raises(ValueError):
        Interval(JUN_1, JAN_1)


def test_open_existing_blocks_bounded_candidate_inside_it():
    existing = [Interval(datetime(2024, 1, 1, tzinfo=timezone.utc), None)]
    candidate = Interval(datetime(2024, 3, 1, tzinfo=timezone.utc), datetime(2024, 4, 1, tzinfo=timezone.utc))
    assert has_overlap(existing, candidate) is True


def test_only_matching_interval_counts():
    first = Interval(JAN_1, JUN_1)
    second = Interval(JUL_1, DEC_31)
    aug_1 = Interval(datetime(2024, 8, 1, tzinfo=timezone.utc))
    assert first.overlaps(aug_1) is False
    assert has_overlap([first, second], aug_1) is True
