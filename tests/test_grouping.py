"""Tests for temporal grouping."""

import random

import pytest

from recipe_scan.grouping import Group, group_by_time
from conftest import make_item


def _names(groups):
    return [group.names for group in groups]


class TestGroupByTime:
    """Tests for the greedy gap-based grouping."""

    def test_close_shots_share_a_group(self) -> None:
        items = [make_item("a", 0), make_item("b", 3), make_item("c", 20)]
        groups = group_by_time(items, threshold_seconds=7)
        assert _names(groups) == [["a", "b"], ["c"]]

    def test_gap_equal_to_threshold_joins(self) -> None:
        items = [make_item("a", 0), make_item("b", 7)]
        assert _names(group_by_time(items, 7)) == [["a", "b"]]

    def test_gap_just_over_threshold_splits(self) -> None:
        items = [make_item("a", 0), make_item("b", 7.001)]
        assert _names(group_by_time(items, 7)) == [["a"], ["b"]]

    def test_identical_timestamps_split(self) -> None:
        items = [make_item("a", 5), make_item("b", 5), make_item("c", 6)]
        assert _names(group_by_time(items, 7)) == [["a"], ["b", "c"]]

    def test_gap_measured_from_last_member(self) -> None:
        # Each step is within the threshold even though the span is not
        items = [make_item(str(i), i * 5) for i in range(5)]
        groups = group_by_time(items, 7)
        assert len(groups) == 1
        assert len(groups[0]) == 5

    def test_unsorted_input_is_ordered_by_time(self) -> None:
        items = [make_item("late", 100), make_item("early", 0), make_item("mid", 4)]
        assert _names(group_by_time(items, 7)) == [["early", "mid"], ["late"]]

    def test_empty_input(self) -> None:
        assert group_by_time([], 7) == []

    def test_partition_property(self) -> None:
        rng = random.Random(1234)
        for _ in range(50):
            offsets = sorted(rng.choice([0, 1, 3, 7, 8, 15]) for _ in range(rng.randint(1, 30)))
            running = 0
            items = []
            for i, step in enumerate(offsets):
                running += step
                items.append(make_item(f"img{i:02d}", running))

            groups = group_by_time(items, 7)
            flattened = [item for group in groups for item in group.items]
            assert flattened == items

            for group in groups:
                for prev, cur in zip(group.items, group.items[1:]):
                    gap = (cur.timestamp - prev.timestamp).total_seconds()
                    assert 0 < gap <= 7
            for prev_group, next_group in zip(groups, groups[1:]):
                gap = (next_group.items[0].timestamp - prev_group.items[-1].timestamp).total_seconds()
                assert gap == 0 or gap > 7


class TestGroup:
    """Tests for the Group container."""

    def test_label_lists_member_names(self) -> None:
        group = Group((make_item("IMG_1.jpg"), make_item("IMG_2.jpg", 2)))
        assert group.label == "IMG_1.jpg, IMG_2.jpg"
        assert group.names == ["IMG_1.jpg", "IMG_2.jpg"]

    def test_empty_group_rejected(self) -> None:
        with pytest.raises(ValueError):
            Group(())
