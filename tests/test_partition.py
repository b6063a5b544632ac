import pytest

from osprojects.forksort.partition import SorterTimes, compute_times, record_ranges


@pytest.mark.parametrize("coachnum", [0, 1, 2, 3])
@pytest.mark.parametrize("numofrecords", [0, 1, 7, 16, 100, 1001])
def test_ranges_are_contiguous_and_cover_everything(coachnum, numofrecords):
    ranges = record_ranges(coachnum, numofrecords)
    assert len(ranges) == 1 << coachnum
    assert ranges[0][0] == 0
    assert ranges[-1][1] == numofrecords
    for (_, end), (start, _) in zip(ranges, ranges[1:]):
        assert end == start
    assert all(start <= end for start, end in ranges)


def test_single_sorter_takes_all():
    assert record_ranges(0, 50) == [(0, 50)]


def test_two_sorters_split_in_half():
    assert record_ranges(1, 50) == [(0, 25), (25, 50)]


def test_eight_sorters_on_sixteen_records():
    assert record_ranges(3, 16) == [
        (0, 1), (1, 2), (2, 3), (3, 4), (4, 6), (6, 8), (8, 12), (12, 16)
    ]


def test_four_sorters_grow_in_size():
    ranges = record_ranges(2, 800)
    sizes = [end - start for start, end in ranges]
    assert sizes[0] == sizes[1]
    assert sizes[2] == 2 * sizes[1]
    assert sizes[3] >= sizes[2]


@pytest.mark.parametrize("coachnum", [-1, 4])
def test_bad_coach_number(coachnum):
    with pytest.raises(ValueError):
        record_ranges(coachnum, 10)


def test_compute_times():
    times = compute_times([1.0, 3.0, 2.0])
    assert times == SorterTimes(1.0, 3.0, 2.0)


def test_compute_times_single():
    assert compute_times([0.5]) == SorterTimes(0.5, 0.5, 0.5)


def test_compute_times_empty():
    with pytest.raises(ValueError):
        compute_times([])