import pytest

from osprojects.forksort.arguments import (
    ArgumentError,
    Arguments,
    CoachSpec,
    parse_arguments,
)


def test_single_coach_with_column():
    args = parse_arguments(["-f", "data.bin", "-h", "3"])
    assert args == Arguments("data.bin", (CoachSpec("h", 3),), ())
    assert args.numofcoaches == 1


def test_column_defaults_to_one():
    args = parse_arguments(["-f", "data.bin", "-q"])
    assert args.coaches == (CoachSpec("q", 1),)


def test_one_is_not_read_as_a_column():
    args = parse_arguments(["-f", "data.bin", "-h", "1"])
    assert args.coaches == (CoachSpec("h", 1),)


def test_coaches_keep_their_order():
    args = parse_arguments(["-q", "8", "-f", "in", "-h", "2"])
    assert args.filename == "in"
    assert args.coaches == (CoachSpec("q", 8), CoachSpec("h", 2))


def test_duplicate_columns_are_ignored_with_warnings():
    args = parse_arguments(["-f", "x", "-h", "2", "-q", "2", "-q", "2", "-h", "3"])
    assert args.coaches == (CoachSpec("h", 2), CoachSpec("h", 3))
    assert len(args.warnings) == 2
    assert "Coach 2 " in args.warnings[0]
    assert "Coach 3 " in args.warnings[1]


def test_too_few_arguments():
    with pytest.raises(ArgumentError, match="Usage"):
        parse_arguments(["-f", "x"])


def test_duplicate_file_flag():
    with pytest.raises(ArgumentError, match="Usage"):
        parse_arguments(["-f", "x", "-f", "y", "-h"])


def test_file_flag_without_name():
    with pytest.raises(ArgumentError, match="Usage"):
        parse_arguments(["-h", "2", "-f"])


def test_missing_file():
    with pytest.raises(ArgumentError, match="Usage"):
        parse_arguments(["-h", "2", "-q", "3"])


def test_no_coaches():
    with pytest.raises(ArgumentError, match="Minimum"):
        parse_arguments(["-f", "x", "junk"])


def test_too_many_coaches():
    argv = ["-f", "x", "-h", "2", "-h", "3", "-h", "4", "-h", "5", "-h", "6"]
    with pytest.raises(ArgumentError, match="Maximum"):
        parse_arguments(argv)


def test_fifth_coach_fails_even_if_duplicate():
    argv = ["-f", "x", "-h", "2", "-h", "3", "-h", "4", "-h", "5", "-q", "2"]
    with pytest.raises(ArgumentError, match="Maximum"):
        parse_arguments(argv)


@pytest.mark.parametrize("column", ["2x", "23", "8 "])
def test_bad_column(column):
    with pytest.raises(ArgumentError, match="column"):
        parse_arguments(["-f", "x", "-h", column])