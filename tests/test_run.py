import pytest

from osprojects.elections.run import CmdParams, UsageError, parse_args


def test_all_flags():
    params = parse_args(["-i", "in", "-o", "out", "-n", "3"])
    assert params == CmdParams(input="in", output="out", num_of_updates=3)


def test_updates_default_to_five():
    params = parse_args(["-i", "in", "-o", "out"])
    assert params.num_of_updates == 5
    assert (params.input, params.output) == ("in", "out")


def test_flags_in_any_order():
    params = parse_args(["-n", "7", "-o", "out", "-i", "in"])
    assert params == CmdParams(input="in", output="out", num_of_updates=7)


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["-i", "in"],
        ["-i", "in", "-o"],
        ["-x", "in", "-o", "out"],
        ["-i", "in", "-n", "3"],
        ["-i", "in", "-i", "other"],
        ["-i", "in", "-o", "out", "-i", "again"],
        ["-i", "in", "-o", "out", "-n", "3", "extra"],
    ],
)
def test_wrong_usage(argv):
    with pytest.raises(UsageError, match="Usage"):
        parse_args(argv)