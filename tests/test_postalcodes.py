import pytest

from osprojects.elections.postalcodes import PostalCodes
from osprojects.elections.voter import Voter


def make(id_num):
    return Voter(id_num, "Name", "Surname", 30, "M")


def test_insert_creates_code_and_links_voter():
    codes = PostalCodes()
    voter = make("A1")
    postal = codes.insert(15772, voter)
    assert voter.post is postal
    assert postal.code == 15772
    assert postal.voters_number == 1
    assert codes.get_votes(15772) == 0


def test_unknown_code_has_no_votes():
    codes = PostalCodes()
    assert codes.get_votes(404) is None


def test_voters_share_a_code():
    codes = PostalCodes()
    a, b = make("A1"), make("B2")
    codes.insert(100, a)
    codes.insert(100, b)
    assert a.post is b.post
    assert a.post.voters_number == 2
    assert len(codes) == 1


def test_codes_iterate_ascending():
    codes = PostalCodes()
    for index, code in enumerate([300, 100, 200]):
        codes.insert(code, make(f"V{index}"))
    assert [postal.code for postal in codes] == [100, 200, 300]


def test_remove_voter_updates_counts_and_drops_empty_code():
    codes = PostalCodes()
    a, b = make("A1"), make("B2")
    codes.insert(100, a)
    codes.insert(100, b)
    a.has_voted = True
    a.post.have_voted += 1
    codes.remove_voter(a)
    assert codes.get_votes(100) == 0
    assert b.post.voters_number == 1
    codes.remove_voter(b)
    assert codes.get_votes(100) is None
    assert len(codes) == 0


def test_delete_missing_code_raises():
    codes = PostalCodes()
    with pytest.raises(KeyError):
        codes.delete(1)