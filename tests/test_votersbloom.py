from osprojects.elections.bloom import compute_size
from osprojects.elections.voter import Voter
from osprojects.elections.votersbloom import (
    VotersBloomFilter,
    djb2_hash,
    linear_hash,
    murmur3_32,
)
from osprojects.elections.votersrbt import VotersTree


def make_tree(ids):
    tree = VotersTree()
    for id_num in ids:
        tree.insert(Voter(id_num, "Name", "Surname", 40, "M"))
    return tree


def test_djb2_of_empty_key_is_seed():
    assert djb2_hash("") == 5381


def test_hashes_are_deterministic_and_64_bit():
    keys = ["A1", "AK123456", "xyz", "ΑΒΓ", "a" * 37]
    for hash_function in (djb2_hash, murmur3_32, linear_hash):
        values = [hash_function(key) for key in keys]
        assert values == [hash_function(key) for key in keys]
        assert all(0 <= value < 2**64 for value in values)
        assert len(set(values)) == len(keys)


def test_fill_puts_every_id_in_filter():
    ids = [f"ID{n}" for n in range(20)]
    tree = make_tree(ids)
    bloom = VotersBloomFilter(len(tree), 1000)
    bloom.fill(tree)
    assert all(id_num in bloom for id_num in ids)
    assert bloom.updates_done == len(ids)


def test_insert_update_below_threshold_keeps_filter():
    tree = make_tree(["A1", "B2"])
    bloom = VotersBloomFilter(len(tree), 1000)
    bloom.fill(tree)
    before = bloom.bloom
    tree.insert(Voter("C3", "N", "S", 20, "F"))
    bloom.insert_update("C3", len(tree), tree)
    assert bloom.bloom is before
    assert "C3" in bloom
    assert bloom.updates_done == len(tree)


def test_reaching_threshold_rebuilds_for_current_count():
    tree = make_tree(["A1", "B2"])
    bloom = VotersBloomFilter(len(tree), 1)
    bloom.fill(tree)
    assert bloom.bloom.size == compute_size(2)
    tree.insert(Voter("C3", "N", "S", 20, "F"))
    bloom.insert_update("C3", len(tree), tree)
    assert bloom.bloom.size == compute_size(3)
    assert all(id_num in bloom for id_num in ["A1", "B2", "C3"])


def test_delete_update_counts_and_rebuilds():
    tree = make_tree(["A1", "B2", "C3"])
    bloom = VotersBloomFilter(len(tree), 1000)
    bloom.fill(tree)
    done = bloom.updates_done
    tree.delete("B2")
    bloom.delete_update(len(tree), tree)
    assert bloom.updates_done == done + 1
    assert "B2" in bloom

    bloom.num_of_updates = 0
    bloom.delete_update(len(tree), tree)
    assert bloom.bloom.size == compute_size(len(tree))
    assert "A1" in bloom and "C3" in bloom


def test_rebuild_with_empty_registry_is_allowed():
    tree = make_tree([])
    bloom = VotersBloomFilter(1, 0)
    bloom.delete_update(0, tree)
    assert bloom.bloom.size == compute_size(1)