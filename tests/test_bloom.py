import pytest

from osprojects.elections.bloom import BloomFilter, compute_size


def _is_prime(n):
    if n < 2:
        return False
    return all(n % d for d in range(2, int(n**0.5) + 1))


def _identity(k):
    return k


def _double(k):
    return 2 * k


def _triple(k):
    return 3 * k


@pytest.mark.parametrize("count", range(2, 60))
def test_compute_size_is_smallest_prime_from_three_times_count(count):
    size = compute_size(count)
    assert size >= 3 * count
    assert _is_prime(size)
    assert not any(_is_prime(m) for m in range(3 * count, size))


def test_compute_size_for_single_key():
    assert compute_size(1) == 3


def test_rejects_non_positive_count():
    with pytest.raises(ValueError):
        BloomFilter(0, _identity, _double, _triple)
    with pytest.raises(ValueError):
        BloomFilter(-4, _identity, _double, _triple)


def test_rejects_missing_hash():
    with pytest.raises(ValueError):
        BloomFilter(10, _identity, None, _triple)


def test_size_follows_compute_size():
    bloom = BloomFilter(25, _identity, _double, _triple)
    assert bloom.size == compute_size(25)


def test_inserted_key_is_found():
    bloom = BloomFilter(100, _identity, _double, _triple)
    bloom.insert(1)
    assert 1 in bloom


def test_absent_key_is_not_found():
    bloom = BloomFilter(100, _identity, _double, _triple)
    bloom.insert(1)
    assert 5 not in bloom


def test_empty_filter_contains_nothing():
    bloom = BloomFilter(10, _identity, _double, _triple)
    assert all(k not in bloom for k in range(50))


def test_no_false_negatives_for_many_keys():
    bloom = BloomFilter(200, hash, lambda k: hash(k) * 31 + 7, lambda k: len(k))
    keys = [f"id{n}" for n in range(200)]
    for key in keys:
        bloom.insert(key)
    assert all(key in bloom for key in keys)


def test_large_hash_values_wrap_around():
    bloom = BloomFilter(10, lambda k: k + 10**12, _double, _triple)
    bloom.insert(7)
    assert 7 in bloom


def test_constant_hashes_give_false_positives():
    bloom = BloomFilter(10, lambda k: 0, lambda k: 1, lambda k: 2)
    bloom.insert("a")
    assert "anything" in bloom