"""
Property Tests for the Deterministic Primitives
"""

from hypothesis import given, strategies as st

from overlay.deterministic import content_hash, deterministic_id, derive_seed
from overlay.seeded_random import SeededRandom


# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

json_scalars = st.none() | st.booleans() | st.integers() | st.text()

json_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=8), children, max_size=4),
    max_leaves=12,
)


# =============================================================================
# HASHING
# =============================================================================

@given(st.dictionaries(st.text(max_size=10), json_values, max_size=8))
def test_content_hash_ignores_insertion_order(data):
    reordered = dict(reversed(list(data.items())))
    assert content_hash(data) == content_hash(reordered)


@given(json_values)
def test_content_hash_fixed_length(value):
    assert len(content_hash(value)) == 64


@given(st.lists(st.text(min_size=1, max_size=10), min_size=1, max_size=5))
def test_deterministic_id_shape(parts):
    result = deterministic_id(*parts)
    assert len(result) == 16
    assert all(c in "0123456789abcdef" for c in result)


@given(st.text(min_size=1), st.text(min_size=1))
def test_derive_seed_stable(run_id, timestamp_iso):
    assert derive_seed(run_id, timestamp_iso) == derive_seed(run_id, timestamp_iso)


# =============================================================================
# SEEDED RANDOM
# =============================================================================

@given(st.text(), st.integers(min_value=1, max_value=50))
def test_next_in_unit_interval(seed, draws):
    rng = SeededRandom(seed)
    assert all(0.0 <= rng.next() < 1.0 for _ in range(draws))


@given(st.text(), st.integers(min_value=-1000, max_value=1000), st.integers(min_value=1, max_value=1000))
def test_next_int_within_bounds(seed, low, span):
    value = SeededRandom(seed).next_int(low, low + span)
    assert low <= value < low + span


@given(st.text(), st.lists(st.integers(), max_size=30))
def test_shuffle_is_permutation(seed, items):
    assert sorted(SeededRandom(seed).shuffle(items)) == sorted(items)


@given(st.text(), st.lists(st.integers(), max_size=30))
def test_shuffle_reproducible(seed, items):
    assert SeededRandom(seed).shuffle(items) == SeededRandom(seed).shuffle(items)
