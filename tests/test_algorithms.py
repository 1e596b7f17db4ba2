"""Tests for the skip algorithms and their registry."""

from __future__ import annotations

import math

import numpy as np
import pytest

from seqsample.algorithms import (
    ALGORITHMS,
    Counter,
    SkipAlgorithm,
    VitterA,
    VitterD,
    VitterDState,
    available_algorithms,
    get_algorithm,
    vitter_a,
    vitter_a_skip,
    vitter_d,
)
from seqsample.errors import InvalidArgumentError
from seqsample.rng import NumpyRandomSource
from helpers import ScriptedSource


def _counters(n: int, big_n: int) -> tuple[Counter, Counter]:
    sample = Counter()
    records = Counter()
    sample.reset(n)
    records.reset(big_n)
    return sample, records


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def test_registry_lists_vitter_a_and_d() -> None:
    assert available_algorithms() == ["vitter_a", "vitter_d"]
    assert ALGORITHMS["vitter_a"] is vitter_a
    assert ALGORITHMS["vitter_d"] is vitter_d


def test_get_algorithm_resolves_names_and_passes_instances_through() -> None:
    custom = VitterD(alpha_inverse=5)
    assert get_algorithm("vitter_a") is vitter_a
    assert get_algorithm(custom) is custom


def test_get_algorithm_rejects_unknown_names() -> None:
    """Unimplemented algorithms such as nair_e are not registered."""
    with pytest.raises(InvalidArgumentError, match="nair_e"):
        get_algorithm("nair_e")


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        ALGORITHMS["vitter_x"] = VitterA()  # type: ignore[index]


def test_skip_algorithm_is_abstract() -> None:
    with pytest.raises(TypeError):
        SkipAlgorithm()  # type: ignore[abstract]


# ---------------------------------------------------------------------------
# Algorithm A
# ---------------------------------------------------------------------------


def test_vitter_a_single_selection_uses_uniform_int() -> None:
    sample, records = _counters(1, 10)
    rng = ScriptedSource(integers=[4])
    assert vitter_a_skip(sample, records, rng) == 4
    assert rng.int_bounds == [10]
    assert rng.pos_calls == 0


def test_vitter_a_rejection_loop_matches_hand_computation() -> None:
    """N=10, n=2, V=0.5: quot goes 0.8 -> 0.622 -> 0.467, so S=2."""
    sample, records = _counters(2, 10)
    rng = ScriptedSource(positives=[0.5])
    assert vitter_a_skip(sample, records, rng) == 2


def test_vitter_a_never_skips_when_every_record_is_needed() -> None:
    sample, records = _counters(4, 4)
    rng = ScriptedSource(positives=[1e-300])
    assert vitter_a_skip(sample, records, rng) == 0


def test_vitter_a_does_not_touch_counters() -> None:
    sample, records = _counters(3, 50)
    vitter_a.skip(None, sample, records, ScriptedSource(positives=[0.01]))
    assert (sample.total, sample.remaining) == (3, 3)
    assert (records.total, records.remaining) == (50, 50)


def test_vitter_a_has_no_state() -> None:
    assert vitter_a.new_state() is None


# ---------------------------------------------------------------------------
# Algorithm D
# ---------------------------------------------------------------------------


def test_vitter_d_rejects_non_positive_alpha_inverse() -> None:
    with pytest.raises(InvalidArgumentError):
        VitterD(alpha_inverse=0)


def test_vitter_d_init_delegates_without_drawing_for_dense_samples() -> None:
    """13 * 3 > 20, so the run goes straight to Algorithm A."""
    state = vitter_d.new_state()
    sample, records = _counters(3, 20)
    rng = ScriptedSource()
    vitter_d.init(state, sample, records, rng)
    assert state.use_algorithm_a is True
    assert rng.pos_calls == 0


def test_vitter_d_init_caches_root_of_uniform() -> None:
    state = vitter_d.new_state()
    sample, records = _counters(2, 100)
    vitter_d.init(state, sample, records, ScriptedSource(positives=[0.25]))
    assert state.use_algorithm_a is False
    assert state.vprime == pytest.approx(0.5)


def test_vitter_d_init_resets_previous_state() -> None:
    state = VitterDState(vprime=0.9, use_algorithm_a=True)
    sample, records = _counters(2, 100)
    vitter_d.init(state, sample, records, ScriptedSource(positives=[0.25]))
    assert state.use_algorithm_a is False


def test_vitter_d_init_with_empty_sample_draws_nothing() -> None:
    state = vitter_d.new_state()
    sample, records = _counters(0, 100)
    rng = ScriptedSource()
    vitter_d.init(state, sample, records, rng)
    assert rng.pos_calls == 0


def test_vitter_d_last_selection_uses_cached_variate() -> None:
    state = vitter_d.new_state()
    sample, records = _counters(1, 100)
    rng = ScriptedSource(positives=[0.305])
    vitter_d.init(state, sample, records, rng)
    assert vitter_d.skip(state, sample, records, rng) == 30
    assert rng.pos_calls == 1


def test_vitter_d_last_selection_stays_in_range_when_vprime_rounds_up() -> None:
    state = VitterDState(vprime=1.0)
    sample, records = _counters(1, 100)
    assert vitter_d.skip(state, sample, records, ScriptedSource()) == 99


def test_vitter_d_switches_to_algorithm_a_when_threshold_is_crossed() -> None:
    """26 > 20 once two selections remain among twenty records."""
    state = VitterDState(vprime=0.5, use_algorithm_a=False)
    sample = Counter(total=5, remaining=2)
    records = Counter(total=100, remaining=20)

    expected = vitter_a_skip(sample, records, ScriptedSource(positives=[0.3]))
    assert vitter_d.skip(state, sample, records, ScriptedSource(positives=[0.3])) == expected
    assert state.use_algorithm_a is True


def test_vitter_d_custom_threshold_changes_hand_over_point() -> None:
    eager = VitterD(alpha_inverse=100)
    state = eager.new_state()
    sample, records = _counters(2, 100)
    eager.init(state, sample, records, ScriptedSource())
    assert state.use_algorithm_a is True


def test_vitter_d_skips_stay_within_rejection_bound() -> None:
    """Every accepted skip satisfies S < qu1 = N - n + 1."""
    rng = NumpyRandomSource(3)
    for n, big_n in [(2, 1_000), (3, 100), (10, 10_000), (40, 1_000_000)]:
        state = vitter_d.new_state()
        sample, records = _counters(n, big_n)
        vitter_d.init(state, sample, records, rng)
        for _ in range(200):
            s = vitter_d.skip(state, sample, records, rng)
            assert 0 <= s <= big_n - n
            assert 0.0 < state.vprime
            assert math.isfinite(state.vprime)
            # Restart from the same counters each time.
            vitter_d.init(state, sample, records, rng)


def test_vitter_d_does_not_touch_counters() -> None:
    state = vitter_d.new_state()
    sample, records = _counters(5, 10_000)
    rng = NumpyRandomSource(np.random.default_rng(11))
    vitter_d.init(state, sample, records, rng)
    vitter_d.skip(state, sample, records, rng)
    assert sample.remaining == 5
    assert records.remaining == 10_000
