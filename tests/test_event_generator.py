"""Flat sampling, batching and the generation driver."""

import math
from decimal import Decimal, localcontext

import numpy as np
import pytest

from eemumu.conservation import check_event_kinematics
from eemumu.event_generator import (
    TargetUnreachableError,
    filter_accepted,
    generate_event_and_mask,
    generate_events,
    iter_accepted_batches,
    sample_flat_event,
)
from eemumu.events import Event, event_stats
from eemumu.processes import EEToMuMuProcess, FlatProcess, FunctionProcess


ZERO = FunctionProcess(lambda E, c: 0.0, lambda E: 1.0, name="zero")


# ----------------------------- Sampling -----------------------------------
def test_sample_flat_event_ranges_and_weight():
    proc = EEToMuMuProcess()
    rng = np.random.default_rng(0)
    for _ in range(500):
        ev = sample_flat_event(1000.0, proc, rng)
        assert -1.0 <= ev.cos_theta < 1.0
        assert 0.0 <= ev.phi < 2 * math.pi
        assert ev.weight == proc.differential_cross_section(1000.0, ev.cos_theta)
        assert ev.element_type is float


def test_sample_flat_event_int_energy():
    ev = sample_flat_event(1000, EEToMuMuProcess(), np.random.default_rng(1))
    assert ev.element_type is float
    assert ev.energy == 1000.0


def test_generate_event_and_mask():
    event, accepted = generate_event_and_mask(1000.0, FlatProcess(), np.random.default_rng(2))
    assert isinstance(event, Event)
    assert accepted is True


def test_filter_accepted_is_stable():
    evs = [Event(1.0, 0.1 * i, 0.0, 1.0) for i in range(6)]
    records = list(zip(evs, [True, False, True, True, False, True]))
    assert filter_accepted(records) == [evs[0], evs[2], evs[3], evs[5]]


def test_event_momenta_conserve():
    ev = sample_flat_event(800.0, EEToMuMuProcess(), np.random.default_rng(3))
    moms = ev.momenta()
    assert check_event_kinematics(tuple(moms.values()))["conserved"]


# ----------------------------- Driver -------------------------------------
@pytest.mark.parametrize("vectorized", [True, False])
@pytest.mark.parametrize("chunk_size", [1, 7, 100, 1000])
def test_generate_events_count_bounds(chunk_size, vectorized):
    n = 50
    events = generate_events(1000.0, n, chunk_size=chunk_size, seed=11, vectorized=vectorized)
    assert n < len(events) <= n + chunk_size


def test_generate_events_exact():
    events = generate_events(1000.0, 50, chunk_size=64, seed=12, exact=True)
    assert len(events) == 50


def test_generate_zero_events_still_runs_one_batch():
    events = generate_events(1000.0, 0, chunk_size=10, process=FlatProcess(), seed=1)
    assert len(events) == 10


def test_generate_events_reproducible():
    a = generate_events(1000.0, 30, chunk_size=16, seed=5)
    b = generate_events(1000.0, 30, chunk_size=16, seed=5)
    assert a == b


def test_generate_events_keeps_sampling_order():
    proc = FlatProcess()
    rng = np.random.default_rng(3)
    expected = [generate_event_and_mask(500.0, proc, rng)[0] for _ in range(10)]
    events = generate_events(500.0, 9, chunk_size=5, process=proc,
                             rng=np.random.default_rng(3), vectorized=False)
    assert events == expected


def test_generated_events_follow_cross_section():
    proc = EEToMuMuProcess()
    events = generate_events(1000.0, 20000, chunk_size=5000, process=proc, seed=21)
    stats = event_stats(events)
    assert stats["mean_cos_theta"] == pytest.approx(0.0, abs=0.02)
    # <cos^2> for 1 + cos^2 is 0.4, flat gives 1/3
    mean_c2 = np.mean([ev.cos_theta ** 2 for ev in events])
    assert mean_c2 == pytest.approx(0.4, abs=0.01)


def test_float32_generation():
    events = generate_events(np.float32(1000.0), 20, chunk_size=50, seed=0)
    assert all(ev.element_type is np.float32 for ev in events)


def test_decimal_generation():
    with localcontext() as ctx:
        ctx.prec = 30
        events = generate_events(Decimal(1000), 5, chunk_size=4, seed=1)
        assert len(events) > 5
        assert all(ev.element_type is Decimal for ev in events)


def test_vectorized_requires_float_kind():
    with pytest.raises(ValueError):
        generate_events(Decimal(1000), 5, chunk_size=4, vectorized=True)


def test_vectorized_requires_vectorized_process():
    proc = FunctionProcess(lambda E, c: 1.0, lambda E: 1.0)
    with pytest.raises(ValueError):
        generate_events(1000.0, 5, process=proc, vectorized=True)


def test_unreachable_target_raises():
    with pytest.raises(TargetUnreachableError, match="with 0 accepted"):
        generate_events(1000.0, 10, chunk_size=20, process=ZERO, seed=0, max_batches=3)


def test_unreachable_target_reports_partial_progress():
    half = FunctionProcess(lambda E, c: 1.0, lambda E: 2.0, name="half")
    with pytest.raises(TargetUnreachableError, match=r"with [1-9]\d* accepted"):
        generate_events(1000.0, 1000, chunk_size=50, process=half, seed=0, max_batches=2)


def test_iter_accepted_batches_cap():
    batches = iter_accepted_batches(1000.0, 5, ZERO, np.random.default_rng(0), max_batches=2)
    assert next(batches) == []
    assert next(batches) == []
    with pytest.raises(TargetUnreachableError):
        next(batches)


@pytest.mark.parametrize("kwargs", [{"chunk_size": 0}, {"max_batches": 0}])
def test_invalid_batch_arguments(kwargs):
    with pytest.raises(ValueError):
        generate_events(1000.0, 5, **kwargs)


def test_negative_target_raises():
    with pytest.raises(ValueError):
        generate_events(1000.0, -1)


# ----------------------------- Summary ------------------------------------
def test_event_stats():
    events = [Event(1000.0, 0.5, 0.0, 1.0), Event(1000.0, -0.2, 0.0, 3.0), Event(1000.0, 0.1, 0.0, 2.0)]
    stats = event_stats(events)
    assert stats["n_events"] == 3
    assert stats["forward"] == 2
    assert stats["backward"] == 1
    assert stats["forward_backward_asymmetry"] == pytest.approx(1 / 3)
    assert stats["mean_cos_theta"] == pytest.approx(0.4 / 3)
    assert stats["mean_weight"] == pytest.approx(2.0)


def test_event_stats_empty():
    stats = event_stats([])
    assert stats["n_events"] == 0
    assert stats["forward_backward_asymmetry"] == 0.0


def test_rng_and_seed_are_exclusive():
    with pytest.raises(ValueError, match="not both"):
        generate_events(1000.0, 5, rng=np.random.default_rng(0), seed=0)


# ------------------- Injected functions of another kind -------------------
def test_decimal_generation_with_float_bound():
    proc = FunctionProcess(lambda E, c: 1 + c * c, lambda E: 2.0, name="1+cos^2")
    with localcontext() as ctx:
        ctx.prec = 30
        events = generate_events(Decimal(1000), 5, chunk_size=4, process=proc, seed=1)
    assert len(events) >= 6
    assert all(ev.element_type is Decimal for ev in events)


@pytest.mark.parametrize("vectorized", [False, True])
def test_float32_generation_with_float64_weights(vectorized):
    proc = FunctionProcess(
        lambda E, c: np.float64(1.0) + np.asarray(c, dtype=np.float64) ** 2,
        lambda E: np.float64(2.0),
        name="1+cos^2 (float64)",
        vectorized=True,
    )
    events = generate_events(np.float32(1000.0), 50, chunk_size=20, process=proc,
                             seed=2, vectorized=vectorized)
    assert len(events) > 50
    assert all(ev.element_type is np.float32 for ev in events)
