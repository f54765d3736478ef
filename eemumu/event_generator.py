import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

from . import numeric
from .config import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_BATCHES, DEFAULT_PROCESS
from .events import Event
from .processes import ScatteringProcess, get_process
from .unweighting import build_unweighting_mask


logger = logging.getLogger(__name__)


class TargetUnreachableError(RuntimeError):
    """Batch cap exhausted before enough events were accepted."""


def _working_energy(E_in):
    kind = numeric.inexact_kind(numeric.common_kind(E_in))
    return numeric.convert(E_in, kind)


def sample_flat_event(E_in, process: Optional[ScatteringProcess] = None,
                      rng: Optional[np.random.Generator] = None) -> Event:
    """
    Draw one flat phase-space point at beam energy E_in and weight it.

    cos_theta is uniform in [-1, 1), phi uniform in [0, 2 pi), both drawn in
    the numeric kind of E_in. The weight is the differential cross-section.
    """
    process = process or get_process(DEFAULT_PROCESS)
    E = _working_energy(E_in)
    kind = type(E)

    cth = 2 * numeric.uniform(kind, rng) - 1
    phi = 2 * numeric.pi_of(kind) * numeric.uniform(kind, rng)
    weight = numeric.convert(process.differential_cross_section(E, cth), kind)

    return Event(E, cth, phi, weight)


def generate_event_and_mask(E_in, process: Optional[ScatteringProcess] = None,
                            rng: Optional[np.random.Generator] = None) -> Tuple[Event, bool]:
    """Sample one flat event and its accept/reject decision."""
    process = process or get_process(DEFAULT_PROCESS)
    E = _working_energy(E_in)
    event = sample_flat_event(E, process, rng)
    return event, build_unweighting_mask(E, event, process, rng)


def filter_accepted(records) -> List[Event]:
    """Keep the accepted events of (event, accepted) records, in order."""
    return [event for event, accepted in records if accepted]


def _sample_chunk_scalar(E, chunk_size: int, process: ScatteringProcess,
                         rng: np.random.Generator) -> List[Event]:
    records = [generate_event_and_mask(E, process, rng) for _ in range(chunk_size)]
    return filter_accepted(records)


def _sample_chunk_vectorized(E, chunk_size: int, process: ScatteringProcess,
                             rng: np.random.Generator) -> List[Event]:
    kind = type(E)
    cth = 2 * numeric.uniform_array(kind, chunk_size, rng) - 1
    phi = 2 * numeric.pi_of(kind) * numeric.uniform_array(kind, chunk_size, rng)
    weights = np.asarray(process.differential_cross_section(E, cth), dtype=kind)
    maximum_weight = numeric.convert(process.max_weight(E), kind)
    u = numeric.uniform_array(kind, chunk_size, rng)
    mask = weights >= u * maximum_weight

    # index instead of .item() so numpy scalar kinds survive
    return [
        Event(E, kind(cth[i]), kind(phi[i]), kind(weights[i]))
        for i in np.flatnonzero(mask)
    ]


def iter_accepted_batches(E_in,
                          chunk_size: int = DEFAULT_CHUNK_SIZE,
                          process: Optional[ScatteringProcess] = None,
                          rng: Optional[np.random.Generator] = None,
                          max_batches: Optional[int] = DEFAULT_MAX_BATCHES,
                          vectorized: Optional[bool] = None) -> Iterator[List[Event]]:
    """
    Yield the accepted events of successive batches of chunk_size flat samples.

    Args:
        E_in: beam energy (MeV); sets the numeric kind of every event
        chunk_size: samples drawn per batch
        process: scattering process (default: registered DEFAULT_PROCESS)
        rng: numpy Generator
        max_batches: raise TargetUnreachableError once this many batches have
            been yielded and another is requested; None for no cap
        vectorized: draw each batch as numpy arrays; None picks it when the
            numeric kind and the process support it

    Yields:
        list of accepted Event, in sampling order (possibly empty)
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1 (got {chunk_size})")
    if max_batches is not None and max_batches < 1:
        raise ValueError(f"max_batches must be >= 1 or None (got {max_batches})")

    process = process or get_process(DEFAULT_PROCESS)
    rng = rng or np.random.default_rng()
    E = _working_energy(E_in)

    can_vectorize = numeric.supports_arrays(type(E)) and process.vectorized
    if vectorized is None:
        vectorized = can_vectorize
    elif vectorized and not can_vectorize:
        raise ValueError(
            f"Vectorized batches need a float kind and a vectorized process "
            f"(got {type(E).__name__}, {process.name})"
        )
    sample_chunk = _sample_chunk_vectorized if vectorized else _sample_chunk_scalar

    n_batches = 0
    n_accepted = 0
    while True:
        if max_batches is not None and n_batches >= max_batches:
            logger.error(
                f"Batch cap reached: {n_accepted} events accepted in {n_batches} batches "
                f"of {chunk_size} at E_in={E_in}"
            )
            raise TargetUnreachableError(
                f"Gave up after {n_batches} batches of {chunk_size} events with "
                f"{n_accepted} accepted ({process.name}, E_in={E_in})"
            )
        accepted = sample_chunk(E, chunk_size, process, rng)
        n_batches += 1
        n_accepted += len(accepted)
        logger.debug(f"Batch {n_batches}: {len(accepted)}/{chunk_size} accepted")
        yield accepted


def generate_events(E_in, n_events: int,
                    chunk_size: int = DEFAULT_CHUNK_SIZE,
                    process: Optional[ScatteringProcess] = None,
                    rng: Optional[np.random.Generator] = None,
                    seed: Optional[int] = None,
                    max_batches: Optional[int] = DEFAULT_MAX_BATCHES,
                    exact: bool = False,
                    vectorized: Optional[bool] = None) -> List[Event]:
    """
    Generate unweighted events by rejection sampling, chunk by chunk.

    Batches are consumed while the number of accepted events is <= n_events,
    so the result holds at least n_events + 1 events and overshoots by at most
    one batch. Pass exact=True to truncate to exactly n_events.

    Args:
        E_in: beam energy (MeV)
        n_events: number of unweighted events wanted
        chunk_size: samples drawn per batch
        process: scattering process (default: registered DEFAULT_PROCESS)
        rng: numpy Generator; built from seed if omitted
        seed: random seed for reproducibility; only one of rng and seed may be given
        max_batches: batch cap, see iter_accepted_batches
        exact: truncate the result to n_events
        vectorized: see iter_accepted_batches

    Returns:
        list of accepted Event in batch order, sampling order within a batch

    Raises:
        TargetUnreachableError: max_batches exhausted first
        ValueError: both rng and seed given
    """
    if n_events < 0:
        raise ValueError(f"n_events must be >= 0 (got {n_events})")
    if rng is not None and seed is not None:
        raise ValueError("Pass either rng or seed, not both")
    process = process or get_process(DEFAULT_PROCESS)
    rng = rng or np.random.default_rng(seed)

    unweighted_events: List[Event] = []
    n_sampled = 0
    batches = iter_accepted_batches(E_in, chunk_size, process, rng,
                                    max_batches=max_batches, vectorized=vectorized)
    for accepted in batches:
        unweighted_events.extend(accepted)
        n_sampled += chunk_size
        if len(unweighted_events) > n_events:
            break
    batches.close()

    if n_sampled:
        logger.info(
            f"✅ Generated {len(unweighted_events)} unweighted events for {process.name} "
            f"at E_in={E_in} ({n_sampled} sampled, efficiency {len(unweighted_events) / n_sampled:.3f})"
        )

    if exact:
        return unweighted_events[:n_events]
    return unweighted_events
