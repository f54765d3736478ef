"""
eemumu: kinematics and unweighted event generation for e+ e- -> mu+ mu-.

Usage:
    from eemumu import generate_events, momenta_dict_from_coords

    events = generate_events(1000.0, 10_000, chunk_size=1000, seed=42)
    moms = momenta_dict_from_coords(1000.0, 0.9, 0.785)
"""
from .kinematics import (
    FourVector,
    KinematicsError,
    minkowski_dot,
    rho,
    momenta_from_coords,
    momenta_dict_from_coords,
)
from .events import Event, event_stats
from .unweighting import UnweightingController, build_unweighting_mask, estimate_max_weight
from .event_generator import (
    TargetUnreachableError,
    sample_flat_event,
    generate_event_and_mask,
    filter_accepted,
    iter_accepted_batches,
    generate_events,
)

__version__ = "0.1.0"

__all__ = [
    "FourVector",
    "KinematicsError",
    "minkowski_dot",
    "rho",
    "momenta_from_coords",
    "momenta_dict_from_coords",
    "Event",
    "event_stats",
    "UnweightingController",
    "build_unweighting_mask",
    "estimate_max_weight",
    "TargetUnreachableError",
    "sample_flat_event",
    "generate_event_and_mask",
    "filter_accepted",
    "iter_accepted_batches",
    "generate_events",
]
