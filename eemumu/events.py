from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable

from . import numeric
from .kinematics import FourVector, momenta_dict_from_coords


@dataclass(frozen=True)
class Event:
    """
    One sampled phase-space point of e+ e- -> mu+ mu-.

    energy     : incoming beam energy E_in (MeV)
    cos_theta  : cosine of the muon polar angle in the CM frame
    phi        : muon azimuthal angle (rad)
    weight     : differential cross-section at (energy, cos_theta)

    All four values are stored in one numeric kind.
    """

    energy: Any
    cos_theta: Any
    phi: Any
    weight: Any

    def __post_init__(self):
        values = numeric.promote(self.energy, self.cos_theta, self.phi, self.weight)
        for field_name, value in zip(("energy", "cos_theta", "phi", "weight"), values):
            object.__setattr__(self, field_name, value)

    @property
    def element_type(self) -> type:
        return type(self.energy)

    def momenta(self) -> Dict[str, FourVector]:
        """Four-momenta of the event keyed by particle name."""
        return momenta_dict_from_coords(self.energy, self.cos_theta, self.phi)


def event_stats(events: Iterable[Event]) -> Dict[str, Any]:
    """
    Get summary statistics for a sample of events.

    The forward-backward asymmetry counts muons with cos_theta > 0 as forward
    and cos_theta < 0 as backward.
    """
    events = list(events)
    n = len(events)
    if n == 0:
        return {
            "n_events": 0,
            "mean_cos_theta": 0.0,
            "forward": 0,
            "backward": 0,
            "forward_backward_asymmetry": 0.0,
            "mean_weight": 0.0,
        }

    forward = sum(1 for ev in events if ev.cos_theta > 0)
    backward = sum(1 for ev in events if ev.cos_theta < 0)
    mean_cth = sum(float(ev.cos_theta) for ev in events) / n
    mean_w = sum(float(ev.weight) for ev in events) / n

    return {
        "n_events": n,
        "mean_cos_theta": mean_cth,
        "forward": forward,
        "backward": backward,
        "forward_backward_asymmetry": (forward - backward) / n,
        "mean_weight": mean_w,
    }
