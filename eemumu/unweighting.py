import logging
from typing import Optional

import numpy as np

from . import numeric
from .processes import ScatteringProcess, get_process
from .config import DEFAULT_PROCESS

logger = logging.getLogger(__name__)


def _bound(process: ScatteringProcess, E_in):
    """process.max_weight(E_in) converted to the working kind of E_in."""
    kind = numeric.inexact_kind(numeric.common_kind(E_in))
    return kind, numeric.convert(process.max_weight(E_in), kind)


def build_unweighting_mask(E_in, event, process: Optional[ScatteringProcess] = None,
                           rng: Optional[np.random.Generator] = None) -> bool:
    """
    Accept-reject test for one flat event.

    Accepts iff event.weight >= u * process.max_weight(E_in), with u uniform in
    [0, 1) drawn in the numeric kind of E_in, so an event survives with
    probability weight / w_max. The sample is unbiased only if max_weight is
    a true bound of the cross-section at E_in.
    """
    process = process or get_process(DEFAULT_PROCESS)
    kind, maximum_weight = _bound(process, E_in)
    u = numeric.uniform(kind, rng)
    return bool(numeric.convert(event.weight, kind) >= u * maximum_weight)


class UnweightingController:
    """Accept-reject unweighting with running acceptance statistics."""

    def __init__(self, process: ScatteringProcess, safety_factor: float = 1.0):
        self.process = process
        self.safety_factor = safety_factor
        self.accepted = 0
        self.rejected = 0
        self._w_max = {}

    def w_max(self, E_in):
        if E_in not in self._w_max:
            kind, w = _bound(self.process, E_in)
            if self.safety_factor != 1.0:
                w = w * numeric.convert(self.safety_factor, kind)
            self._w_max[E_in] = w
        return self._w_max[E_in]

    def accept(self, E_in, event, rng: Optional[np.random.Generator] = None) -> bool:
        w_max = self.w_max(E_in)
        kind = type(w_max)
        u = numeric.uniform(kind, rng)
        if numeric.convert(event.weight, kind) >= u * w_max:
            self.accepted += 1
            return True
        else:
            self.rejected += 1
            return False

    @property
    def efficiency(self) -> float:
        total = self.accepted + self.rejected
        return self.accepted / total if total > 0 else 0.0


def estimate_max_weight(process: ScatteringProcess, E_in, n_trials: int = 5000,
                        rng: Optional[np.random.Generator] = None,
                        safety_factor: float = 1.2):
    """
    Estimate max_weight for a process without a closed-form bound.

    Scans n_trials flat values of cos_theta and returns the largest weight seen
    times safety_factor.
    """
    rng = rng or np.random.default_rng()
    kind = numeric.inexact_kind(numeric.common_kind(E_in))
    E = numeric.convert(E_in, kind)

    w_max = numeric.convert(0, kind)
    for _ in range(n_trials):
        cth = 2 * numeric.uniform(kind, rng) - 1
        w = process.differential_cross_section(E, cth)
        if w > w_max:
            w_max = w

    if w_max <= 0:
        raise RuntimeError(f"Failed to estimate w_max for {process.name} at E_in={E_in} (no positive weight)")
    logger.debug(f"Estimated w_max = {w_max} for {process.name} at E_in={E_in}")
    return w_max * numeric.convert(safety_factor, kind)
