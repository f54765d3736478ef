import numpy as np

from .. import numeric
from .base import ScatteringProcess


class FlatProcess(ScatteringProcess):
    """Uniform angular distribution (no dynamics)."""

    name = "Flat"
    description = "Returns dsigma/dOmega = value for all configurations"
    vectorized = True

    def __init__(self, value: float = 1.0):
        self.value = value

    def differential_cross_section(self, E_in, cos_theta):
        kind = numeric.inexact_kind(numeric.common_kind(E_in))
        value = numeric.convert(self.value, kind)
        if isinstance(cos_theta, np.ndarray):
            return np.full(cos_theta.shape, value, dtype=cos_theta.dtype)
        return value

    def max_weight(self, E_in):
        kind = numeric.inexact_kind(numeric.common_kind(E_in))
        return numeric.convert(self.value, kind)
