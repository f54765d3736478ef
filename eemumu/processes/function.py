from typing import Callable

from .base import ScatteringProcess


class FunctionProcess(ScatteringProcess):
    """
    Process built from two injected pure functions.

    Example:
        >>> proc = FunctionProcess(lambda E, c: 1 + c * c, lambda E: 2.0, name="1+cos^2")
        >>> proc.max_weight(100.0)
        2.0
    """

    description = "User-supplied cross-section and weight bound"

    def __init__(self,
                 differential_cross_section: Callable,
                 max_weight: Callable,
                 name: str = "function",
                 vectorized: bool = False):
        self._dcs = differential_cross_section
        self._max_weight = max_weight
        self.name = name
        self.vectorized = vectorized

    def differential_cross_section(self, E_in, cos_theta):
        return self._dcs(E_in, cos_theta)

    def max_weight(self, E_in):
        return self._max_weight(E_in)
