from abc import ABC, abstractmethod


class ScatteringProcess(ABC):
    """
    Base class for all 2 -> 2 scattering processes.

    Provides the differential cross-section dsigma/dOmega as a function of the
    beam energy E_in and the scattering angle cos_theta, and an upper bound on
    it over all angles at fixed E_in.
    All implementations must be pure functions (no RNG).
    """

    name: str = "abstract"
    description: str = ""

    # True if differential_cross_section accepts a numpy array of cos_theta
    vectorized: bool = False

    @abstractmethod
    def differential_cross_section(self, E_in, cos_theta):
        """
        Return dsigma/dOmega at (E_in, cos_theta).

        Args:
            E_in: beam energy (MeV); sets the numeric kind of the result
            cos_theta: cosine of the scattering angle, in [-1, 1]

        Returns:
            Non-negative value in the numeric kind of E_in
        """

    @abstractmethod
    def max_weight(self, E_in):
        """
        Return an upper bound of differential_cross_section(E_in, .) over all angles.

        Unweighting is only unbiased if this is a true bound.
        """
