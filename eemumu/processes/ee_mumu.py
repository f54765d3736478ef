"""
Tree-level QED matrix element for e+ e- -> mu+ mu-.

Pure physics, both lepton masses kept:

    <|M|^2> = 8 e^4 / s^2 [ (p1.p3)(p2.p4) + (p1.p4)(p2.p3)
                            + m_mu^2 (p1.p2) + m_e^2 (p3.p4) + 2 m_e^2 m_mu^2 ]

with p1 = e-, p2 = e+, p3 = mu-, p4 = mu+, s = (2 E_in)^2 and e^2 = 4 pi alpha.
In the CM frame every dot product is a function of E_in and cos_theta only.
"""
import numpy as np

from .. import numeric
from ..constants import ALPHA, ELECTRON_MASS, MUON_MASS
from ..kinematics import rho
from .base import ScatteringProcess


class EEToMuMuProcess(ScatteringProcess):
    """
    Unpolarized e+ e- -> mu+ mu- via s-channel photon exchange.

    dsigma/dOmega = <|M|^2> / (64 pi^2 s) * |p_mu| / |p_e|

    The angular dependence is const + 2 (rho_e rho_mu cos_theta)^2, so the
    maximum over angles sits at cos_theta = +-1 and max_weight is exact.
    """

    name = "QED e+e- -> mu+mu-"
    description = "Spin-averaged tree-level QED with lepton masses"
    vectorized = True

    def differential_cross_section(self, E_in, cos_theta):
        """
        Compute dsigma/dOmega in MeV^-2.

        Args:
            E_in: beam energy (MeV), must be above the muon mass
            cos_theta: cosine of the muon polar angle (scalar or numpy array)
        """
        kind = numeric.inexact_kind(numeric.common_kind(E_in))
        E = numeric.convert(E_in, kind)
        me = numeric.convert(ELECTRON_MASS, kind)
        mmu = numeric.convert(MUON_MASS, kind)
        alpha = numeric.convert(ALPHA, kind)
        pi = numeric.pi_of(kind)
        if not isinstance(cos_theta, np.ndarray):
            cos_theta = numeric.convert(cos_theta, kind)

        rho_e = rho(E, me)
        rho_mu = rho(E, mmu)
        E2 = E * E
        s = 4 * E2

        # CM-frame dot products
        rr_cth = rho_e * rho_mu * cos_theta
        p1p3 = E2 - rr_cth     # = p2.p4
        p1p4 = E2 + rr_cth     # = p2.p3
        p1p2 = E2 + rho_e * rho_e
        p3p4 = E2 + rho_mu * rho_mu

        me2 = me * me
        mmu2 = mmu * mmu
        e4 = (4 * pi * alpha) ** 2

        M2 = 8 * e4 / (s * s) * (
            p1p3 * p1p3 + p1p4 * p1p4 + mmu2 * p1p2 + me2 * p3p4 + 2 * me2 * mmu2
        )
        return M2 * rho_mu / (64 * pi * pi * s * rho_e)

    def max_weight(self, E_in):
        kind = numeric.inexact_kind(numeric.common_kind(E_in))
        return self.differential_cross_section(E_in, numeric.convert(1, kind))
