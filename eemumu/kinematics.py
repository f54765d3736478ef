"""
Kinematics helpers for eemumu.

Units: MeV (natural units c = 1).
"""

from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Tuple

from . import numeric
from .constants import ELECTRON_MASS, MUON_MASS, PARTICLE_NAMES


class KinematicsError(ValueError):
    """Inputs outside the physical region (E below a mass, |cos(theta)| > 1)."""


# -----------------------------
# FourVector
# -----------------------------
@dataclass(frozen=True)
class FourVector:
    E: object
    px: object
    py: object
    pz: object

    def __post_init__(self):
        # all four components share one numeric kind
        E, px, py, pz = numeric.promote(self.E, self.px, self.py, self.pz)
        object.__setattr__(self, "E", E)
        object.__setattr__(self, "px", px)
        object.__setattr__(self, "py", py)
        object.__setattr__(self, "pz", pz)

    @property
    def element_type(self) -> type:
        return type(self.E)

    @property
    def p(self) -> tuple:
        return (self.px, self.py, self.pz)

    @property
    def mass2(self):
        return minkowski_dot(self, self)

    @property
    def mass(self):
        m2 = self.mass2
        return numeric.sqrt(m2 if m2 > 0 else numeric.convert(0, type(m2)))

    @property
    def momentum(self):
        return numeric.sqrt(self.px * self.px + self.py * self.py + self.pz * self.pz)

    def to_tuple(self) -> tuple:
        return (self.E, self.px, self.py, self.pz)

    def _common(self, other: "FourVector") -> Tuple[tuple, tuple]:
        kind = numeric.common_kind(self.E, other.E)
        a = tuple(numeric.convert(c, kind) for c in self.to_tuple())
        b = tuple(numeric.convert(c, kind) for c in other.to_tuple())
        return a, b

    def __add__(self, other: "FourVector") -> "FourVector":
        if not isinstance(other, FourVector):
            return NotImplemented
        a, b = self._common(other)
        return FourVector(a[0] + b[0], a[1] + b[1], a[2] + b[2], a[3] + b[3])

    def __sub__(self, other: "FourVector") -> "FourVector":
        if not isinstance(other, FourVector):
            return NotImplemented
        a, b = self._common(other)
        return FourVector(a[0] - b[0], a[1] - b[1], a[2] - b[2], a[3] - b[3])

    def __mul__(self, scalar) -> "FourVector":
        if isinstance(scalar, FourVector):
            return NotImplemented
        kind = numeric.common_kind(self.E, scalar)
        k = numeric.convert(scalar, kind)
        return FourVector(*(k * numeric.convert(c, kind) for c in self.to_tuple()))

    __rmul__ = __mul__

    def __neg__(self) -> "FourVector":
        return FourVector(-self.E, -self.px, -self.py, -self.pz)

    def __repr__(self) -> str:
        return f"FourVector(E={self.E}, px={self.px}, py={self.py}, pz={self.pz})"

    def __str__(self) -> str:
        # Fractions display as decimals
        shown = (float(c) if isinstance(c, Fraction) else c for c in self.to_tuple())
        return "(" + ", ".join(str(round(c, 6)) for c in shown) + ")"


def minkowski_dot(p1: FourVector, p2: FourVector):
    """Minkowski inner product with (+,-,-,-) signature."""
    a, b = p1._common(p2)
    return a[0] * b[0] - a[1] * b[1] - a[2] * b[2] - a[3] * b[3]


# -----------------------------
# 2 -> 2 in the CM frame
# -----------------------------
def rho(E, m):
    """Momentum magnitude sqrt(E^2 - m^2) of a particle with energy E and mass m."""
    if E < m:
        raise KinematicsError(f"Energy E={E} is below the particle mass m={m}")
    return numeric.sqrt(E * E - m * m)


def momenta_from_coords(E_in, cos_theta, phi) -> Tuple[FourVector, FourVector, FourVector, FourVector]:
    """
    Build (e-, e+, mu-, mu+) four-momenta for e+ e- -> mu+ mu- in the CM frame.

    The electron moves along +z, the positron along -z, each with energy E_in.
    The muon leaves at polar angle theta (given as cos_theta) and azimuth phi,
    also with energy E_in. The antimuon is fixed by conservation,
    p(mu+) = p(e-) + p(e+) - p(mu-).

    E_in sets the numeric kind of the result; masses and angles are converted
    to it before use (ints and Fractions widen to float).
    """
    kind = numeric.inexact_kind(numeric.common_kind(E_in))
    E = numeric.convert(E_in, kind)
    cth = numeric.convert(cos_theta, kind)
    phi = numeric.convert(phi, kind)

    me = numeric.convert(ELECTRON_MASS, kind)
    mmu = numeric.convert(MUON_MASS, kind)

    if abs(cth) > 1:
        raise KinematicsError(f"cos_theta={cos_theta} is outside [-1, 1]")

    rho_e = rho(E, me)
    zero = numeric.convert(0, kind)
    p_in_electron = FourVector(E, zero, zero, rho_e)
    p_in_positron = FourVector(E, zero, zero, -rho_e)

    rho_mu = rho(E, mmu)
    sin_theta = numeric.sqrt(1 - cth * cth)
    sin_phi, cos_phi = numeric.sincos(phi)
    p_out_muon = FourVector(
        E, rho_mu * sin_theta * cos_phi, rho_mu * sin_theta * sin_phi, rho_mu * cth
    )
    p_out_antimuon = p_in_electron + p_in_positron - p_out_muon

    return (p_in_electron, p_in_positron, p_out_muon, p_out_antimuon)


def momenta_dict_from_coords(E_in, cos_theta, phi) -> Dict[str, FourVector]:
    """Same as momenta_from_coords, keyed by particle name ("e-", "e+", "mu-", "mu+")."""
    return dict(zip(PARTICLE_NAMES, momenta_from_coords(E_in, cos_theta, phi)))
