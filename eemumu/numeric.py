"""
Numeric-kind helpers shared by the kinematics, the processes and the generator.

Every value handled by eemumu lives in one *kind*: a Python numeric type
(int, Fraction, float, Decimal) or a numpy scalar type (np.float32, np.float64,
np.longdouble, ...). Mixed inputs are promoted to a common kind once, at the
boundary, and every arithmetic step afterwards stays in that kind.
"""

from __future__ import annotations
import math
from decimal import Decimal, localcontext
from fractions import Fraction
from typing import Optional, Tuple

import numpy as np

# Promotion order for the Python numeric tower
_PY_RANK = {
    bool: 0,
    int: 0,
    Fraction: 1,
    float: 2,
    Decimal: 3,
}


def _py_kind(value) -> type:
    for kind in (bool, int, Fraction, float, Decimal):
        if type(value) is kind:
            return kind
    # subclasses (e.g. IntEnum) fall back to their nearest base
    for kind in (Decimal, float, Fraction, int):
        if isinstance(value, kind):
            return kind
    raise TypeError(f"Unsupported numeric value {value!r} of type {type(value).__name__}")


def common_kind(*values) -> type:
    """
    Return the kind all `values` promote to.

    numpy scalars promote through ``np.result_type``; Python values follow
    int < Fraction < float < Decimal. Mixing numpy scalars with Decimal or
    Fraction has no lossless answer and raises TypeError.
    """
    if not values:
        raise TypeError("common_kind() needs at least one value")

    if any(isinstance(v, np.generic) for v in values):
        if any(isinstance(v, (Decimal, Fraction)) for v in values):
            raise TypeError("Cannot mix numpy scalars with Decimal or Fraction values")
        return np.result_type(*values).type

    kinds = [_py_kind(v) for v in values]
    kind = max(kinds, key=lambda k: _PY_RANK[k])
    return int if kind is bool else kind


def convert(value, kind: type):
    """Explicitly convert `value` to `kind`."""
    if type(value) is kind:
        return value
    if kind is Decimal:
        if isinstance(value, Fraction):
            return Decimal(value.numerator) / Decimal(value.denominator)
        if isinstance(value, np.generic):
            return Decimal(value.item())
        return Decimal(value)
    if kind is Fraction:
        if isinstance(value, np.generic):
            return Fraction(value.item())
        return Fraction(value)
    if kind in (int, float):
        return kind(value)
    if isinstance(value, (Decimal, Fraction)):
        return kind(float(value))
    return kind(value)


def promote(*values) -> tuple:
    """Convert all `values` to their common kind."""
    kind = common_kind(*values)
    return tuple(convert(v, kind) for v in values)


def inexact_kind(kind: type) -> type:
    """Kind used for kinematics: integers and fractions widen to floating point."""
    if kind in (bool, int, Fraction):
        return float
    if issubclass(kind, np.integer) or kind is np.bool_:
        return np.float64
    return kind


def supports_arrays(kind: type) -> bool:
    """True if batches in `kind` can be drawn as numpy arrays."""
    return kind is float or issubclass(kind, np.floating)


# -----------------------------
# Elementary functions
# -----------------------------
def sqrt(x):
    """Square root in the kind of `x`. Negative input raises ValueError."""
    if x < 0:
        raise ValueError(f"math domain error: sqrt({x!r})")
    if isinstance(x, Decimal):
        return x.sqrt()
    if isinstance(x, np.generic):
        return np.sqrt(x)
    if isinstance(x, Fraction):
        return Fraction(math.sqrt(x))
    return math.sqrt(x)


def _decimal_pi() -> Decimal:
    with localcontext() as ctx:
        ctx.prec += 2
        three = Decimal(3)
        lasts, t, s, n, na, d, da = 0, three, 3, 1, 0, 0, 24
        while s != lasts:
            lasts = s
            n, na = n + na, na + 8
            d, da = d + da, da + 32
            t = (t * n) / d
            s += t
    return +s


def _decimal_sincos(x: Decimal) -> Tuple[Decimal, Decimal]:
    with localcontext() as ctx:
        ctx.prec += 4
        two_pi = 2 * _decimal_pi()
        x = x % two_pi

        # Taylor series for sin and cos, accumulated together
        i, lasts, sin_s, cos_s = 1, 0, x, Decimal(1)
        sin_term, cos_term = x, Decimal(1)
        while sin_s != lasts:
            lasts = sin_s
            sin_term = -sin_term * x * x / ((2 * i) * (2 * i + 1))
            cos_term = -cos_term * x * x / ((2 * i - 1) * (2 * i))
            sin_s += sin_term
            cos_s += cos_term
            i += 1
    return +sin_s, +cos_s


def sincos(x) -> tuple:
    """Return (sin(x), cos(x)) in the kind of `x`."""
    if isinstance(x, Decimal):
        return _decimal_sincos(x)
    if isinstance(x, np.generic):
        return np.sin(x), np.cos(x)
    if isinstance(x, Fraction):
        return Fraction(math.sin(x)), Fraction(math.cos(x))
    return math.sin(x), math.cos(x)


def pi_of(kind: type):
    """pi in `kind`."""
    if kind is Decimal:
        return _decimal_pi()
    if kind is float:
        return math.pi
    if kind is np.longdouble:
        # atan(1) * 4 keeps the extended mantissa
        return np.arctan(np.longdouble(1)) * 4
    return convert(math.pi, kind)


# -----------------------------
# Uniform draws
# -----------------------------
def uniform(kind: type, rng: Optional[np.random.Generator] = None):
    """Draw u uniform in [0, 1) as a value of `kind`."""
    rng = rng or np.random.default_rng()
    kind = inexact_kind(kind)
    if kind is np.float32:
        return np.float32(rng.random(dtype=np.float32))
    return convert(rng.random(), kind)


def uniform_array(kind: type, size: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Draw `size` values uniform in [0, 1) as an array of dtype `kind`."""
    rng = rng or np.random.default_rng()
    kind = inexact_kind(kind)
    if not supports_arrays(kind):
        raise TypeError(f"No array representation for numeric kind {kind.__name__}")
    if kind is np.float32:
        return rng.random(size, dtype=np.float32)
    return rng.random(size).astype(kind)
