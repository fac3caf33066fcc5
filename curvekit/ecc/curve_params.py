#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve parameter records.

A parameter record is the immutable description of one curve:
field prime, equation coefficients, order of the generator,
cofactor, and generator affine coordinates.

Parameters are checked once, at construction, according to
SEC 1 v.2 3.1.1.2.1 (where applicable to the curve family);
the generator order is trusted, not re-verified.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from math import ceil
from typing import Any, Dict

from curvekit.alias import Point
from curvekit.ecc.field import Field
from curvekit.exceptions import CurveKitTypeError, CurveKitValueError
from curvekit.utils import int_repr


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CurveKitTypeError(f"{name} must be an int: {value!r}")


def _require_field_element(name: str, value: int, p: int) -> None:
    if value < 0:
        raise CurveKitValueError(f"negative {name}: {value}")
    if p <= value:
        raise CurveKitValueError(f"p <= {name}: {int_repr(p)} <= {int_repr(value)}")


@dataclass(frozen=True)
class CurveParams(ABC):
    "Fields shared by all curve families."

    p: int
    n: int
    h: int
    Gx: int
    Gy: int

    Fp: Field = field(init=False, compare=False, repr=False)
    Fn: Field = field(init=False, compare=False, repr=False)
    plen: int = field(init=False, compare=False, repr=False)
    p_size: int = field(init=False, compare=False, repr=False)
    nlen: int = field(init=False, compare=False, repr=False)
    n_size: int = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("p", "n", "h", "Gx", "Gy"):
            _require_int(name, getattr(self, name))

        # p prime, by a base-2 Fermat test
        p = self.p
        if p < 3 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise CurveKitValueError(f"p is not prime: {int_repr(p)}")

        # n primality is trusted, only sanity checks here
        if self.n < 3 or self.n % 2 == 0:
            raise CurveKitValueError(f"invalid n: {int_repr(self.n)}")
        if self.h < 1:
            raise CurveKitValueError(f"invalid h: {self.h}")

        _require_field_element("Gx", self.Gx, p)
        _require_field_element("Gy", self.Gy, p)

        object.__setattr__(self, "Fp", Field(p))
        object.__setattr__(self, "Fn", Field(self.n))
        object.__setattr__(self, "plen", p.bit_length())
        object.__setattr__(self, "p_size", ceil(self.plen / 8))
        object.__setattr__(self, "nlen", self.n.bit_length())
        object.__setattr__(self, "n_size", ceil(self.nlen / 8))

    @property
    def G(self) -> Point:
        return self.Gx, self.Gy

    @abstractmethod
    def is_on_curve(self, Q: Point) -> bool:
        "Return True if the affine point Q is on the curve."

    def require_on_curve(self, Q: Point) -> None:
        "Raise CurveKitValueError if Q is not on the curve."
        if not self.is_on_curve(Q):
            raise CurveKitValueError("point not on curve")

    def to_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init}


@dataclass(frozen=True)
class WeierstrassParams(CurveParams):
    """Short Weierstrass curve y^2 = x^3 + a*x + b over Fp.

    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0.
    """

    a: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        super().__post_init__()

        # SEC 1 v.2 3.1.1.2.1 steps 2 to 4: a, b in [0, p-1], non-zero
        # discriminant, G on curve
        _require_int("a", self.a)
        _require_int("b", self.b)
        _require_field_element("a", self.a, self.p)
        _require_field_element("b", self.b, self.p)

        d = 4 * self.a * self.a * self.a + 27 * self.b * self.b
        if d % self.p == 0:
            raise CurveKitValueError("zero discriminant")

        if self.Gy == 0:
            raise CurveKitValueError("INF point cannot be a generator")
        if not self.is_on_curve(self.G):
            raise CurveKitValueError("Generator is not on the curve")

    def _y2(self, x: int) -> int:
        # x is not validated: y^2 may have no root
        return ((x * x + self.a) * x + self.b) % self.p

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve.

        The infinity point INF = (0, 0) is considered on curve.
        """
        if len(Q) != 2:
            raise CurveKitValueError("point must be a tuple[int, int]")
        if Q[0] == 0 and Q[1] == 0:  # INF in affine coordinates
            return True
        if not 0 <= Q[0] < self.p or not 0 <= Q[1] < self.p:
            return False
        return self._y2(Q[0]) == (Q[1] * Q[1] % self.p)

    def y(self, x: int) -> int:
        """Return one of the y coordinates from x, as in (x, y).

        Raise an Error if x is not a valid x-coordinate.
        """
        if not 0 <= x < self.p:
            raise CurveKitValueError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        y2 = self._y2(x)
        try:
            return self.Fp.sqrt(y2)
        except CurveKitValueError as e:
            raise CurveKitValueError(f"invalid x-coordinate: {int_repr(x)}") from e

    def y_even(self, x: int) -> int:
        """Return the even affine y-coordinate associated to x."""
        root = self.y(x)
        # switch even/odd root as needed
        return self.p - root if root % 2 else root


@dataclass(frozen=True)
class EdwardsParams(CurveParams):
    """Twisted Edwards curve a*x^2 + y^2 = 1 + d*x^2*y^2 over Fp.

    a and d must be distinct and non-zero.
    For the addition law to be complete
    a should be a square and d a non-square in Fp.
    """

    a: int = 1
    d: int = 0

    def __post_init__(self) -> None:
        super().__post_init__()

        _require_int("a", self.a)
        _require_int("d", self.d)
        _require_field_element("a", self.a, self.p)
        _require_field_element("d", self.d, self.p)
        if self.a == 0 or self.d == 0:
            raise CurveKitValueError("a and d must be non-zero")
        if self.a == self.d:
            raise CurveKitValueError("a == d: singular curve")

        if self.Gx == 0:
            raise CurveKitValueError("small order point cannot be a generator")
        if not self.is_on_curve(self.G):
            raise CurveKitValueError("Generator is not on the curve")

    @property
    def encoding_size(self) -> int:
        "RFC 8032 encoding size: plen bits for y plus the x-sign bit."
        return ceil((self.plen + 1) / 8)

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve."""
        if len(Q) != 2:
            raise CurveKitValueError("point must be a tuple[int, int]")
        x, y = Q
        if not 0 <= x < self.p or not 0 <= y < self.p:
            return False
        x2 = x * x
        y2 = y * y
        return (self.a * x2 + y2 - 1 - self.d * x2 * y2) % self.p == 0
