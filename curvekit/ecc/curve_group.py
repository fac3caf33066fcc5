#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve group element.

GroupElement is the interface shared by the two point representations:
short Weierstrass points in Jacobian coordinates
(curvekit.ecc.weierstrass.JacobianPoint)
and twisted Edwards points in extended coordinates
(curvekit.ecc.edwards.ExtendedPoint).

Concrete classes provide the unchecked group law
(add_unchecked, double, negate), the conversions to and from
affine coordinates, and the byte encoding;
everything else (operand checks, scalar multiplication, operators)
is implemented here once.
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple, Type, TypeVar

from curvekit.alias import Octets, Point
from curvekit.ecc.curve_params import CurveParams
from curvekit.ecc.mult import mult_mont_ladder, mult_w_NAF
from curvekit.exceptions import (
    CurveKitTypeError,
    PointNotOnCurve,
    ScalarOutOfRange,
    TypeMismatch,
)
from curvekit.utils import bytes_from_octets, int_repr

_E = TypeVar("_E", bound="GroupElement")


def affine_coordinates(Q: Any) -> Tuple[int, int]:
    "Return Q if it is a tuple of two int, raise CurveKitTypeError otherwise."
    if (
        not isinstance(Q, tuple)
        or len(Q) != 2
        or any(isinstance(c, bool) or not isinstance(c, int) for c in Q)
    ):
        raise CurveKitTypeError(f"point must be a tuple[int, int]: {Q!r}")
    return Q


class GroupElement(ABC):
    """Element of the group of points of an elliptic curve.

    Instances are immutable and carry a reference (ec)
    to the parameter record of their curve.
    Operations between elements of different curves,
    or of different representations, are rejected with TypeMismatch.
    """

    ec: CurveParams

    # construction

    @classmethod
    @abstractmethod
    def zero(cls: Type[_E], ec: Any) -> _E:
        "Return the neutral element of the group."

    @classmethod
    def generator(cls: Type[_E], ec: Any) -> _E:
        return cls.from_affine(ec, ec.G)

    @classmethod
    @abstractmethod
    def from_affine(cls: Type[_E], ec: Any, Q: Point) -> _E:
        """Return the group element with affine coordinates Q.

        PointNotOnCurve is raised if Q does not satisfy
        the curve equation.
        """

    @classmethod
    @abstractmethod
    def from_bytes(cls: Type[_E], ec: Any, data: Octets) -> _E:
        "Return the group element decoded from its canonical encoding."

    @classmethod
    def from_hex(cls: Type[_E], ec: Any, data: Octets) -> _E:
        return cls.from_bytes(ec, bytes_from_octets(data))

    def zero_like(self: _E) -> _E:
        return type(self).zero(self.ec)

    # representation

    @abstractmethod
    def to_affine(self) -> Point:
        pass

    @abstractmethod
    def to_bytes(self, compressed: bool = True) -> bytes:
        pass

    def to_hex(self, compressed: bool = True) -> str:
        return self.to_bytes(compressed).hex()

    @abstractmethod
    def is_zero(self) -> bool:
        pass

    # unchecked group law

    @abstractmethod
    def add_unchecked(self: _E, other: _E) -> _E:
        "Add a group element assumed to be of the same curve."

    @abstractmethod
    def double(self: _E) -> _E:
        pass

    @abstractmethod
    def negate(self: _E) -> _E:
        pass

    @abstractmethod
    def _equals(self: _E, other: _E) -> bool:
        pass

    # checked operations

    def _same_group(self, other: Any) -> bool:
        return type(other) is type(self) and (
            other.ec is self.ec or other.ec == self.ec
        )

    def _require_same_group(self, other: Any) -> None:
        if not self._same_group(other):
            name = type(self).__name__
            raise TypeMismatch(
                f"{name} of the same curve expected, not {type(other).__name__}"
            )

    def _require_scalar(self, k: Any, lower: int) -> int:
        if isinstance(k, bool) or not isinstance(k, int):
            raise TypeMismatch(f"scalar must be an int, not {type(k).__name__}")
        if not lower <= k < self.ec.n:
            msg = f"scalar not in {lower}..n-1: {int_repr(k) if k > 0 else k}"
            raise ScalarOutOfRange(msg)
        return k

    def add(self: _E, other: _E) -> _E:
        self._require_same_group(other)
        return self.add_unchecked(other)

    def subtract(self: _E, other: _E) -> _E:
        self._require_same_group(other)
        return self.add_unchecked(other.negate())

    def equals(self: _E, other: _E) -> bool:
        self._require_same_group(other)
        return self._equals(other)

    def multiply(self: _E, k: int) -> _E:
        """Return k*self, with k in 1..n-1.

        Constant sequence of group operations (Montgomery ladder
        over the bit length of n): use it for secret scalars.
        """
        k = self._require_scalar(k, 1)
        return mult_mont_ladder(k, self, self.ec.nlen)

    def multiply_unsafe(self: _E, k: int) -> _E:
        """Return k*self, with k in 0..n-1.

        Variable time (wNAF): use it for public scalars only.
        """
        k = self._require_scalar(k, 0)
        return mult_w_NAF(k, self)

    def clear_cofactor(self: _E) -> _E:
        "Return h*self, i.e. the projection on the prime order subgroup."
        if self.ec.h == 1:
            return self
        return mult_w_NAF(self.ec.h, self)

    def is_torsion_free(self) -> bool:
        "Return True if the element belongs to the subgroup of order n."
        if self.ec.h == 1:
            return True
        return mult_w_NAF(self.ec.n, self).is_zero()

    def assert_validity(self) -> None:
        """Raise PointNotOnCurve if the element is not a curve point.

        The neutral element is valid.
        """
        if not self.is_zero() and not self.ec.is_on_curve(self.to_affine()):
            raise PointNotOnCurve(f"point not on curve: {self.to_affine()}")

    # Python data model

    def __add__(self: _E, other: _E) -> _E:
        return self.add(other)

    def __sub__(self: _E, other: _E) -> _E:
        return self.subtract(other)

    def __neg__(self: _E) -> _E:
        return self.negate()

    def __mul__(self: _E, k: int) -> _E:
        return self.multiply(k)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroupElement):
            return NotImplemented
        return self._same_group(other) and self._equals(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.ec, self.to_affine()))

    def __repr__(self) -> str:
        x, y = self.to_affine()
        return f"{type(self).__name__}(x={int_repr(x)}, y={int_repr(y)})"
