#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Twisted Edwards curve points in extended coordinates.

Extended coordinates (X, Y, Z, T) represent the affine point
(X/Z, Y/Z), with the auxiliary coordinate T = X*Y/Z.
The neutral element is (0, 1, 1, 0).

The addition law is unified (it also handles doubling and the
neutral element) and, for a square a and a non-square d,
complete: no input is a special case.

https://hyperelliptic.org/EFD/g1p/auto-twisted-extended.html

Encoding is according to RFC 8032, sections 5.1.2 and 5.2.2:
the little-endian y-coordinate, with the most significant bit
of the final octet holding the least significant bit of x.
"""

from dataclasses import dataclass

from curvekit.alias import Octets, Point
from curvekit.ecc.curve_group import GroupElement, affine_coordinates
from curvekit.ecc.curve_params import EdwardsParams
from curvekit.exceptions import (
    CurveKitValueError,
    InvalidEncodingLength,
    PointNotOnCurve,
)
from curvekit.utils import bytes_from_octets, int_repr


@dataclass(frozen=True, eq=False, repr=False)
class ExtendedPoint(GroupElement):
    "Twisted Edwards curve point in extended coordinates."

    ec: EdwardsParams
    X: int
    Y: int
    Z: int
    T: int

    @classmethod
    def zero(cls, ec: EdwardsParams) -> "ExtendedPoint":
        return cls(ec, 0, 1, 1, 0)

    @classmethod
    def from_affine(cls, ec: EdwardsParams, Q: Point) -> "ExtendedPoint":
        x, y = affine_coordinates(Q)
        if not ec.is_on_curve((x, y)):
            raise PointNotOnCurve(f"point not on curve: {int_repr(x)}, {int_repr(y)}")
        return cls(ec, x, y, 1, x * y % ec.p)

    @classmethod
    def from_bytes(cls, ec: EdwardsParams, data: Octets) -> "ExtendedPoint":
        """Return the point decoded from its RFC 8032 encoding.

        Non canonical y-coordinates (y >= p) are rejected,
        as is the encoding of x = 0 with the sign bit set.
        """

        data = bytes_from_octets(data)
        size = ec.encoding_size
        if len(data) != size:
            err_msg = f"invalid size: {len(data)} bytes instead of {size}"
            raise InvalidEncodingLength(err_msg)

        x_0 = data[-1] >> 7
        y = int.from_bytes(data[:-1] + bytes([data[-1] & 0x7F]), "little")
        if y >= ec.p:
            raise PointNotOnCurve(f"y-coordinate not in 0..p-1: {int_repr(y)}")

        # a*x^2 + y^2 = 1 + d*x^2*y^2, i.e. x^2 = (y^2 - 1) / (d*y^2 - a)
        Fp = ec.Fp
        y2 = Fp.sqr(y)
        u = Fp.sub(y2, 1)
        v = Fp.sub(Fp.mul(ec.d, y2), ec.a)
        try:
            x = Fp.sqrt(Fp.div(u, v))
        except CurveKitValueError as e:
            raise PointNotOnCurve(f"invalid y-coordinate: {int_repr(y)}") from e

        if x == 0 and x_0 == 1:
            raise PointNotOnCurve("invalid x-coordinate sign for x = 0")
        if x & 1 != x_0:
            x = ec.p - x
        return cls(ec, x, y, 1, x * y % ec.p)

    def to_affine(self) -> Point:
        Fp = self.ec.Fp
        iZ = Fp.inv(self.Z)
        return Fp.mul(self.X, iZ), Fp.mul(self.Y, iZ)

    def to_bytes(self, compressed: bool = True) -> bytes:
        """Return the RFC 8032 encoding of the point.

        There is only one (compressed) encoding:
        the flag is accepted for interface compatibility.
        """

        x, y = self.to_affine()
        encoded = bytearray(y.to_bytes(self.ec.encoding_size, "little"))
        encoded[-1] |= (x & 1) << 7
        return bytes(encoded)

    def is_zero(self) -> bool:
        p = self.ec.p
        return self.X % p == 0 and (self.Y - self.Z) % p == 0

    def negate(self) -> "ExtendedPoint":
        p = self.ec.p
        return ExtendedPoint(self.ec, -self.X % p, self.Y, self.Z, -self.T % p)

    def _equals(self, other: "ExtendedPoint") -> bool:
        p = self.ec.p
        if (self.X * other.Z - other.X * self.Z) % p:
            return False
        return (self.Y * other.Z - other.Y * self.Z) % p == 0

    def assert_validity(self) -> None:
        # T = XY/Z is assumed by the addition formulas
        p = self.ec.p
        if self.Z % p == 0 or (self.X * self.Y - self.T * self.Z) % p:
            err_msg = "invalid extended coordinates: "
            coords = (self.X, self.Y, self.Z, self.T)
            err_msg += ", ".join(int_repr(c % p) for c in coords)
            raise PointNotOnCurve(err_msg)
        super().assert_validity()

    def add_unchecked(self, other: "ExtendedPoint") -> "ExtendedPoint":
        # add-2008-hwcd
        p = self.ec.p
        A = self.X * other.X
        B = self.Y * other.Y
        C = self.T * self.ec.d * other.T
        D = self.Z * other.Z
        E = (self.X + self.Y) * (other.X + other.Y) - A - B
        F = D - C
        G = D + C
        H = B - self.ec.a * A
        return ExtendedPoint(self.ec, E * F % p, G * H % p, F * G % p, E * H % p)

    def double(self) -> "ExtendedPoint":
        # dbl-2008-hwcd
        p = self.ec.p
        A = self.X * self.X
        B = self.Y * self.Y
        C = 2 * self.Z * self.Z
        D = self.ec.a * A
        E = (self.X + self.Y) * (self.X + self.Y) - A - B
        G = D + B
        F = G - C
        H = D - B
        return ExtendedPoint(self.ec, E * F % p, G * H % p, F * G % p, E * H % p)
