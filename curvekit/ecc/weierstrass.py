#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Short Weierstrass curve points in Jacobian coordinates.

Jacobian coordinates (X, Y, Z) represent the affine point
(X/Z^2, Y/Z^3); any Z == 0 is the infinity point.
They allow group operations without field inversions,
which are deferred to the final conversion to affine coordinates.

Encoding is SEC compressed/uncompressed point representation,
according to SEC 1 v.2, sections 2.3.3 and 2.3.4.
"""

from dataclasses import dataclass

from curvekit.alias import INF, Octets, Point
from curvekit.ecc.curve_group import GroupElement, affine_coordinates
from curvekit.ecc.curve_params import WeierstrassParams
from curvekit.exceptions import (
    CurveKitValueError,
    InvalidEncodingLength,
    PointNotOnCurve,
)
from curvekit.utils import bytes_from_octets, int_repr


@dataclass(frozen=True, eq=False, repr=False)
class JacobianPoint(GroupElement):
    "Short Weierstrass curve point in Jacobian coordinates."

    ec: WeierstrassParams
    X: int
    Y: int
    Z: int

    @classmethod
    def zero(cls, ec: WeierstrassParams) -> "JacobianPoint":
        return cls(ec, 0, 1, 0)

    @classmethod
    def from_affine(cls, ec: WeierstrassParams, Q: Point) -> "JacobianPoint":
        x, y = affine_coordinates(Q)
        if not ec.is_on_curve((x, y)):
            raise PointNotOnCurve(f"point not on curve: {int_repr(x)}, {int_repr(y)}")
        if x == 0 and y == 0:  # INF in affine coordinates
            return cls.zero(ec)
        return cls(ec, x, y, 1)

    @classmethod
    def from_bytes(cls, ec: WeierstrassParams, data: Octets) -> "JacobianPoint":
        """Return the point decoded from its SEC 1 encoding.

        Return a point that belongs to the curve according to
        SEC 1 v.2, section 2.3.4.
        """

        data = bytes_from_octets(data)

        size = len(data)
        if size not in (ec.p_size + 1, 2 * ec.p_size + 1):
            err_msg = f"invalid size: {size} bytes instead of "
            err_msg += f"{ec.p_size + 1} or {2 * ec.p_size + 1}"
            raise InvalidEncodingLength(err_msg)

        if data[0] in (0x02, 0x03):  # compressed point
            if size != ec.p_size + 1:
                err_msg = "invalid size for compressed point: "
                err_msg += f"{size} instead of {ec.p_size + 1}"
                raise InvalidEncodingLength(err_msg)
            x = int.from_bytes(data[1:], byteorder="big", signed=False)
            try:
                y = ec.y_even(x)  # also check x validity
            except CurveKitValueError as e:
                raise PointNotOnCurve(f"invalid x-coordinate: {int_repr(x)}") from e
            return cls(ec, x, y if data[0] == 0x02 else ec.p - y, 1)

        if data[0] == 0x04:  # uncompressed point
            if size != 2 * ec.p_size + 1:
                err_msg = "invalid size for uncompressed point: "
                err_msg += f"{size} instead of {2 * ec.p_size + 1}"
                raise InvalidEncodingLength(err_msg)
            x = int.from_bytes(data[1 : ec.p_size + 1], byteorder="big", signed=False)
            y = int.from_bytes(data[ec.p_size + 1 :], byteorder="big", signed=False)
            if x == 0 and y == 0:  # INF in affine coordinates
                raise PointNotOnCurve("no bytes representation for infinity point")
            if not ec.is_on_curve((x, y)):
                msg = f"point not on curve: {int_repr(x)}, {int_repr(y)}"
                raise PointNotOnCurve(msg)
            return cls(ec, x, y, 1)

        raise CurveKitValueError(f"not a point: {data!r}")

    def to_affine(self) -> Point:
        if self.Z == 0:
            return INF
        Fp = self.ec.Fp
        Z2 = Fp.sqr(self.Z)
        x = Fp.div(self.X, Z2)
        y = Fp.div(self.Y, Z2 * self.Z)
        return x, y

    def to_bytes(self, compressed: bool = True) -> bytes:
        """Return the point as compressed/uncompressed octet sequence.

        Return the point as compressed (0x02, 0x03) or uncompressed (0x04)
        octet sequence, according to SEC 1 v.2, section 2.3.3.
        """

        if self.Z == 0:
            raise CurveKitValueError("no bytes representation for infinity point")

        x, y = self.to_affine()
        bytes_ = x.to_bytes(self.ec.p_size, byteorder="big", signed=False)
        if compressed:
            return (b"\x03" if (y & 1) else b"\x02") + bytes_

        bytes_ += y.to_bytes(self.ec.p_size, byteorder="big", signed=False)
        return b"\x04" + bytes_

    def is_zero(self) -> bool:
        return self.Z % self.ec.p == 0

    def negate(self) -> "JacobianPoint":
        return JacobianPoint(self.ec, self.X, (self.ec.p - self.Y) % self.ec.p, self.Z)

    def _equals(self, other: "JacobianPoint") -> bool:
        p = self.ec.p
        if self.Z % p == 0:  # self is INF
            return other.Z % p == 0
        if other.Z % p == 0:  # other is INF (self is not)
            return False

        QZ2 = self.Z * self.Z
        RZ2 = other.Z * other.Z
        if (self.X * RZ2 - other.X * QZ2) % p:
            return False
        return (self.Y * RZ2 * other.Z - other.Y * QZ2 * self.Z) % p == 0

    def add_unchecked(self, other: "JacobianPoint") -> "JacobianPoint":
        # points are assumed to be on curve

        # self or other equal to INF is not a special case here:
        # the result is selected at the end, after all calculations.
        # Equal affine inputs still branch to double, which the ladder
        # never hits since its two registers always differ by Q.
        p = self.ec.p
        Q = self.X, self.Y, self.Z
        R = other.X, other.Y, other.Z

        RZ2 = R[2] * R[2]
        RZ3 = RZ2 * R[2]
        QZ2 = Q[2] * Q[2]
        QZ3 = QZ2 * Q[2]

        M = Q[0] * RZ2
        N = R[0] * QZ2

        T = Q[1] * RZ3
        U = R[1] * QZ3

        if M % p == N % p and T % p == U % p and Q[2] % p and R[2] % p:
            # same affine point: doubling
            return self.double()

        W = U - T
        V = N - M

        V2 = V * V
        V3 = V2 * V
        MV2 = M * V2

        X = (W * W - V3 - 2 * MV2) % p
        Y = (W * (MV2 - X) - T * V3) % p
        Z = (V * Q[2] * R[2]) % p

        # Z is zero if self or other are equal to INF,
        # so (X, Y, Z) is INF instead of being other or self (respectively)

        # possible return values are:
        ret_values = [JacobianPoint(self.ec, X, Y, Z), other, self, self.zero_like()]
        #      Q==INF  +    R==INF  * 2
        #           0  +         0  * 2 = 0 → (X, Y, Z)
        #           1  +         0  * 2 = 1 → R
        #           0  +         1  * 2 = 2 → Q
        #           1  +         1  * 2 = 3 → INF
        i = (Q[2] % p == 0) + (R[2] % p == 0) * 2
        return ret_values[i]

    def double(self) -> "JacobianPoint":
        # point is assumed to be on curve
        p = self.ec.p

        QZ2 = self.Z * self.Z
        QY2 = self.Y * self.Y
        W = 3 * self.X * self.X + self.ec.a * QZ2 * QZ2
        V = 4 * self.X * QY2
        X = W * W - 2 * V
        Y = W * (V - X) - 8 * QY2 * QY2
        Z = 2 * self.Y * self.Z
        return JacobianPoint(self.ec, X % p, Y % p, Z % p)
