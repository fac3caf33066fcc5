#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Scalar multiplication engine.

The functions here are generic over the GroupElement strategies
(short Weierstrass Jacobian points, twisted Edwards extended points):
they only use the unchecked group law of the element.

The input points are assumed to be on curve and
the m coefficients are assumed to have been reduced mod n.

References:
    - https://en.wikipedia.org/wiki/Elliptic_curve_point_multiplication
    - https://cr.yp.to/bib/2003/joye-ladder.pdf
    - D. Hankerson, 'Guide to Elliptic Curve Cryptography' chapter 3
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, TypeVar

from curvekit.exceptions import CurveKitValueError

if TYPE_CHECKING:  # pragma: no cover
    from curvekit.ecc.curve_group import GroupElement

E = TypeVar("E", bound="GroupElement")


def mult_mont_ladder(m: int, Q: E, nbits: int) -> E:
    """Return m*Q with the Montgomery ladder over nbits bits.

    m is left-padded to nbits, so that the number of steps does not
    leak its bit length; each step is one addition and one doubling
    whatever the bit (https://eprint.iacr.org/2014/140.pdf).
    """

    if m < 0:
        raise CurveKitValueError(f"negative m: {hex(m)}")

    # R[0] is the running result, R[1] = R[0] + Q is an ancillary variable
    R = [Q.zero_like(), Q]
    for i in [int(i) for i in bin(m)[2:].zfill(nbits)]:
        R[not i] = R[i].add_unchecked(R[not i])
        R[i] = R[i].double()
    return R[0]


def mods(m: int, w: int) -> int:
    "Signed modulo function."

    w2 = 1 << w
    M = m % w2
    return M - w2 if M >= (w2 >> 1) else M


def wNAF_of_m(m: int, w: int) -> List[int]:
    """Return the width-w non-adjacent form of m, least significant digit first.

    Non-zero digits are odd, smaller than 2^(w-1) in absolute value,
    and separated by at least w-1 zeros: on average one digit in w+1
    is non-zero (Hankerson et al., Guide to ECC, algorithm 3.35).
    """

    if w < 2:
        raise CurveKitValueError(f"invalid w: {w}")

    M: List[int] = []
    while m > 0:
        if m & 1:
            digit = mods(m, w)
            m -= digit
        else:
            digit = 0
        M.append(digit)
        m >>= 1
    return M


def mult_w_NAF(m: int, Q: E, w: int = 4) -> E:
    """Scalar multiplication using wNAF.

    Point subtraction is as cheap as point addition,
    so only the positive odd multiples Q, 3Q, ..., (2^(w-1)-1)Q
    are precomputed and negated on the fly.

    It is not constant time: use it for public scalars only.
    """

    if m < 0:
        raise CurveKitValueError(f"negative m: {hex(m)}")

    M = wNAF_of_m(m, w)

    Q2 = Q.double()
    T = [Q]
    for _ in range(1, 1 << (w - 2)):
        T.append(T[-1].add_unchecked(Q2))

    R = Q.zero_like()
    for digit in reversed(M):
        R = R.double()
        if digit > 0:
            R = R.add_unchecked(T[(digit - 1) >> 1])
        elif digit < 0:
            R = R.add_unchecked(T[(-digit - 1) >> 1].negate())
    return R


def double_mult(u: int, H: E, v: int, Q: E) -> E:
    """Return u*H + v*Q sharing the doublings (Shamir-Strauss).

    A single left-to-right loop scans the bits of u and v together,
    adding one of 0, H, Q, H+Q at each step.

    It is not constant time: use it for public scalars only.
    """

    if u < 0:
        raise CurveKitValueError(f"negative first coefficient: {hex(u)}")
    if v < 0:
        raise CurveKitValueError(f"negative second coefficient: {hex(v)}")

    # indexed by u_bit + 2 * v_bit
    T = [H.zero_like(), H, Q, H.add_unchecked(Q)]
    ui = bin(u)[2:]
    vi = bin(v)[2:].zfill(len(ui))
    ui = ui.zfill(len(vi))
    digits = [int(j) + 2 * int(k) for j, k in zip(ui, vi)]
    R = T[digits[0]]
    for i in digits[1:]:
        R = R.double()
        if i:
            R = R.add_unchecked(T[i])
    return R
