#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic over integers.

Inversion for any modulus goes through the extended Euclidean algorithm;
square roots modulo a prime use closed forms for p = 3 mod 4 and
p = 5 mod 8, and Tonelli-Shanks for everything else.
"""

from typing import Tuple

from curvekit.exceptions import CurveKitValueError, NotInvertible
from curvekit.utils import int_repr


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    "Return (g, x, y) such that a*x + b*y = g = gcd(a, b)."

    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_x, x = x, old_x - quotient * x
        old_y, y = y, old_y - quotient * y
    return old_r, old_x, old_y


def mod_inv(a: int, m: int) -> int:
    "Return the inverse of a modulo m; m does not have to be a prime."

    a %= m
    g, x, _ = xgcd(a, m)
    if g != 1:
        raise NotInvertible(f"No inverse for {int_repr(a)} mod {int_repr(m)}")
    return x % m


def legendre_symbol(a: int, p: int) -> int:
    """Return the Legendre symbol (a|p) for an odd prime p.

    The result is 1 for non-zero quadratic residues,
    -1 for non-residues and 0 when p divides a.
    """

    euler = pow(a, (p - 1) // 2, p)
    return -1 if euler == p - 1 else euler


def _no_root(a: int, p: int) -> CurveKitValueError:
    return CurveKitValueError(f"no root for {int_repr(a)} mod {int_repr(p)}")


def mod_sqrt(a: int, p: int) -> int:
    """Return x such that x^2 = a mod p, p being a prime.

    p - x is the other root.
    """

    a %= p
    if p == 2 or a == 0:
        return a

    if p % 4 == 3:
        root = pow(a, (p + 1) // 4, p)
    elif p % 8 == 5:
        # Atkin: v = (2a)^((p-5)/8), i = 2av^2, root = av(i-1)
        two_a = 2 * a % p
        v = pow(two_a, (p - 5) // 8, p)
        i = two_a * v * v % p
        root = a * v * (i - 1) % p
    else:
        return tonelli(a, p)

    if root * root % p != a:
        raise _no_root(a, p)
    return root


def tonelli(a: int, p: int) -> int:
    "Return a square root of a modulo the prime p using Tonelli-Shanks."

    a %= p
    if p == 2 or a == 0:
        return a
    if legendre_symbol(a, p) != 1:
        raise _no_root(a, p)

    # p - 1 = q * 2^m with q odd
    q, m = p - 1, 0
    while q % 2 == 0:
        q //= 2
        m += 1

    z = 2
    while legendre_symbol(z, p) != -1:
        z += 1

    c = pow(z, q, p)
    t = pow(a, q, p)
    root = pow(a, (q + 1) // 2, p)
    while t != 1:
        # least i in 0 < i < m with t^(2^i) = 1
        i, t2i = 0, t
        while t2i != 1:
            t2i = t2i * t2i % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        root = root * b % p
    return root
