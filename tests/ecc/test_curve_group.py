#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `curvekit.ecc.curve_group` module."

import secrets
from typing import List

import pytest

from curvekit.curves import CURVES, secp256k1, secp256r1
from curvekit.ecc.curve import Curve
from curvekit.ecc.curve_group import GroupElement
from curvekit.exceptions import PointNotOnCurve, ScalarOutOfRange, TypeMismatch

# one instance per parameter set: variants only differ in the hash
CURVE_NAMES = [
    "secp192r1",
    "secp224r1",
    "secp256r1",
    "secp384r1",
    "secp521r1",
    "secp256k1",
    "secp160r1",
    "pallas",
    "vesta",
    "ed25519",
    "ed448",
]


def _multiples(ec: Curve) -> List[GroupElement]:
    G = [ec.ZERO, ec.BASE]
    for i in range(2, 10):
        G.append(ec.BASE.multiply(i))
    return G


def _other(ec: Curve) -> Curve:
    return secp256r1 if ec is secp256k1 else secp256k1


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
def test_zero(ec_name: str) -> None:
    ec = CURVES[ec_name]
    G = _multiples(ec)
    assert G[0].is_zero()
    assert G[0].double() == G[0]
    assert G[0].add(G[0]) == G[0]
    assert G[0].subtract(G[0]) == G[0]
    assert G[0].negate() == G[0]
    for i, P in enumerate(G):
        assert P.add(G[0]) == P
        assert G[0].add(P) == P
        assert G[0].multiply(i + 1) == G[0]
    assert G[1].multiply_unsafe(0) == G[0]


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
def test_group_laws(ec_name: str) -> None:
    ec = CURVES[ec_name]
    G = _multiples(ec)

    assert G[1].double() == G[2]
    assert G[1].subtract(G[1]) == G[0]
    assert G[1].add(G[1]) == G[2]

    assert G[2].double() == G[4]
    assert G[2].add(G[2]) == G[4]
    assert G[7].add(G[3].negate()) == G[4]

    assert G[4].add(G[3]) == G[3].add(G[4])
    assert G[4].add(G[3]) == G[3].add(G[2]).add(G[2])

    assert G[3].double() == G[6]
    assert G[2].multiply(3) == G[6]
    assert G[3].add(G[3]) == G[6]
    assert G[3].add(G[3].negate()) == G[0]
    assert G[3].subtract(G[3]) == G[0]
    for i in range(1, 10):
        assert G[1].multiply_unsafe(i) == G[i]
        assert G[i] - G[1] == G[i - 1]


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
def test_curve_order(ec_name: str) -> None:
    ec = CURVES[ec_name]
    n = ec.params.n
    G = _multiples(ec)

    assert G[1].multiply(n - 1).add(G[1]) == G[0]
    assert G[1].multiply(n - 1).add(G[2]) == G[1]
    assert G[1].multiply(n - 2).add(G[2]) == G[0]
    assert G[1].multiply_unsafe(n - 1) == G[1].negate()
    half = n // 2
    carry = G[1] if n % 2 == 1 else G[0]
    assert G[1].multiply(half).double().add(carry) == G[0]

    with pytest.raises(ScalarOutOfRange):
        G[1].multiply(n)
    assert G[1].is_torsion_free()
    assert G[1].clear_cofactor() == G[1].multiply(ec.params.h)


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
def test_scalar_multiplication(ec_name: str) -> None:
    ec = CURVES[ec_name]
    n = ec.params.n
    G = ec.BASE

    a = 1234
    b = 5678
    c = a * b
    assert G.multiply(a).multiply(b) == G.multiply(c)
    assert G.multiply(c).multiply(ec.Fn.inv(b)) == G.multiply(a)

    for _ in range(3):
        a = 2 + secrets.randbelow(n - 2)
        b = 2 + secrets.randbelow(n - 2)
        pA = G.multiply(a)
        pB = G.multiply(b)
        c = (a + b) % n
        if c:
            assert pA.add(pB) == pB.add(pA)
            assert pA.add(pB) == G.multiply(c)
        c = a * b % n
        assert pA.multiply(b) == pB.multiply(a)
        assert pA.multiply(b) == G.multiply(c)
        assert pA.multiply(b) == pA.multiply_unsafe(b)


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
@pytest.mark.parametrize("op", ["add", "subtract", "equals"])
def test_operand_type_check(ec_name: str, op: str) -> None:
    ec = CURVES[ec_name]
    G1 = ec.BASE
    G2 = ec.BASE.double()
    getattr(G1, op)(G2)
    invalid_operands = [
        0,
        ec.params.n,
        123.456,
        True,
        "1",
        {"x": 1, "y": 1, "z": 1, "t": 1},
        (ec.params.Gx, ec.params.Gy),
        b"",
        b"\x00",
        b"\x01",
        b"\x01" * 4096,
        _other(ec).BASE,
    ]
    for operand in invalid_operands:
        with pytest.raises(TypeMismatch):
            getattr(G1, op)(operand)


def test_representation_mismatch() -> None:
    ed25519 = CURVES["ed25519"]
    with pytest.raises(TypeMismatch):
        secp256k1.BASE.add(ed25519.BASE)
    with pytest.raises(TypeMismatch):
        ed25519.BASE.equals(secp256k1.BASE)
    # same parameters, different hash binding: same group
    assert CURVES["ed25519ph"].BASE.add(ed25519.BASE) == ed25519.BASE.double()


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
@pytest.mark.parametrize("op", ["multiply", "multiply_unsafe"])
def test_scalar_type_check(ec_name: str, op: str) -> None:
    ec = CURVES[ec_name]
    n = ec.params.n
    G1 = ec.BASE
    mult = getattr(G1, op)
    if op == "multiply":
        with pytest.raises(ScalarOutOfRange):
            mult(0)
    mult(1)
    mult(n - 1)
    for k in (n, n + 1, -1):
        with pytest.raises(ScalarOutOfRange):
            mult(k)
    invalid_scalars = [
        G1.double(),
        123.456,
        True,
        "1",
        b"",
        b"\x00",
        b"\x01",
        b"\x01" * 4096,
        _other(ec).BASE,
    ]
    for k in invalid_scalars:
        with pytest.raises(TypeMismatch):
            mult(k)


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
def test_affine(ec_name: str) -> None:
    ec = CURVES[ec_name]
    assert ec.BASE.to_affine() == ec.params.G
    assert ec.from_affine(ec.params.G) == ec.BASE
    assert ec.from_affine(ec.ZERO.to_affine()) == ec.ZERO
    Q = ec.BASE.multiply(7)
    assert ec.from_affine(Q.to_affine()) == Q
    assert ec.from_affine(Q.to_affine()).to_affine() == Q.to_affine()


def test_affine_zero_y() -> None:
    # only (0, 0) stands for the identity
    for ec in (secp256k1, secp256r1):
        assert ec.from_affine((0, 0)) == ec.ZERO
        for x in (5, ec.params.Gx):
            with pytest.raises(PointNotOnCurve, match="point not on curve"):
                ec.from_affine((x, 0))
            assert not ec.params.is_on_curve((x, 0))


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
def test_bytes_roundtrip(ec_name: str) -> None:
    ec = CURVES[ec_name]
    for _ in range(3):
        x = 1 + secrets.randbelow(ec.params.n - 1)
        hex_ = ec.BASE.multiply(x).to_hex()
        assert ec.from_hex(hex_).to_hex() == hex_
        Q = ec.from_bytes(bytes.fromhex(hex_))
        assert Q == ec.BASE.multiply(x)


@pytest.mark.parametrize("ec_name", CURVE_NAMES)
def test_operators(ec_name: str) -> None:
    ec = CURVES[ec_name]
    G = ec.BASE
    assert G + G == G.double()
    assert G * 3 == 3 * G == G.multiply(3)
    assert G * 3 - G == G.double()
    assert -G == G.negate()
    assert G != G.double()
    assert G != 1
    assert (G == "G") is False
    assert hash(G.multiply(2)) == hash(G.double())
    assert {G, G.multiply(1), G.double()} == {G, G.double()}
    assert repr(G).startswith(type(G).__name__)


def test_immutability() -> None:
    G = secp256k1.BASE
    with pytest.raises(AttributeError):
        G.X = 1  # type: ignore
    with pytest.raises(AttributeError):
        CURVES["ed25519"].BASE.T = 1  # type: ignore
