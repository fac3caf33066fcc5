#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `curvekit.ecc.curve_params` module."

from dataclasses import replace

import pytest

from curvekit.curves import ed448, ed25519, params_from_name, secp160r1, secp256k1
from curvekit.ecc.curve_params import CurveParams, EdwardsParams, WeierstrassParams
from curvekit.exceptions import CurveKitTypeError, CurveKitValueError


def test_sizes() -> None:
    ec = secp256k1.params
    assert (ec.plen, ec.p_size, ec.nlen, ec.n_size) == (256, 32, 256, 32)
    ec = secp160r1.params
    assert (ec.plen, ec.p_size, ec.nlen, ec.n_size) == (160, 20, 161, 21)
    assert ed25519.params.encoding_size == 32
    assert ed448.params.encoding_size == 57
    assert ed25519.params.nlen == 253
    assert ed448.params.h == 4


def test_params_equality() -> None:
    ec = params_from_name("secp256k1")
    assert ec == secp256k1.params
    assert ec is not secp256k1.params
    assert hash(ec) == hash(secp256k1.params)
    assert ec != params_from_name("secp256r1")
    assert ec.to_dict() == {
        "p": ec.p,
        "n": ec.n,
        "h": 1,
        "Gx": ec.Gx,
        "Gy": ec.Gy,
        "a": 0,
        "b": 7,
    }
    assert WeierstrassParams(**ec.to_dict()) == ec
    ed = ed25519.params
    assert EdwardsParams(**ed.to_dict()) == ed
    assert ed.to_dict()["a"] == ed.p - 1


def test_invalid_common_params() -> None:
    ec = WeierstrassParams(13, 19, 1, 1, 9, 0, 2)

    with pytest.raises(CurveKitTypeError, match="p must be an int: "):
        replace(ec, p=13.0)
    with pytest.raises(CurveKitTypeError, match="Gy must be an int: "):
        replace(ec, Gy=True)
    with pytest.raises(CurveKitValueError, match="p is not prime: "):
        replace(ec, p=15)
    with pytest.raises(CurveKitValueError, match="p is not prime: "):
        replace(ec, p=2)
    with pytest.raises(CurveKitValueError, match="invalid n: "):
        replace(ec, n=20)
    with pytest.raises(CurveKitValueError, match="invalid n: "):
        replace(ec, n=1)
    with pytest.raises(CurveKitValueError, match="invalid h: "):
        replace(ec, h=0)
    with pytest.raises(CurveKitValueError, match="p <= Gx: "):
        replace(ec, Gx=13)
    with pytest.raises(CurveKitValueError, match="negative Gy: "):
        replace(ec, Gy=-1)


def test_invalid_weierstrass_params() -> None:
    ec = WeierstrassParams(13, 19, 1, 1, 9, 0, 2)

    with pytest.raises(CurveKitValueError, match="p <= a: "):
        replace(ec, a=13)
    with pytest.raises(CurveKitValueError, match="negative a: "):
        replace(ec, a=-1)
    with pytest.raises(CurveKitValueError, match="p <= b: "):
        replace(ec, b=13)
    with pytest.raises(CurveKitValueError, match="negative b: "):
        replace(ec, b=-2)
    with pytest.raises(CurveKitTypeError, match="b must be an int: "):
        replace(ec, b=2.0)
    with pytest.raises(CurveKitValueError, match="zero discriminant"):
        replace(ec, b=0)
    with pytest.raises(CurveKitValueError, match="INF point cannot be a generator"):
        replace(ec, Gy=0)
    with pytest.raises(CurveKitValueError, match="Generator is not on the curve"):
        replace(ec, Gx=2)


def test_invalid_edwards_params() -> None:
    ec = ed25519.params

    with pytest.raises(CurveKitValueError, match="a and d must be non-zero"):
        replace(ec, d=0)
    with pytest.raises(CurveKitValueError, match="a and d must be non-zero"):
        replace(ec, a=0)
    with pytest.raises(CurveKitValueError, match="singular curve"):
        replace(ec, d=ec.a)
    with pytest.raises(CurveKitValueError, match="p <= d: "):
        replace(ec, d=ec.p)
    with pytest.raises(CurveKitValueError, match="small order point"):
        replace(ec, Gx=0, Gy=1)
    with pytest.raises(CurveKitValueError, match="Generator is not on the curve"):
        replace(ec, Gy=ec.Gy + 1)


def test_is_on_curve() -> None:
    ec = secp256k1.params
    assert ec.is_on_curve(ec.G)
    # the infinity point
    assert ec.is_on_curve((0, 0))
    assert not ec.is_on_curve((ec.Gx, ec.Gy + 1))
    assert not ec.is_on_curve((ec.Gx + ec.p, ec.Gy))
    assert not ec.is_on_curve((ec.Gx, ec.Gy - ec.p))
    with pytest.raises(CurveKitValueError, match="point must be a tuple"):
        ec.is_on_curve((ec.Gx, ec.Gy, 1))  # type: ignore
    ec.require_on_curve(ec.G)
    with pytest.raises(CurveKitValueError, match="point not on curve"):
        ec.require_on_curve((ec.Gx, ec.Gy + 1))

    ed = ed25519.params
    assert ed.is_on_curve(ed.G)
    assert ed.is_on_curve((0, 1))
    assert ed.is_on_curve((0, ed.p - 1))
    assert not ed.is_on_curve((0, 0))
    assert not ed.is_on_curve((ed.Gx, ed.Gy + 1))
    with pytest.raises(CurveKitValueError, match="point must be a tuple"):
        ed.is_on_curve((1,))  # type: ignore


def test_abstract_params() -> None:
    # the curve equation, hence the generator check, is family specific
    ec = secp256k1.params
    with pytest.raises(TypeError):
        CurveParams(ec.p, ec.n, ec.h, ec.Gx, ec.Gy)  # type: ignore
