#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Functions for conversions between different private key formats.

Short Weierstrass private keys are scalars in 1..n-1,
given as int or as n_size big-endian Octets.

Twisted Edwards private keys are RFC 8032 seeds,
i.e. encoding_size random Octets, from which the secret scalar
is derived by hashing; an int seed is taken big-endian.
"""

from typing import Any, Callable, Union

from curvekit.ecc.curve_params import CurveParams, EdwardsParams
from curvekit.exceptions import (
    CurveKitTypeError,
    InvalidPrivateKey,
    InvalidPrivateKeyLength,
)
from curvekit.utils import bytes_from_octets, hex_string

PrvKey = Union[int, bytes, str]


def _octets(prv_key: Any, size: int) -> bytes:
    if isinstance(prv_key, bool) or not isinstance(
        prv_key, (bytes, bytearray, memoryview, str)
    ):
        raise CurveKitTypeError(f"not a private key: {type(prv_key).__name__}")
    prv_key = bytes_from_octets(prv_key)
    if len(prv_key) != size:
        err_msg = f"invalid private key size: {len(prv_key)} bytes instead of {size}"
        raise InvalidPrivateKeyLength(err_msg)
    return prv_key


def int_from_prv_key(prv_key: PrvKey, ec: CurveParams) -> int:
    """Return a verified-as-valid private key integer.

    It supports:

    - SEC Octets (bytes or hex-string of n_size bytes)
    - native int
    """

    if isinstance(prv_key, int) and not isinstance(prv_key, bool):
        q = prv_key
    else:
        q = int.from_bytes(_octets(prv_key, ec.n_size), "big")

    if not 0 < q < ec.n:
        msg = f"private key not in 1..n-1: {hex_string(q) if q > 0 else q}"
        raise InvalidPrivateKey(msg)

    return q


def seed_from_prv_key(prv_key: PrvKey, ec: EdwardsParams) -> bytes:
    "Return the encoding_size bytes seed of a twisted Edwards private key."

    size = ec.encoding_size
    if isinstance(prv_key, int) and not isinstance(prv_key, bool):
        if not 0 < prv_key < 1 << (8 * size):
            raise InvalidPrivateKey(f"private key seed out of range: {prv_key}")
        return prv_key.to_bytes(size, "big")
    return _octets(prv_key, size)


def is_valid_private_key(prv_key: PrvKey, ec: CurveParams) -> bool:
    try:
        if isinstance(ec, EdwardsParams):
            seed_from_prv_key(prv_key, ec)
        else:
            int_from_prv_key(prv_key, ec)
    except (ValueError, TypeError):
        return False
    return True


def random_private_key(ec: CurveParams, random_bytes: Callable[[int], bytes]) -> bytes:
    """Return a random private key.

    A short Weierstrass key is an n_size scalar in 1..n-1:
    reducing n_size + 8 random bytes makes the bias negligible.
    A twisted Edwards key is an encoding_size random seed.
    """

    if isinstance(ec, EdwardsParams):
        return random_bytes(ec.encoding_size)

    i = int.from_bytes(random_bytes(ec.n_size + 8), "big")
    q = i % (ec.n - 1) + 1
    return q.to_bytes(ec.n_size, "big")
