#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve Diffie-Hellman key agreement.

Both parties multiply the peer public point by their own private
scalar and obtain the same group element; its defining coordinate is
the raw shared secret, optionally stretched by the SEC 1 key
derivation function.
"""

from math import ceil
from typing import Optional

from curvekit.alias import HashF
from curvekit.ecc.curve_group import GroupElement
from curvekit.ecc.curve_params import EdwardsParams
from curvekit.exceptions import CurveKitRuntimeError, CurveKitValueError


def ansi_x9_63_kdf(
    z: bytes, size: int, hf: HashF, shared_info: Optional[bytes]
) -> bytes:
    """Return size bytes of keying data derived from z.

    ANSI-X9.63-KDF, see SEC 1 v.2 section 3.6.1.
    """
    hf_size = hf().digest_size
    max_size = hf_size * (2**32 - 1)
    if size > max_size:
        raise CurveKitValueError(f"cannot derive a key larger than {max_size} bytes")

    suffix = shared_info or b""
    blocks = ceil(size / hf_size)
    keying_data = b"".join(
        hf(z + i.to_bytes(4, "big") + suffix).digest() for i in range(1, blocks + 1)
    )
    return keying_data[:size]


def shared_secret_point(q: int, Q: GroupElement) -> GroupElement:
    "Return q*Q, using the constant time scalar multiplication."

    K = Q.multiply(q)
    # only possible for small order points of Edwards curves
    if K.is_zero():
        raise CurveKitRuntimeError("invalid (zero) shared point")
    return K


def shared_secret(q: int, Q: GroupElement) -> bytes:
    """Return the shared secret q*Q reduced to its defining coordinate.

    It is the p_size big-endian x-coordinate for short Weierstrass
    curves, the RFC 8032 point encoding for twisted Edwards curves.
    """

    K = shared_secret_point(q, Q)
    if isinstance(K.ec, EdwardsParams):
        return K.to_bytes()
    x_K = K.to_affine()[0]
    return x_K.to_bytes(K.ec.p_size, byteorder="big", signed=False)


def diffie_hellman(
    dU: int,
    QV: GroupElement,
    size: int,
    hf: HashF,
    shared_info: Optional[bytes] = None,
) -> bytes:
    "Return size bytes of keying data agreed upon with the owner of QV."

    return ansi_x9_63_kdf(shared_secret(dU, QV), size, hf, shared_info)
