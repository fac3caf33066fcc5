#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""RFC 6979 deterministic nonces.

ECDSA leaks the private key whenever a nonce is reused or even
slightly biased, and a secure random source is hard to test.
RFC 6979 (https://tools.ietf.org/html/rfc6979) derives the nonce
from the private key and the message hash through an HMAC-DRBG
instead; here the HMAC is the one of the HashSuite bound to the curve.
"""

from curvekit.alias import Octets
from curvekit.ecc.curve_params import CurveParams
from curvekit.ecc.prv_key import PrvKey, int_from_prv_key
from curvekit.hashes import HashSuite
from curvekit.utils import bytes_from_octets, int_from_bits


def challenge_(msg_hash: Octets, ec: CurveParams, hash_suite: HashSuite) -> int:
    # msg_hash must have the digest size
    msg_hash = bytes_from_octets(msg_hash, hash_suite.digest_size)

    # leftmost nlen bits, reduced mod n
    return int_from_bits(msg_hash, ec.nlen) % ec.n


def _rfc6979_nonce_(c: int, q: int, ec: CurveParams, hash_suite: HashSuite) -> int:
    # https://tools.ietf.org/html/rfc6979 section 3.2

    # int2octets(q) || bits2octets(c), both n_size bytes
    seed = b"".join(i.to_bytes(ec.n_size, "big") for i in (q, c))

    hmac = hash_suite.hmac
    hf_size = hash_suite.digest_size
    v = b"\x01" * hf_size  # 3.2.b
    k = b"\x00" * hf_size  # 3.2.c

    k = hmac(k, v, b"\x00", seed)  # 3.2.d
    v = hmac(k, v)  # 3.2.e
    k = hmac(k, v, b"\x01", seed)  # 3.2.f
    v = hmac(k, v)  # 3.2.g

    while True:  # 3.2.h
        t = b""  # 3.2.h.1
        while len(t) < ec.n_size:  # 3.2.h.2
            v = hmac(k, v)
            t += v
        # out of range candidates are discarded, not reduced
        nonce = int_from_bits(t, ec.nlen)  # 3.2.h.3
        if 0 < nonce < ec.n:
            return nonce
        k = hmac(k, v, b"\x00")
        v = hmac(k, v)


def rfc6979_nonce_(
    msg_hash: Octets, prv_key: PrvKey, ec: CurveParams, hash_suite: HashSuite
) -> int:
    "Return the RFC 6979 nonce for signing msg_hash with prv_key."
    c = challenge_(msg_hash, ec, hash_suite)
    q = int_from_prv_key(prv_key, ec)

    return _rfc6979_nonce_(c, q, ec, hash_suite)
