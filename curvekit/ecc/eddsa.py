#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Edwards-curve Digital Signature Algorithm (EdDSA).

Implementation according to RFC 8032:

https://tools.ietf.org/html/rfc8032

The private key is a random seed: hashing it yields
the secret scalar (after the variant specific bit pruning)
and a prefix used for the deterministic nonce.

The EdDSAVariant record selects among the RFC 8032 instances
(e.g. Ed25519 vs Ed25519ctx vs Ed25519ph) for a given curve and hash.

Verification is cofactored, i.e. it checks [h][S]B = [h]R + [h][k]A.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple, Type, TypeVar, Union

from dataclasses_json import DataClassJsonMixin, config

from curvekit.alias import HashF, Octets
from curvekit.ecc.curve_params import EdwardsParams
from curvekit.ecc.edwards import ExtendedPoint
from curvekit.ecc.prv_key import PrvKey, seed_from_prv_key
from curvekit.exceptions import (
    CurveKitValueError,
    EmptyMessage,
    InvalidSignatureFormat,
)
from curvekit.hashes import HashSuite, reduce_to_hlen
from curvekit.utils import bytes_from_octets

PubKey = Union[ExtendedPoint, Octets]


def _no_pruning(head: bytes) -> bytes:
    return head


def prune_ed25519(head: bytes) -> bytes:
    "Clear the three lowest bits and the highest one, set the second highest."
    head = bytearray(head)
    head[0] &= 248
    head[31] &= 127
    head[31] |= 64
    return bytes(head)


def prune_ed448(head: bytes) -> bytes:
    "Clear the two lowest bits and the last octet, set the highest bit before it."
    head = bytearray(head)
    head[0] &= 252
    head[55] |= 128
    head[56] = 0
    return bytes(head)


@dataclass(frozen=True)
class EdDSAVariant:
    """RFC 8032 instance parameters.

    domain_tag: None (pure Ed25519, no context allowed) or the
        dom2/dom4 prefix tag, e.g. b"SigEd448"
    prehash: None or the hash function applied to the message (ph variants)
    prune: bit pruning of the secret scalar buffer
    """

    domain_tag: Optional[bytes] = None
    prehash: Optional[HashF] = None
    prune: Callable[[bytes], bytes] = _no_pruning

    def dom(self, ctx: bytes) -> bytes:
        "Return the dom2/dom4 prefix for the given context."
        phflag = 0 if self.prehash is None else 1
        if self.domain_tag is None:
            if ctx or phflag:
                raise CurveKitValueError("context not supported")
            return b""
        if len(ctx) > 255:
            raise CurveKitValueError(f"context too long: {len(ctx)} bytes")
        return self.domain_tag + bytes([phflag, len(ctx)]) + ctx

    def message(self, msg: Octets) -> bytes:
        msg = bytes_from_octets(msg)
        if not msg:
            raise EmptyMessage("empty message")
        if self.prehash is None:
            return msg
        return reduce_to_hlen(msg, self.prehash)


_Sig = TypeVar("_Sig", bound="Sig")


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    "EdDSA signature: encoded point R and scalar S."

    r: bytes = field(metadata=config(encoder=lambda v: v.hex(), decoder=bytes.fromhex))
    s: int = field(metadata=config(encoder=hex, decoder=lambda v: int(v, 16)))

    def to_bytes(self, ec: EdwardsParams) -> bytes:
        "Return the R || S (little-endian) representation."
        return self.r + self.s.to_bytes(ec.encoding_size, "little")

    @classmethod
    def from_bytes(cls: Type[_Sig], data: Octets, ec: EdwardsParams) -> _Sig:
        b = ec.encoding_size
        try:
            data = bytes_from_octets(data, 2 * b)
        except CurveKitValueError as e:
            raise InvalidSignatureFormat(str(e)) from e
        return cls(data[:b], int.from_bytes(data[b:], "little"))


def _hash_to_scalar(hash_suite: HashSuite, ec: EdwardsParams, *msgs: bytes) -> int:
    return int.from_bytes(hash_suite.hash(*msgs), "little") % ec.n


def expand_seed(
    seed: bytes, ec: EdwardsParams, hash_suite: HashSuite, variant: EdDSAVariant
) -> Tuple[int, bytes]:
    "Return the secret scalar and the nonce prefix of a seed."
    h = hash_suite.hash(seed)
    b = ec.encoding_size
    head = variant.prune(h[:b])
    return int.from_bytes(head, "little") % ec.n, h[b:]


def gen_keys(
    prv_key: PrvKey, ec: EdwardsParams, hash_suite: HashSuite, variant: EdDSAVariant
) -> Tuple[int, ExtendedPoint]:
    "Return the secret scalar and the public key point of a seed."
    seed = seed_from_prv_key(prv_key, ec)
    a, _ = expand_seed(seed, ec, hash_suite, variant)
    return a, ExtendedPoint.generator(ec).multiply(a)


def sign(
    msg: Octets,
    prv_key: PrvKey,
    ec: EdwardsParams,
    hash_suite: HashSuite,
    variant: EdDSAVariant,
    ctx: Octets = b"",
) -> Sig:
    "EdDSA signature (RFC 8032 section 5.1.6 and 5.2.6)."

    seed = seed_from_prv_key(prv_key, ec)
    a, prefix = expand_seed(seed, ec, hash_suite, variant)
    G = ExtendedPoint.generator(ec)
    A = G.multiply(a).to_bytes()

    M = variant.message(msg)
    dom = variant.dom(bytes_from_octets(ctx))

    r = _hash_to_scalar(hash_suite, ec, dom, prefix, M)
    R = G.multiply(r).to_bytes()
    k = _hash_to_scalar(hash_suite, ec, dom, R, A, M)
    s = (r + k * a) % ec.n
    return Sig(R, s)


def _pub_key(key: PubKey, ec: EdwardsParams) -> ExtendedPoint:
    if isinstance(key, ExtendedPoint):
        A = ExtendedPoint.zero(ec).add(key)  # checks the group
        key.assert_validity()
        return A
    return ExtendedPoint.from_bytes(ec, key)


def verify(
    msg: Octets,
    key: PubKey,
    sig: Union[Sig, Octets],
    ec: EdwardsParams,
    hash_suite: HashSuite,
    variant: EdDSAVariant,
    ctx: Octets = b"",
) -> bool:
    """EdDSA signature verification (RFC 8032 section 5.1.7 and 5.2.7).

    Malformed input (signature size, invalid public key) raises an Error;
    a well-formed signature that does not match returns False.
    """

    if not isinstance(sig, Sig):
        sig = Sig.from_bytes(sig, ec)
    elif len(sig.r) != ec.encoding_size:
        raise InvalidSignatureFormat(f"invalid R size: {len(sig.r)} bytes")
    A = _pub_key(key, ec)
    M = variant.message(msg)
    dom = variant.dom(bytes_from_octets(ctx))

    # small order public keys would validate many signatures
    if A.clear_cofactor().is_zero():
        return False
    if not 0 <= sig.s < ec.n:
        return False
    try:
        R = ExtendedPoint.from_bytes(ec, sig.r)
    except CurveKitValueError:
        return False

    k = _hash_to_scalar(hash_suite, ec, dom, sig.r, A.to_bytes(), M)
    G = ExtendedPoint.generator(ec)
    # [h]([S]B - R - [k]A) == 0
    K = G.multiply_unsafe(sig.s).subtract(R).subtract(A.multiply_unsafe(k))
    return K.clear_cofactor().is_zero()
