#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""ECDSA over short Weierstrass curves.

Signing and verification follow SEC 1 v.2 sections 4.1.3 and 4.1.4
(http://www.secg.org/sec1-v2.pdf); signatures are normalized to
'low-s' unless asked otherwise, so that (r, n - s) is not accepted
as a second valid signature.

Message hashing and the RFC 6979 deterministic nonce both use the
HashSuite bound to the curve.
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Optional, Type, TypeVar, Union

from dataclasses_json import DataClassJsonMixin, config

from curvekit.alias import Octets
from curvekit.ecc.curve_params import WeierstrassParams
from curvekit.ecc.mult import double_mult
from curvekit.ecc.prv_key import PrvKey, int_from_prv_key
from curvekit.ecc.rfc6979 import _rfc6979_nonce_, challenge_
from curvekit.ecc.weierstrass import JacobianPoint
from curvekit.exceptions import (
    CurveKitRuntimeError,
    CurveKitValueError,
    EmptyMessage,
    InvalidSignatureFormat,
    ScalarOutOfRange,
)
from curvekit.hashes import HashSuite
from curvekit.utils import bytes_from_octets, int_repr

_DER_INTEGER = 0x02
_DER_SEQUENCE = 0x30

PubKey = Union[JacobianPoint, Octets]


def _der_length(size: int) -> bytes:
    # short form up to 127, then 0x81 long form (P-521 signatures)
    if size < 0x80:
        return bytes([size])
    return bytes([0x81, size])


def _read_der_length(stream: BytesIO) -> int:
    first = stream.read(1)
    if not first:
        raise InvalidSignatureFormat("missing DER size")
    if first[0] == 0x81:
        second = stream.read(1)
        if not second or second[0] < 0x80:
            raise InvalidSignatureFormat("invalid DER long form size")
        size = second[0]
    elif first[0] < 0x80:
        size = first[0]
    else:
        raise InvalidSignatureFormat(f"invalid DER size: {first.hex()}")
    if size == 0:
        raise InvalidSignatureFormat("zero DER size")
    return size


def _read_der_element(stream: BytesIO, tag: int, name: str) -> bytes:
    "Return the value of the tag-length-value element at the stream position."

    header = stream.read(1)
    if header != bytes([tag]):
        err_msg = f"invalid {name} header: {header.hex()}"
        err_msg += f", instead of {tag:02x}"
        raise InvalidSignatureFormat(err_msg)
    size = _read_der_length(stream)
    value = stream.read(size)
    if len(value) != size:
        raise InvalidSignatureFormat(f"not enough data for {name}")
    return value


def _der_integer(i: int) -> bytes:
    # one extra byte keeps the sign bit clear when the top bit is set
    value = i.to_bytes(i.bit_length() // 8 + 1, byteorder="big", signed=True)
    return bytes([_DER_INTEGER]) + _der_length(len(value)) + value


def _read_der_integer(stream: BytesIO) -> int:
    value = _read_der_element(stream, _DER_INTEGER, "value")
    if value[0] & 0x80:
        raise InvalidSignatureFormat("invalid negative scalar")
    if len(value) > 1 and value[0] == 0 and not value[1] & 0x80:
        raise InvalidSignatureFormat("invalid null byte at the start of scalar")
    return int.from_bytes(value, byteorder="big", signed=False)


_Sig = TypeVar("_Sig", bound="Sig")


def _hex_field() -> Any:
    return field(metadata=config(encoder=hex, decoder=lambda v: int(v, 16)))


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    """ECDSA signature (r, s).

    Two byte representations are supported: the fixed size compact
    r || s, with n_size big-endian bytes each, and the strict
    ASN.1 DER SEQUENCE of two minimally encoded positive INTEGERs.
    """

    r: int = _hex_field()
    s: int = _hex_field()

    def assert_valid(self, ec: WeierstrassParams) -> None:
        for name, value in (("r", self.r), ("s", self.s)):
            if not 0 < value < ec.n:
                err_msg = f"scalar {name} not in 1..n-1: {int_repr(value)}"
                raise ScalarOutOfRange(err_msg)

    def has_high_s(self, ec: WeierstrassParams) -> bool:
        return self.s > ec.n >> 1

    def normalize_s(self: _Sig, ec: WeierstrassParams) -> _Sig:
        "Return the equivalent signature with canonical 'low-s'."
        if self.has_high_s(ec):
            return type(self)(self.r, ec.n - self.s)
        return self

    def to_bytes(self, ec: WeierstrassParams) -> bytes:
        "Return the compact r || s representation."
        self.assert_valid(ec)
        return b"".join(
            i.to_bytes(ec.n_size, byteorder="big", signed=False)
            for i in (self.r, self.s)
        )

    @classmethod
    def from_bytes(cls: Type[_Sig], data: Octets, ec: WeierstrassParams) -> _Sig:
        try:
            data = bytes_from_octets(data, 2 * ec.n_size)
        except CurveKitValueError as e:
            raise InvalidSignatureFormat(str(e)) from e
        r = int.from_bytes(data[: ec.n_size], byteorder="big", signed=False)
        s = int.from_bytes(data[ec.n_size :], byteorder="big", signed=False)
        return cls(r, s)

    def to_der(self) -> bytes:
        content = _der_integer(self.r) + _der_integer(self.s)
        return bytes([_DER_SEQUENCE]) + _der_length(len(content)) + content

    @classmethod
    def from_der(cls: Type[_Sig], data: Octets) -> _Sig:
        "Parse a strict DER signature, rejecting any trailing data."

        stream = BytesIO(bytes_from_octets(data))
        header = stream.read(1)
        if header != bytes([_DER_SEQUENCE]):
            err_msg = f"invalid compound header: {header.hex()}"
            err_msg += f", instead of DER sequence tag {_DER_SEQUENCE:02x}"
            raise InvalidSignatureFormat(err_msg)
        size = _read_der_length(stream)
        content = stream.read(size)
        if len(content) != size or stream.read(1):
            raise InvalidSignatureFormat("invalid DER sequence length")

        content_stream = BytesIO(content)
        r = _read_der_integer(content_stream)
        s = _read_der_integer(content_stream)
        if content_stream.read(1):
            raise InvalidSignatureFormat("invalid DER sequence length")
        return cls(r, s)


def _sign_(c: int, q: int, nonce: int, lower_s: bool, ec: WeierstrassParams) -> Sig:
    # c in [0, n-1], q and nonce in [1, n-1]: any challenge can be
    # signed, which low-cardinality curve tests rely upon.
    # Step numbers refer to SEC 1 v.2 section 4.1.3.
    K = JacobianPoint.generator(ec).multiply(nonce)  # 1
    r = K.to_affine()[0] % ec.n  # 2, 3
    if r == 0:
        raise CurveKitRuntimeError("failed to sign: r = 0")

    s = ec.Fn.div(c + r * q, nonce)  # 6
    if s == 0:
        raise CurveKitRuntimeError("failed to sign: s = 0")
    if lower_s and s > ec.n >> 1:
        s = ec.n - s
    return Sig(r, s)


def sign_(
    msg_hash: Octets,
    prv_key: PrvKey,
    ec: WeierstrassParams,
    hash_suite: HashSuite,
    nonce: Optional[PrvKey] = None,
    lower_s: bool = True,
) -> Sig:
    """Sign a message hash of the bound hash digest size.

    Without an explicit nonce, the RFC 6979 deterministic one is used.
    """

    q = int_from_prv_key(prv_key, ec)
    c = challenge_(msg_hash, ec, hash_suite)  # 4, 5
    if nonce is None:
        k = _rfc6979_nonce_(c, q, ec, hash_suite)
    else:
        k = int_from_prv_key(nonce, ec)
    return _sign_(c, q, k, lower_s, ec)


def _message(msg: Octets) -> bytes:
    msg = bytes_from_octets(msg)
    if not msg:
        raise EmptyMessage("empty message")
    return msg


def sign(
    msg: Octets,
    prv_key: PrvKey,
    ec: WeierstrassParams,
    hash_suite: HashSuite,
    nonce: Optional[PrvKey] = None,
    lower_s: bool = True,
    prehash: bool = True,
) -> Sig:
    """Return the ECDSA signature of msg.

    msg is hashed with the bound hash function first; with
    prehash=False it is taken to be the message hash itself.

    The security level is the smaller of the digest bit-length
    and nlen, yet any combination of the two is allowed:
    longer digests are truncated to their leftmost nlen bits.
    """
    msg = _message(msg)
    msg_hash = hash_suite.hash(msg) if prehash else msg
    return sign_(msg_hash, prv_key, ec, hash_suite, nonce, lower_s)


def _pub_key(key: PubKey, ec: WeierstrassParams) -> JacobianPoint:
    if isinstance(key, JacobianPoint):
        Q = JacobianPoint.zero(ec).add(key)  # checks the group
        key.assert_validity()
    else:
        Q = JacobianPoint.from_bytes(ec, key)
    if Q.is_zero():
        raise CurveKitValueError("invalid (INF) public key")
    return Q


def _assert_as_valid_(
    c: int, Q: JacobianPoint, r: int, s: int, lower_s: bool, ec: WeierstrassParams
) -> None:
    # step numbers refer to SEC 1 v.2 section 4.1.4
    if lower_s and s > ec.n >> 1:
        raise CurveKitRuntimeError("not a low s")

    w = ec.Fn.inv(s)
    u = c * w % ec.n
    v = r * w % ec.n  # 4
    K = double_mult(v, Q, u, JacobianPoint.generator(ec))  # 5
    if K.is_zero():
        raise CurveKitRuntimeError("invalid (INF) key")
    if K.to_affine()[0] % ec.n != r:  # 6, 7, 8
        raise CurveKitRuntimeError("signature verification failed")


def _sig(sig: Union[Sig, Octets], ec: WeierstrassParams) -> Sig:
    if not isinstance(sig, Sig):
        sig = Sig.from_bytes(sig, ec)
    sig.assert_valid(ec)
    return sig


def verify_(
    msg_hash: Octets,
    key: PubKey,
    sig: Union[Sig, Octets],
    ec: WeierstrassParams,
    hash_suite: HashSuite,
    lower_s: bool = True,
) -> bool:
    """Verify an ECDSA signature of a message hash.

    Malformed input (signature size, scalars out of range,
    invalid public key) raises an Error;
    a well-formed signature that does not match returns False.
    """

    sig = _sig(sig, ec)
    Q = _pub_key(key, ec)
    c = challenge_(msg_hash, ec, hash_suite)  # 2, 3
    try:
        _assert_as_valid_(c, Q, sig.r, sig.s, lower_s, ec)
    except CurveKitRuntimeError:
        return False
    return True


def verify(
    msg: Octets,
    key: PubKey,
    sig: Union[Sig, Octets],
    ec: WeierstrassParams,
    hash_suite: HashSuite,
    lower_s: bool = True,
    prehash: bool = True,
) -> bool:
    "Verify an ECDSA signature of msg, see sign for prehash."
    msg = _message(msg)
    msg_hash = hash_suite.hash(msg) if prehash else msg
    return verify_(msg_hash, key, sig, ec, hash_suite, lower_s)
