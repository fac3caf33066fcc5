#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve instances.

A curve instance bundles an immutable parameter record,
the hash suite bound to it, and the signature scheme of its family:
ECDSA for short Weierstrass curves, EdDSA for twisted Edwards curves.

Instances are frozen: create() returns a sibling instance
with the same parameters and a different bound hash function.
"""

import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Callable, ClassVar, Optional, Type, Union

from curvekit.alias import HashF, Octets, Point
from curvekit.ecc import dh, dsa, eddsa
from curvekit.ecc.curve_group import GroupElement
from curvekit.ecc.curve_params import CurveParams, EdwardsParams, WeierstrassParams
from curvekit.ecc.edwards import ExtendedPoint
from curvekit.ecc.field import Field
from curvekit.ecc.prv_key import (
    PrvKey,
    int_from_prv_key,
    is_valid_private_key,
    random_private_key,
    seed_from_prv_key,
)
from curvekit.ecc.weierstrass import JacobianPoint
from curvekit.exceptions import CurveKitTypeError
from curvekit.hashes import HashSuite

PubKey = Union[GroupElement, Octets]


@dataclass(frozen=True)
class CurveUtils:
    "Private key utilities of a curve instance."

    ec: CurveParams
    hash_suite: HashSuite

    def random_private_key(self) -> bytes:
        return random_private_key(self.ec, self.hash_suite.random_bytes)

    def is_valid_private_key(self, prv_key: PrvKey) -> bool:
        return is_valid_private_key(prv_key, self.ec)


@dataclass(frozen=True)
class KeyPair:
    """Private/public key-pair.

    prv_key is the private key encoding (scalar or seed),
    q the secret scalar, Q = q*G the public key point.
    """

    prv_key: bytes
    q: int
    Q: GroupElement

    @property
    def pub_key(self) -> bytes:
        return self.Q.to_bytes()


@dataclass(frozen=True)
class Curve(ABC):
    "Elliptic curve instance bound to a hash function."

    params: CurveParams
    hash_suite: HashSuite
    name: str = ""

    ZERO: GroupElement = field(init=False, compare=False, repr=False)
    BASE: GroupElement = field(init=False, compare=False, repr=False)
    utils: CurveUtils = field(init=False, compare=False, repr=False)

    point_class: ClassVar[Type[GroupElement]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ZERO", self.point_class.zero(self.params))
        object.__setattr__(self, "BASE", self.point_class.generator(self.params))
        object.__setattr__(self, "utils", CurveUtils(self.params, self.hash_suite))

    @property
    def Fp(self) -> Field:
        return self.params.Fp

    @property
    def Fn(self) -> Field:
        return self.params.Fn

    def create(self, hf: HashF) -> "Curve":
        "Return a sibling instance with a different bound hash function."
        hash_suite = HashSuite(hf, self.hash_suite.random_bytes)
        return replace(self, hash_suite=hash_suite)

    def from_affine(self, Q: Point) -> GroupElement:
        return self.point_class.from_affine(self.params, Q)

    def from_bytes(self, data: Octets) -> GroupElement:
        return self.point_class.from_bytes(self.params, data)

    def from_hex(self, data: Octets) -> GroupElement:
        return self.point_class.from_hex(self.params, data)

    def _pub_key(self, pub_key: PubKey) -> GroupElement:
        if isinstance(pub_key, GroupElement):
            Q = self.ZERO.add(pub_key)  # checks the group
            pub_key.assert_validity()
            return Q
        return self.from_bytes(pub_key)

    @abstractmethod
    def _scalar(self, prv_key: PrvKey) -> int:
        "Return the secret scalar of a private key."

    @abstractmethod
    def _prv_key_bytes(self, prv_key: PrvKey) -> bytes:
        pass

    def gen_keys(self, prv_key: Optional[PrvKey] = None) -> KeyPair:
        "Return a (random, if prv_key is None) key-pair."
        if prv_key is None:
            prv_key = self.utils.random_private_key()
        q = self._scalar(prv_key)
        return KeyPair(self._prv_key_bytes(prv_key), q, self.BASE.multiply(q))

    def get_public_key(self, prv_key: PrvKey, compressed: bool = True) -> bytes:
        Q = self.BASE.multiply(self._scalar(prv_key))
        return Q.to_bytes(compressed)

    def get_shared_secret(self, prv_key: PrvKey, pub_key: PubKey) -> bytes:
        """Return the shared secret of a private key and a public key.

        It is commutative: the shared secret of (a, B)
        is the same as the one of (b, A).
        """
        return dh.shared_secret(self._scalar(prv_key), self._pub_key(pub_key))

    @abstractmethod
    def sign(self, msg: Octets, prv_key: PrvKey, *args: Any, **kwargs: Any) -> Any:
        "Return the signature of msg."

    @abstractmethod
    def verify(
        self, sig: Any, msg: Octets, pub_key: PubKey, *args: Any, **kwargs: Any
    ) -> bool:
        "Return True if sig is a valid signature of msg for pub_key."


@dataclass(frozen=True)
class WeierstrassCurve(Curve):
    "Short Weierstrass curve instance, with ECDSA signatures."

    params: WeierstrassParams
    lower_s: bool = True

    point_class: ClassVar[Type[GroupElement]] = JacobianPoint

    def _scalar(self, prv_key: PrvKey) -> int:
        return int_from_prv_key(prv_key, self.params)

    def _prv_key_bytes(self, prv_key: PrvKey) -> bytes:
        q = int_from_prv_key(prv_key, self.params)
        return q.to_bytes(self.params.n_size, byteorder="big", signed=False)

    def sign(
        self,
        msg: Octets,
        prv_key: PrvKey,
        nonce: Optional[PrvKey] = None,
        lower_s: Optional[bool] = None,
        prehash: bool = True,
    ) -> dsa.Sig:
        lower_s = self.lower_s if lower_s is None else lower_s
        return dsa.sign(
            msg, prv_key, self.params, self.hash_suite, nonce, lower_s, prehash
        )

    def verify(
        self,
        sig: Union[dsa.Sig, Octets],
        msg: Octets,
        pub_key: PubKey,
        lower_s: Optional[bool] = None,
        prehash: bool = True,
    ) -> bool:
        lower_s = self.lower_s if lower_s is None else lower_s
        return dsa.verify(
            msg, pub_key, sig, self.params, self.hash_suite, lower_s, prehash
        )


@dataclass(frozen=True)
class EdwardsCurve(Curve):
    "Twisted Edwards curve instance, with EdDSA signatures."

    params: EdwardsParams
    variant: eddsa.EdDSAVariant = eddsa.EdDSAVariant()

    point_class: ClassVar[Type[GroupElement]] = ExtendedPoint

    def _scalar(self, prv_key: PrvKey) -> int:
        seed = seed_from_prv_key(prv_key, self.params)
        return eddsa.expand_seed(seed, self.params, self.hash_suite, self.variant)[0]

    def _prv_key_bytes(self, prv_key: PrvKey) -> bytes:
        return seed_from_prv_key(prv_key, self.params)

    def sign(self, msg: Octets, prv_key: PrvKey, ctx: Octets = b"") -> eddsa.Sig:
        return eddsa.sign(
            msg, prv_key, self.params, self.hash_suite, self.variant, ctx
        )

    def verify(
        self,
        sig: Union[eddsa.Sig, Octets],
        msg: Octets,
        pub_key: PubKey,
        ctx: Octets = b"",
    ) -> bool:
        return eddsa.verify(
            msg, pub_key, sig, self.params, self.hash_suite, self.variant, ctx
        )


def create_curve(
    params: CurveParams,
    hf: HashF,
    name: str = "",
    random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    **options: Any,
) -> Curve:
    """Return the curve instance for params, bound to hf.

    The parameter record has already been validated at construction;
    its type selects the point representation and the signature scheme.
    options are the family specific ones:
    lower_s for short Weierstrass curves, variant for twisted Edwards ones.
    """

    hash_suite = HashSuite(hf, random_bytes)
    if isinstance(params, WeierstrassParams):
        return WeierstrassCurve(params, hash_suite, name, **options)
    if isinstance(params, EdwardsParams):
        return EdwardsCurve(params, hash_suite, name, **options)
    raise CurveKitTypeError(f"not a curve parameter record: {type(params).__name__}")
