#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions.

The engine is hash-agnostic: a curve instance is bound to a HashSuite,
which bundles a hashlib-style constructor with its HMAC variant
and the cryptographically secure source of random bytes.
"""

import copy
import hashlib
import hmac
import secrets
from dataclasses import dataclass
from typing import Any, Callable

from curvekit.alias import HashF, Octets
from curvekit.utils import bytes_from_octets


class _XofDigest:
    """Fixed output size wrapper of an extendable-output function.

    It makes e.g. SHAKE256 look like a regular hashlib object,
    with a digest() method that takes no arguments, usable also
    as hmac digestmod (block_size and copy are provided).
    """

    def __init__(self, xof: Callable[..., Any], size: int, data: bytes = b"") -> None:
        self._h = xof(data)
        self.digest_size = size
        self.name = f"{self._h.name}_{size * 8}"
        self.block_size = self._h.block_size

    def update(self, data: bytes) -> None:
        self._h.update(data)

    def digest(self) -> bytes:
        return self._h.digest(self.digest_size)

    def copy(self) -> "_XofDigest":
        clone = copy.copy(self)
        clone._h = self._h.copy()
        return clone


def xof(xof_f: Callable[..., Any], size: int) -> HashF:
    "Return a hashlib-style constructor for a fixed size XOF digest."

    def constructor(data: bytes = b"") -> _XofDigest:
        return _XofDigest(xof_f, size, data)

    constructor.__name__ = f"{xof_f.__name__}_{size}"
    return constructor


shake256_114 = xof(hashlib.shake_256, 114)
shake256_64 = xof(hashlib.shake_256, 64)


def reduce_to_hlen(msg: Octets, hf: HashF = hashlib.sha256) -> bytes:
    msg = bytes_from_octets(msg)
    # Step 4 of SEC 1 v.2 section 4.1.3
    h = hf()
    h.update(msg)
    return bytes(h.digest())


@dataclass(frozen=True)
class HashSuite:
    """Hash collaborator bound to a curve instance.

    hf is a hashlib-style constructor (e.g. hashlib.sha256);
    random_bytes must be a cryptographically secure byte source.
    """

    hf: HashF
    random_bytes: Callable[[int], bytes] = secrets.token_bytes

    @property
    def digest_size(self) -> int:
        return self.hf().digest_size

    def hash(self, *msgs: bytes) -> bytes:
        h = self.hf()
        for msg in msgs:
            h.update(msg)
        return bytes(h.digest())

    def hmac(self, key: bytes, *msgs: bytes) -> bytes:
        return hmac.new(key, b"".join(msgs), self.hf).digest()
