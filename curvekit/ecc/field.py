#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic over a prime modulus.

The same class is used for the curve base field Fp
(coordinates) and for the scalar field Fn (private keys,
nonces, signature scalars).

All results are canonical representatives in [0, modulus).
Inversion uses Fermat's little theorem, i.e. an exponentiation
that does not branch on the value of the input.
"""

from dataclasses import dataclass, field
from math import ceil

from curvekit.alias import Integer
from curvekit.ecc.number_theory import mod_sqrt
from curvekit.exceptions import CurveKitTypeError, CurveKitValueError, NotInvertible
from curvekit.utils import int_from_integer, int_repr


@dataclass(frozen=True)
class Field:
    "Prime field of integers modulo a prime."

    modulus: int
    bits: int = field(init=False, compare=False, repr=False)
    size: int = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.modulus, bool) or not isinstance(self.modulus, int):
            raise CurveKitTypeError(f"invalid modulus: {self.modulus!r}")
        if self.modulus < 3:
            raise CurveKitValueError(f"invalid modulus: {self.modulus}")
        object.__setattr__(self, "bits", self.modulus.bit_length())
        object.__setattr__(self, "size", ceil(self.bits / 8))

    def create(self, value: Integer) -> int:
        "Return the canonical representative of value."
        return int_from_integer(value) % self.modulus

    def is_valid(self, value: int) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and 0 <= value < self.modulus
        )

    def is_zero(self, value: int) -> bool:
        return value % self.modulus == 0

    def eql(self, a: int, b: int) -> bool:
        return (a - b) % self.modulus == 0

    def neg(self, a: int) -> int:
        return -a % self.modulus

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.modulus

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.modulus

    def sqr(self, a: int) -> int:
        return (a * a) % self.modulus

    def pow(self, a: int, e: int) -> int:
        if e < 0:
            return pow(self.inv(a), -e, self.modulus)
        return pow(a, e, self.modulus)

    def inv(self, a: int) -> int:
        a %= self.modulus
        if a == 0:
            raise NotInvertible(f"No inverse for 0 mod {int_repr(self.modulus)}")
        return pow(a, self.modulus - 2, self.modulus)

    def div(self, a: int, b: int) -> int:
        return (a * self.inv(b)) % self.modulus

    def sqrt(self, a: int) -> int:
        return mod_sqrt(a, self.modulus)

    def to_bytes(self, a: int, little_endian: bool = False) -> bytes:
        byteorder = "little" if little_endian else "big"
        return (a % self.modulus).to_bytes(self.size, byteorder, signed=False)

    def from_bytes(self, data: bytes, little_endian: bool = False) -> int:
        "Return the integer encoded in data, reduced mod the field modulus."
        byteorder = "little" if little_endian else "big"
        return int.from_bytes(data, byteorder, signed=False) % self.modulus
