#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Conversions between octets, hex-strings and integers.

Octets are bytes-like objects or hex-strings; integer representations
also include "0x"-prefixed strings. The bit-string to integer
conversion follows SEC 1 v.2 section 4.1.3 and RFC 6979 section 2.3.2.
"""

from collections.abc import Iterable as IterableCollection
from typing import Iterable, Optional, Union

from curvekit.alias import Integer, Octets
from curvekit.exceptions import CurveKitTypeError, CurveKitValueError

SizeSpec = Optional[Union[int, Iterable[int]]]

# larger integers are printed as spaced hex-strings in error messages
HEX_THRESHOLD = 0xFFFFFFFF


def _has_size(data: bytes, size: SizeSpec) -> bool:
    if size is None:
        return True
    if isinstance(size, int):
        return len(data) == size
    if isinstance(size, IterableCollection):
        return len(data) in size
    return False


def bytes_from_octets(octets: Octets, out_size: SizeSpec = None) -> bytes:
    """Return bytes from octets, optionally enforcing their size.

    Hex-strings may include spaces; bytearray and memoryview
    are copied into bytes.
    """

    if isinstance(octets, str):
        try:
            data = bytes.fromhex(octets)
        except ValueError as e:
            raise CurveKitValueError(f"not a hex-string: {octets!r}") from e
    elif isinstance(octets, (bytes, bytearray, memoryview)):
        data = bytes(octets)
    else:
        raise CurveKitTypeError(f"not octets: {type(octets).__name__}")

    if not _has_size(data, out_size):
        err_msg = f"invalid size: {len(data)} bytes instead of {out_size}"
        raise CurveKitValueError(err_msg)
    return data


def int_from_bits(octets: Octets, nlen: int) -> int:
    """Return the integer made of the leftmost nlen bits of octets.

    Shorter inputs are not padded. The result is less than 2^nlen
    but not reduced modulo n: that is left to the caller.
    """

    data = bytes_from_octets(octets)
    excess_bits = max(len(data) * 8 - nlen, 0)
    return int.from_bytes(data, byteorder="big", signed=False) >> excess_bits


def int_from_integer(i: Integer) -> int:
    """Return an int from one of its representations.

    Accepted: int (but not bool), "0x"/"-0x" prefixed hex-strings,
    plain hex-strings and bytes, the latter two read as big-endian
    unsigned.
    """

    if isinstance(i, bool):
        raise CurveKitTypeError(f"not an integer: {i!r}")
    if isinstance(i, int):
        return i
    if isinstance(i, str):
        text = i.strip().lower()
        if text.startswith(("0x", "-0x")):
            return int(text, 16)
        i = bytes_from_octets(text)
    if isinstance(i, bytes):
        return int.from_bytes(i, byteorder="big", signed=False)
    raise CurveKitTypeError(f"not an integer: {type(i).__name__}")


def hex_string(i: Integer) -> str:
    """Return the upper-case hex-string of a non-negative integer.

    The hex-string has an even number of digits, grouped by
    four bytes starting from the right, e.g. '01 DEADBEEF 00000000'.
    """

    value = int_from_integer(i)
    if value < 0:
        raise CurveKitValueError(f"negative integer: {value}")
    digits = f"{value:X}"
    if len(digits) % 2:
        digits = "0" + digits
    head = len(digits) % 8
    groups = [digits[:head]] if head else []
    groups.extend(digits[j : j + 8] for j in range(head, len(digits), 8))
    return " ".join(groups)


def int_repr(i: int) -> str:
    "Return a short decimal or a spaced hex representation of i."
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"
