#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Any, Callable, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "dead beef"
# "02 79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
#
# use curvekit.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for messages, private keys, encoded points
# and serialized signatures.
Octets = Union[bytes, str]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Hash digest constructor, e.g. hashlib.sha256
HashF = Callable[..., Any]

# Elliptic curve point in affine coordinates.
Point = Tuple[int, int]

# The short Weierstrass infinity point has no affine coordinates:
# by convention it is represented as (0, 0), which is not on any curve
# with b != 0; it can be checked with 'INF[1] == 0'
# as no affine point has y=0 coordinate in a group of odd prime order.
INF = 0, 0

