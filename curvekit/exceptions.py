#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are meant to discriminate between Exceptions being raised
by curvekit from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the curvekit versions are derived.
The finer-grained classes below allow to tell apart
the different kinds of malformed input.
"""


class CurveKitValueError(ValueError):
    pass


class CurveKitTypeError(TypeError):
    pass


class CurveKitRuntimeError(RuntimeError):
    pass


class ScalarOutOfRange(CurveKitValueError):
    "Scalar not in 1..n-1 (or 0..n-1, where zero is allowed)."


class PointNotOnCurve(CurveKitValueError):
    "Decoded coordinates do not satisfy the curve equation."


class InvalidEncodingLength(CurveKitValueError):
    "Byte length mismatch for a point encoding."


class InvalidPrivateKeyLength(CurveKitValueError):
    pass


class InvalidPrivateKey(CurveKitValueError):
    pass


class InvalidSignatureFormat(CurveKitValueError):
    pass


class EmptyMessage(CurveKitValueError):
    pass


class NotInvertible(CurveKitValueError):
    "Modular inverse of a value that is not coprime with the modulus."


class TypeMismatch(CurveKitTypeError):
    "Operand is not a group element of the same curve and representation."
