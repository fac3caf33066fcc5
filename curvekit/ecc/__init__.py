#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module curvekit.ecc."""

from curvekit.ecc.curve import (
    Curve,
    CurveUtils,
    EdwardsCurve,
    KeyPair,
    WeierstrassCurve,
    create_curve,
)
from curvekit.ecc.curve_group import GroupElement
from curvekit.ecc.curve_params import CurveParams, EdwardsParams, WeierstrassParams
from curvekit.ecc.edwards import ExtendedPoint
from curvekit.ecc.field import Field
from curvekit.ecc.mult import double_mult, mult_mont_ladder, mult_w_NAF
from curvekit.ecc.weierstrass import JacobianPoint

__all__ = [
    "Curve",
    "CurveUtils",
    "EdwardsCurve",
    "KeyPair",
    "WeierstrassCurve",
    "create_curve",
    "GroupElement",
    "CurveParams",
    "EdwardsParams",
    "WeierstrassParams",
    "ExtendedPoint",
    "Field",
    "double_mult",
    "mult_mont_ladder",
    "mult_w_NAF",
    "JacobianPoint",
]
