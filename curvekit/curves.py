#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Named elliptic curves.

* SEC 2 v.2 curves
  http://www.secg.org/sec2-v2.pdf
* SEC 2 v.1 curves, removed from SEC 2 v.2 as insecure ones
  http://www.secg.org/SEC2-Ver-1.0.pdf
* Federal Information Processing Standards Publication 186-4
  (NIST) curves
  https://oag.ca.gov/sites/all/files/agweb/pdfs/erds1/fips_pub_07_2013.pdf
* Pasta curves (Pallas and Vesta)
  https://neuromancer.sk/std/other/Pallas
* Edwards curves of RFC 8032
  https://tools.ietf.org/html/rfc8032

Curve parameters are loaded from data/curves.json;
each named instance binds them to its conventional hash function.
"""

import hashlib
import json
from os import path
from typing import Dict

from curvekit.ecc.curve import Curve, create_curve
from curvekit.ecc.curve_params import CurveParams, EdwardsParams, WeierstrassParams
from curvekit.ecc.eddsa import EdDSAVariant, prune_ed448, prune_ed25519
from curvekit.hashes import shake256_64, shake256_114

datadir = path.join(path.dirname(__file__), "data")

filename = path.join(datadir, "curves.json")
with open(filename, "r", encoding="ascii") as file_:
    _CURVE_PARAMS = json.load(file_)


def params_from_name(ec_name: str) -> CurveParams:
    "Return the parameter record of a named curve."
    data = dict(_CURVE_PARAMS[ec_name])
    family = data.pop("family")
    kwargs = {k: v if isinstance(v, int) else int(v, 16) for k, v in data.items()}
    if family == "edwards":
        return EdwardsParams(**kwargs)
    return WeierstrassParams(**kwargs)


secp192r1 = create_curve(params_from_name("secp192r1"), hashlib.sha256, "secp192r1")
secp224r1 = create_curve(params_from_name("secp224r1"), hashlib.sha224, "secp224r1")
secp256r1 = create_curve(params_from_name("secp256r1"), hashlib.sha256, "secp256r1")
secp384r1 = create_curve(params_from_name("secp384r1"), hashlib.sha384, "secp384r1")
secp521r1 = create_curve(params_from_name("secp521r1"), hashlib.sha512, "secp521r1")
secp256k1 = create_curve(params_from_name("secp256k1"), hashlib.sha256, "secp256k1")
secp160r1 = create_curve(params_from_name("secp160r1"), hashlib.sha1, "secp160r1")
pallas = create_curve(params_from_name("pallas"), hashlib.sha256, "pallas")
vesta = create_curve(params_from_name("vesta"), hashlib.sha256, "vesta")

_ED25519_TAG = b"SigEd25519 no Ed25519 collisions"
_ED448_TAG = b"SigEd448"

_ed25519_params = params_from_name("ed25519")
ed25519 = create_curve(
    _ed25519_params,
    hashlib.sha512,
    "ed25519",
    variant=EdDSAVariant(prune=prune_ed25519),
)
ed25519ctx = create_curve(
    _ed25519_params,
    hashlib.sha512,
    "ed25519ctx",
    variant=EdDSAVariant(domain_tag=_ED25519_TAG, prune=prune_ed25519),
)
ed25519ph = create_curve(
    _ed25519_params,
    hashlib.sha512,
    "ed25519ph",
    variant=EdDSAVariant(_ED25519_TAG, hashlib.sha512, prune_ed25519),
)

_ed448_params = params_from_name("ed448")
ed448 = create_curve(
    _ed448_params,
    shake256_114,
    "ed448",
    variant=EdDSAVariant(domain_tag=_ED448_TAG, prune=prune_ed448),
)
ed448ph = create_curve(
    _ed448_params,
    shake256_114,
    "ed448ph",
    variant=EdDSAVariant(_ED448_TAG, shake256_64, prune_ed448),
)

# P-xxx aliases of the NIST curves
P192 = secp192r1
P224 = secp224r1
P256 = secp256r1
P384 = secp384r1
P521 = secp521r1

CURVES: Dict[str, Curve] = {
    ec.name: ec
    for ec in (
        secp192r1,
        secp224r1,
        secp256r1,
        secp384r1,
        secp521r1,
        secp256k1,
        secp160r1,
        pallas,
        vesta,
        ed25519,
        ed25519ctx,
        ed25519ph,
        ed448,
        ed448ph,
    )
}
