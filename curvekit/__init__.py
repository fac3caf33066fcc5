#!/usr/bin/env python3

# Copyright (C) The curvekit developers
#
# This file is part of curvekit. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvekit including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the curvekit package."

name = "curvekit"
__version__ = "2024.3.1"
__author__ = "The curvekit developers"
__author_email__ = "devs@curvekit.org"
__copyright__ = "Copyright (C) 2022-2024 The curvekit developers"
__license__ = "MIT License"
