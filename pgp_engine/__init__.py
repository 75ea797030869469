# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
Configure base logger for pgp_engine (see pgp_engine.log for details).

"""
import pgp_engine.log

# pgp-engine version
__version__ = "0.3.0"
