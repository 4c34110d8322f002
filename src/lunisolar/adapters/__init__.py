# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for external ephemeris providers.

External dependencies (skyfield, data files) are confined to this layer.
"""
from lunisolar.adapters.skyfield_ephemeris import SkyfieldEphemeris

__all__ = [
    "SkyfieldEphemeris",
]
