# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Port interfaces. Adapters implement these to plug in external providers."""
from lunisolar.ports.ephemeris import EphemerisProvider, EphemerisUnavailableError

__all__ = [
    "EphemerisProvider",
    "EphemerisUnavailableError",
]
