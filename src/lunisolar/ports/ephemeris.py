# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for ephemeris providers.

Adapters wrap a full ephemeris (JPL DE files via skyfield); the domain
ships a closed-form implementation that is always ready.
"""
from datetime import datetime
from typing import Protocol, runtime_checkable

from lunisolar.domain.bodies import Accuracy, Body, EquatorialPosition


class EphemerisUnavailableError(RuntimeError):
    """Provider cannot answer: not initialized, failed to load, or out of range."""


@runtime_checkable
class EphemerisProvider(Protocol):
    """Port for equatorial positions of the Sun and Moon."""

    @property
    def is_ready(self) -> bool:
        """True once the provider can answer queries without blocking."""
        ...

    @property
    def accuracy(self) -> Accuracy:
        """Accuracy class of the positions this provider returns."""
        ...

    async def initialize(self) -> bool:
        """Load whatever the provider needs. Returns success."""
        ...

    def julian_day(self, when: datetime) -> float:
        """Julian Day (UT) of a UTC instant."""
        ...

    def equatorial_position(self, jd: float, body: Body) -> EquatorialPosition:
        """Apparent geocentric position of a body at a Julian Day."""
        ...

    def sidereal_time_hours(self, jd: float) -> float:
        """Greenwich sidereal time in hours, [0, 24)."""
        ...
