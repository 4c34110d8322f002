# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Closed-form ephemeris provider.

Implements the EphemerisProvider port with the analytical Sun and Moon
series and the Unix-epoch Julian Day / mean sidereal time formulas. It
needs no data files, is ready from construction, and reports
Accuracy.APPROXIMATE.
"""
from datetime import datetime

from lunisolar.domain.bodies import Accuracy, Body, EquatorialPosition
from lunisolar.domain.lunar import moon_position
from lunisolar.domain.solar import sun_position
from lunisolar.domain.time_coordinates import gmst_deg, julian_day


class AnalyticEphemeris:
    """Fallback provider: Meeus-style series, no external data."""

    @property
    def is_ready(self) -> bool:
        return True

    @property
    def accuracy(self) -> Accuracy:
        return Accuracy.APPROXIMATE

    async def initialize(self) -> bool:
        return True

    def julian_day(self, when: datetime) -> float:
        return julian_day(when)

    def equatorial_position(self, jd: float, body: Body) -> EquatorialPosition:
        if body is Body.SUN:
            pos = sun_position(jd)
        elif body is Body.MOON:
            pos = moon_position(jd)
        else:
            raise ValueError(f"Unsupported body: {body!r}")
        return EquatorialPosition(
            right_ascension_deg=pos.right_ascension_deg,
            declination_deg=pos.declination_deg,
            distance_km=pos.distance_km,
            ecliptic_longitude_deg=pos.ecliptic_longitude_deg,
        )

    def sidereal_time_hours(self, jd: float) -> float:
        return gmst_deg(jd) / 15.0
