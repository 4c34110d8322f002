# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Sub-solar and sub-lunar positions for any instant.

BodyPositionResolver is the single place that chooses between the primary
ephemeris provider and the closed-form fallback. Every quantity (Julian
Day, sidereal time, Sun and Moon positions) comes from whichever provider
is active, so primary and fallback numbers are never mixed within one
answer.

The resolver never waits for a provider: until the primary reports
is_ready it answers from the fallback, and every result carries the
Accuracy of the provider that produced it.
"""
import logging
from dataclasses import dataclass
from datetime import datetime

from lunisolar.domain.analytic_ephemeris import AnalyticEphemeris
from lunisolar.domain.bodies import Accuracy, Body, EquatorialPosition
from lunisolar.domain.lunar import phase_from_longitudes
from lunisolar.domain.time_coordinates import as_utc, normalize_degrees, sub_point_from_equatorial
from lunisolar.ports.ephemeris import EphemerisProvider, EphemerisUnavailableError

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodyGeoPosition:
    """Geographic sub-point of a body at one instant."""
    body: Body
    lat_deg: float
    lon_deg: float
    distance_km: float
    phase: float | None  # Moon only, [0, 1), 0 = new moon
    accuracy: Accuracy


class BodyPositionResolver:
    """Resolves body positions through a primary provider with fallback.

    Args:
        provider: Primary provider (e.g. SkyfieldEphemeris). Optional.
        fallback: Provider used while the primary is absent or not ready.
            Defaults to AnalyticEphemeris.
    """

    def __init__(
        self,
        provider: EphemerisProvider | None = None,
        fallback: EphemerisProvider | None = None,
    ):
        self._provider = provider
        self._fallback = fallback if fallback is not None else AnalyticEphemeris()

    @property
    def active_provider(self) -> EphemerisProvider:
        if self._provider is not None and self._provider.is_ready:
            return self._provider
        return self._fallback

    @property
    def accuracy(self) -> Accuracy:
        return self.active_provider.accuracy

    def _query(self, fn_name: str, *args):
        """Call fn_name on the active provider, falling back on provider errors.

        Returns:
            (result, provider) so callers can chain further queries on the
            same provider.
        """
        provider = self.active_provider
        try:
            return getattr(provider, fn_name)(*args), provider
        except EphemerisUnavailableError as e:
            if provider is self._fallback:
                raise
            _log.warning("Ephemeris provider failed (%s); using fallback", e)
            return getattr(self._fallback, fn_name)(*args), self._fallback

    def julian_day(self, when: datetime) -> float:
        jd, _ = self._query("julian_day", as_utc(when))
        return jd

    def gmst_deg(self, when: datetime) -> float:
        """Greenwich sidereal time in degrees, [0, 360)."""
        jd, provider = self._query("julian_day", as_utc(when))
        return self._gmst_from(provider, jd)

    def equatorial(self, body: Body, when: datetime) -> EquatorialPosition:
        position, _, _ = self._equatorial_with_provider(body, when)
        return position

    def distance_of(self, body: Body, when: datetime) -> float:
        """Geocentric distance of a body in km."""
        return self.equatorial(body, when).distance_km

    def moon_phase(self, when: datetime) -> float:
        """Lunar phase in [0, 1), 0 = new moon."""
        moon, provider, jd = self._equatorial_with_provider(Body.MOON, when)
        sun = provider.equatorial_position(jd, Body.SUN)
        return phase_from_longitudes(moon.ecliptic_longitude_deg, sun.ecliptic_longitude_deg)

    def position_of(self, body: Body, when: datetime) -> BodyGeoPosition:
        """
        Sub-point, distance and (for the Moon) phase of a body.

        Args:
            body: Body.SUN or Body.MOON.
            when: UTC instant (naive datetimes are treated as UTC).

        Returns:
            BodyGeoPosition tagged with the accuracy of the provider used.
        """
        equatorial, provider, jd = self._equatorial_with_provider(body, when)
        point = sub_point_from_equatorial(
            equatorial.right_ascension_deg,
            equatorial.declination_deg,
            self._gmst_from(provider, jd),
        )

        phase = None
        if body is Body.MOON:
            sun = provider.equatorial_position(jd, Body.SUN)
            phase = phase_from_longitudes(
                equatorial.ecliptic_longitude_deg, sun.ecliptic_longitude_deg,
            )

        return BodyGeoPosition(
            body=body,
            lat_deg=point.lat_deg,
            lon_deg=point.lon_deg,
            distance_km=equatorial.distance_km,
            phase=phase,
            accuracy=provider.accuracy,
        )

    def _equatorial_with_provider(
        self, body: Body, when: datetime,
    ) -> tuple[EquatorialPosition, EphemerisProvider, float]:
        jd, provider = self._query("julian_day", as_utc(when))
        try:
            return provider.equatorial_position(jd, body), provider, jd
        except EphemerisUnavailableError as e:
            if provider is self._fallback:
                raise
            _log.warning("Ephemeris provider failed for %s (%s); using fallback", body.value, e)
            jd = self._fallback.julian_day(as_utc(when))
            return self._fallback.equatorial_position(jd, body), self._fallback, jd

    @staticmethod
    def _gmst_from(provider: EphemerisProvider, jd: float) -> float:
        return normalize_degrees(provider.sidereal_time_hours(jd) * 15.0)
