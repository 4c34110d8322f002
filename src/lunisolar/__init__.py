# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
lunisolar

Sun and Moon geometry for Earth visualisation: sub-solar and sub-lunar
points, lunar phase, topocentric altitude/azimuth, rise/set search under a
distance-dependent horizon, and eclipse shadow cones. Positions come from
a JPL ephemeris through skyfield when loaded, and from closed-form series
otherwise.
"""

from lunisolar.domain.bodies import (
    Accuracy,
    Body,
    BodyConstants,
    EquatorialPosition,
)
from lunisolar.domain.time_coordinates import (
    GeographicPoint,
    julian_day,
    gmst_deg,
    normalize_longitude,
    sub_point_from_equatorial,
)
from lunisolar.domain.analytic_ephemeris import AnalyticEphemeris
from lunisolar.domain.body_position import (
    BodyGeoPosition,
    BodyPositionResolver,
)
from lunisolar.domain.lunar import (
    illumination_percent,
    phase_name,
)
from lunisolar.domain.horizon import horizon_threshold
from lunisolar.domain.observation import (
    HorizontalPosition,
    alt_az,
)
from lunisolar.domain.rise_set import (
    EventKind,
    HorizonEvent,
    RiseSetResult,
    SearchSettings,
    VisibilityStatus,
    is_above_horizon,
    next_event,
    rise_set_for_day,
)
from lunisolar.domain.eclipse import (
    EclipseConeGeometry,
    critical_moon_distance_km,
    disk_overlap_fraction,
    eclipse_cones,
    eclipse_cones_at,
    solar_obscuration,
)
from lunisolar.domain.sky_snapshot import (
    SkySnapshot,
    sky_snapshot,
)
from lunisolar.ports.ephemeris import (
    EphemerisProvider,
    EphemerisUnavailableError,
)

__version__ = "0.4.0"

__all__ = [
    "Accuracy",
    "Body",
    "BodyConstants",
    "EquatorialPosition",
    "GeographicPoint",
    "julian_day",
    "gmst_deg",
    "normalize_longitude",
    "sub_point_from_equatorial",
    "AnalyticEphemeris",
    "BodyGeoPosition",
    "BodyPositionResolver",
    "illumination_percent",
    "phase_name",
    "horizon_threshold",
    "HorizontalPosition",
    "alt_az",
    "EventKind",
    "HorizonEvent",
    "RiseSetResult",
    "SearchSettings",
    "VisibilityStatus",
    "is_above_horizon",
    "next_event",
    "rise_set_for_day",
    "EclipseConeGeometry",
    "critical_moon_distance_km",
    "disk_overlap_fraction",
    "eclipse_cones",
    "eclipse_cones_at",
    "solar_obscuration",
    "SkySnapshot",
    "sky_snapshot",
    "EphemerisProvider",
    "EphemerisUnavailableError",
]
