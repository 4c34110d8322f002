# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Rise/set event search.

Sweeps a body's topocentric altitude at a fixed step, tracking sign
changes of (altitude - horizon threshold), and places each crossing by
linear interpolation between the two bracketing samples.

Two queries share the sweep:
    rise_set_for_day  : first rise and first set within local noon ± 12 h
    next_event        : first crossing after an instant, up to max_days

The threshold is evaluated per sample from the body's current distance,
so the Moon's distance-dependent horizon is tracked through the window.

Timing error is bounded by the interpolation over one step: negligible
for steep crossings, up to about half a step for grazing crossings near
the poles. Default steps: Sun 10 min, Moon 5 min (its threshold moves
with distance), forward search 15 min.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Iterator, Union

from lunisolar.domain.bodies import Body
from lunisolar.domain.body_position import BodyPositionResolver
from lunisolar.domain.horizon import horizon_threshold
from lunisolar.domain.observation import alt_az
from lunisolar.domain.time_coordinates import as_utc, geographic_point

_log = logging.getLogger(__name__)

# Fixed altitude (deg), a function of distance (km) -> altitude, or None for the body default
Threshold = Union[float, Callable[[float], float], None]


class EventKind(Enum):
    RISE = "rise"
    SET = "set"


class VisibilityStatus(Enum):
    """What happened to a body over a search window."""
    RISES_AND_SETS = "rises_and_sets"
    RISES_ONLY = "rises_only"
    SETS_ONLY = "sets_only"
    ALWAYS_ABOVE = "always_above"    # polar day / circumpolar
    ALWAYS_BELOW = "always_below"    # polar night / never rises


@dataclass(frozen=True)
class HorizonEvent:
    """A single horizon crossing."""
    kind: EventKind
    time: datetime
    offset_minutes: float  # relative to the search's reference instant

    @property
    def offset(self) -> timedelta:
        return timedelta(minutes=self.offset_minutes)


@dataclass(frozen=True)
class RiseSetResult:
    """Rise and set of a body within one local day window."""
    body: Body
    rise: HorizonEvent | None
    set: HorizonEvent | None
    status: VisibilityStatus
    window_start: datetime
    window_end: datetime

    @property
    def time_above_horizon(self) -> timedelta:
        """Time the body spends above its threshold within the window.

        For the Sun this is the day length.
        """
        if self.status is VisibilityStatus.ALWAYS_ABOVE:
            return self.window_end - self.window_start
        if self.status is VisibilityStatus.ALWAYS_BELOW:
            return timedelta(0)
        if self.rise is None:
            return self.set.time - self.window_start
        if self.set is None:
            return self.window_end - self.rise.time
        if self.set.time > self.rise.time:
            return self.set.time - self.rise.time
        return (self.window_end - self.rise.time) + (self.set.time - self.window_start)


@dataclass(frozen=True)
class SearchSettings:
    """Sample steps for the horizon sweeps."""
    sun_step: timedelta = timedelta(minutes=10)
    moon_step: timedelta = timedelta(minutes=5)
    forward_step: timedelta = timedelta(minutes=15)
    max_days: float = 60.0
    half_window: timedelta = timedelta(hours=12)

    def day_step(self, body: Body) -> timedelta:
        return self.moon_step if body is Body.MOON else self.sun_step


DEFAULT_SEARCH = SearchSettings()


def _threshold_fn(body: Body, threshold: Threshold) -> Callable[[float], float]:
    if threshold is None:
        return lambda distance_km: horizon_threshold(body, distance_km)
    if callable(threshold):
        return threshold
    value = float(threshold)
    return lambda distance_km: value


def _margin_fn(
    resolver: BodyPositionResolver,
    lat_deg: float,
    lon_deg: float,
    body: Body,
    threshold: Threshold,
) -> Callable[[datetime], float]:
    """Signed altitude above the threshold, as a function of time."""
    observer = geographic_point(lat_deg, lon_deg)
    threshold_at = _threshold_fn(body, threshold)

    def margin(t: datetime) -> float:
        pos = resolver.position_of(body, t)
        altitude = alt_az(observer.lat_deg, observer.lon_deg, pos.lat_deg, pos.lon_deg).altitude_deg
        return altitude - threshold_at(pos.distance_km)

    return margin


def altitude_margin(
    resolver: BodyPositionResolver,
    lat_deg: float,
    lon_deg: float,
    body: Body,
    when: datetime,
    threshold: Threshold = None,
) -> float:
    """Degrees the body stands above (positive) or below its rise/set threshold."""
    return _margin_fn(resolver, lat_deg, lon_deg, body, threshold)(as_utc(when))


def is_above_horizon(
    resolver: BodyPositionResolver,
    lat_deg: float,
    lon_deg: float,
    body: Body,
    when: datetime,
    threshold: Threshold = None,
) -> bool:
    """True when the body's upper limb is above the horizon at an instant.

    Distinguishes polar day from polar night when a search finds no event.
    """
    return altitude_margin(resolver, lat_deg, lon_deg, body, when, threshold) >= 0.0


def _interpolate(t0: datetime, step_seconds: float, f0: float, f1: float) -> datetime:
    """Zero of the straight line through (t0, f0) and (t0 + step, f1)."""
    frac = f0 / (f0 - f1)
    return t0 + timedelta(seconds=step_seconds * frac)


def _crossings(
    margin: Callable[[datetime], float],
    start: datetime,
    duration_seconds: float,
    step_seconds: float,
) -> Iterator[tuple[EventKind, datetime]]:
    """
    Sweep margin(t) from start for duration_seconds.

    Yields (kind, crossing_time) for every sign change, in time order.
    Bounded by duration/step samples.
    """
    f_prev = margin(start)
    t_prev = start
    n_steps = int(math.ceil(duration_seconds / step_seconds - 1e-9))

    for i in range(1, n_steps + 1):
        elapsed = min(i * step_seconds, duration_seconds)
        t = start + timedelta(seconds=elapsed)
        f = margin(t)
        dt = elapsed - (i - 1) * step_seconds

        if f_prev < 0.0 <= f:
            yield EventKind.RISE, _interpolate(t_prev, dt, f_prev, f)
        elif f < 0.0 <= f_prev:
            yield EventKind.SET, _interpolate(t_prev, dt, f_prev, f)

        t_prev, f_prev = t, f


def _validate_step(step: timedelta) -> float:
    step_seconds = step.total_seconds()
    if step_seconds <= 0:
        raise ValueError(f"Step must be positive, got {step}")
    return step_seconds


def local_day_window(
    reference: datetime,
    tz_offset_hours: float = 0.0,
    half_window: timedelta = DEFAULT_SEARCH.half_window,
) -> tuple[datetime, datetime]:
    """UTC bounds of local noon ± half_window on the local date of reference."""
    offset = timedelta(hours=tz_offset_hours)
    local_date = (as_utc(reference) + offset).date()
    local_noon_utc = datetime(
        local_date.year, local_date.month, local_date.day, 12, tzinfo=timezone.utc,
    ) - offset
    return local_noon_utc - half_window, local_noon_utc + half_window


def rise_set_for_day(
    resolver: BodyPositionResolver,
    lat_deg: float,
    lon_deg: float,
    body: Body,
    reference: datetime,
    tz_offset_hours: float = 0.0,
    step: timedelta | None = None,
    threshold: Threshold = None,
    settings: SearchSettings = DEFAULT_SEARCH,
) -> RiseSetResult:
    """
    Rise and set of a body on the local day containing reference.

    Args:
        resolver: Position resolver (primary or fallback ephemeris).
        lat_deg: Observer latitude in degrees (clamped to [-90, 90]).
        lon_deg: Observer longitude in degrees, east positive.
        body: Body.SUN or Body.MOON.
        reference: Any instant on the wanted local day.
        tz_offset_hours: Local time offset from UTC defining the local day.
        step: Sample step (default: settings.day_step(body)).
        threshold: Override of the horizon threshold (see Threshold).
        settings: Search settings.

    Returns:
        RiseSetResult with at most one rise and one set. Event offsets are
        minutes after the window start (local midnight for a 12 h
        half-window). When neither crossing is found, status tells polar
        day (ALWAYS_ABOVE) from polar night (ALWAYS_BELOW).

    Raises:
        ValueError: If step is zero or negative, or coordinates non-finite.
    """
    step_seconds = _validate_step(step if step is not None else settings.day_step(body))
    window_start, window_end = local_day_window(reference, tz_offset_hours, settings.half_window)
    margin = _margin_fn(resolver, lat_deg, lon_deg, body, threshold)

    rise: HorizonEvent | None = None
    set_: HorizonEvent | None = None
    duration_seconds = (window_end - window_start).total_seconds()

    for kind, when in _crossings(margin, window_start, duration_seconds, step_seconds):
        event = HorizonEvent(
            kind=kind,
            time=when,
            offset_minutes=(when - window_start).total_seconds() / 60.0,
        )
        if kind is EventKind.RISE and rise is None:
            rise = event
        elif kind is EventKind.SET and set_ is None:
            set_ = event
        if rise is not None and set_ is not None:
            break

    if rise is not None and set_ is not None:
        status = VisibilityStatus.RISES_AND_SETS
    elif rise is not None:
        status = VisibilityStatus.RISES_ONLY
    elif set_ is not None:
        status = VisibilityStatus.SETS_ONLY
    elif margin(window_start) >= 0.0:
        status = VisibilityStatus.ALWAYS_ABOVE
    else:
        status = VisibilityStatus.ALWAYS_BELOW

    return RiseSetResult(
        body=body,
        rise=rise,
        set=set_,
        status=status,
        window_start=window_start,
        window_end=window_end,
    )


def next_event(
    resolver: BodyPositionResolver,
    lat_deg: float,
    lon_deg: float,
    body: Body,
    from_instant: datetime,
    threshold: Threshold = None,
    max_days: float | None = None,
    step: timedelta | None = None,
    settings: SearchSettings = DEFAULT_SEARCH,
) -> HorizonEvent | None:
    """
    First rise or set after from_instant.

    A body above its threshold at from_instant can only set next, one below
    can only rise next.

    Args:
        resolver: Position resolver.
        lat_deg: Observer latitude in degrees.
        lon_deg: Observer longitude in degrees, east positive.
        body: Body.SUN or Body.MOON.
        from_instant: Search start (UTC).
        threshold: Horizon threshold override (see Threshold).
        max_days: Search horizon in days (default settings.max_days).
        step: Sample step (default settings.forward_step).
        settings: Search settings.

    Returns:
        HorizonEvent whose offset is measured from from_instant, or None
        when the body does not cross within max_days.

    Raises:
        ValueError: If step or max_days is not positive.
    """
    step_seconds = _validate_step(step if step is not None else settings.forward_step)
    days = settings.max_days if max_days is None else max_days
    if not days > 0:
        raise ValueError(f"max_days must be positive, got {max_days}")

    start = as_utc(from_instant)
    margin = _margin_fn(resolver, lat_deg, lon_deg, body, threshold)

    for kind, when in _crossings(margin, start, days * 86400.0, step_seconds):
        return HorizonEvent(
            kind=kind,
            time=when,
            offset_minutes=(when - start).total_seconds() / 60.0,
        )

    _log.debug("No %s crossing within %s days of %s", body.value, days, start.isoformat())
    return None
