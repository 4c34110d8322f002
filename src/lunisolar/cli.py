# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for Sun and Moon queries.

Usage:
    # Sub-solar / sub-lunar point (closed-form series, no data files)
    lunisolar position --body moon --time 2024-04-08T18:17:00Z

    # Rise and set on a local day
    lunisolar riseset --lat 51.5 --lon -0.1 --date 2024-06-21 --tz 1

    # Next horizon crossing
    lunisolar next --lat 69.6 --lon 18.9 --body sun --days 90

    # Shadow cones (and obscuration for an observer)
    lunisolar eclipse --time 2024-04-08T18:17:00Z --lat 31.9 --lon -104.7

    # Everything at once, using the JPL DE421 ephemeris (requires download)
    lunisolar --ephemeris de421.bsp snapshot --lat 51.5 --lon -0.1
"""
import argparse
import asyncio
import logging
import math
import sys
from datetime import date, datetime, timedelta, timezone

from lunisolar.domain.bodies import Body
from lunisolar.domain.body_position import BodyPositionResolver
from lunisolar.domain.eclipse import (
    critical_moon_distance_km,
    eclipse_cones_at,
    solar_obscuration,
)
from lunisolar.domain.lunar import illumination_percent, phase_name
from lunisolar.domain.rise_set import next_event, rise_set_for_day
from lunisolar.domain.sky_snapshot import sky_snapshot

_log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_time(value: str | None) -> datetime:
    """ISO 8601 instant ('Z' allowed, naive treated as UTC); None means now."""
    if value is None:
        return datetime.now(timezone.utc)
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid ISO time: {value!r}") from None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def build_resolver(ephemeris: str | None = None, data_dir: str | None = None) -> BodyPositionResolver:
    """Resolver backed by skyfield when an ephemeris file is named."""
    if not ephemeris:
        return BodyPositionResolver()

    from lunisolar.adapters.skyfield_ephemeris import SkyfieldEphemeris

    provider = SkyfieldEphemeris(ephemeris, data_dir=data_dir)
    if not asyncio.run(provider.initialize()):
        print(
            f"Warning: could not load {ephemeris}; using approximate positions.",
            file=sys.stderr,
        )
    return BodyPositionResolver(provider)


def _local(dt: datetime, tz_offset_hours: float) -> str:
    return (dt + timedelta(hours=tz_offset_hours)).strftime("%Y-%m-%d %H:%M")


def _format_duration(td: timedelta) -> str:
    minutes = int(round(td.total_seconds() / 60.0))
    return f"{minutes // 60}h {minutes % 60:02d}m"


def run_position(resolver: BodyPositionResolver, body: Body, when: datetime) -> list[str]:
    pos = resolver.position_of(body, when)
    lines = [
        f"{body.value.capitalize()} at {when.isoformat()} ({pos.accuracy.value})",
        f"  Sub-point: lat {pos.lat_deg:+.4f}°, lon {pos.lon_deg:+.4f}°",
    ]
    if body is Body.SUN:
        lines.append(f"  Distance: {pos.distance_km / 1e6:.3f} million km")
    else:
        lines.append(f"  Distance: {pos.distance_km:,.0f} km")
        lines.append(
            f"  Phase: {pos.phase:.4f} ({phase_name(pos.phase)}, "
            f"{illumination_percent(pos.phase)}% illuminated)"
        )
    return lines


def run_riseset(
    resolver: BodyPositionResolver,
    body: Body,
    lat: float,
    lon: float,
    day: date,
    tz_offset_hours: float,
) -> list[str]:
    reference = datetime(day.year, day.month, day.day, 12, tzinfo=timezone.utc) - timedelta(hours=tz_offset_hours)
    result = rise_set_for_day(resolver, lat, lon, body, reference, tz_offset_hours)

    name = body.value.capitalize()
    lines = [f"{name} on {day.isoformat()} at ({lat:.4f}, {lon:.4f}), UTC{tz_offset_hours:+g}"]
    lines.append(f"  Rise: {_local(result.rise.time, tz_offset_hours) if result.rise else '-'}")
    lines.append(f"  Set:  {_local(result.set.time, tz_offset_hours) if result.set else '-'}")
    lines.append(f"  Status: {result.status.value}")
    lines.append(f"  Above horizon: {_format_duration(result.time_above_horizon)}")
    return lines


def run_next(
    resolver: BodyPositionResolver,
    body: Body,
    lat: float,
    lon: float,
    when: datetime,
    max_days: float,
) -> list[str]:
    event = next_event(resolver, lat, lon, body, when, max_days=max_days)
    name = body.value.capitalize()
    if event is None:
        return [f"No {name.lower()} rise or set within {max_days:g} days"]
    return [
        f"Next {name.lower()}{event.kind.value}: {event.time.isoformat(timespec='seconds')}",
        f"  In: {_format_duration(event.offset)}",
    ]


def run_eclipse(
    resolver: BodyPositionResolver,
    when: datetime,
    lat: float | None = None,
    lon: float | None = None,
) -> list[str]:
    cones = eclipse_cones_at(resolver, when)
    sun_km = resolver.distance_of(Body.SUN, when)
    moon_km = resolver.distance_of(Body.MOON, when)
    lines = [
        f"Shadow cones at {when.isoformat()}",
        f"  Moon distance: {moon_km:,.0f} km (total/annular boundary "
        f"{critical_moon_distance_km(sun_km):,.0f} km)",
        f"  Umbra: half-angle {math.degrees(cones.umbra_half_angle_rad):.4f}°, "
        f"length {cones.umbra_length_km:,.0f} km",
        f"  Penumbra: half-angle {math.degrees(cones.penumbra_half_angle_rad):.4f}°, "
        f"radius at Earth {cones.penumbra_radius_at_earth_km:,.0f} km",
    ]
    if cones.umbra_reaches_earth:
        lines.append("  Umbra reaches Earth: total eclipse possible")
    else:
        lines.append(
            f"  Umbra falls short: antumbra radius {cones.antumbra_radius_at_earth_km:,.0f} km (annular)"
        )
    if lat is not None and lon is not None:
        fraction = solar_obscuration(resolver, lat, lon, when)
        lines.append(f"  Solar disk covered at ({lat:.4f}, {lon:.4f}): {fraction * 100:.1f}%")
    return lines


def run_snapshot(resolver: BodyPositionResolver, lat: float, lon: float, when: datetime) -> list[str]:
    snap = sky_snapshot(resolver, lat, lon, when)
    return [
        f"Sky at {snap.time.isoformat()} from ({snap.lat_deg:.4f}, {snap.lon_deg:.4f}) "
        f"({snap.accuracy.value})",
        f"  Sun:  alt {snap.sun_horizontal.altitude_deg:+.2f}°, az {snap.sun_horizontal.azimuth_deg:.2f}° "
        f"({snap.sun_horizontal.compass_direction}), {snap.sun_distance_million_km:.3f} million km",
        f"  Moon: alt {snap.moon_horizontal.altitude_deg:+.2f}°, az {snap.moon_horizontal.azimuth_deg:.2f}° "
        f"({snap.moon_horizontal.compass_direction}), {snap.moon.distance_km:,.0f} km",
        f"  Moon phase: {snap.moon_phase_name}, {snap.moon_illumination_percent}% illuminated",
        f"  Solar disk covered: {snap.solar_obscuration * 100:.1f}%",
    ]


def _add_observer(parser: argparse.ArgumentParser, required: bool = True) -> None:
    parser.add_argument('--lat', type=float, required=required, help="Observer latitude (deg)")
    parser.add_argument('--lon', type=float, required=required, help="Observer longitude (deg, east positive)")


def _add_body(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--body', choices=[b.value for b in Body], default=Body.SUN.value,
        help="Body to query (default: sun)"
    )


def _add_time(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--time', type=parse_time, default=None, help="ISO 8601 instant (default: now)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sun and Moon positions, rise/set times and eclipse geometry"
    )
    parser.add_argument(
        '--ephemeris',
        help="JPL ephemeris file for skyfield (e.g. de421.bsp); default: closed-form series"
    )
    parser.add_argument('--data-dir', help="Directory for ephemeris files")
    parser.add_argument('--verbose', '-v', action='store_true', default=False, help="Enable debug logging")

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('position', help="Sub-solar or sub-lunar point")
    _add_body(p)
    _add_time(p)

    p = sub.add_parser('riseset', help="Rise and set times on a local day")
    _add_observer(p)
    _add_body(p)
    p.add_argument('--date', type=date.fromisoformat, default=None, help="Local date YYYY-MM-DD (default: today)")
    p.add_argument('--tz', type=float, default=0.0, help="Local UTC offset in hours (default: 0)")

    p = sub.add_parser('next', help="Next rise or set after an instant")
    _add_observer(p)
    _add_body(p)
    _add_time(p)
    p.add_argument('--days', type=float, default=60.0, help="Search horizon in days (default: 60)")

    p = sub.add_parser('eclipse', help="Moon shadow cones")
    _add_time(p)
    _add_observer(p, required=False)

    p = sub.add_parser('snapshot', help="Sun and Moon as seen by an observer")
    _add_observer(p)
    _add_time(p)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    resolver = build_resolver(args.ephemeris, args.data_dir)
    when = args.time if getattr(args, 'time', None) is not None else parse_time(None)

    try:
        if args.command == 'position':
            lines = run_position(resolver, Body(args.body), when)
        elif args.command == 'riseset':
            tz = args.tz
            day = args.date or (datetime.now(timezone.utc) + timedelta(hours=tz)).date()
            lines = run_riseset(resolver, Body(args.body), args.lat, args.lon, day, tz)
        elif args.command == 'next':
            lines = run_next(resolver, Body(args.body), args.lat, args.lon, when, args.days)
        elif args.command == 'eclipse':
            lines = run_eclipse(resolver, when, args.lat, args.lon)
        else:
            lines = run_snapshot(resolver, args.lat, args.lon, when)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("\n".join(lines))


if __name__ == "__main__":
    main()
