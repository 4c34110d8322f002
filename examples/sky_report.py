#!/usr/bin/env python3
"""Sky report example: a week of sunrise/sunset plus the next eclipse-season check.

Prints daily Sun and Moon rise/set times for an observer, the Moon's phase
each evening, and whether the Moon's umbra would reach the Earth at the
next new moon.

Usage:
    python examples/sky_report.py
    python examples/sky_report.py de421.bsp     # JPL ephemeris via skyfield
"""
import asyncio
import sys
from datetime import datetime, timedelta, timezone

from lunisolar import (
    Body,
    BodyPositionResolver,
    critical_moon_distance_km,
    eclipse_cones_at,
    illumination_percent,
    phase_name,
    rise_set_for_day,
)


LAT, LON = 51.48, 0.0  # Greenwich
TZ_HOURS = 1.0


def _hhmm(event):
    if event is None:
        return "  -  "
    return (event.time + timedelta(hours=TZ_HOURS)).strftime("%H:%M")


def main():
    resolver = BodyPositionResolver()
    if len(sys.argv) > 1:
        from lunisolar.adapters.skyfield_ephemeris import SkyfieldEphemeris

        provider = SkyfieldEphemeris(sys.argv[1])
        asyncio.run(provider.initialize())
        resolver = BodyPositionResolver(provider)
    print(f"Positions: {resolver.accuracy.value}")

    start = datetime(2026, 3, 18, 12, 0, 0, tzinfo=timezone.utc)

    # --- Step 1: A week of rise and set times ---
    print(f"\n  {'Date':<10} {'Sunrise':>8} {'Sunset':>8} {'Moonrise':>9} {'Moonset':>8}  Moon")
    print(f"  {'-'*10} {'-'*8} {'-'*8} {'-'*9} {'-'*8}  {'-'*24}")
    for day in range(7):
        noon = start + timedelta(days=day)
        sun = rise_set_for_day(resolver, LAT, LON, Body.SUN, noon, TZ_HOURS)
        moon = rise_set_for_day(resolver, LAT, LON, Body.MOON, noon, TZ_HOURS)
        phase = resolver.moon_phase(noon)
        print(
            f"  {noon:%Y-%m-%d} {_hhmm(sun.rise):>8} {_hhmm(sun.set):>8} "
            f"{_hhmm(moon.rise):>9} {_hhmm(moon.set):>8}  "
            f"{phase_name(phase)} ({illumination_percent(phase)}%)"
        )

    # --- Step 2: Step to the next new moon ---
    when = start
    while resolver.moon_phase(when) > 0.01:
        when += timedelta(hours=1)
    print(f"\nNext new moon: {when:%Y-%m-%d %H:00} UTC")

    # --- Step 3: Shadow cones at that new moon ---
    cones = eclipse_cones_at(resolver, when)
    moon_km = resolver.distance_of(Body.MOON, when)
    limit_km = critical_moon_distance_km(resolver.distance_of(Body.SUN, when))
    print(f"  Moon distance {moon_km:,.0f} km, total/annular boundary {limit_km:,.0f} km")
    if cones.umbra_reaches_earth:
        print("  Umbra reaches Earth: any eclipse this lunation would be total")
    else:
        print("  Umbra falls short: any eclipse this lunation would be annular")


if __name__ == "__main__":
    main()
