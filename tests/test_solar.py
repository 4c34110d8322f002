# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the analytical solar ephemeris."""
import ast
from datetime import datetime, timezone

import pytest

from lunisolar.domain.bodies import BodyConstants
from lunisolar.domain.solar import (
    OBLIQUITY_J2000_DEG,
    SunPosition,
    obliquity_deg,
    solar_declination_deg,
    sun_position,
)
from lunisolar.domain.time_coordinates import J2000_JD, julian_day


def _jd(*args):
    return julian_day(datetime(*args, tzinfo=timezone.utc))


class TestSunPosition:

    def test_frozen(self):
        pos = sun_position(J2000_JD)
        with pytest.raises(AttributeError):
            pos.declination_deg = 0.0

    def test_returns_sun_position(self):
        assert isinstance(sun_position(J2000_JD), SunPosition)

    def test_j2000_declination(self):
        """Early January: Sun near the southern solstice, dec ≈ -23°."""
        assert sun_position(J2000_JD).declination_deg == pytest.approx(-23.03, abs=0.1)

    def test_j2000_right_ascension(self):
        assert sun_position(J2000_JD).right_ascension_deg == pytest.approx(281.3, abs=0.2)

    def test_march_equinox_2024(self):
        """Equinox 2024-03-20 03:06 UTC: declination crosses zero."""
        assert sun_position(_jd(2024, 3, 20, 3, 6)).declination_deg == pytest.approx(0.0, abs=0.05)

    def test_june_solstice_2024(self):
        """Solstice 2024-06-20 20:51 UTC: declination at maximum."""
        dec = solar_declination_deg(_jd(2024, 6, 20, 20, 51))
        assert dec == pytest.approx(23.44, abs=0.05)

    def test_december_solstice_2024(self):
        dec = solar_declination_deg(_jd(2024, 12, 21, 9, 20))
        assert dec == pytest.approx(-23.44, abs=0.05)

    def test_ra_range(self):
        for day in range(0, 365, 5):
            ra = sun_position(J2000_JD + day).right_ascension_deg
            assert 0.0 <= ra < 360.0


# ── Distance ─────────────────────────────────────────────────────────

class TestSunDistance:

    def test_perihelion(self):
        """Perihelion 2024-01-03: ~147.1 million km."""
        d = sun_position(_jd(2024, 1, 3)).distance_km
        assert 146.9e6 < d < 147.3e6

    def test_aphelion(self):
        """Aphelion 2024-07-05: ~152.1 million km."""
        d = sun_position(_jd(2024, 7, 5)).distance_km
        assert 151.9e6 < d < 152.3e6

    def test_near_one_au(self):
        for day in range(0, 365, 10):
            d = sun_position(J2000_JD + day).distance_km
            assert abs(d / BodyConstants.AU_KM - 1.0) < 0.02


class TestObliquity:

    def test_j2000_value(self):
        assert obliquity_deg(J2000_JD) == pytest.approx(OBLIQUITY_J2000_DEG)

    def test_decreasing(self):
        assert obliquity_deg(J2000_JD + 36525.0) < obliquity_deg(J2000_JD)


# ── Domain purity ────────────────────────────────────────────────────

class TestSolarPurity:

    def test_imports_only_stdlib_numpy_and_domain(self):
        import lunisolar.domain.solar as mod

        allowed = {'math', 'numpy', 'dataclasses', 'typing', 'abc', 'enum', '__future__', 'datetime'}
        with open(mod.__file__) as f:
            tree = ast.parse(f.read())

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    root = alias.name.split('.')[0]
                    if root not in allowed and root != 'lunisolar':
                        assert False, f"Disallowed import '{alias.name}'"
            if isinstance(node, ast.ImportFrom):
                if node.module and node.level == 0:
                    root = node.module.split('.')[0]
                    if root not in allowed and root != 'lunisolar':
                        assert False, f"Disallowed import from '{node.module}'"
