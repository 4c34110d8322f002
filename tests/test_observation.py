# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for topocentric alt/az from sub-points."""
import ast

import pytest

from lunisolar.domain.observation import (
    HorizontalPosition,
    alt_az,
    angular_separation_deg,
)


class TestHorizontalPosition:

    def test_frozen(self):
        hp = HorizontalPosition(altitude_deg=10.0, azimuth_deg=20.0)
        with pytest.raises(AttributeError):
            hp.altitude_deg = 0.0

    def test_above_horizon(self):
        assert HorizontalPosition(0.1, 0.0).is_above_horizon
        assert not HorizontalPosition(-0.1, 0.0).is_above_horizon

    @pytest.mark.parametrize("az,name", [
        (0.0, "N"), (45.0, "NE"), (90.0, "E"), (180.0, "S"),
        (270.0, "W"), (350.0, "N"), (202.5, "SSW"),
    ])
    def test_compass_direction(self, az, name):
        assert HorizontalPosition(10.0, az).compass_direction == name


# ── Altitude ─────────────────────────────────────────────────────────

class TestAltitude:

    def test_zenith(self):
        hp = alt_az(0.0, -75.0, 0.0, -75.0)
        assert hp.altitude_deg == pytest.approx(90.0)
        assert hp.azimuth_deg == 0.0

    def test_nadir(self):
        hp = alt_az(0.0, 10.0, 0.0, -170.0)
        assert hp.altitude_deg == pytest.approx(-90.0)
        assert hp.azimuth_deg == 0.0

    def test_antipodal_quarter_is_horizon(self):
        """Sub-point 90° away along the equator: body on the horizon."""
        hp = alt_az(0.0, 0.0, 0.0, 90.0)
        assert hp.altitude_deg == pytest.approx(0.0, abs=1e-9)

    def test_meridian_altitude(self):
        """Body on the meridian: altitude = 90 - |lat - dec|."""
        hp = alt_az(51.5, -0.1, 23.44, -0.1)
        assert hp.altitude_deg == pytest.approx(90.0 - (51.5 - 23.44))
        assert hp.azimuth_deg == pytest.approx(180.0)

    def test_altitude_range(self):
        for obs_lat in range(-90, 91, 15):
            for body_lon in range(-180, 180, 30):
                hp = alt_az(float(obs_lat), 0.0, 10.0, float(body_lon))
                assert -90.0 <= hp.altitude_deg <= 90.0
                assert 0.0 <= hp.azimuth_deg < 360.0


# ── Azimuth ──────────────────────────────────────────────────────────

class TestAzimuth:

    def test_body_north(self):
        hp = alt_az(0.0, 0.0, 30.0, 0.0)
        assert hp.azimuth_deg == pytest.approx(0.0, abs=1e-5)

    def test_body_east(self):
        """Sub-point east of the observer: body east of the meridian (rising side)."""
        hp = alt_az(0.0, 0.0, 0.0, 30.0)
        assert hp.azimuth_deg == pytest.approx(90.0)

    def test_body_west(self):
        hp = alt_az(0.0, 0.0, 0.0, -30.0)
        assert hp.azimuth_deg == pytest.approx(270.0)

    def test_body_south(self):
        hp = alt_az(45.0, 0.0, 0.0, 0.0)
        assert hp.azimuth_deg == pytest.approx(180.0)

    def test_polar_observer_degenerate(self):
        hp = alt_az(90.0, 0.0, 10.0, 45.0)
        assert hp.altitude_deg == pytest.approx(10.0)
        assert hp.azimuth_deg == 0.0


# ── Angular separation ───────────────────────────────────────────────

class TestAngularSeparation:

    def test_same_point(self):
        hp = HorizontalPosition(30.0, 120.0)
        assert angular_separation_deg(hp, hp) == pytest.approx(0.0, abs=1e-12)

    def test_altitude_only(self):
        assert angular_separation_deg(
            HorizontalPosition(10.0, 50.0), HorizontalPosition(20.0, 50.0)
        ) == pytest.approx(10.0)

    def test_along_horizon(self):
        assert angular_separation_deg(
            HorizontalPosition(0.0, 350.0), HorizontalPosition(0.0, 10.0)
        ) == pytest.approx(20.0)

    def test_small_separation_precise(self):
        sep = angular_separation_deg(
            HorizontalPosition(45.0, 100.0), HorizontalPosition(45.0001, 100.0)
        )
        assert sep == pytest.approx(0.0001, rel=1e-6)


# ── Domain purity ────────────────────────────────────────────────────

class TestObservationPurity:

    def test_imports_only_stdlib_numpy(self):
        import lunisolar.domain.observation as mod

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
