# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the skyfield ephemeris adapter, with skyfield's loader faked."""
import asyncio
import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from skyfield.errors import EphemerisRangeError

from lunisolar.adapters.skyfield_ephemeris import DEFAULT_EPHEMERIS, SkyfieldEphemeris
from lunisolar.domain.bodies import Accuracy, Body, EquatorialPosition
from lunisolar.domain.body_position import BodyPositionResolver
from lunisolar.ports.ephemeris import EphemerisProvider, EphemerisUnavailableError


_EPOCH = datetime(2024, 6, 21, 12, 0, 0, tzinfo=timezone.utc)


class _OutOfRange(EphemerisRangeError):
    def __init__(self):
        ValueError.__init__(self, "out of range")


def _fake_loader(ra_hours=6.0, dec_deg=23.44, distance_km=1.52e8, ecl_lon_deg=90.0, gmst_hours=6.0):
    """Loader whose ephemeris answers every observe() with the same apparent position."""
    apparent = MagicMock()
    apparent.radec.return_value = (
        MagicMock(hours=ra_hours), MagicMock(degrees=dec_deg), MagicMock(km=distance_km),
    )
    apparent.frame_latlon.return_value = (
        MagicMock(), MagicMock(degrees=ecl_lon_deg), MagicMock(),
    )

    earth = MagicMock()
    earth.at.return_value.observe.return_value.apparent.return_value = apparent

    eph = MagicMock()
    eph.__getitem__.side_effect = lambda name: earth if name == "earth" else MagicMock(name=name)

    ts = MagicMock()
    ts.from_datetime.return_value = MagicMock(ut1=2460483.0)
    ts.ut1_jd.return_value = MagicMock(gmst=gmst_hours)

    loader = MagicMock()
    loader.timescale.return_value = ts
    loader.return_value = eph
    return loader


def _loaded(**kwargs):
    provider = SkyfieldEphemeris(loader=_fake_loader(**kwargs))
    assert asyncio.run(provider.initialize()) is True
    return provider


# ── Lifecycle ────────────────────────────────────────────────────────

class TestInitialize:

    def test_satisfies_port(self):
        assert isinstance(SkyfieldEphemeris(loader=_fake_loader()), EphemerisProvider)

    def test_not_ready_before_initialize(self):
        provider = SkyfieldEphemeris(loader=_fake_loader())
        assert not provider.is_ready

    def test_ready_after_initialize(self):
        assert _loaded().is_ready

    def test_accuracy(self):
        assert SkyfieldEphemeris(loader=_fake_loader()).accuracy is Accuracy.EPHEMERIS

    def test_loads_named_file(self):
        loader = _fake_loader()
        asyncio.run(SkyfieldEphemeris("de440s.bsp", loader=loader).initialize())
        loader.assert_called_once_with("de440s.bsp")

    def test_default_file(self):
        loader = _fake_loader()
        asyncio.run(SkyfieldEphemeris(loader=loader).initialize())
        loader.assert_called_once_with(DEFAULT_EPHEMERIS)

    def test_initialize_idempotent(self):
        loader = _fake_loader()
        provider = SkyfieldEphemeris(loader=loader)
        asyncio.run(provider.initialize())
        asyncio.run(provider.initialize())
        assert loader.call_count == 1

    @pytest.mark.parametrize("error", [OSError("no network"), ValueError("bad file"), KeyError("earth")])
    def test_load_failure_returns_false(self, error, caplog):
        loader = _fake_loader()
        loader.side_effect = error
        provider = SkyfieldEphemeris(loader=loader)
        with caplog.at_level(logging.WARNING, logger="lunisolar.adapters.skyfield_ephemeris"):
            assert asyncio.run(provider.initialize()) is False
        assert not provider.is_ready
        assert "Could not load ephemeris" in caplog.text


# ── Queries ──────────────────────────────────────────────────────────

class TestQueries:

    def test_not_loaded_raises(self):
        provider = SkyfieldEphemeris(loader=_fake_loader())
        with pytest.raises(EphemerisUnavailableError):
            provider.equatorial_position(2460483.0, Body.SUN)
        with pytest.raises(EphemerisUnavailableError):
            provider.julian_day(_EPOCH)
        with pytest.raises(EphemerisUnavailableError):
            provider.sidereal_time_hours(2460483.0)

    def test_julian_day_is_ut1(self):
        assert _loaded().julian_day(_EPOCH) == 2460483.0

    def test_equatorial_position_converts_units(self):
        pos = _loaded(ra_hours=6.0, dec_deg=23.44, distance_km=1.52e8, ecl_lon_deg=90.0) \
            .equatorial_position(2460483.0, Body.SUN)
        assert isinstance(pos, EquatorialPosition)
        assert pos.right_ascension_deg == pytest.approx(90.0)
        assert pos.declination_deg == 23.44
        assert pos.distance_km == 1.52e8
        assert pos.ecliptic_longitude_deg == 90.0

    def test_observes_named_body(self):
        loader = _fake_loader()
        provider = SkyfieldEphemeris(loader=loader)
        asyncio.run(provider.initialize())
        provider.equatorial_position(2460483.0, Body.MOON)
        eph = loader.return_value
        requested = [c.args[0] for c in eph.__getitem__.call_args_list]
        assert "moon" in requested

    def test_apparent_of_date(self):
        loader = _fake_loader()
        provider = SkyfieldEphemeris(loader=loader)
        asyncio.run(provider.initialize())
        provider.equatorial_position(2460483.0, Body.SUN)
        earth = loader.return_value["earth"]
        apparent = earth.at.return_value.observe.return_value.apparent.return_value
        apparent.radec.assert_called_once_with(epoch="date")

    def test_out_of_range_becomes_unavailable(self):
        loader = _fake_loader()
        earth = loader.return_value["earth"]
        earth.at.return_value.observe.side_effect = _OutOfRange()
        provider = SkyfieldEphemeris(loader=loader)
        asyncio.run(provider.initialize())
        with pytest.raises(EphemerisUnavailableError) as exc_info:
            provider.equatorial_position(2300000.0, Body.SUN)
        assert isinstance(exc_info.value.__cause__, EphemerisRangeError)

    def test_sidereal_time(self):
        assert _loaded(gmst_hours=7.5).sidereal_time_hours(2460483.0) == 7.5


# ── Through the resolver ─────────────────────────────────────────────

class TestWithResolver:

    def test_resolver_uses_loaded_provider(self):
        resolver = BodyPositionResolver(_loaded(ra_hours=6.0, gmst_hours=6.0))
        pos = resolver.position_of(Body.SUN, _EPOCH)
        assert pos.accuracy is Accuracy.EPHEMERIS
        assert pos.lon_deg == pytest.approx(0.0, abs=1e-9)
        assert pos.lat_deg == pytest.approx(23.44)

    def test_resolver_falls_back_before_load(self):
        resolver = BodyPositionResolver(SkyfieldEphemeris(loader=_fake_loader()))
        assert resolver.position_of(Body.SUN, _EPOCH).accuracy is Accuracy.APPROXIMATE

    def test_resolver_falls_back_out_of_range(self):
        loader = _fake_loader()
        loader.return_value["earth"].at.return_value.observe.side_effect = _OutOfRange()
        provider = SkyfieldEphemeris(loader=loader)
        asyncio.run(provider.initialize())
        pos = BodyPositionResolver(provider).position_of(Body.MOON, _EPOCH)
        assert pos.accuracy is Accuracy.APPROXIMATE
