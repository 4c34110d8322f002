# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Skyfield adapter: JPL DE ephemeris behind the EphemerisProvider port.

External dependencies (skyfield, its data files, the network on first
download) are confined to this layer.

Loading the ephemeris file is slow on first use (download, then parse),
so initialize() runs it in a worker thread. Until it completes the
provider reports is_ready = False and the resolver keeps answering from
the analytical fallback.
"""
import asyncio
import logging
from datetime import datetime
from pathlib import Path

from skyfield.api import Loader
from skyfield.errors import EphemerisRangeError
from skyfield.framelib import ecliptic_frame

from lunisolar.domain.bodies import Accuracy, Body, EquatorialPosition
from lunisolar.domain.time_coordinates import as_utc
from lunisolar.ports.ephemeris import EphemerisProvider, EphemerisUnavailableError

_log = logging.getLogger(__name__)

DEFAULT_EPHEMERIS = "de421.bsp"
DEFAULT_DATA_DIR = Path.home() / ".cache" / "lunisolar"


class SkyfieldEphemeris(EphemerisProvider):
    """
    Apparent Sun and Moon positions from a JPL ephemeris via skyfield.

    DE421 covers 1900-2050; pass "de440s.bsp" for 1849-2150.

    Args:
        ephemeris_file: BSP file name (downloaded into data_dir if missing).
        data_dir: Directory for ephemeris and timescale files.
        loader: Pre-built skyfield Loader (mainly for tests).
    """

    BODY_NAMES = {
        Body.SUN: "sun",
        Body.MOON: "moon",
    }

    def __init__(
        self,
        ephemeris_file: str = DEFAULT_EPHEMERIS,
        data_dir: str | Path | None = None,
        loader=None,
    ):
        self._ephemeris_file = ephemeris_file
        self._data_dir = Path(data_dir) if data_dir is not None else DEFAULT_DATA_DIR
        self._loader = loader
        self._ts = None
        self._eph = None
        self._earth = None
        self._ready = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def accuracy(self) -> Accuracy:
        return Accuracy.EPHEMERIS

    def load(self) -> None:
        """Load timescale and ephemeris synchronously (may download)."""
        loader = self._loader
        if loader is None:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            loader = Loader(str(self._data_dir), verbose=False)

        ts = loader.timescale()
        eph = loader(self._ephemeris_file)
        earth = eph["earth"]

        self._ts, self._eph, self._earth = ts, eph, earth
        self._ready = True

    async def initialize(self) -> bool:
        """Load the ephemeris off the event loop. Returns success."""
        if self._ready:
            return True
        try:
            await asyncio.to_thread(self.load)
        except (OSError, ValueError, KeyError) as e:
            _log.warning(
                "Could not load ephemeris %s: %s; positions stay approximate",
                self._ephemeris_file, e,
            )
            return False
        _log.info("Loaded ephemeris %s", self._ephemeris_file)
        return True

    def _require_ready(self) -> None:
        if not self._ready:
            raise EphemerisUnavailableError(
                f"Ephemeris {self._ephemeris_file} is not loaded"
            )

    def julian_day(self, when: datetime) -> float:
        self._require_ready()
        return float(self._ts.from_datetime(as_utc(when)).ut1)

    def equatorial_position(self, jd: float, body: Body) -> EquatorialPosition:
        """
        Apparent geocentric RA/Dec (equator and equinox of date).

        Raises:
            EphemerisUnavailableError: If not loaded or jd is outside the
                ephemeris coverage.
        """
        self._require_ready()
        t = self._ts.ut1_jd(jd)
        try:
            target = self._eph[self.BODY_NAMES[body]]
            apparent = self._earth.at(t).observe(target).apparent()
        except EphemerisRangeError as e:
            raise EphemerisUnavailableError(
                f"JD {jd} outside {self._ephemeris_file} coverage"
            ) from e

        ra, dec, distance = apparent.radec(epoch="date")
        _, ecliptic_lon, _ = apparent.frame_latlon(ecliptic_frame)

        return EquatorialPosition(
            right_ascension_deg=float(ra.hours) * 15.0,
            declination_deg=float(dec.degrees),
            distance_km=float(distance.km),
            ecliptic_longitude_deg=float(ecliptic_lon.degrees),
        )

    def sidereal_time_hours(self, jd: float) -> float:
        self._require_ready()
        return float(self._ts.ut1_jd(jd).gmst)
