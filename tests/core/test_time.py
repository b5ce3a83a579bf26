"""Tests for calendar, Unix and sidereal time conversions."""

from datetime import datetime, timezone

import numpy as np
import pytest

from pysatnav.core.constants import R2D
from pysatnav.core.time import (
    SimulationTime,
    calendar_to_unix,
    epoch_line_to_unix,
    greenwich_sidereal_angle,
    julian_day,
    unix_to_datetime,
)


def test_calendar_to_unix_is_utc():
    assert calendar_to_unix(1970, 1, 1) == 0.0
    assert calendar_to_unix(2000, 1, 1, 12, 0, 0.0) == 946728000.0
    assert calendar_to_unix(2020, 1, 1) == 1577836800.0


def test_calendar_to_unix_keeps_fraction():
    assert calendar_to_unix(2020, 1, 1, 0, 0, 30.25) == pytest.approx(1577836830.25, abs=1e-6)


def test_unix_to_datetime():
    assert unix_to_datetime(1577836800.0) == datetime(2020, 1, 1, tzinfo=timezone.utc)


def test_epoch_line_to_unix():
    tokens = "*  2020  1  1  0 15  0.00000000".split()
    assert epoch_line_to_unix(tokens) == 1577836800.0 + 900.0


def test_epoch_line_too_short():
    with pytest.raises(ValueError):
        epoch_line_to_unix(["*", "2020", "1", "1"])


def test_julian_day_j2000():
    assert julian_day(2000, 1, 1, 12, 0, 0.0) == pytest.approx(2451545.0)
    assert julian_day(2000, 1, 2, 12, 0, 0.0) - julian_day(2000, 1, 1, 12, 0, 0.0) == pytest.approx(1.0)


def test_greenwich_sidereal_angle():
    # GMST at J2000.0 is 280.46061837 deg
    assert greenwich_sidereal_angle(2451545.0) * R2D == pytest.approx(280.46061837, abs=1e-6)


def test_greenwich_sidereal_angle_range():
    for jd in np.linspace(2451545.0, 2460000.0, 37):
        gst = greenwich_sidereal_angle(jd)
        assert 0.0 <= gst < 2.0 * np.pi


def test_simulation_time():
    sim_time = SimulationTime(2020, 1, 1, 0, 15, 0.0, step_s=10.0)
    assert sim_time.start_unix_time == 1577836800.0 + 900.0

    sim_time.advance()
    sim_time.advance(5)
    assert sim_time.elapsed_time_s == 60.0
