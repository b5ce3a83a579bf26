"""Synthetic SP3 and RINEX clock pages shared by the test suite."""

import logging
from datetime import datetime, timedelta

import pytest

START = datetime(2020, 1, 1, 0, 0, 0)


def epoch_line(t):
    return f"*  {t.year:4d} {t.month:2d} {t.day:2d} {t.hour:2d} {t.minute:2d} {t.second:11.8f}"


def make_sp3_page(states, sat_ids=("G01",), num_epochs=10, interval=900.0, start=START,
                  skip=None):
    """
    Build an SP3 page

    ``states(sat_id, k)`` returns ``(x_km, y_km, z_km, clock_us)`` of epoch
    ``k``. ``skip`` maps a satellite id to epochs written as "no data".
    """
    skip = skip or {}
    sats = "".join(sat_ids)
    page = [
        f"#dP{start.year:4d} {start.month:2d} {start.day:2d} {start.hour:2d} {start.minute:2d}"
        f" {start.second:11.8f} {num_epochs:7d} ORBIT IGS14 HLM  IGS",
        f"## 2086 259200.00000000 {interval:14.8f} 58849 0.0000000000000",
        f"+  {len(sat_ids):3d}   {sats}",
        "++         2  2  2",
        "/* synthetic orbit",
    ]
    for k in range(num_epochs):
        page.append(epoch_line(start + timedelta(seconds=k * interval)))
        for sat_id in sat_ids:
            if k in skip.get(sat_id, ()):
                x = y = z = c = 999999.999999
            else:
                x, y, z, c = states(sat_id, k)
            page.append(f"P{sat_id} {x:14.6f} {y:14.6f} {z:14.6f} {c:14.6f}")
    return page


def make_clk_page(biases, sat_ids=("G01",), num_epochs=10, interval=30.0, start=START):
    """RINEX clock page; ``biases(sat_id, k)`` returns the bias of epoch ``k`` (s)"""
    page = [
        "     3.04           C                                       RINEX VERSION / TYPE",
        "                                                            END OF HEADER",
    ]
    for k in range(num_epochs):
        t = start + timedelta(seconds=k * interval)
        for sat_id in sat_ids:
            page.append(f"AS {sat_id}  {t.year:4d} {t.month:02d} {t.day:02d} {t.hour:02d} {t.minute:02d}"
                        f" {t.second:9.6f}  1   {biases(sat_id, k):.12E}")
    return page


@pytest.fixture
def sp3_page():
    return make_sp3_page


@pytest.fixture
def clk_page():
    return make_clk_page


@pytest.fixture
def start_unix():
    return 1577836800.0  # 2020-01-01T00:00:00Z


@pytest.fixture
def engine_loggers():
    """Restore the engine loggers touched by a test"""
    touched = {}

    def track(*names):
        for name in names:
            logger = logging.getLogger(name)
            touched.setdefault(name, (logger.level, list(logger.handlers), logger.propagate))

    yield track

    for name, (level, handlers, propagate) in touched.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.setLevel(level)
        logger.handlers = handlers
        logger.propagate = propagate
