"""Tests for combined position/clock data sets."""

import logging

import pytest

from pysatnav.core.satellite_numbering import Constellation, ConstellationTable, index_from_id
from pysatnav.gnss.clock_store import SatelliteClockStore
from pysatnav.gnss.records import ClockFileFormat, ClockProduct, PositionProduct
from pysatnav.gnss.satellite_information import SatelliteInformation

G01 = index_from_id('G01')


def state(sat_id, k):
    return 20000.0 + k, 10000.0, 5000.0, 100.0


@pytest.fixture
def info(sp3_page):
    info = SatelliteInformation()
    position_page = sp3_page(state, num_epochs=8)
    clock_page = sp3_page(state, num_epochs=8, skip={"G01": [2]})
    info.initialize(PositionProduct([position_page], 4),
                    ClockProduct([clock_page], 2, ClockFileFormat.SP3))
    return info


def test_valid_only_if_both_windows_valid(info, start_unix):
    info.set_up(start_unix + 3 * 900.0, 1.0)
    assert info.position.get_whether_valid(G01)
    assert not info.clock.get_whether_valid(G01)
    assert not info.get_whether_valid(G01)

    for step in range(1, 7):
        info.update(start_unix + 3 * 900.0 + step * 150.0)
    assert info.get_whether_valid(G01)
    assert info.get_position_ecef_m(G01)[0] == pytest.approx(20004000.0)


def test_clock_uses_position_time_span(sp3_page, clk_page, start_unix):
    info = SatelliteInformation()
    info.initialize(PositionProduct([sp3_page(state, num_epochs=3)], 3),
                    ClockProduct([clk_page(lambda s, k: 1e-4, num_epochs=100)], 2, ClockFileFormat.CLK))
    # 0 s .. 1800 s + 30 s margin (exclusive)
    assert info.clock.num_samples(G01) == 61


def test_number_of_satellites(info):
    assert info.number_of_satellites == 117
    assert info.count_mismatches == 0


def test_count_mismatch(info, caplog):
    info.clock = SatelliteClockStore(ConstellationTable((Constellation('G', 'GPS', 32),)))
    with caplog.at_level(logging.WARNING):
        assert info.number_of_satellites == 0
    assert info.count_mismatches == 1
    assert "mismatch" in caplog.text
