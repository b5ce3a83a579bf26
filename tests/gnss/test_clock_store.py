"""Tests for SP3 and RINEX clock ingestion."""

import pytest

from pysatnav.core.constants import CLIGHT
from pysatnav.core.satellite_numbering import index_from_id
from pysatnav.gnss.clock_store import SatelliteClockStore, parse_clk_record
from pysatnav.gnss.records import ClockFileFormat, UltraRapidMode

G01, G02 = index_from_id('G01'), index_from_id('G02')


def sp3_state(sat_id, k):
    return 20000.0, 10000.0, 5000.0, 100.0 + 0.01 * k


def bias(sat_id, k):
    return 1.0e-4 + 1.0e-9 * k


def test_parse_clk_record(start_unix):
    sat_id, unix_time, value = parse_clk_record(
        "AS G05  2020 01 01 00 00 30.000000  2   -1.234567890123E-04  1.0E-11")
    assert sat_id == 'G05'
    assert unix_time == start_unix + 30.0
    assert value == pytest.approx(-1.234567890123e-4)


@pytest.mark.parametrize("line", [
    "AS G05  2020 01 01 00",
    "AS G05  2020 01 01 00 00 xx.000000  2   -1.2E-04",
    "AS G05  2020 01 01 00 00 30.000000  2   bias",
])
def test_malformed_clk_record(line):
    with pytest.raises(ValueError):
        parse_clk_record(line)


class TestSp3Clock:
    def test_microseconds_to_meters(self, sp3_page, start_unix):
        store = SatelliteClockStore()
        store.initialize([sp3_page(sp3_state, num_epochs=6)], ClockFileFormat.SP3, 1)
        store.set_up(start_unix + 2 * 900.0, 1.0)

        assert store.get_whether_valid(G01)
        assert store.get_clock_offset_m(G01) == pytest.approx(100.02e-6 * CLIGHT, rel=1e-12)

    def test_linear_interpolation(self, sp3_page, start_unix):
        store = SatelliteClockStore()
        store.initialize([sp3_page(sp3_state, num_epochs=6)], ClockFileFormat.SP3, 2)
        store.set_up(start_unix + 3 * 900.0 + 450.0, 1.0)

        assert store.get_whether_valid(G01)
        assert store.get_clock_offset_m(G01) == pytest.approx(100.035e-6 * CLIGHT, rel=1e-12)

    def test_missing_epoch_invalidates(self, sp3_page, start_unix):
        """Clock windows tolerate no missing epoch"""
        store = SatelliteClockStore()
        page = sp3_page(sp3_state, sat_ids=("G01", "G02"), num_epochs=6, skip={"G02": [2]})
        store.initialize([page], ClockFileFormat.SP3, 2)
        store.set_up(start_unix + 3 * 900.0, 1.0)

        assert store.get_whether_valid(G01)
        assert not store.get_whether_valid(G02)
        assert store.get_clock_offset_m(G02) == 0.0

    def test_ultra_rapid_segment(self, sp3_page):
        store = SatelliteClockStore()
        store.initialize([sp3_page(sp3_state, num_epochs=16)], ClockFileFormat.SP3, 1,
                         UltraRapidMode.PREDICT_2)
        assert store.num_samples(G01) == 2


class TestRinexClock:
    def test_time_period_bounds_records(self, clk_page, start_unix):
        store = SatelliteClockStore()
        store.initialize([clk_page(bias, num_epochs=20)], ClockFileFormat.CLK, 2,
                         time_period=(start_unix + 60.0, start_unix + 300.0))

        # 60 s .. 300 s + 30 s margin (exclusive)
        assert store.num_samples(G01) == 9
        assert store.times[G01][0] == start_unix + 60.0
        assert store.times[G01][-1] == start_unix + 300.0

    def test_interval_is_minimum_spacing(self, clk_page, start_unix):
        store = SatelliteClockStore()
        store.initialize([clk_page(bias, sat_ids=("G01", "G02"), num_epochs=20)], ClockFileFormat.CLK, 2,
                         time_period=(start_unix, start_unix + 600.0))
        assert store.interval == 30.0

    def test_seconds_to_meters(self, clk_page, start_unix):
        store = SatelliteClockStore()
        store.initialize([clk_page(bias, num_epochs=20)], ClockFileFormat.CLK, 2,
                         time_period=(start_unix, start_unix + 600.0))
        store.set_up(start_unix + 45.0, 1.0)

        assert store.get_whether_valid(G01)
        assert store.get_clock_offset_m(G01) == pytest.approx((1.0e-4 + 1.5e-9) * CLIGHT, rel=1e-12)

    def test_gap_invalidates(self, clk_page, start_unix):
        page = clk_page(bias, sat_ids=("G01", "G02"), num_epochs=20)
        page = [line for line in page if not (line.startswith("AS G02") and " 00 01 30.000000" in line)]

        store = SatelliteClockStore()
        store.initialize([page], ClockFileFormat.CLK, 2, time_period=(start_unix, start_unix + 600.0))
        store.set_up(start_unix + 100.0, 1.0)

        assert store.num_samples(G02) == 19
        assert store.get_whether_valid(G01)
        assert not store.get_whether_valid(G02)

    def test_update_follows_records(self, clk_page, start_unix):
        store = SatelliteClockStore()
        store.initialize([clk_page(bias, num_epochs=20)], ClockFileFormat.CLK, 2,
                         time_period=(start_unix, start_unix + 600.0))
        store.set_up(start_unix + 30.0, 1.0)
        for step in range(1, 200):
            t = 30.0 + step
            store.update(start_unix + t)
            assert store.get_clock_offset_m(G01) == pytest.approx((1.0e-4 + 1.0e-9 * t / 30.0) * CLIGHT,
                                                                  rel=1e-12)

    def test_observe_segment(self, clk_page, start_unix):
        store = SatelliteClockStore()
        store.initialize([clk_page(bias, num_epochs=8, interval=3 * 3600.0)], ClockFileFormat.CLK, 2,
                         UltraRapidMode.OBSERVE_2)

        assert store.times[G01] == [start_unix + 6 * 3600.0, start_unix + 9 * 3600.0]
        assert store.interval == 3 * 3600.0

    def test_prediction_segment_rejected(self, clk_page):
        with pytest.raises(ValueError):
            SatelliteClockStore().initialize([clk_page(bias)], ClockFileFormat.CLK, 2,
                                             UltraRapidMode.PREDICT_1)

    def test_time_period_required(self, clk_page):
        with pytest.raises(ValueError):
            SatelliteClockStore().initialize([clk_page(bias)], ClockFileFormat.CLK, 2)
