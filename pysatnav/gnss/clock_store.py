# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Satellite clock bias time series from SP3 or RINEX clock products"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from ..core.constants import (CLIGHT, CLK_COALESCE_TOL, CLK_END_MARGIN, CLOCK_MISSING_EPOCHS,
                              INVALID_SATELLITE_INDEX, SP3_COALESCE_TOL, SP3_NO_DATA,
                              SP3_NO_DATA_TOL, TIME_EPS, UR_SEGMENT_SEC, US2S)
from ..core.satellite_numbering import DEFAULT_CONSTELLATIONS, ConstellationTable, index_from_id
from ..core.time import calendar_to_unix, epoch_line_to_unix
from .interpolation import lagrange_interpolation
from .records import ClockFileFormat, Page, UltraRapidMode, iter_sp3_pages
from .time_series import WindowedTimeSeries

logger = logging.getLogger(__name__)

CLK_RECORD_MARKER = "AS "
CLK_INITIAL_INTERVAL = 1e9


def parse_clk_record(line: str) -> Tuple[str, float, float]:
    """
    Parse a satellite record of a RINEX clock file

    Parameters
    ----------
    line : str
        ``AS <id> <year> <month> <day> <hour> <minute> <second> <n> <bias> [<sigma>]``

    Returns
    -------
    sat_id : str
        Satellite identifier
    unix_time : float
        Epoch (Unix time, s)
    bias : float
        Clock bias (s)
    """
    tokens = line.split()
    if len(tokens) < 10:
        raise ValueError(f"Clock record has {len(tokens)} fields, expected at least 10: {line!r}")
    try:
        unix_time = calendar_to_unix(int(tokens[2]), int(tokens[3]), int(tokens[4]),
                                     int(tokens[5]), int(tokens[6]), float(tokens[7]))
        bias = float(tokens[9])
    except ValueError as e:
        raise ValueError(f"Malformed clock record {line!r}: {e}") from e
    return tokens[1], unix_time, bias


class SatelliteClockStore(WindowedTimeSeries):
    """Satellite clock offsets (m) with windowed Lagrange interpolation

    Clock windows tolerate no missing epoch.

    Parameters
    ----------
    table : ConstellationTable
        Constellation sizing table
    """

    allowed_missing_epochs = CLOCK_MISSING_EPOCHS

    def __init__(self, table: ConstellationTable = DEFAULT_CONSTELLATIONS):
        super().__init__(table, num_channels=1)
        self.clock_format = ClockFileFormat.SP3
        self.clock_offset_m = np.zeros(self.num_satellites)

    def initialize(self, pages: Sequence[Page], clock_format: ClockFileFormat,
                   interpolation_number: int,
                   ur_mode: UltraRapidMode = UltraRapidMode.NOT_USE,
                   time_period: Optional[Tuple[float, float]] = None) -> None:
        """
        Ingest clock pages

        Parameters
        ----------
        pages : sequence of list of str
            Files as lists of lines, in time order
        clock_format : ClockFileFormat
            SP3 clock column or RINEX clock records
        interpolation_number : int
            Number of samples per interpolation window
        ur_mode : UltraRapidMode
            Ultra-rapid segment to ingest, NOT_USE for whole files
        time_period : tuple of float, optional
            Span of the position product; bounds RINEX clock records when
            no ultra-rapid segment is selected
        """
        self._set_interpolation_number(interpolation_number)
        self.clock_format = ClockFileFormat(clock_format)

        if self.clock_format == ClockFileFormat.SP3:
            self._ingest_sp3(pages, ur_mode)
        else:
            self._ingest_clk(pages, ur_mode, time_period)

        logger.info(f"Ingested clocks of {sum(1 for t in self.times if t)} satellites "
                    f"from {len(pages)} {self.clock_format.name} page(s), interval {self.interval} s")

    def _ingest_sp3(self, pages: Sequence[Page], ur_mode: UltraRapidMode) -> None:
        for header, epoch in iter_sp3_pages(pages, ur_mode):
            self.interval = header.interval
            unix_time = epoch_line_to_unix(epoch.epoch_tokens)

            for record in epoch.records:
                sat = index_from_id(record[0], self.table)
                if sat == INVALID_SATELLITE_INDEX:
                    logger.debug(f"Skipping unknown satellite {record[0]}")
                    continue
                try:
                    clock = float(record[4])
                except ValueError as e:
                    raise ValueError(f"Malformed SP3 clock record {' '.join(record)!r}") from e
                if abs(clock - SP3_NO_DATA) < SP3_NO_DATA_TOL:
                    continue

                # microseconds -> meters
                self._store_sample(sat, unix_time, SP3_COALESCE_TOL, clock * CLIGHT * US2S)

    def _ingest_clk(self, pages: Sequence[Page], ur_mode: UltraRapidMode,
                    time_period: Optional[Tuple[float, float]]) -> None:
        if ur_mode.is_prediction:
            raise ValueError("Clock files hold no prediction segment; "
                             f"ultra-rapid mode {ur_mode.name} cannot be used with {self.clock_format.name}")
        if ur_mode == UltraRapidMode.NOT_USE and time_period is None:
            raise ValueError("A time period is required to read clock files")

        self.interval = CLK_INITIAL_INTERVAL
        for page in pages:
            if ur_mode == UltraRapidMode.NOT_USE:
                start_time = time_period[0]
                end_time = time_period[1] + CLK_END_MARGIN
            else:
                start_time = None
                end_time = None

            for line in page:
                if not line.startswith(CLK_RECORD_MARKER):
                    continue

                sat_id, unix_time, bias = parse_clk_record(line)
                if start_time is None:
                    start_time = unix_time + ur_mode.segment * UR_SEGMENT_SEC
                    end_time = start_time + UR_SEGMENT_SEC

                if start_time - unix_time > TIME_EPS:
                    continue
                if end_time - unix_time < TIME_EPS:
                    break

                sat = index_from_id(sat_id, self.table)
                if sat == INVALID_SATELLITE_INDEX:
                    logger.debug(f"Skipping unknown satellite {sat_id}")
                    continue

                times = self.times[sat]
                if times and unix_time - times[-1] >= CLK_COALESCE_TOL:
                    self.interval = min(self.interval, unix_time - times[-1])
                # seconds -> meters
                self._store_sample(sat, unix_time, CLK_COALESCE_TOL, bias * CLIGHT)

    def _reset_value(self, sat: int) -> None:
        self.clock_offset_m[sat] = 0.0

    def _set_exact(self, sat: int, index: int) -> None:
        self.clock_offset_m[sat] = self._channels[0][sat][index]

    def _set_interpolated(self, sat: int, t: float) -> None:
        self.clock_offset_m[sat] = lagrange_interpolation(self.window_times[sat],
                                                          self.window_values[sat][0], t)

    def get_clock_offset_m(self, gnss_satellite_id: int) -> float:
        """Interpolated clock offset (m), 0.0 for out-of-range ids"""
        if not self.in_range(gnss_satellite_id):
            return 0.0
        return float(self.clock_offset_m[gnss_satellite_id])
