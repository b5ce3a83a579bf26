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

"""Satellite position time series from SP3 orbit products"""

import logging
from typing import Sequence, Tuple

import numpy as np

from ..coordinate.dcm import ecef2eci_dcm
from ..core.constants import (INVALID_SATELLITE_INDEX, KM2M, POSITION_MISSING_EPOCHS,
                              SP3_COALESCE_TOL, SP3_NO_DATA, SP3_NO_DATA_TOL)
from ..core.satellite_numbering import DEFAULT_CONSTELLATIONS, ConstellationTable, index_from_id
from ..core.time import epoch_line_to_unix, greenwich_sidereal_angle, julian_day
from .interpolation import lagrange_interpolation, trigonometric_interpolation
from .records import InterpolationMethod, Page, UltraRapidMode, iter_sp3_pages
from .time_series import WindowedTimeSeries

logger = logging.getLogger(__name__)

_ECEF, _ECI = 0, 1  # value channels


def _is_no_data(value: float) -> bool:
    return abs(value - SP3_NO_DATA) < SP3_NO_DATA_TOL


class SatellitePositionStore(WindowedTimeSeries):
    """Satellite positions in ECEF and ECI with windowed interpolation

    Both frames are built from the same epochs: ECI samples are the SP3 ECEF
    samples rotated by the Greenwich sidereal angle of their epoch.

    Parameters
    ----------
    table : ConstellationTable
        Constellation sizing table
    """

    allowed_missing_epochs = POSITION_MISSING_EPOCHS

    def __init__(self, table: ConstellationTable = DEFAULT_CONSTELLATIONS):
        super().__init__(table, num_channels=2)
        self.interpolation_method = InterpolationMethod.TRIGONOMETRIC
        self.position_ecef_m = np.zeros((self.num_satellites, 3))
        self.position_eci_m = np.zeros((self.num_satellites, 3))

    def initialize(self, pages: Sequence[Page], interpolation_number: int,
                   interpolation_method: InterpolationMethod = InterpolationMethod.TRIGONOMETRIC,
                   ur_mode: UltraRapidMode = UltraRapidMode.NOT_USE) -> Tuple[float, float]:
        """
        Ingest SP3 pages

        Parameters
        ----------
        pages : sequence of list of str
            SP3 files as lists of lines, in time order
        interpolation_number : int
            Number of samples per interpolation window
        interpolation_method : InterpolationMethod
            Position interpolation method
        ur_mode : UltraRapidMode
            Ultra-rapid segment to ingest, NOT_USE for whole files

        Returns
        -------
        start_time, end_time : float
            Earliest and latest epoch over all pages (Unix time, s)
        """
        self._set_interpolation_number(interpolation_number)
        self.interpolation_method = InterpolationMethod(interpolation_method)

        start_time = np.inf
        end_time = -np.inf
        for header, epoch in iter_sp3_pages(pages, ur_mode):
            self.interval = header.interval

            tokens = epoch.epoch_tokens
            try:
                unix_time = epoch_line_to_unix(tokens)
                jd = julian_day(int(tokens[1]), int(tokens[2]), int(tokens[3]),
                                int(tokens[4]), int(tokens[5]), float(tokens[6]))
            except ValueError as e:
                raise ValueError(f"Malformed SP3 epoch line {' '.join(tokens)!r}: {e}") from e
            C_e_i = ecef2eci_dcm(greenwich_sidereal_angle(jd))

            start_time = min(start_time, unix_time)
            end_time = max(end_time, unix_time)

            for record in epoch.records:
                sat = index_from_id(record[0], self.table)
                if sat == INVALID_SATELLITE_INDEX:
                    logger.debug(f"Skipping unknown satellite {record[0]}")
                    continue

                try:
                    xyz = [float(v) for v in record[1:4]]
                except ValueError as e:
                    raise ValueError(f"Malformed SP3 position record {' '.join(record)!r}") from e
                if any(_is_no_data(v) for v in xyz):
                    continue

                ecef = np.array(xyz) * KM2M
                eci = C_e_i @ ecef
                self._store_sample(sat, unix_time, SP3_COALESCE_TOL, ecef, eci)

        if not np.isfinite(start_time):
            raise ValueError("SP3 pages contain no epochs")

        logger.info(f"Ingested positions of {sum(1 for t in self.times if t)} satellites "
                    f"from {len(pages)} page(s), interval {self.interval} s")
        return start_time, end_time

    def _reset_value(self, sat: int) -> None:
        self.position_ecef_m[sat] = 0.0
        self.position_eci_m[sat] = 0.0

    def _set_exact(self, sat: int, index: int) -> None:
        self.position_ecef_m[sat] = self._channels[_ECEF][sat][index]
        self.position_eci_m[sat] = self._channels[_ECI][sat][index]

    def _set_interpolated(self, sat: int, t: float) -> None:
        if self.interpolation_method == InterpolationMethod.LAGRANGE:
            interpolate = lagrange_interpolation
        else:
            interpolate = trigonometric_interpolation
        times = self.window_times[sat]
        self.position_ecef_m[sat] = interpolate(times, self.window_values[sat][_ECEF], t)
        self.position_eci_m[sat] = interpolate(times, self.window_values[sat][_ECI], t)

    def get_position_ecef_m(self, gnss_satellite_id: int) -> np.ndarray:
        """Interpolated ECEF position (m), zero vector for out-of-range ids"""
        if not self.in_range(gnss_satellite_id):
            return np.zeros(3)
        return self.position_ecef_m[gnss_satellite_id].copy()

    def get_position_eci_m(self, gnss_satellite_id: int) -> np.ndarray:
        """Interpolated ECI position (m), zero vector for out-of-range ids"""
        if not self.in_range(gnss_satellite_id):
            return np.zeros(3)
        return self.position_eci_m[gnss_satellite_id].copy()
