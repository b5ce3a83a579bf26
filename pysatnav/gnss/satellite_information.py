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

"""Position and clock stores paired into one queryable data set"""

import logging

import numpy as np

from ..core.satellite_numbering import DEFAULT_CONSTELLATIONS, ConstellationTable
from .clock_store import SatelliteClockStore
from .position_store import SatellitePositionStore
from .records import ClockProduct, PositionProduct

logger = logging.getLogger(__name__)


class SatelliteInformation:
    """One data set (true or estimated) of GNSS satellite positions and clocks

    A satellite is valid only while both its position and its clock window
    are valid.
    """

    def __init__(self, table: ConstellationTable = DEFAULT_CONSTELLATIONS):
        self.table = table
        self.position = SatellitePositionStore(table)
        self.clock = SatelliteClockStore(table)
        self.count_mismatches = 0

    def initialize(self, position_product: PositionProduct, clock_product: ClockProduct) -> None:
        """Ingest positions first; their time span bounds the clock records"""
        time_period = self.position.initialize(position_product.pages,
                                               position_product.interpolation_number,
                                               position_product.interpolation_method,
                                               position_product.ur_mode)
        self.clock.initialize(clock_product.pages, clock_product.clock_format,
                              clock_product.interpolation_number, clock_product.ur_mode,
                              time_period)

    def set_up(self, start_time: float, step_width: float) -> None:
        self.position.set_up(start_time, step_width)
        self.clock.set_up(start_time, step_width)

    def update(self, current_time: float) -> None:
        self.position.update(current_time)
        self.clock.update(current_time)

    @property
    def number_of_satellites(self) -> int:
        """Number of satellites, 0 if the stores disagree"""
        if self.position.num_satellites == self.clock.num_satellites:
            return self.position.num_satellites
        self.count_mismatches += 1
        logger.warning(f"Satellite count mismatch: {self.position.num_satellites} positions, "
                       f"{self.clock.num_satellites} clocks")
        return 0

    def get_whether_valid(self, gnss_satellite_id: int) -> bool:
        return (self.position.get_whether_valid(gnss_satellite_id)
                and self.clock.get_whether_valid(gnss_satellite_id))

    def get_position_ecef_m(self, gnss_satellite_id: int) -> np.ndarray:
        return self.position.get_position_ecef_m(gnss_satellite_id)

    def get_position_eci_m(self, gnss_satellite_id: int) -> np.ndarray:
        return self.position.get_position_eci_m(gnss_satellite_id)

    def get_clock_offset_m(self, gnss_satellite_id: int) -> float:
        return self.clock.get_clock_offset_m(gnss_satellite_id)
