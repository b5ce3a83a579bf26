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

"""GNSS observation engine

``GnssSatellites`` owns two independent data sets: the *true* satellite
states used to synthesize observables, and the *estimated* states exposed to
the on-board navigation (for example a broadcast or ultra-rapid prediction).
Comparing the two emulates realistic ephemeris and clock errors.

All satellite arguments are flat satellite indices (see
``pysatnav.core.satellite_numbering``). Invalid or out-of-range satellites
yield zero values; use ``get_whether_valid`` to tell them apart.
"""

import logging
import math
from typing import Callable, List, Tuple

import numpy as np

from ..core.constants import CLIGHT, US2S
from ..core.satellite_numbering import (DEFAULT_CONSTELLATIONS, ConstellationTable,
                                        id_from_index, index_from_id)
from ..core.time import SimulationTime
from ..io.log_format import format_scalar, format_scalar_header, format_vector, format_vector_header
from .ionosphere import single_layer_delay
from .records import ClockProduct, GnssFrame, PositionProduct
from .satellite_information import SatelliteInformation

logger = logging.getLogger(__name__)


def split_cycles(cycle: float) -> Tuple[float, float]:
    """Split a cycle count into its fraction in [0, 1) and the whole cycles below it"""
    bias = math.floor(cycle)
    fraction = cycle - bias
    # a tiny negative count rounds up to a full cycle
    if fraction >= 1.0:
        fraction, bias = 0.0, bias + 1
    return fraction, float(bias)

UpdateObserver = Callable[['GnssSatellites'], None]


class GnssSatellites:
    """GNSS constellation ephemeris/clock engine and observable synthesis

    Parameters
    ----------
    is_calc_enabled : bool
        When False, set_up and update do nothing and every satellite is invalid
    table : ConstellationTable
        Constellation sizing table shared by all stores

    Examples
    --------
    >>> sats = GnssSatellites(True)
    >>> sats.initialize(true_pos, true_clk, est_pos, est_clk)
    >>> sats.set_up(sim_time)
    >>> sim_time.advance()
    >>> sats.update(sim_time)
    >>> pr = sats.get_pseudo_range(0, rec_pos, 0.0, 1575.42)
    """

    def __init__(self, is_calc_enabled: bool = True,
                 table: ConstellationTable = DEFAULT_CONSTELLATIONS):
        self.is_calc_enabled = is_calc_enabled
        self.is_log_enabled = is_calc_enabled
        self.table = table
        self.true_info = SatelliteInformation(table)
        self.estimate_info = SatelliteInformation(table)
        self.start_unix_time = 0.0
        self.current_unix_time = 0.0
        self._observers: List[UpdateObserver] = []

    def initialize(self, true_position: PositionProduct, true_clock: ClockProduct,
                   estimate_position: PositionProduct, estimate_clock: ClockProduct) -> None:
        """Ingest the true and the estimated products"""
        logger.info("Initializing true GNSS satellite data")
        self.true_info.initialize(true_position, true_clock)
        logger.info("Initializing estimated GNSS satellite data")
        self.estimate_info.initialize(estimate_position, estimate_clock)

    def set_up(self, simulation_time: SimulationTime) -> None:
        """Anchor the engine at the simulation start time"""
        if not self.is_calc_enabled:
            return

        self.start_unix_time = simulation_time.start_unix_time
        self.current_unix_time = self.start_unix_time
        self.true_info.set_up(self.start_unix_time, simulation_time.step_s)
        self.estimate_info.set_up(self.start_unix_time, simulation_time.step_s)

    def update(self, simulation_time: SimulationTime) -> None:
        """Advance both data sets to the current simulation time"""
        if not self.is_calc_enabled:
            return

        self.current_unix_time = self.start_unix_time + simulation_time.elapsed_time_s
        self.true_info.update(self.current_unix_time)
        self.estimate_info.update(self.current_unix_time)

        for observer in self._observers:
            observer(self)

    def add_observer(self, observer: UpdateObserver) -> None:
        """Register a callable notified with the engine after every update"""
        self._observers.append(observer)

    def remove_observer(self, observer: UpdateObserver) -> None:
        self._observers.remove(observer)

    @property
    def number_of_satellites(self) -> int:
        return self.estimate_info.number_of_satellites

    def get_index_from_id(self, sat_id: str) -> int:
        return index_from_id(sat_id, self.table)

    def get_id_from_index(self, index: int) -> str:
        return id_from_index(index, self.table)

    def get_whether_valid(self, gnss_satellite_id: int) -> bool:
        """Whether both the true and the estimated data of a satellite are valid"""
        if not 0 <= gnss_satellite_id < self.number_of_satellites:
            return False
        return (self.true_info.get_whether_valid(gnss_satellite_id)
                and self.estimate_info.get_whether_valid(gnss_satellite_id))

    # Estimated states
    def get_satellite_position_ecef(self, gnss_satellite_id: int) -> np.ndarray:
        if not self.get_whether_valid(gnss_satellite_id):
            return np.zeros(3)
        return self.estimate_info.get_position_ecef_m(gnss_satellite_id)

    def get_satellite_position_eci(self, gnss_satellite_id: int) -> np.ndarray:
        if not self.get_whether_valid(gnss_satellite_id):
            return np.zeros(3)
        return self.estimate_info.get_position_eci_m(gnss_satellite_id)

    def get_satellite_clock(self, gnss_satellite_id: int) -> float:
        if not self.get_whether_valid(gnss_satellite_id):
            return 0.0
        return self.estimate_info.get_clock_offset_m(gnss_satellite_id)

    # True states
    def get_true_satellite_position_ecef(self, gnss_satellite_id: int) -> np.ndarray:
        if not self.get_whether_valid(gnss_satellite_id):
            return np.zeros(3)
        return self.true_info.get_position_ecef_m(gnss_satellite_id)

    def get_true_satellite_position_eci(self, gnss_satellite_id: int) -> np.ndarray:
        if not self.get_whether_valid(gnss_satellite_id):
            return np.zeros(3)
        return self.true_info.get_position_eci_m(gnss_satellite_id)

    def get_true_satellite_clock(self, gnss_satellite_id: int) -> float:
        if not self.get_whether_valid(gnss_satellite_id):
            return 0.0
        return self.true_info.get_clock_offset_m(gnss_satellite_id)

    def _true_position(self, gnss_satellite_id: int, frame: GnssFrame) -> np.ndarray:
        if GnssFrame(frame) == GnssFrame.ECI:
            return self.true_info.get_position_eci_m(gnss_satellite_id)
        return self.true_info.get_position_ecef_m(gnss_satellite_id)

    def _range_and_clock(self, gnss_satellite_id: int, rec_position: np.ndarray,
                         rec_clock: float, frame: GnssFrame) -> float:
        sat_position = self._true_position(gnss_satellite_id, frame)
        rho = float(np.linalg.norm(np.asarray(rec_position, dtype=np.float64) - sat_position))
        return rho + rec_clock - self.true_info.get_clock_offset_m(gnss_satellite_id)

    def add_ionospheric_delay(self, gnss_satellite_id: int, rec_position: np.ndarray,
                              frequency: float, frame: GnssFrame = GnssFrame.ECEF) -> float:
        """
        Ionospheric delay between a receiver and a satellite

        Parameters
        ----------
        gnss_satellite_id : int
            Flat satellite index
        rec_position : np.ndarray
            Receiver position in ``frame`` (m)
        frequency : float
            Signal frequency (MHz)
        frame : GnssFrame
            Frame of the receiver position

        Returns
        -------
        float
            Delay (m); 0 for invalid satellites and receivers above 1000 km
        """
        if not self.get_whether_valid(gnss_satellite_id):
            return 0.0
        return single_layer_delay(rec_position, self._true_position(gnss_satellite_id, frame),
                                  frequency)

    def get_pseudo_range(self, gnss_satellite_id: int, rec_position: np.ndarray,
                         rec_clock: float, frequency: float,
                         frame: GnssFrame = GnssFrame.ECEF) -> float:
        """
        Simulated pseudorange

        Geometric range to the true satellite position, plus receiver minus
        true satellite clock offset, plus ionospheric delay.

        Parameters
        ----------
        gnss_satellite_id : int
            Flat satellite index
        rec_position : np.ndarray
            Receiver position in ``frame`` (m)
        rec_clock : float
            Receiver clock offset (m)
        frequency : float
            Signal frequency (MHz)
        frame : GnssFrame
            Frame of the receiver position

        Returns
        -------
        float
            Pseudorange (m), 0 for invalid satellites
        """
        if not self.get_whether_valid(gnss_satellite_id):
            return 0.0

        res = self._range_and_clock(gnss_satellite_id, rec_position, rec_clock, frame)
        res += self.add_ionospheric_delay(gnss_satellite_id, rec_position, frequency, frame)
        return res

    def get_pseudo_range_ecef(self, gnss_satellite_id: int, rec_position: np.ndarray,
                              rec_clock: float, frequency: float) -> float:
        return self.get_pseudo_range(gnss_satellite_id, rec_position, rec_clock, frequency, GnssFrame.ECEF)

    def get_pseudo_range_eci(self, gnss_satellite_id: int, rec_position: np.ndarray,
                             rec_clock: float, frequency: float) -> float:
        return self.get_pseudo_range(gnss_satellite_id, rec_position, rec_clock, frequency, GnssFrame.ECI)

    def get_carrier_phase(self, gnss_satellite_id: int, rec_position: np.ndarray,
                          rec_clock: float, frequency: float,
                          frame: GnssFrame = GnssFrame.ECEF) -> Tuple[float, float]:
        """
        Simulated carrier phase

        Same geometry and clock terms as the pseudorange, but the ionosphere
        advances the phase, so its delay is subtracted.

        Returns
        -------
        fraction : float
            Fractional cycles in [0, 1)
        bias : float
            Integer ambiguity (whole cycles)
        """
        if not self.get_whether_valid(gnss_satellite_id):
            return 0.0, 0.0

        res = self._range_and_clock(gnss_satellite_id, rec_position, rec_clock, frame)
        res -= self.add_ionospheric_delay(gnss_satellite_id, rec_position, frequency, frame)

        wavelength = CLIGHT * US2S / frequency  # frequency in MHz
        return split_cycles(res / wavelength)

    def get_carrier_phase_ecef(self, gnss_satellite_id: int, rec_position: np.ndarray,
                               rec_clock: float, frequency: float) -> Tuple[float, float]:
        return self.get_carrier_phase(gnss_satellite_id, rec_position, rec_clock, frequency, GnssFrame.ECEF)

    def get_carrier_phase_eci(self, gnss_satellite_id: int, rec_position: np.ndarray,
                              rec_clock: float, frequency: float) -> Tuple[float, float]:
        return self.get_carrier_phase(gnss_satellite_id, rec_position, rec_clock, frequency, GnssFrame.ECI)

    def get_log_header(self) -> str:
        """Log columns: true ECEF position and clock of every GPS satellite"""
        header = ""
        for index in self.table.index_range('G'):
            header += format_vector_header(f"GPS{index}_position", "ecef", "m", 3)
            header += format_scalar_header(f"GPS{index}_clock_offset", "m")
        return header

    def get_log_value(self) -> str:
        value = ""
        for index in self.table.index_range('G'):
            value += format_vector(self.true_info.get_position_ecef_m(index), 16)
            value += format_scalar(self.true_info.get_clock_offset_m(index))
        return value
