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

"""GNSS satellite ephemeris and clock engine

Windowed interpolation of precise orbit (SP3) and clock (SP3/CLK) products
for every satellite of the constellation table, and the observables derived
from them.

Example Usage:
    >>> engine = GnssSatellites()
    >>> engine.initialize(true_position, true_clock, estimate_position, estimate_clock)
    >>> engine.set_up(sim_time)
    >>> for _ in range(n_steps):
    ...     sim_time.advance()
    ...     engine.update(sim_time)
    ...     rho = engine.get_pseudo_range_ecef(0, rec_pos, rec_clock_m, FREQ_L1_MHZ)
"""

from .clock_store import SatelliteClockStore, parse_clk_record
from .debug_output import DebugOutputRecorder
from .gnss_satellites import GnssSatellites
from .interpolation import lagrange_interpolation, trigonometric_interpolation
from .ionosphere import single_layer_delay
from .position_store import SatellitePositionStore
from .records import (
    ClockFileFormat,
    ClockProduct,
    GnssFrame,
    InterpolationMethod,
    PositionProduct,
    UltraRapidMode,
)
from .satellite_information import SatelliteInformation
from .time_series import WindowedTimeSeries
