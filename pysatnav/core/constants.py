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

"""GNSS Constants and Engine Parameters"""

import numpy as np

# Physical Constants
CLIGHT = 299792458.0  # speed of light (m/s)

# Earth Parameters (WGS84)
RE_WGS84 = 6378137.0           # earth semimajor axis (m)
OMGE = 7.2921151467E-5         # earth angular velocity (rad/s)

# GPS frequencies
FREQ_L1_MHZ = 1575.42          # L1 frequency (MHz)
FREQ_L2_MHZ = 1227.60          # L2 frequency (MHz)
FREQ_L5_MHZ = 1176.45          # L5 frequency (MHz)

# Unit conversions
R2D = 180.0 / np.pi            # radians to degrees
D2R = np.pi / 180.0            # degrees to radians
KM2M = 1000.0                  # kilometers to meters
US2S = 1.0E-6                  # microseconds to seconds
SEC_PER_DAY = 86400.0

# Trigonometric interpolation angular rate (rad/s).
# Empirical: one revolution per day scaled by 1.03 to fit GNSS orbital periods.
TRIG_INTERP_OMEGA = 2.0 * np.pi / SEC_PER_DAY * 1.03

# SP3 "no data" sentinel and the tolerance used to detect it
SP3_NO_DATA = 999999.999999
SP3_NO_DATA_TOL = 1.0

# Time tolerances (s)
TIME_EPS = 1.0E-4              # exact-match / span tolerance
SP3_COALESCE_TOL = 1.0         # near-duplicate epochs inside SP3 pages
CLK_COALESCE_TOL = 1.0E-4      # near-duplicate epochs inside clock streams

# Window validation: epochs allowed to be missing inside a window
POSITION_MISSING_EPOCHS = 3
CLOCK_MISSING_EPOCHS = 0

# Ultra-rapid products
UR_SEGMENTS = 8                # 48 h product split into 6 h segments
UR_SEGMENT_SEC = 6 * 60 * 60
CLK_END_MARGIN = 30.0          # extra seconds kept after the orbit span

# Single-layer ionosphere model
IONO_MAX_ALT_KM = 1000.0       # no ionosphere above this altitude
IONO_DEFAULT_DELAY_M = 20.0    # zenith delay at the surface, reference frequency
IONO_REF_FREQ_MHZ = 1500.0     # reference frequency of the default delay

# Satellite index sentinel (out of range for every constellation table)
INVALID_SATELLITE_INDEX = 2147483647
