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

"""Single-layer ionospheric delay model for simulated observables.

The ionosphere is modeled as a shell extending to 1000 km above a spherical
Earth. The delay seen by a receiver inside the shell scales with the
thickness of ionosphere left above it and with the slant of the line of
sight, and falls with the square of the signal frequency.
"""

import numpy as np

from ..coordinate.dcm import angle_between
from ..core.constants import IONO_DEFAULT_DELAY_M, IONO_MAX_ALT_KM, IONO_REF_FREQ_MHZ, KM2M, RE_WGS84


def receiver_altitude_km(rec_pos: np.ndarray) -> float:
    """Altitude above a spherical Earth of radius RE_WGS84 (km)"""
    return (float(np.linalg.norm(rec_pos)) - RE_WGS84) / KM2M


def single_layer_delay(rec_pos: np.ndarray, sat_pos: np.ndarray, frequency_mhz: float) -> float:
    """Ionospheric delay of one receiver-satellite path.

    Parameters
    ----------
    rec_pos : np.ndarray
        Receiver position (m), same frame as sat_pos
    sat_pos : np.ndarray
        Satellite position (m)
    frequency_mhz : float
        Signal frequency (MHz)

    Returns
    -------
    float
        Delay (m), 0 at or above the top of the ionosphere

    Notes
    -----
    ``delay = 20 m * (1000 - h) / 1000 / cos(angle) * (1500 MHz / f)^2`` with
    ``h`` the receiver altitude in km and ``angle`` the angle between the
    receiver radial direction and the line of sight. The cosine is not
    clipped: lines of sight below the local horizon give negative delays.
    """
    rec_pos = np.asarray(rec_pos, dtype=np.float64)
    sat_pos = np.asarray(sat_pos, dtype=np.float64)

    altitude_km = receiver_altitude_km(rec_pos)
    if altitude_km >= IONO_MAX_ALT_KM:
        return 0.0

    angle = angle_between(rec_pos, sat_pos - rec_pos)
    delay = IONO_DEFAULT_DELAY_M * (IONO_MAX_ALT_KM - altitude_km) / IONO_MAX_ALT_KM / np.cos(angle)
    # inversely proportional to the square of the frequency
    delay *= (IONO_REF_FREQ_MHZ / frequency_mhz) ** 2
    return float(delay)
