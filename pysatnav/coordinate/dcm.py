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

"""Direction Cosine Matrix (DCM) transformations between ECEF and ECI"""

import numpy as np


def ecef2eci_dcm(gst: float) -> np.ndarray:
    """
    Earth-Centered-Earth-Fixed to Earth-Centered-Inertial direction cosine matrix

    Parameters:
    -----------
    gst : float
        Greenwich sidereal angle (rad)

    Returns:
    --------
    C_e_i : np.ndarray
        ECEF->ECI direction cosine matrix (3x3)
    """
    sin_g = np.sin(gst)
    cos_g = np.cos(gst)

    C_e_i = np.array([
        [cos_g, -sin_g, 0.0],
        [sin_g, cos_g, 0.0],
        [0.0, 0.0, 1.0]
    ], dtype=np.float64)

    return C_e_i


def eci2ecef_dcm(gst: float) -> np.ndarray:
    """
    Earth-Centered-Inertial to Earth-Centered-Earth-Fixed direction cosine matrix

    Parameters:
    -----------
    gst : float
        Greenwich sidereal angle (rad)

    Returns:
    --------
    C_i_e : np.ndarray
        ECI->ECEF direction cosine matrix (3x3)
    """
    return ecef2eci_dcm(gst).T


def ecef2eci(xyz_ecef: np.ndarray, gst: float) -> np.ndarray:
    """Rotate an ECEF vector into ECI using the Greenwich sidereal angle"""
    return ecef2eci_dcm(gst) @ np.asarray(xyz_ecef, dtype=np.float64)


def eci2ecef(xyz_eci: np.ndarray, gst: float) -> np.ndarray:
    """Rotate an ECI vector into ECEF using the Greenwich sidereal angle"""
    return eci2ecef_dcm(gst) @ np.asarray(xyz_eci, dtype=np.float64)


def angle_between(v1: np.ndarray, v2: np.ndarray) -> float:
    """
    Angle between two vectors

    Returns:
    --------
    float
        Angle in [0, pi] (rad)
    """
    cos_angle = np.dot(v1, v2) / (np.linalg.norm(v1) * np.linalg.norm(v2))
    return float(np.arccos(np.clip(cos_angle, -1.0, 1.0)))
