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

"""
Interpolation kernels for windowed ephemeris and clock samples

Trigonometric interpolation is used for satellite positions, whose samples
are close to periodic over a day; Lagrange polynomial interpolation is used
for clock biases, which drift smoothly without periodicity. Both operate on
small windows and accept scalar values (shape ``(n,)``) or vector values
(shape ``(n, N)``).

Sample times inside one window must be distinct; coinciding times divide by
zero and are not guarded against.
"""

import numpy as np
from numba import njit

from ..core.constants import TRIG_INTERP_OMEGA


@njit(cache=True)
def trigonometric_weights(times, t, omega):
    """
    Basis weights of trigonometric interpolation

    Parameters
    ----------
    times : ndarray
        Sample times of the window (s)
    t : float
        Interpolation time (s)
    omega : float
        Angular rate of the basis (rad/s)

    Returns
    -------
    weights : ndarray
        One weight per sample
    """
    n = times.shape[0]
    weights = np.ones(n)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            weights[i] *= (np.sin(omega * (t - times[j]) / 2.0)
                           / np.sin(omega * (times[i] - times[j]) / 2.0))
    return weights


@njit(cache=True)
def lagrange_weights(times, t):
    """
    Basis weights of Lagrange polynomial interpolation

    Parameters
    ----------
    times : ndarray
        Sample times of the window (s)
    t : float
        Interpolation time (s)

    Returns
    -------
    weights : ndarray
        One weight per sample
    """
    n = times.shape[0]
    weights = np.ones(n)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            weights[i] *= (t - times[j]) / (times[i] - times[j])
    return weights


def _combine(weights, values):
    values = np.asarray(values, dtype=np.float64)
    res = weights @ values
    if values.ndim == 1:
        return float(res)
    return res


def trigonometric_interpolation(times, values, t: float, omega: float = TRIG_INTERP_OMEGA):
    """
    Trigonometric interpolation over a window of samples

    Parameters
    ----------
    times : array_like
        Sample times (s), distinct
    values : array_like
        Samples, shape (n,) or (n, N)
    t : float
        Interpolation time (s)
    omega : float
        Angular rate of the basis (rad/s)

    Returns
    -------
    float or ndarray
        Interpolated scalar, or vector of length N
    """
    times = np.ascontiguousarray(times, dtype=np.float64)
    return _combine(trigonometric_weights(times, float(t), float(omega)), values)


def lagrange_interpolation(times, values, t: float):
    """
    Lagrange polynomial interpolation over a window of samples

    Parameters
    ----------
    times : array_like
        Sample times (s), distinct
    values : array_like
        Samples, shape (n,) or (n, N)
    t : float
        Interpolation time (s)

    Returns
    -------
    float or ndarray
        Interpolated scalar, or vector of length N
    """
    times = np.ascontiguousarray(times, dtype=np.float64)
    return _combine(lagrange_weights(times, float(t)), values)
