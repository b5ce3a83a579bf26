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

"""Per-satellite time series with rolling interpolation windows

Both the position and the clock store keep, for every satellite of the
constellation table, an ordered list of sample times with one or more
parallel value channels. While simulated time advances, each satellite keeps
a cached nearest-sample index and a fixed-size window of samples around it.

A window is valid only if

- it holds exactly ``interpolation_number`` samples,
- its time span does not exceed
  ``interval * (interpolation_number - 1 + allowed_missing_epochs)``,
- the nearest sample is at most one nominal interval away from the query.

Invalid satellites carry zero values.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

import numpy as np

from ..core.constants import TIME_EPS
from ..core.satellite_numbering import DEFAULT_CONSTELLATIONS, ConstellationTable
from ..logger import get_logger

logger = get_logger(__name__)


class WindowedTimeSeries(ABC):
    """Common windowing discipline of the ephemeris stores

    Subclasses declare their value channels, fill them through
    ``_store_sample`` during ingestion, and implement the three value hooks
    ``_reset_value``, ``_set_exact`` and ``_set_interpolated``.

    Parameters
    ----------
    table : ConstellationTable
        Constellation sizing table shared by all stores
    num_channels : int
        Number of value channels kept per sample
    """

    allowed_missing_epochs = 0

    def __init__(self, table: ConstellationTable = DEFAULT_CONSTELLATIONS, num_channels: int = 1):
        self.table = table
        n = table.num_satellites

        self.interpolation_number = 0
        self.interval = 0.0          # nominal sample interval (s)
        self.step_width = 0.0        # simulation step (s)

        self.times: List[List[float]] = [[] for _ in range(n)]
        self._channels: List[List[list]] = [[[] for _ in range(n)] for _ in range(num_channels)]

        self.nearest_index = [0] * n
        self.window: List[Tuple[int, int]] = [(0, 0)] * n
        self.window_times: List[np.ndarray] = [np.empty(0)] * n
        self.window_values: List[List[np.ndarray]] = [[] for _ in range(n)]
        self.valid = [False] * n

    @property
    def num_satellites(self) -> int:
        return self.table.num_satellites

    def in_range(self, gnss_satellite_id: int) -> bool:
        return 0 <= gnss_satellite_id < self.num_satellites

    def get_whether_valid(self, gnss_satellite_id: int) -> bool:
        """Whether the satellite currently has a valid interpolation window"""
        if not self.in_range(gnss_satellite_id):
            return False
        return self.valid[gnss_satellite_id]

    def num_samples(self, gnss_satellite_id: int) -> int:
        if not self.in_range(gnss_satellite_id):
            return 0
        return len(self.times[gnss_satellite_id])

    def time_span(self) -> Tuple[float, float]:
        """Earliest and latest sample time over all satellites"""
        firsts = [t[0] for t in self.times if t]
        lasts = [t[-1] for t in self.times if t]
        if not firsts:
            raise ValueError("No samples have been ingested")
        return min(firsts), max(lasts)

    def _set_interpolation_number(self, interpolation_number: int) -> None:
        if interpolation_number < 1:
            raise ValueError(f"Interpolation number must be positive, got {interpolation_number}")
        self.interpolation_number = int(interpolation_number)

    def _store_sample(self, sat: int, t: float, tolerance: float, *values) -> None:
        """Append a sample, overwriting the last one if its time is within tolerance"""
        times = self.times[sat]
        if times and abs(t - times[-1]) < tolerance:
            times[-1] = t
            for channel, value in zip(self._channels, values):
                channel[sat][-1] = value
            return
        if times and t < times[-1]:
            logger.debug(f"Skipping out-of-order sample of satellite {sat} at {t}")
            return
        times.append(t)
        for channel, value in zip(self._channels, values):
            channel[sat].append(value)

    def _materialize_window(self, sat: int) -> None:
        # 2n+1 points -> [-n, n], 2n points -> [-n, n)
        index = self.nearest_index[sat]
        lo = max(0, index - self.interpolation_number // 2)
        hi = min(len(self.times[sat]), index + (self.interpolation_number + 1) // 2)
        self.window[sat] = (lo, hi)
        self.window_times[sat] = np.asarray(self.times[sat][lo:hi], dtype=np.float64)
        self.window_values[sat] = [np.asarray(channel[sat][lo:hi], dtype=np.float64)
                                   for channel in self._channels]

    def _clear_window(self, sat: int) -> None:
        self.window[sat] = (0, 0)
        self.window_times[sat] = np.empty(0)
        self.window_values[sat] = []

    def _window_is_valid(self, sat: int, t: float) -> bool:
        nearest_time = self.times[sat][self.nearest_index[sat]]
        if abs(t - nearest_time) > self.interval:
            return False

        window_times = self.window_times[sat]
        if len(window_times) != self.interpolation_number:
            return False

        span = window_times[-1] - window_times[0]
        max_span = self.interval * (self.interpolation_number - 1 + self.allowed_missing_epochs)
        return span <= max_span + TIME_EPS

    def _refresh(self, sat: int, t: float) -> None:
        if not self._window_is_valid(sat, t):
            self._invalidate(sat)
            return
        self.valid[sat] = True

        index = self.nearest_index[sat]
        if abs(t - self.times[sat][index]) < TIME_EPS:
            self._set_exact(sat, index)
        else:
            self._set_interpolated(sat, t)

    def _invalidate(self, sat: int) -> None:
        self.valid[sat] = False
        self._reset_value(sat)

    def set_up(self, start_time: float, step_width: float) -> None:
        """
        Locate the nearest sample of every satellite and build its first window

        Parameters
        ----------
        start_time : float
            Absolute (Unix) start time of the simulation (s)
        step_width : float
            Simulation step (s)
        """
        self.step_width = step_width
        odd = self.interpolation_number % 2 == 1

        for sat in range(self.num_satellites):
            times = self.times[sat]
            self._clear_window(sat)
            if not times:
                self.nearest_index[sat] = 0
                self._invalidate(sat)
                continue

            index = int(np.searchsorted(np.asarray(times), start_time, side='left'))
            if index == len(times):
                self.nearest_index[sat] = index
                self._invalidate(sat)
                continue

            if odd and index != 0:
                if abs(start_time - times[index - 1]) < abs(start_time - times[index]):
                    index -= 1
            self.nearest_index[sat] = index

            self._materialize_window(sat)
            self._refresh(sat, start_time)

        logger.debug(f"{type(self).__name__} set up at {start_time:.3f}: "
                     f"{sum(self.valid)}/{self.num_satellites} satellites valid")

    def update(self, current_time: float) -> None:
        """
        Advance the windows to the current time

        The nearest index moves forward by at most one sample per call, so
        time is expected to advance monotonically in steps shorter than the
        sample interval.

        Parameters
        ----------
        current_time : float
            Absolute (Unix) time (s)
        """
        for sat in range(self.num_satellites):
            times = self.times[sat]
            if not times:
                self._invalidate(sat)
                continue

            index = self.nearest_index[sat]
            if index == len(times):
                self._invalidate(sat)
                continue

            if index + 1 < len(times):
                if abs(current_time - times[index + 1]) < abs(current_time - times[index]):
                    self.nearest_index[sat] = index + 1
                    self._materialize_window(sat)
                    logger.trace(f"Satellite {sat} window moved to samples "
                                 f"{self.window[sat]} at {current_time:.3f}")

            self._refresh(sat, current_time)

    @abstractmethod
    def _reset_value(self, sat: int) -> None:
        """Zero the current value of an invalid satellite"""

    @abstractmethod
    def _set_exact(self, sat: int, index: int) -> None:
        """Copy the sample at ``index`` as the current value"""

    @abstractmethod
    def _set_interpolated(self, sat: int, t: float) -> None:
        """Interpolate the current window at time ``t``"""
