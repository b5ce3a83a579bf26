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

"""Debug recorder of true, estimated and error time series

Register an instance with ``GnssSatellites.add_observer``; after every update
it samples the ECEF position and clock of the tracked satellites from both
data sets. Rows are zeros while a satellite is invalid.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

FIELDS = ("x_m", "y_m", "z_m", "clock_m")


class DebugOutputRecorder:
    """Observer collecting per-update satellite states

    Parameters
    ----------
    satellite_indices : iterable of int, optional
        Satellites to record; all GPS satellites of the engine table by default
    """

    def __init__(self, satellite_indices: Optional[Iterable[int]] = None):
        self.satellite_indices = None if satellite_indices is None else list(satellite_indices)
        self.times: List[float] = []
        self._rows: Dict[str, List[np.ndarray]] = {"true": [], "estimation": [], "sa": []}

    def __call__(self, gnss_satellites) -> None:
        if self.satellite_indices is None:
            self.satellite_indices = list(gnss_satellites.table.index_range('G'))

        true_row, estimation_row, sa_row = [], [], []
        for index in self.satellite_indices:
            true_valid = gnss_satellites.true_info.get_whether_valid(index)
            estimation_valid = gnss_satellites.estimate_info.get_whether_valid(index)

            true_state = self._state(gnss_satellites.true_info, index) if true_valid else np.zeros(4)
            estimation_state = (self._state(gnss_satellites.estimate_info, index)
                                if estimation_valid else np.zeros(4))
            if true_valid and estimation_valid:
                sa_state = estimation_state - true_state
            else:
                sa_state = np.zeros(4)

            true_row.append(true_state)
            estimation_row.append(estimation_state)
            sa_row.append(sa_state)

        self._rows["true"].append(np.concatenate(true_row))
        self._rows["estimation"].append(np.concatenate(estimation_row))
        self._rows["sa"].append(np.concatenate(sa_row))
        self.times.append(gnss_satellites.current_unix_time)

    @staticmethod
    def _state(info, index: int) -> np.ndarray:
        return np.append(info.get_position_ecef_m(index), info.get_clock_offset_m(index))

    def _columns(self) -> List[str]:
        return [f"sat{index}_{field}" for index in self.satellite_indices for field in FIELDS]

    def to_dataframes(self) -> Dict[str, pd.DataFrame]:
        """Recorded series as DataFrames keyed by ``true``, ``estimation`` and ``sa``"""
        if self.satellite_indices is None:
            return {name: pd.DataFrame() for name in self._rows}
        columns = self._columns()
        index = pd.Index(self.times, name="unix_time")
        return {name: pd.DataFrame(np.array(rows).reshape(len(rows), len(columns)),
                                   index=index, columns=columns)
                for name, rows in self._rows.items()}

    def write_csv(self, directory: Union[str, Path] = ".") -> None:
        """Write ``true.csv``, ``estimation.csv`` and ``sa.csv``"""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        for name, frame in self.to_dataframes().items():
            frame.to_csv(directory / f"{name}.csv", float_format="%.10f")
        logger.info(f"Wrote {len(self._rows['true'])} debug rows to {directory}")
