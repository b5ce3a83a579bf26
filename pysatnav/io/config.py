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

"""Engine configuration and construction from YAML/JSON files

The keys mirror the ``GNSS_SATELLITES`` section of the simulator
configuration. A file may hold the keys at top level or nested under
``GNSS_SATELLITES``::

    GNSS_SATELLITES:
      calculation: true
      directory_path: /data/gnss/
      true_position_file_sort: IGS
      true_position_first: igs21000.sp3
      true_position_last: igs21001.sp3
      ...
      log_settings:
        level: INFO
        module_levels:
          pysatnav.gnss.time_series: TRACE
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..gnss.gnss_satellites import GnssSatellites
from ..gnss.records import (
    ClockFileFormat,
    ClockProduct,
    InterpolationMethod,
    PositionProduct,
    UltraRapidMode,
)
from ..logger import setup_logger_from_config
from .gnss_files import read_clock_files, read_sp3_files

logger = logging.getLogger(__name__)

SECTION = "GNSS_SATELLITES"


@dataclass
class GnssSatellitesConfig:
    """Settings of the GNSS satellite engine"""
    calculation: bool = True
    directory_path: str = ""

    true_position_file_sort: str = ""
    true_position_first: str = ""
    true_position_last: str = ""
    true_position_interpolation_method: int = 0
    true_position_interpolation_number: int = 9

    true_clock_file_sort: str = ""
    true_clock_first: str = ""
    true_clock_last: str = ""
    true_clock_file_extension: str = ".sp3"
    true_clock_interpolation_number: int = 1

    estimate_position_file_sort: str = ""
    estimate_position_first: str = ""
    estimate_position_last: str = ""
    estimate_position_interpolation_method: int = 0
    estimate_position_interpolation_number: int = 9

    estimate_clock_file_sort: str = ""
    estimate_clock_first: str = ""
    estimate_clock_last: str = ""
    estimate_clock_file_extension: str = ".sp3"
    estimate_clock_interpolation_number: int = 1

    estimate_ur_observe_or_predict: str = "observe1"
    true_ur_observe_or_predict: Optional[str] = None

    log_settings: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GnssSatellitesConfig':
        """Create from a mapping, optionally nested under ``GNSS_SATELLITES``"""
        if SECTION in data:
            data = data[SECTION]
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown GNSS satellite settings: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_from_file(filepath: Union[str, Path]) -> GnssSatellitesConfig:
    """
    Load engine settings from file.

    Parameters:
    -----------
    filepath : str or Path
        Path to configuration file (.yaml, .yml, or .json)

    Raises:
        ValueError: If file format is not supported
        FileNotFoundError: If the specified file doesn't exist
    """
    filepath = Path(filepath)

    if filepath.suffix in ['.yaml', '.yml']:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    elif filepath.suffix == '.json':
        with open(filepath) as f:
            data = json.load(f)
    else:
        raise ValueError(f"Unsupported file format: {filepath.suffix}")

    return GnssSatellitesConfig.from_dict(data or {})


def save_to_file(config: GnssSatellitesConfig, filepath: Union[str, Path], format: str = 'yaml') -> None:
    """Save engine settings under a ``GNSS_SATELLITES`` section"""
    data = {SECTION: config.to_dict()}
    if format == 'yaml':
        with open(filepath, 'w') as f:
            yaml.dump(data, f, default_flow_style=False)
    elif format == 'json':
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)
    else:
        raise ValueError(f"Unsupported format: {format}")


def _select_segment(detected: UltraRapidMode, selector: Optional[str], name: str) -> UltraRapidMode:
    if detected == UltraRapidMode.NOT_USE:
        return detected
    if not selector:
        raise ValueError(f"{name} is an ultra-rapid product but no segment is selected")
    return UltraRapidMode.from_selector(selector)


def _read_clock(config: GnssSatellitesConfig, prefix: str, position_mode: UltraRapidMode,
                selector: Optional[str]):
    extension = getattr(config, f"{prefix}_clock_file_extension")
    clock_format = ClockFileFormat.from_extension(extension)
    sort = getattr(config, f"{prefix}_clock_file_sort")
    first = getattr(config, f"{prefix}_clock_first")
    last = getattr(config, f"{prefix}_clock_last")

    if clock_format == ClockFileFormat.SP3:
        pages, detected = read_sp3_files(config.directory_path, sort, first, last)
        ur_mode = _select_segment(detected, selector, f"{prefix} clock")
    else:
        pages = read_clock_files(config.directory_path, extension, sort, first, last)
        ur_mode = position_mode
    return ClockProduct(pages=pages,
                        interpolation_number=getattr(config, f"{prefix}_clock_interpolation_number"),
                        clock_format=clock_format,
                        ur_mode=ur_mode)


def _read_position(config: GnssSatellitesConfig, prefix: str, selector: Optional[str]) -> PositionProduct:
    pages, detected = read_sp3_files(config.directory_path,
                                     getattr(config, f"{prefix}_position_file_sort"),
                                     getattr(config, f"{prefix}_position_first"),
                                     getattr(config, f"{prefix}_position_last"))
    return PositionProduct(
        pages=pages,
        interpolation_number=getattr(config, f"{prefix}_position_interpolation_number"),
        interpolation_method=InterpolationMethod(getattr(config, f"{prefix}_position_interpolation_method")),
        ur_mode=_select_segment(detected, selector, f"{prefix} position"))


def init_gnss_satellites(config: Union[GnssSatellitesConfig, str, Path]) -> GnssSatellites:
    """
    Build a GNSS satellite engine from settings or a settings file

    When calculation is disabled the engine is returned uninitialized and all
    of its set-up/update calls are no-ops.
    """
    if not isinstance(config, GnssSatellitesConfig):
        config = load_from_file(config)
    if config.log_settings is not None:
        setup_logger_from_config(config.log_settings)

    engine = GnssSatellites(config.calculation)
    if not engine.is_calc_enabled:
        logger.info("GNSS satellite calculation disabled")
        return engine

    true_position = _read_position(config, "true", config.true_ur_observe_or_predict)
    true_clock = _read_clock(config, "true", UltraRapidMode.NOT_USE, config.true_ur_observe_or_predict)
    estimate_position = _read_position(config, "estimate", config.estimate_ur_observe_or_predict)
    estimate_clock = _read_clock(config, "estimate", estimate_position.ur_mode,
                                 config.estimate_ur_observe_or_predict)

    engine.initialize(true_position, true_clock, estimate_position, estimate_clock)
    return engine
