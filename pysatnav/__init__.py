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
PySatNav - GNSS satellite ephemeris and clock engine

Reads precise orbit and clock products (SP3, RINEX clock), interpolates
satellite positions and clock offsets at simulation time and synthesizes
pseudorange and carrier phase observations.
"""

__version__ = "1.0.0"
__author__ = "PySatNav Development Team"
__title__ = "pysatnav"
__description__ = "GNSS satellite ephemeris and clock engine"

from .core import *
from .coordinate import *
from .gnss import *
from .io.config import GnssSatellitesConfig, init_gnss_satellites, load_from_file
from .logger import get_logger, setup_logger, setup_logger_from_config
