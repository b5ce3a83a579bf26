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

"""Core definitions for the GNSS ephemeris engine.

- **Constants**: physical constants, GNSS frequencies, sentinel values and
  tolerances used throughout ingestion and windowing
- **Satellite Numbering**: immutable constellation table and the flat satellite
  index space shared by all stores
- **Time**: calendar/Unix conversions, Julian date, Greenwich sidereal angle and
  the simulation clock consumed by the engine

Example Usage:
    >>> from pysatnav.core import index_from_id, id_from_index
    >>> index_from_id('E05')
    62
    >>> id_from_index(62)
    'E05'
"""

from .constants import *
from .satellite_numbering import (
    DEFAULT_CONSTELLATIONS,
    Constellation,
    ConstellationTable,
    id_from_index,
    index_from_id,
)
from .time import (
    SimulationTime,
    calendar_to_unix,
    epoch_line_to_unix,
    greenwich_sidereal_angle,
    julian_day,
    unix_to_datetime,
)
