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

"""Calendar, Unix and sidereal time conversions"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Sequence

from .constants import D2R

UNIX_EPOCH = datetime(1970, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
JD_J2000 = 2451545.0


def calendar_to_unix(year: int, month: int, day: int, hour: int = 0,
                     minute: int = 0, second: float = 0.0) -> float:
    """
    Convert a UTC calendar date to Unix time

    Parameters:
    -----------
    year, month, day, hour, minute : int
        Calendar fields (month and day are 1-based)
    second : float
        Seconds, fractional part kept

    Returns:
    --------
    float
        Seconds since 1970-01-01T00:00:00 UTC
    """
    whole = int(math.floor(second))
    dt = datetime(int(year), int(month), int(day), int(hour), int(minute), whole,
                  tzinfo=timezone.utc)
    return (dt - UNIX_EPOCH).total_seconds() + (second - whole)


def unix_to_datetime(unix_time: float) -> datetime:
    """Convert Unix time to a timezone-aware UTC datetime"""
    return UNIX_EPOCH + timedelta(seconds=unix_time)


def epoch_line_to_unix(tokens: Sequence[str]) -> float:
    """
    Unix time of an SP3 epoch line

    Parameters:
    -----------
    tokens : sequence of str
        Whitespace separated tokens of a ``*`` epoch line:
        ``['*', year, month, day, hour, minute, second]``

    Returns:
    --------
    float
        Unix time of the epoch
    """
    if len(tokens) < 7:
        raise ValueError(f"Epoch line has {len(tokens)} fields, expected 7: {' '.join(tokens)}")
    return calendar_to_unix(int(tokens[1]), int(tokens[2]), int(tokens[3]),
                            int(tokens[4]), int(tokens[5]), float(tokens[6]))


def julian_day(year: int, month: int, day: int, hour: int = 0,
               minute: int = 0, second: float = 0.0) -> float:
    """
    Julian date of a calendar date (valid 1900-2100)

    Follows Vallado, Fundamentals of Astrodynamics and Applications.
    """
    return (367.0 * year
            - math.floor((7 * (year + math.floor((month + 9) / 12.0))) * 0.25)
            + math.floor(275 * month / 9.0)
            + day + 1721013.5
            + ((second / 60.0 + minute) / 60.0 + hour) / 24.0)


def greenwich_sidereal_angle(jd_ut1: float) -> float:
    """
    Greenwich mean sidereal angle (IAU-82)

    Parameters:
    -----------
    jd_ut1 : float
        Julian date (UT1)

    Returns:
    --------
    float
        Sidereal angle in [0, 2*pi) (rad)
    """
    tut1 = (jd_ut1 - JD_J2000) / 36525.0
    temp = (-6.2e-6 * tut1 ** 3 + 0.093104 * tut1 ** 2
            + (876600.0 * 3600.0 + 8640184.812866) * tut1 + 67310.54841)  # s
    temp = math.fmod(temp * D2R / 240.0, 2.0 * math.pi)
    if temp < 0.0:
        temp += 2.0 * math.pi
    return temp


@dataclass
class SimulationTime:
    """Simulation clock as seen by the ephemeris engine

    Only the calendar start, the fixed step and the elapsed time are read.
    """
    start_year: int
    start_month: int
    start_day: int
    start_hour: int = 0
    start_minute: int = 0
    start_second: float = 0.0
    step_s: float = 1.0
    elapsed_time_s: float = 0.0

    @property
    def start_unix_time(self) -> float:
        return calendar_to_unix(self.start_year, self.start_month, self.start_day,
                                self.start_hour, self.start_minute, self.start_second)

    def advance(self, steps: int = 1) -> None:
        """Advance the elapsed time by a number of fixed steps"""
        self.elapsed_time_s += steps * self.step_s

