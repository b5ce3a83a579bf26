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

"""Reading sequences of SP3 and clock product files into pages

Products are stored as ``<directory>/<center>/<product>/`` trees, one file
per day (or per 6 h for ultra-rapid products). A sequence is given by its
first and last file names; the names in between are generated by stepping
the day-of-year, GPS week/day or hour embedded in the name.
"""

import logging
from pathlib import Path
from typing import List, Tuple, Union

from ..gnss.records import Page, UltraRapidMode

logger = logging.getLogger(__name__)

MAX_FILES = 10000

CODE_MGEX_HEADER = "COD0MGXFIN_"
CODE_MGEX_FOOTER = "0000_01D_05M_ORB.SP3"


def directory_from_file_sort(file_sort: str) -> str:
    """
    Relative directory of a product

    Parameters
    ----------
    file_sort : str
        Product kind, e.g. ``IGS``, ``IGU``, ``madoca``, ``CODE_Final``

    Returns
    -------
    str
        Directory such as ``IGS/igs/`` or ``CODE/final/``
    """
    if file_sort[:2] == "IG":
        sub = {"S": "igs/", "R": "igr/", "U": "igu/"}.get(file_sort[2:3])
        if sub is None:
            raise ValueError(f"Unknown IGS product: {file_sort}")
        return "IGS/" + sub
    if file_sort[:2] == "ma":
        return "JAXA/madoca/"

    center, sep, kind = file_sort.partition("_")
    if not sep:
        raise ValueError(f"Unknown product file sort: {file_sort}")
    sub = {"F": "final/", "R": "rapid/", "U": "ultra_rapid/"}.get(kind[:1])
    if sub is None:
        raise ValueError(f"Unknown product file sort: {file_sort}")
    return f"{center}/{sub}"


def read_file_contents(path: Union[str, Path]) -> Page:
    """Lines of a text file, without a trailing ``EOF`` line"""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"GNSS file not found: {path}")
    with open(path, 'r') as f:
        lines = f.read().splitlines()
    if lines and lines[-1] == "EOF":
        lines.pop()
    return lines


def _split_name(first: str) -> Tuple[str, str]:
    for i, c in enumerate(first):
        if c.isdigit():
            return first[:i], first[i:]
    raise ValueError(f"File name carries no date: {first}")


def _days_in_year(year: int) -> int:
    return 365 + (year % 4 == 0) - (year % 100 == 0) + (year % 400 == 0)


def _code_mgex_names(first: str, last: str) -> List[str]:
    offset = len(CODE_MGEX_HEADER)
    year = int(first[offset:offset + 4])
    day = int(first[offset + 4:offset + 7])

    names = []
    while len(names) < MAX_FILES:
        if day > _days_in_year(year):
            year += 1
            day = 1
        names.append(f"{CODE_MGEX_HEADER}{year}{day:03d}{CODE_MGEX_FOOTER}")
        if names[-1] == last:
            return names
        day += 1
    raise ValueError(f"Last file {last} is not reached from {first}")


def _daily_names(first: str, last: str) -> List[str]:
    header, rest = _split_name(first)
    if len(rest) < 5 or not rest[:5].isdigit():
        raise ValueError(f"File name carries no date: {first}")
    gps_week = int(rest[0:4])
    day = int(rest[4])
    footer = rest[5:]

    names = []
    while len(names) < MAX_FILES:
        if day == 7:
            gps_week += 1
            day = 0
        names.append(f"{header}{gps_week}{day}{footer}")
        if names[-1] == last:
            return names
        day += 1
    raise ValueError(f"Last file {last} is not reached from {first}")


def _ultra_rapid_names(first: str, last: str) -> List[str]:
    header, rest = _split_name(first)
    if len(rest) < 8 or not (rest[:5].isdigit() and rest[6:8].isdigit()):
        raise ValueError(f"File name carries no date: {first}")
    gps_week = int(rest[0:4])
    day = int(rest[4])
    hour = int(rest[6:8])
    footer = rest[8:]

    names = []
    while len(names) < MAX_FILES:
        if hour == 24:
            hour = 0
            day += 1
        if day == 7:
            gps_week += 1
            day = 0
        names.append(f"{header}{gps_week}{day}_{hour:02d}{footer}")
        if names[-1] == last:
            return names
        hour += 6
    raise ValueError(f"Last file {last} is not reached from {first}")


def is_ultra_rapid(file_sort: str) -> bool:
    return file_sort[:3] == "IGU" or "Ultra" in file_sort


def sp3_file_names(file_sort: str, first: str, last: str) -> Tuple[List[str], bool]:
    """
    Names of the SP3 files from ``first`` to ``last``

    Returns
    -------
    names : list of str
    ultra_rapid : bool
        Whether the product is ultra-rapid (6 h files)
    """
    if first[:3] == "COD":
        return _code_mgex_names(first, last), False
    if is_ultra_rapid(file_sort):
        return _ultra_rapid_names(first, last), True
    return _daily_names(first, last), False


def clock_file_names(file_sort: str, first: str, last: str) -> List[str]:
    """Names of the clock files from ``first`` to ``last``"""
    if "Ultra" in file_sort:
        return _ultra_rapid_names(first, last)
    return _daily_names(first, last)


def read_sp3_files(directory_path: Union[str, Path], file_sort: str, first: str,
                   last: str) -> Tuple[List[Page], UltraRapidMode]:
    """
    Read a sequence of SP3 files

    Returns
    -------
    pages : list of list of str
        One page per file
    ur_mode : UltraRapidMode
        UNKNOWN for ultra-rapid products (segment still to be chosen),
        NOT_USE otherwise
    """
    directory = Path(directory_path) / directory_from_file_sort(file_sort)
    names, ultra_rapid = sp3_file_names(file_sort, first, last)
    pages = [read_file_contents(directory / name) for name in names]
    logger.info(f"Read {len(pages)} SP3 file(s) from {directory}")
    return pages, UltraRapidMode.UNKNOWN if ultra_rapid else UltraRapidMode.NOT_USE


def read_clock_files(directory_path: Union[str, Path], extension: str, file_sort: str,
                     first: str, last: str) -> List[Page]:
    """Read a sequence of clock files stored under ``<product>/<extension>/``"""
    directory = Path(directory_path) / directory_from_file_sort(file_sort) / extension.lstrip(".")
    pages = [read_file_contents(directory / name) for name in clock_file_names(file_sort, first, last)]
    logger.info(f"Read {len(pages)} clock file(s) from {directory}")
    return pages
