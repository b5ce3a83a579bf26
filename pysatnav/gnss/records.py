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

"""Ingestion records: product descriptions and SP3 page traversal

A *page* is the content of one source file as a list of text lines, as handed
over by the file reader. Several pages of one product are concatenated in
time order; page boundaries are invisible to the stored time series.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, List, Sequence, Tuple

from ..core.constants import UR_SEGMENTS

logger = logging.getLogger(__name__)

Page = List[str]


class UltraRapidMode(IntEnum):
    """Segment of a 48 h ultra-rapid product to ingest

    The product holds 24 h of observed orbit followed by 24 h of prediction,
    split into eight 6 h segments.
    """
    NOT_USE = 0
    UNKNOWN = 1
    OBSERVE_1 = 2
    OBSERVE_2 = 3
    OBSERVE_3 = 4
    OBSERVE_4 = 5
    PREDICT_1 = 6
    PREDICT_2 = 7
    PREDICT_3 = 8
    PREDICT_4 = 9

    @property
    def segment(self) -> int:
        """Index of the 6 h segment (0-7)"""
        if self in (UltraRapidMode.NOT_USE, UltraRapidMode.UNKNOWN):
            raise ValueError(f"{self.name} does not select an ultra-rapid segment")
        return int(self) - int(UltraRapidMode.OBSERVE_1)

    @property
    def is_prediction(self) -> bool:
        return UltraRapidMode.PREDICT_1 <= self <= UltraRapidMode.PREDICT_4

    @classmethod
    def from_selector(cls, selector: str) -> 'UltraRapidMode':
        """Parse selectors such as ``"observe1"`` or ``"predict3"``"""
        selector = selector.strip().lower()
        if not selector or not selector[-1].isdigit():
            raise ValueError(f"Invalid ultra-rapid selector: {selector!r}")
        number = int(selector[-1])
        if not 1 <= number <= 4:
            raise ValueError(f"Ultra-rapid segment must be 1-4: {selector!r}")
        if "observe" in selector:
            return cls(int(cls.OBSERVE_1) + number - 1)
        if "predict" in selector:
            return cls(int(cls.PREDICT_1) + number - 1)
        raise ValueError(f"Invalid ultra-rapid selector: {selector!r}")


class ClockFileFormat(Enum):
    """Source format of clock biases"""
    SP3 = ".sp3"       # clock column of SP3 orbit files (microseconds)
    CLK = ".clk"       # RINEX clock 'AS' records (seconds)

    @classmethod
    def from_extension(cls, extension: str) -> 'ClockFileFormat':
        """Resolve a file extension (``.sp3``, ``.clk``, ``.clk_30s`` ...) once"""
        return cls.SP3 if extension.lower() == ".sp3" else cls.CLK


class InterpolationMethod(IntEnum):
    """Interpolation of satellite positions"""
    TRIGONOMETRIC = 0
    LAGRANGE = 1


class GnssFrame(Enum):
    """Frame of receiver and satellite positions"""
    ECEF = "ecef"
    ECI = "eci"


@dataclass
class PositionProduct:
    """Position product to ingest"""
    pages: Sequence[Page]
    interpolation_number: int
    interpolation_method: InterpolationMethod = InterpolationMethod.TRIGONOMETRIC
    ur_mode: UltraRapidMode = UltraRapidMode.NOT_USE


@dataclass
class ClockProduct:
    """Clock product to ingest"""
    pages: Sequence[Page]
    interpolation_number: int
    clock_format: ClockFileFormat = ClockFileFormat.SP3
    ur_mode: UltraRapidMode = UltraRapidMode.NOT_USE


@dataclass
class Sp3Header:
    """The part of an SP3 header the engine needs"""
    num_epochs: int
    interval: float
    num_satellites: int
    first_epoch_line: int


@dataclass
class Sp3Epoch:
    """One epoch block: the ``*`` line and one line per satellite"""
    epoch_tokens: List[str]
    records: List[List[str]] = field(default_factory=list)


def _token(page: Page, line: int, position: int) -> str:
    try:
        return page[line].split()[position]
    except IndexError:
        raise ValueError(f"SP3 header line {line + 1} has no field {position + 1}") from None


def parse_sp3_header(page: Page) -> Sp3Header:
    """
    Read the epoch count, epoch interval and satellite count of an SP3 page

    Parameters
    ----------
    page : list of str
        Lines of one SP3 file

    Returns
    -------
    Sp3Header
    """
    if len(page) < 3:
        raise ValueError("SP3 page is shorter than its header")
    try:
        num_epochs = int(_token(page, 0, 6))
        interval = float(_token(page, 1, 3))
        num_satellites = int(_token(page, 2, 1))
    except ValueError as e:
        raise ValueError(f"Malformed SP3 header: {e}") from e

    line = 3
    while line < len(page) and not page[line].startswith('*'):
        line += 1
    if line == len(page):
        raise ValueError("SP3 page has no epoch line")

    return Sp3Header(num_epochs, interval, num_satellites, line)


def _line_range(header: Sp3Header, ur_mode: UltraRapidMode) -> Tuple[int, int]:
    block = header.num_satellites + 1
    if ur_mode == UltraRapidMode.NOT_USE:
        return header.first_epoch_line, header.first_epoch_line + block * header.num_epochs
    segment_lines = block * header.num_epochs // UR_SEGMENTS
    start = header.first_epoch_line + segment_lines * ur_mode.segment
    return start, start + segment_lines


def iter_sp3_epochs(page: Page, header: Sp3Header,
                    ur_mode: UltraRapidMode = UltraRapidMode.NOT_USE) -> Iterator[Sp3Epoch]:
    """
    Iterate over the epoch blocks of an SP3 page

    Each block is one epoch line followed by exactly ``num_satellites`` data
    lines. With an ultra-rapid mode only the selected eighth of the blocks is
    visited.

    Parameters
    ----------
    page : list of str
        Lines of one SP3 file
    header : Sp3Header
        Parsed header of the page
    ur_mode : UltraRapidMode
        Segment selection

    Yields
    ------
    Sp3Epoch
    """
    start, end = _line_range(header, ur_mode)
    if end > len(page):
        raise ValueError(f"SP3 page ends at line {len(page)}, header announces {end} lines")

    block = header.num_satellites + 1
    epoch = None
    for i in range(end - start):
        tokens = page[start + i].split()
        if i % block == 0:
            if epoch is not None:
                yield epoch
            if not tokens or tokens[0] != '*':
                raise ValueError(f"Expected epoch line at line {start + i + 1}: {page[start + i]!r}")
            epoch = Sp3Epoch(tokens)
        else:
            if len(tokens) < 5:
                raise ValueError(f"SP3 record at line {start + i + 1} has {len(tokens)} fields")
            epoch.records.append(tokens)
    if epoch is not None:
        yield epoch


def iter_sp3_pages(pages: Sequence[Page],
                   ur_mode: UltraRapidMode = UltraRapidMode.NOT_USE) -> Iterator[Tuple[Sp3Header, Sp3Epoch]]:
    """Iterate over the epoch blocks of consecutive SP3 pages"""
    for page_no, page in enumerate(pages):
        header = parse_sp3_header(page)
        logger.debug(f"SP3 page {page_no}: {header.num_epochs} epochs, "
                     f"{header.num_satellites} satellites, interval {header.interval} s")
        for epoch in iter_sp3_epochs(page, header, ur_mode):
            yield header, epoch
