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

"""Flat satellite index space shared by every constellation.

All tracked satellites live in a single integer index space that is split
into contiguous ranges, one per constellation, in table order. With the
default table the ranges are:

- GPS (G): 0-31
- GLONASS (R): 32-57
- Galileo (E): 58-93
- BeiDou (C): 94-109
- QZSS (J): 110-116

A satellite identifier is the constellation character followed by the slot
number (``"G01"``). SP3 position records prefix it with ``'P'`` (``"PG01"``);
the prefix is accepted and ignored.
"""

from dataclasses import dataclass
from typing import Tuple

from .constants import INVALID_SATELLITE_INDEX


@dataclass(frozen=True)
class Constellation:
    """One constellation of the index space"""
    char: str    # identifier character ('G', 'R', ...)
    name: str
    count: int   # maximum number of satellites (slots 1..count)


@dataclass(frozen=True)
class ConstellationTable:
    """Immutable constellation sizing table.

    Built once at start-up and handed by reference to every store so that all
    of them agree on the same index space.

    Parameters
    ----------
    constellations : tuple of Constellation
        Constellations in index order
    """
    constellations: Tuple[Constellation, ...]

    def __post_init__(self):
        chars = [c.char for c in self.constellations]
        if len(set(chars)) != len(chars):
            raise ValueError(f"Duplicate constellation characters: {chars}")
        for c in self.constellations:
            if c.count <= 0:
                raise ValueError(f"Constellation {c.char} must hold at least one satellite")

    @property
    def num_satellites(self) -> int:
        """Total number of satellites over all constellations"""
        return sum(c.count for c in self.constellations)

    def index_bias(self, char: str) -> int:
        """Index of slot 0 of the given constellation (slot 1 maps to bias + 1)"""
        bias = -1
        for c in self.constellations:
            if c.char == char:
                return bias
            bias += c.count
        raise KeyError(char)

    def index_range(self, char: str) -> range:
        """Flat indices covered by the given constellation"""
        first = self.index_bias(char) + 1
        return range(first, first + self.get(char).count)

    def get(self, char: str) -> Constellation:
        for c in self.constellations:
            if c.char == char:
                return c
        raise KeyError(char)


DEFAULT_CONSTELLATIONS = ConstellationTable((
    Constellation('G', 'GPS', 32),
    Constellation('R', 'GLONASS', 26),
    Constellation('E', 'Galileo', 36),
    Constellation('C', 'BeiDou', 16),
    Constellation('J', 'QZSS', 7),
))


def index_from_id(sat_id: str, table: ConstellationTable = DEFAULT_CONSTELLATIONS) -> int:
    """Convert a satellite identifier to its flat index.

    Parameters
    ----------
    sat_id : str
        Identifier such as ``"G01"`` or ``"PG01"``
    table : ConstellationTable
        Constellation sizing table

    Returns
    -------
    int
        Flat index, or INVALID_SATELLITE_INDEX for unknown constellations,
        malformed slot numbers and slots beyond the constellation size

    Examples
    --------
    >>> index_from_id('G01')
    0
    >>> index_from_id('PR01')
    32
    >>> index_from_id('X01')
    2147483647
    """
    if not sat_id:
        return INVALID_SATELLITE_INDEX
    if sat_id[0] == 'P' and len(sat_id) > 1 and not sat_id[1].isdigit():
        sat_id = sat_id[1:]

    char, slot_str = sat_id[0], sat_id[1:]
    if not slot_str.isdigit():
        return INVALID_SATELLITE_INDEX

    try:
        constellation = table.get(char)
    except KeyError:
        return INVALID_SATELLITE_INDEX

    slot = int(slot_str)
    if not 1 <= slot <= constellation.count:
        return INVALID_SATELLITE_INDEX

    return slot + table.index_bias(char)


def id_from_index(index: int, table: ConstellationTable = DEFAULT_CONSTELLATIONS) -> str:
    """Convert a flat index back to its satellite identifier.

    Parameters
    ----------
    index : int
        Flat satellite index
    table : ConstellationTable
        Constellation sizing table

    Returns
    -------
    str
        Identifier with a zero-padded two digit slot (``"G05"``), or an empty
        string if the index is outside the table

    Examples
    --------
    >>> id_from_index(4)
    'G05'
    >>> id_from_index(110)
    'J01'
    """
    if index < 0:
        return ""
    bias = -1
    for c in table.constellations:
        if index <= bias + c.count:
            return f"{c.char}{index - bias:02d}"
        bias += c.count
    return ""
