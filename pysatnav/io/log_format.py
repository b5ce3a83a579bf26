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

"""CSV-style header and value fields for simulation log files"""

from typing import Sequence

AXES = ("x", "y", "z")


def format_scalar_header(name: str, unit: str = "") -> str:
    """``name[unit],``"""
    return f"{name}[{unit}],"


def format_vector_header(name: str, frame: str, unit: str, n: int = 3) -> str:
    """``name_x(frame)[unit],name_y(frame)[unit],...``"""
    axes = AXES if n <= len(AXES) else [str(i) for i in range(n)]
    return "".join(f"{name}_{axes[i]}({frame})[{unit}]," for i in range(n))


def format_scalar(value: float, precision: int = 6) -> str:
    """Value with ``precision`` significant digits followed by a comma"""
    return f"{value:.{precision}g},"


def format_vector(values: Sequence[float], precision: int = 6) -> str:
    return "".join(format_scalar(float(v), precision) for v in values)
