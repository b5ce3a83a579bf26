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

"""I/O utilities for pysatnav.

Product file reading and log formatting. Engine configuration lives in
:mod:`pysatnav.io.config`.
"""

from .gnss_files import (
    clock_file_names,
    directory_from_file_sort,
    read_clock_files,
    read_file_contents,
    read_sp3_files,
    sp3_file_names,
)
from .log_format import format_scalar, format_scalar_header, format_vector, format_vector_header

__all__ = [
    'directory_from_file_sort', 'read_file_contents',
    'sp3_file_names', 'clock_file_names',
    'read_sp3_files', 'read_clock_files',
    'format_scalar', 'format_scalar_header', 'format_vector', 'format_vector_header'
]
