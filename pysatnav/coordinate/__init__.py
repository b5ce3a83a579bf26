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

"""Coordinate frame utilities

Earth-fixed / inertial rotation about the Z axis driven by the Greenwich
sidereal angle, as used when SP3 positions are stored in both frames.
"""

from .dcm import angle_between, ecef2eci, ecef2eci_dcm, eci2ecef, eci2ecef_dcm
