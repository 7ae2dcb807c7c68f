#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
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
#
#
#
"""Static strings and numeric limits used in the latticerational package

    Overflow policies

        ABORT = 'abort'

        RAISE = 'raise'

    Numeric limits

        INT64_MIN = -2**63

        INT64_MAX = 2**63 - 1

    Cell transformations

        AXES = 'abc'

        UNIQUE_AXIS_B = 'b'
"""
# Overflow policies
ABORT = 'abort'
RAISE = 'raise'
OVERFLOW_POLICIES = (ABORT, RAISE)
# Numeric limits
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1
# Cell transformations
AXES = 'abc'
UNIQUE_AXIS_B = 'b'
