# Copyright 2026 The Bazel Authors. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Create tar archives from directory trees and extract them back."""

from tartree.build_tar import create, create_in_place
from tartree.errors import (ArchiveError, Error, InvalidArgument, IsADirectory,
                            NotADirectory, UnsafeEntryName)
from tartree.extract_tar import extract, extract_in_place

__version__ = '0.1.0'

__all__ = [
    'ArchiveError',
    'Error',
    'InvalidArgument',
    'IsADirectory',
    'NotADirectory',
    'UnsafeEntryName',
    'create',
    'create_in_place',
    'extract',
    'extract_in_place',
]
