# Copyright 2024 The Sigstore Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Test fixtures to share between tests. Not part of the public API."""

import pytest

from tests import test_support


@pytest.fixture(
    params=test_support.all_context_classes, ids=lambda cls: cls.__name__
)
def context_class(request):
    """Every concrete digest context class."""
    return request.param


@pytest.fixture
def sample_file(tmp_path_factory):
    """A file with known contents."""
    file = tmp_path_factory.mktemp("data") / "file"
    file.write_bytes(test_support.KNOWN_FILE_TEXT)
    return file


@pytest.fixture
def empty_file(tmp_path_factory):
    """An empty file."""
    file = tmp_path_factory.mktemp("data") / "file"
    file.write_bytes(b"")
    return file


@pytest.fixture
def large_file(tmp_path_factory):
    """A file spanning multiple read chunks, with a partial last chunk."""
    file = tmp_path_factory.mktemp("data") / "large"
    file.write_bytes(bytes(range(256)) * 100 + b"tail")
    return file
