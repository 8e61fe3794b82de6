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

"""Failures of the digest engines.

Any sequence of bytes is valid input for every digest, so none of these errors
can be triggered by the data being hashed. They signal a broken environment (a
primitive disabled by policy, memory exhaustion) or misuse of a context after
it has been finalized or released. A digest computed after one of these is
raised cannot be trusted, so library code never catches them.
"""


class HashingDefect(Exception):
    """Base class for unrecoverable failures of a digest engine."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EngineInitFailure(HashingDefect):
    """The primitive engine could not be allocated or initialized."""


class EngineUpdateFailure(HashingDefect):
    """The primitive engine rejected additional data."""


class EngineFinalizeFailure(HashingDefect):
    """The primitive engine failed to produce a digest."""


class DigestLengthMismatch(HashingDefect):
    """The engine produced a digest of a different length than declared."""
