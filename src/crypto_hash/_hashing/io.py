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

"""Machinery for computing digests of files and opened streams.

Example usage for `SimpleFileHasher`:
```python
>>> with open("/tmp/file", "w") as f:
...     f.write("abcd")
>>> hasher = SimpleFileHasher("/tmp/file", SHA256())
>>> digest = hasher.compute()
>>> digest.digest_hex
'88d4266fd4e6338d13b845fcf289579d209c897823b9217da3e161936f031589'
```

Example usage for `StreamHasher`:
```python
>>> with open("/tmp/file", "rb") as f:
...     hasher = StreamHasher(f, SHA256())
...     digest = hasher.compute()
>>> digest.digest_hex
'88d4266fd4e6338d13b845fcf289579d209c897823b9217da3e161936f031589'
```
"""

import logging
import os
import pathlib
from typing import BinaryIO

from typing_extensions import override

from crypto_hash._hashing import hashing
from crypto_hash._hashing import memory


logger = logging.getLogger(__name__)


def _check_chunk_size(chunk_size: int) -> None:
    if chunk_size < 0:
        raise ValueError(f"Chunk size must be non-negative, got {chunk_size}.")


def _feed(
    stream: BinaryIO, content_hasher: memory.GenericHash, chunk_size: int
) -> None:
    """Passes all data from `stream` to `content_hasher`, chunk by chunk."""
    if chunk_size == 0:
        content_hasher.update(stream.read())
        return

    while True:
        data = stream.read(chunk_size)
        if not data:
            break
        content_hasher.update(data)


class FileHasher(hashing.HashEngine):
    """Generic file hash engine.

    This class is intentionally empty (and abstract, via inheritance) to be used
    only as a type annotation (to signal that API expects a hasher capable of
    hashing files, instead of any `HashEngine` instance).
    """

    pass


class SimpleFileHasher(FileHasher):
    """Simple file hash engine that computes the digest iteratively.

    To compute the hash of a file, we read the file exactly once, including for
    very large files that don't fit in memory. Files are read in chunks and each
    chunk is passed to the `update` method of an inner digest context. This
    ensures that the file digest will not change even if the chunk size
    changes.
    """

    def __init__(
        self,
        file: str | os.PathLike,
        content_hasher: memory.GenericHash,
        *,
        chunk_size: int = 1048576,
        digest_name_override: str | None = None,
    ):
        """Initializes an instance to hash a file with a specific context.

        Args:
            file: The file to hash. Use `set_file` to reset it.
            content_hasher: A `memory.GenericHash` instance used to compute the
              digest of the file. It is reset on every `compute` call.
            chunk_size: The amount of file to read at once. Default is 1MB. A
              special value of 0 signals to attempt to read everything in a
              single call.
            digest_name_override: Optional string to allow overriding the
              `digest_name` property to support shorter, standardized names.
        """
        _check_chunk_size(chunk_size)

        self._file = pathlib.Path(file)
        self._content_hasher = content_hasher
        self._chunk_size = chunk_size
        self._digest_name_override = digest_name_override

    def set_file(self, file: str | os.PathLike) -> None:
        """Redefines the file to be hashed in `compute`."""
        self._file = pathlib.Path(file)

    @property
    @override
    def digest_name(self) -> str:
        if self._digest_name_override is not None:
            return self._digest_name_override
        return f"file-{self._content_hasher.digest_name}"

    @override
    def compute(self) -> hashing.Digest:
        logger.debug(
            f"Hashing {self._file} with {self._content_hasher.digest_name}"
        )
        self._content_hasher.reset()

        with open(self._file, "rb") as f:
            _feed(f, self._content_hasher, self._chunk_size)

        digest = self._content_hasher.finalize()
        return hashing.Digest(self.digest_name, digest.digest_value)

    @property
    @override
    def digest_size(self) -> int:
        """The size, in bytes, of the digests produced by the engine."""
        return self._content_hasher.digest_size


class StreamHasher(FileHasher):
    """File hasher operating on already opened binary streams.

    This supports any file-like object opened for reading in binary mode, e.g.,
    `sys.stdin.buffer`, `BytesIO`, `SocketIO`. The stream is read from its
    current position until the end and is not closed.
    """

    def __init__(
        self,
        # https://github.com/python/typeshed/issues/2166
        stream: BinaryIO,
        content_hasher: memory.GenericHash,
        *,
        chunk_size: int = 1048576,
        digest_name_override: str | None = None,
    ):
        """Initializes an instance to hash a stream with a specific context.

        Args:
            stream: The opened stream.
            content_hasher: A `memory.GenericHash` instance used to compute the
              digest of the stream.
            chunk_size: The amount of data to read at once. Default is 1MB. A
              special value of 0 signals to attempt to read everything in a
              single call.
            digest_name_override: Optional string to allow overriding the
              `digest_name` property to support shorter, standardized names.
        """
        _check_chunk_size(chunk_size)

        self._stream = stream
        self._content_hasher = content_hasher
        self._chunk_size = chunk_size
        self._digest_name_override = digest_name_override

    def set_stream(self, stream: BinaryIO) -> None:
        """Redefines the stream to be hashed in `compute`."""
        self._stream = stream

    @property
    @override
    def digest_name(self) -> str:
        if self._digest_name_override is not None:
            return self._digest_name_override
        return f"stream-{self._content_hasher.digest_name}"

    @override
    def compute(self) -> hashing.Digest:
        self._content_hasher.reset()
        _feed(self._stream, self._content_hasher, self._chunk_size)
        digest = self._content_hasher.finalize()
        return hashing.Digest(self.digest_name, digest.digest_value)

    @property
    @override
    def digest_size(self) -> int:
        """The size, in bytes, of the digests produced by the engine."""
        return self._content_hasher.digest_size
