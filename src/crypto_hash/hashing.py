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

"""High level API for the hashing interface of `crypto_hash` library.

One-shot digests are computed with the per-algorithm helpers:

```python
crypto_hash.hashing.sha256(b"abc").digest_hex
crypto_hash.hashing.md5("user:", b"secret").digest_hex
```

Streaming digests use the context classes directly:

```python
with crypto_hash.hashing.SHA256() as ctx:
    for chunk in chunks:
        ctx.update(chunk)
    digest = ctx.finalize()
```

When the algorithm is selected at runtime, a single configuration object can be
shared between the places that need the same kind of digest:

```python
hashing_config = crypto_hash.hashing.Config().use_algorithm("sha512")
digest = hashing_config.hash_file("model.bin")
```

The API defined here is stable and backwards compatible.
"""

import os
from typing import BinaryIO, Literal, TypeAlias

from typing_extensions import Self

from crypto_hash._hashing import algorithms
from crypto_hash._hashing import errors
from crypto_hash._hashing import hashing
from crypto_hash._hashing import io
from crypto_hash._hashing import memory


# Type alias to support `os.PathLike` and `str` objects in the API
PathLike: TypeAlias = str | os.PathLike

AlgorithmName: TypeAlias = Literal["md5", "sha1", "sha256", "sha512"]

Digest = hashing.Digest
HashInput = memory.HashInput

GenericHash = memory.GenericHash
MD5 = memory.MD5
SHA1 = memory.SHA1
SHA256 = memory.SHA256
SHA512 = memory.SHA512

HashingDefect = errors.HashingDefect
EngineInitFailure = errors.EngineInitFailure
EngineUpdateFailure = errors.EngineUpdateFailure
EngineFinalizeFailure = errors.EngineFinalizeFailure
DigestLengthMismatch = errors.DigestLengthMismatch

SUPPORTED_ALGORITHMS = algorithms.SUPPORTED


def md5(*items: HashInput) -> Digest:
    """Computes the MD5 digest of the concatenation of `items`."""
    return MD5.digest_of(*items)


def sha1(*items: HashInput) -> Digest:
    """Computes the SHA-1 digest of the concatenation of `items`."""
    return SHA1.digest_of(*items)


def sha256(*items: HashInput) -> Digest:
    """Computes the SHA-256 digest of the concatenation of `items`."""
    return SHA256.digest_of(*items)


def sha512(*items: HashInput) -> Digest:
    """Computes the SHA-512 digest of the concatenation of `items`."""
    return SHA512.digest_of(*items)


def digest(algorithm: AlgorithmName | str, *items: HashInput) -> Digest:
    """Computes the digest of the concatenation of `items`.

    Args:
        algorithm: The name of the algorithm to use, one of
          `SUPPORTED_ALGORITHMS`.
        items: The data to hash, in order.

    Returns:
        The digest over all items.

    Raises:
        ValueError: The algorithm is not supported.
        TypeError: One of the items is an integer or not bytes-like.
    """
    return memory.get(algorithm).digest_of(*items)


def hash_file(path: PathLike) -> Digest:
    """Hashes a file using the default configuration."""
    return Config().hash_file(path)


class Config:
    """Configuration to use when hashing.

    This configuration class supports selecting the algorithm, among MD5,
    SHA-1, SHA-256 and SHA-512, with SHA-256 being the default. It also
    supports configuring the amount of data read at once when hashing files and
    streams. The chunk size never influences the digest.
    """

    def __init__(self):
        """Initializes the default configuration for hashing."""
        self._context_class = memory.SHA256
        self._chunk_size = 1048576

    @property
    def algorithm(self) -> str:
        """The name of the configured algorithm."""
        return self._context_class.descriptor.name

    @property
    def chunk_size(self) -> int:
        """The amount of data read at once from files and streams."""
        return self._chunk_size

    def use_algorithm(self, algorithm: AlgorithmName | str) -> Self:
        """Configures the algorithm used for every digest.

        Args:
            algorithm: The name of the algorithm, one of
              `SUPPORTED_ALGORITHMS`. Case and dashes are ignored.

        Returns:
            The new hashing configuration with the new algorithm.

        Raises:
            ValueError: The algorithm is not supported.
        """
        self._context_class = memory.get(algorithm)
        return self

    def set_chunk_size(self, chunk_size: int) -> Self:
        """Configures the amount of data to read at once.

        Args:
            chunk_size: The size of each read, in bytes. A special value of 0
              signals to attempt to read everything in a single call.

        Returns:
            The new hashing configuration with the new chunk size.

        Raises:
            ValueError: The chunk size is negative.
        """
        if chunk_size < 0:
            raise ValueError(
                f"Chunk size must be non-negative, got {chunk_size}."
            )
        self._chunk_size = chunk_size
        return self

    def new_context(self, data: HashInput = b"") -> memory.GenericHash:
        """Returns a fresh digest context for the configured algorithm."""
        return self._context_class(data)

    def hash_bytes(self, *items: HashInput) -> Digest:
        """Computes the digest of the concatenation of `items`."""
        return self._context_class.digest_of(*items)

    def hash_file(self, path: PathLike) -> Digest:
        """Computes the digest of the contents of the file at `path`."""
        with self.new_context() as context:
            hasher = io.SimpleFileHasher(
                path, context, chunk_size=self._chunk_size
            )
            file_digest = hasher.compute()
        return Digest(self.algorithm, file_digest.digest_value)

    def hash_stream(self, stream: BinaryIO) -> Digest:
        """Computes the digest of the remaining data in an opened stream."""
        with self.new_context() as context:
            hasher = io.StreamHasher(
                stream, context, chunk_size=self._chunk_size
            )
            stream_digest = hasher.compute()
        return Digest(self.algorithm, stream_digest.digest_value)
