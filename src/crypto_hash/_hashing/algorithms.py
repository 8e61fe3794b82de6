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

"""Descriptors for the supported digest algorithms.

A descriptor pairs the constructor of a primitive from
`cryptography.hazmat.primitives.hashes` with the length of the digests it
produces. Descriptors are constants: pick the one needed at the call site.

```python
>>> SHA256.digest_length
32
>>> get("SHA-1") is SHA1
True
```
"""

from collections.abc import Callable
import dataclasses
import types

from cryptography.hazmat.primitives import hashes


MD5_DIGEST_LENGTH_BYTES = 16
SHA1_DIGEST_LENGTH_BYTES = 20
SHA256_DIGEST_LENGTH_BYTES = 32
SHA512_DIGEST_LENGTH_BYTES = 64


@dataclasses.dataclass(frozen=True)
class AlgorithmDescriptor:
    """Binding between an algorithm name, its primitive and digest length.

    Attributes:
        name: The canonical (lowercase) name of the algorithm, used as the
          `algorithm` of the digests computed with it.
        primitive: Zero argument callable returning the
          `hashes.HashAlgorithm` instance to initialize engines with.
        digest_length: The size, in bytes, of every digest.
    """

    name: str
    primitive: Callable[[], hashes.HashAlgorithm]
    digest_length: int


MD5 = AlgorithmDescriptor("md5", hashes.MD5, MD5_DIGEST_LENGTH_BYTES)
SHA1 = AlgorithmDescriptor("sha1", hashes.SHA1, SHA1_DIGEST_LENGTH_BYTES)
SHA256 = AlgorithmDescriptor(
    "sha256", hashes.SHA256, SHA256_DIGEST_LENGTH_BYTES
)
SHA512 = AlgorithmDescriptor(
    "sha512", hashes.SHA512, SHA512_DIGEST_LENGTH_BYTES
)


_DESCRIPTORS = types.MappingProxyType(
    {d.name: d for d in (MD5, SHA1, SHA256, SHA512)}
)

SUPPORTED: tuple[str, ...] = tuple(_DESCRIPTORS)


def get(name: str) -> AlgorithmDescriptor:
    """Returns the descriptor for an algorithm name.

    Lookup ignores case and dashes, so `"SHA-256"` resolves to `SHA256`.

    Raises:
        ValueError: The algorithm is not supported.
    """
    key = name.lower().replace("-", "")
    try:
        return _DESCRIPTORS[key]
    except KeyError:
        raise ValueError(
            f"Unsupported hashing algorithm {name}, "
            f"expected one of {', '.join(SUPPORTED)}"
        ) from None
