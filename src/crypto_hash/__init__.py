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

"""Uniform message digests over the `cryptography` hash primitives.

The API lives in `crypto_hash.hashing`. It offers four digest contexts, one per
supported algorithm (`MD5`, `SHA1`, `SHA256` and `SHA512`), with the same
streaming interface:

```python
with crypto_hash.hashing.SHA256() as ctx:
    ctx.update(b"header")
    checkpoint = ctx.copy()
    ctx.update(b"body")
    digest = ctx.finalize()
```

For data available at once, the one-shot helpers build, feed and finalize a
context in a single call:

```python
crypto_hash.hashing.sha1("user", b":", b"password").digest_hex
```

The mathematics of each algorithm is delegated to `cryptography`. Failures of
the underlying engine are never caused by the data being hashed. They are
raised as `crypto_hash.hashing.HashingDefect` subclasses and should not be
handled.

A command line interface is also available as `crypto-hash`.
"""

from crypto_hash import hashing


__version__ = "1.0.0"


__all__ = ["hashing"]
