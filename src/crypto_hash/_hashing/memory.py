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

"""Digest contexts for data held in memory.

Every context owns one streaming engine from
`cryptography.hazmat.primitives.hashes`, bound to the algorithm described by
the `descriptor` of its class. Data is fed in any number of `update` calls and
`finalize` produces the digest.

Example usage for streaming:
```python
>>> hasher = SHA256()
>>> hasher.update(b"ab")
>>> hasher.update("c")
>>> digest = hasher.finalize()
>>> digest.digest_hex
'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
```

Example usage for one-shot hashing:
```python
>>> MD5.digest_of(b"").digest_hex
'd41d8cd98f00b204e9800998ecf8427e'
```

Contexts are context managers. The engine is released when leaving the block:
```python
>>> with SHA1(b"abc") as hasher:
...     digest = hasher.finalize()
```
"""

from collections.abc import Iterable
import logging
from typing import ClassVar, NoReturn, TypeAlias

from cryptography import exceptions
from cryptography.hazmat.primitives import hashes
from typing_extensions import Buffer
from typing_extensions import Self
from typing_extensions import override

from crypto_hash._hashing import algorithms
from crypto_hash._hashing import errors
from crypto_hash._hashing import hashing


logger = logging.getLogger(__name__)


# Everything that can be passed to `update`. Integers are deliberately not part
# of this, `bytes(5)` would silently hash five zero bytes.
HashInput: TypeAlias = Buffer | str | hashing.Digest | Iterable[int]


def _defect(
    error_type: type[errors.HashingDefect],
    message: str,
    cause: BaseException | None = None,
) -> NoReturn:
    logger.critical(message)
    raise error_type(message) from cause


def _check_not_integer(data: object) -> None:
    # `bool` is a subclass of `int`.
    if isinstance(data, int):
        raise TypeError(
            f"Cannot hash integer value {data!r}, pass a bytes-like object"
        )


def _as_bytes(data: HashInput) -> bytes | memoryview:
    """Converts any supported input into a buffer the engine accepts."""
    _check_not_integer(data)

    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, hashing.Digest):
        return data.digest_value

    try:
        view = memoryview(data)  # pytype: disable=wrong-arg-types
    except TypeError:
        pass
    else:
        if view.c_contiguous:
            return view.cast("B")
        return view.tobytes()

    if isinstance(data, Iterable):
        # Raises ValueError for ints outside of range(256).
        return bytes(data)

    raise TypeError(f"Cannot hash object of type {type(data).__name__}")


class GenericHash(hashing.StreamingHashEngine):
    """Streaming digest context, generic over the algorithm.

    This class is not used directly. Concrete subclasses set `descriptor` to
    one of the `algorithms` constants, `bind` creates such a subclass for any
    other descriptor.

    A context is either accumulating data or finalized. Once `finalize` has
    been called, further calls to `update` or `finalize` are errors. `reset`
    starts a new message.
    """

    descriptor: ClassVar[algorithms.AlgorithmDescriptor]

    def __init__(self, data: HashInput = b""):
        """Initializes a fresh engine, optionally feeding it some data.

        Args:
            data: Initial data to hash. Equivalent to calling `update` right
              after construction.

        Raises:
            TypeError: The class is not bound to an algorithm or `data` is not
              a bytes-like object.
            EngineInitFailure: The engine could not be initialized.
        """
        if getattr(type(self), "descriptor", None) is None:
            raise TypeError(
                f"{type(self).__name__} is not bound to a hashing algorithm, "
                "use a concrete class or `GenericHash.bind`"
            )

        self._engine: hashes.Hash | None = self._new_engine()
        self._digest = self._empty_digest()
        self.update(data)

    @classmethod
    def bind(
        cls, descriptor: algorithms.AlgorithmDescriptor
    ) -> type["GenericHash"]:
        """Creates the concrete context class for `descriptor`."""
        return type(cls)(
            descriptor.name.upper(),
            (cls,),
            {
                "descriptor": descriptor,
                "__doc__": f"{descriptor.name} digest context.",
                "__module__": cls.__module__,
            },
        )

    @classmethod
    def digest_of(cls, *items: HashInput) -> hashing.Digest:
        """Computes the digest of the concatenation of `items`.

        Args:
            items: The data to hash, in order. Each item can be of any type
              accepted by `update`, except integers.

        Returns:
            The digest over all items.
        """
        for item in items:
            _check_not_integer(item)

        with cls() as hasher:
            for item in items:
                hasher.update(item)
            return hasher.finalize()

    @classmethod
    def _new_engine(cls) -> hashes.Hash:
        try:
            return hashes.Hash(cls.descriptor.primitive())
        except (exceptions.UnsupportedAlgorithm, TypeError, MemoryError) as e:
            _defect(
                errors.EngineInitFailure,
                f"Failed to initialize {cls.descriptor.name} engine: {e}",
                e,
            )

    @classmethod
    def _from_state(cls, engine: hashes.Hash, digest: hashing.Digest) -> Self:
        instance = cls.__new__(cls)
        instance._engine = engine
        instance._digest = digest
        return instance

    def _empty_digest(self) -> hashing.Digest:
        return hashing.Digest.empty(self.digest_name, self.digest_size)

    def _live_engine(
        self, error_type: type[errors.HashingDefect]
    ) -> hashes.Hash:
        if self._engine is None:
            _defect(
                error_type,
                f"The {self.digest_name} context has already been released",
            )
        return self._engine

    def _checked_digest(self, value: bytes) -> hashing.Digest:
        if len(value) != self.digest_size:
            _defect(
                errors.DigestLengthMismatch,
                f"Engine produced a {len(value)} bytes digest for "
                f"{self.digest_name}, expected {self.digest_size} bytes",
            )
        return hashing.Digest(self.digest_name, value)

    @override
    def update(self, data: HashInput) -> None:
        """Appends additional data to the message being hashed.

        Raises:
            TypeError: `data` is an integer or not a bytes-like object.
            ValueError: `data` is an iterable with ints outside `range(256)`.
            EngineUpdateFailure: The context was finalized or released.
        """
        payload = _as_bytes(data)
        engine = self._live_engine(errors.EngineUpdateFailure)
        try:
            engine.update(payload)
        except exceptions.AlreadyFinalized as e:
            _defect(
                errors.EngineUpdateFailure,
                f"Cannot update a finalized {self.digest_name} context",
                e,
            )

    def finalize(self) -> hashing.Digest:
        """Computes the digest of all data passed to `update`.

        The digest is also stored and available via `digest`. Must be called
        once per message.

        Raises:
            EngineFinalizeFailure: The context was finalized or released.
            DigestLengthMismatch: The engine returned a digest of unexpected
              length.
        """
        engine = self._live_engine(errors.EngineFinalizeFailure)
        try:
            value = engine.finalize()
        except exceptions.AlreadyFinalized as e:
            _defect(
                errors.EngineFinalizeFailure,
                f"The {self.digest_name} context was already finalized",
                e,
            )
        self._digest = self._checked_digest(value)
        return self._digest

    @property
    def digest(self) -> hashing.Digest:
        """The last digest computed by `finalize`, all zeros before that."""
        return self._digest

    @override
    def compute(self) -> hashing.Digest:
        """Returns the digest of the data so far, without finalizing."""
        engine = self._live_engine(errors.EngineFinalizeFailure)
        try:
            snapshot = engine.copy()
        except exceptions.AlreadyFinalized:
            return self._digest
        return self._checked_digest(snapshot.finalize())

    @override
    def reset(self, data: HashInput = b"") -> None:
        self._engine = self._new_engine()
        self._digest = self._empty_digest()
        self.update(data)

    def copy(self) -> Self:
        """Duplicates the context, including all data accumulated so far.

        The copy and the original evolve independently afterwards. Copying a
        finalized context returns a finalized context with the same digest.

        Raises:
            EngineInitFailure: The context was released.
        """
        engine = self._live_engine(errors.EngineInitFailure)
        try:
            duplicate = engine.copy()
        except exceptions.AlreadyFinalized:
            duplicate = self._new_engine()
            duplicate.finalize()
        return self._from_state(duplicate, self._digest)

    def __copy__(self) -> Self:
        return self.copy()

    def __deepcopy__(self, memo) -> Self:
        return self.copy()

    def move(self) -> Self:
        """Transfers the engine and the stored digest to a new context.

        This context is left with a fresh engine for the same algorithm, as if
        it was just constructed.

        Raises:
            EngineInitFailure: The context was released or a fresh engine
              could not be initialized.
        """
        engine = self._live_engine(errors.EngineInitFailure)
        fresh_engine = self._new_engine()
        moved = self._from_state(engine, self._digest)
        self._engine = fresh_engine
        self._digest = self._empty_digest()
        logger.debug(f"Moved {self.digest_name} context state")
        return moved

    def release(self) -> None:
        """Releases the engine. Calling this more than once has no effect."""
        if self._engine is None:
            return
        self._engine = None
        logger.debug(f"Released {self.digest_name} context")

    @property
    def released(self) -> bool:
        """Whether `release` has been called since the last `reset`."""
        return self._engine is None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    @property
    @override
    def digest_name(self) -> str:
        return self.descriptor.name

    @property
    @override
    def digest_size(self) -> int:
        """The size, in bytes, of the digests produced by the engine."""
        return self.descriptor.digest_length


class MD5(GenericHash):
    """MD5 digests. Only for fingerprinting, MD5 is not collision resistant."""

    descriptor = algorithms.MD5


class SHA1(GenericHash):
    """SHA-1 digests."""

    descriptor = algorithms.SHA1


class SHA256(GenericHash):
    """SHA-256 digests."""

    descriptor = algorithms.SHA256


class SHA512(GenericHash):
    """SHA-512 digests."""

    descriptor = algorithms.SHA512


_CONTEXTS: dict[str, type[GenericHash]] = {
    cls.descriptor.name: cls for cls in (MD5, SHA1, SHA256, SHA512)
}


def get(name: str) -> type[GenericHash]:
    """Returns the context class for an algorithm name.

    Raises:
        ValueError: The algorithm is not supported.
    """
    return _CONTEXTS[algorithms.get(name).name]
