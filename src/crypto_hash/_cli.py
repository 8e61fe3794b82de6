# Copyright 2025 The Sigstore Authors
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

"""The main entry-point for the crypto_hash package."""

from collections.abc import Sequence
import logging
import sys

import click

import crypto_hash
from crypto_hash import hashing


logger = logging.getLogger(__name__)


# Marker for reading the data to hash from standard input.
_STDIN = "-"


# Decorator for the commonly used option to select the hashing algorithm.
_algorithm_option = click.option(
    "--algorithm",
    type=click.Choice(hashing.SUPPORTED_ALGORITHMS, case_sensitive=False),
    default="sha256",
    show_default=True,
    help="The digest algorithm to use.",
)


# Decorator for the commonly used option to set the read size.
_chunk_size_option = click.option(
    "--chunk_size",
    type=click.IntRange(min=0),
    default=1048576,
    show_default=True,
    metavar="BYTES",
    help="Amount of data to read at once. 0 reads each input in one call.",
)


def _hash_path(config: hashing.Config, path: str) -> hashing.Digest:
    if path == _STDIN:
        return config.hash_stream(click.get_binary_stream("stdin"))
    return config.hash_file(path)


@click.group(
    context_settings=dict(help_option_names=["-h", "--help"]),
)
@click.version_option(crypto_hash.__version__, "--version")
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default="INFO",
    show_default=True,
    metavar="LEVEL",
    envvar="CRYPTO_HASH_LOG_LEVEL",
    help="Set the logging level. This can also be set via the "
    "CRYPTO_HASH_LOG_LEVEL env var.",
)
def main(log_level: str) -> None:
    """Message digests (MD5, SHA-1, SHA-256, SHA-512).

    Use each subcommand's `--help` option for details on each mode.
    """
    logging.basicConfig(
        format="%(message)s", level=getattr(logging, log_level.upper())
    )


@main.command(name="digest")
@click.argument("paths", nargs=-1, required=True, metavar="PATH...")
@_algorithm_option
@_chunk_size_option
def _digest(paths: Sequence[str], algorithm: str, chunk_size: int) -> None:
    """Print the digest of files.

    Every PATH is hashed separately and printed as `<hex digest>  <PATH>`. A
    PATH of `-` reads from standard input.
    """
    try:
        config = (
            hashing.Config()
            .use_algorithm(algorithm)
            .set_chunk_size(chunk_size)
        )
        for path in paths:
            digest = _hash_path(config, path)
            click.echo(f"{digest.digest_hex}  {path}")
    except Exception as err:
        click.echo(f"Hashing failed with error: {err}", err=True)
        sys.exit(1)


@main.command(name="text")
@click.argument("values", nargs=-1, metavar="STRING...")
@_algorithm_option
def _text(values: Sequence[str], algorithm: str) -> None:
    """Print the digest of the concatenation of STRING values.

    Values are encoded as UTF-8. Without any value, this prints the digest of
    the empty message.
    """
    try:
        digest = hashing.digest(algorithm, *values)
    except Exception as err:
        click.echo(f"Hashing failed with error: {err}", err=True)
        sys.exit(1)

    click.echo(digest.digest_hex)


@main.command(name="check")
@click.argument("path", metavar="PATH")
@_algorithm_option
@_chunk_size_option
@click.option(
    "--expected",
    type=str,
    required=True,
    metavar="HEX",
    help="The expected digest, as a hexadecimal string.",
)
def _check(path: str, algorithm: str, chunk_size: int, expected: str) -> None:
    """Check the integrity of a file.

    Computes the digest of the file at PATH (or standard input for `-`) and
    compares it with the expected value. Exits with a non-zero code on
    mismatch.
    """
    try:
        config = (
            hashing.Config()
            .use_algorithm(algorithm)
            .set_chunk_size(chunk_size)
        )
        digest = _hash_path(config, path)
    except Exception as err:
        click.echo(f"Hashing failed with error: {err}", err=True)
        sys.exit(1)

    logger.debug(f"Computed {digest.algorithm} digest {digest.digest_hex}")
    if digest.digest_hex != expected.strip().lower():
        click.echo(
            f"Check failed: expected {expected}, got {digest.digest_hex}",
            err=True,
        )
        sys.exit(1)

    click.echo("Check succeeded")
