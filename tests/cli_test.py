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

"""Tests for the command line interface."""

from click import testing
import pytest

import crypto_hash
from crypto_hash import _cli
from tests import test_support


@pytest.fixture
def runner():
    return testing.CliRunner()


class TestCLI:
    def test_version(self, runner):
        result = runner.invoke(_cli.main, ["--version"])
        assert result.exit_code == 0
        assert crypto_hash.__version__ in result.output

    def test_digest_of_file(self, runner, sample_file):
        result = runner.invoke(_cli.main, ["digest", str(sample_file)])
        expected = crypto_hash.hashing.sha256(test_support.KNOWN_FILE_TEXT)
        assert result.exit_code == 0
        assert result.output == f"{expected.digest_hex}  {sample_file}\n"

    def test_digest_of_multiple_files(self, runner, sample_file, empty_file):
        result = runner.invoke(
            _cli.main,
            ["digest", "--algorithm", "MD5", str(sample_file), str(empty_file)],
        )
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 2
        assert lines[1] == (
            f"{test_support.EMPTY_DIGESTS['md5']}  {empty_file}"
        )

    def test_digest_of_stdin(self, runner):
        result = runner.invoke(
            _cli.main,
            ["digest", "--algorithm", "sha1", "--chunk_size", "1", "-"],
            input=b"abc",
        )
        assert result.exit_code == 0
        assert result.output == f"{test_support.ABC_DIGESTS['sha1']}  -\n"

    def test_digest_of_missing_file(self, runner, tmp_path):
        missing = tmp_path / "missing"
        result = runner.invoke(_cli.main, ["digest", str(missing)])
        assert result.exit_code == 1
        assert "Hashing failed with error" in result.output

    def test_digest_requires_paths(self, runner):
        result = runner.invoke(_cli.main, ["digest"])
        assert result.exit_code != 0

    def test_unknown_algorithm(self, runner, sample_file):
        result = runner.invoke(
            _cli.main, ["digest", "--algorithm", "crc32", str(sample_file)]
        )
        assert result.exit_code != 0

    @pytest.mark.parametrize("name", ["md5", "sha1", "sha256", "sha512"])
    def test_text(self, runner, name):
        result = runner.invoke(
            _cli.main, ["text", "--algorithm", name, "a", "b", "c"]
        )
        assert result.exit_code == 0
        assert result.output == f"{test_support.ABC_DIGESTS[name]}\n"

    def test_text_without_values(self, runner):
        result = runner.invoke(_cli.main, ["text", "--algorithm", "md5"])
        assert result.exit_code == 0
        assert result.output == "d41d8cd98f00b204e9800998ecf8427e\n"

    def test_check_succeeds(self, runner, sample_file):
        expected = crypto_hash.hashing.sha512(test_support.KNOWN_FILE_TEXT)
        result = runner.invoke(
            _cli.main,
            [
                "check",
                "--algorithm",
                "sha512",
                "--expected",
                expected.digest_hex.upper(),
                str(sample_file),
            ],
        )
        assert result.exit_code == 0
        assert "Check succeeded" in result.output

    def test_check_fails_on_mismatch(self, runner, sample_file):
        result = runner.invoke(
            _cli.main,
            [
                "check",
                "--expected",
                test_support.EMPTY_DIGESTS["sha256"],
                str(sample_file),
            ],
        )
        assert result.exit_code == 1
        assert "Check failed" in result.output

    def test_log_level_from_environment(self, runner):
        result = runner.invoke(
            _cli.main,
            ["text", "abc"],
            env={"CRYPTO_HASH_LOG_LEVEL": "DEBUG"},
        )
        assert result.exit_code == 0
        assert result.output == f"{test_support.ABC_DIGESTS['sha256']}\n"
