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

from crypto_hash._hashing import hashing


class TestDigest:
    def test_hex_and_size(self):
        digest = hashing.Digest("test", b"abcd")
        assert digest.digest_hex == "61626364"
        assert digest.digest_size == 4

    def test_hex_unicode(self):
        digest = hashing.Digest("test", "*哈¥эш希".encode("utf-8"))
        assert digest.digest_hex == "2ae59388c2a5d18dd188e5b88c"

    def test_bytes_conversion(self):
        digest = hashing.Digest("test", b"abcd")
        assert bytes(digest) == b"abcd"

    def test_empty_digest_is_all_zeros(self):
        digest = hashing.Digest.empty("sha1", 20)
        assert digest.algorithm == "sha1"
        assert digest.digest_value == b"\x00" * 20

    def test_equality_includes_algorithm(self):
        assert hashing.Digest("a", b"x") == hashing.Digest("a", b"x")
        assert hashing.Digest("a", b"x") != hashing.Digest("b", b"x")
