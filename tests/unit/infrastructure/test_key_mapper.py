"""Tests for DigestKeyMapper."""

import base64
import hashlib
import random
import string

import pytest

from kvcache.infrastructure.key_mappers.digest import DigestKeyMapper


class TestDigestKeyMapper:
    """Tests for DigestKeyMapper."""

    @pytest.fixture
    def key_mapper(self) -> DigestKeyMapper:
        """Create a key mapper for testing."""
        return DigestKeyMapper()

    def test_map_is_digest_of_base64_key(self, key_mapper: DigestKeyMapper) -> None:
        """Test the name is the hex digest of the base64-encoded key."""
        expected = hashlib.sha256(base64.b64encode(b"user:1")).hexdigest()

        assert key_mapper.map("user:1") == expected

    def test_md5_layout(self) -> None:
        """Test MD5 produces the 32-character layout."""
        key_mapper = DigestKeyMapper("md5")
        expected = hashlib.md5(base64.b64encode(b"test")).hexdigest()

        name = key_mapper.map("test")

        assert name == expected
        assert len(name) == 32

    def test_same_key_same_name(self, key_mapper: DigestKeyMapper) -> None:
        """Test that mapping is deterministic."""
        assert key_mapper.map("user:1") == key_mapper.map("user:1")
        assert DigestKeyMapper().map("user:1") == key_mapper.map("user:1")

    def test_fixed_width_hex(self, key_mapper: DigestKeyMapper) -> None:
        """Test names are fixed-width lowercase hex for any key."""
        keys = ["", "a", "with space", "../../etc/passwd", "ключ", "🔑" * 100, "a/b\\c:d"]

        for key in keys:
            name = key_mapper.map(key)
            assert len(name) == 64
            assert set(name) <= set("0123456789abcdef")

    def test_no_collisions_on_random_keys(self, key_mapper: DigestKeyMapper) -> None:
        """Test distinct keys map to distinct names over a large sample."""
        rng = random.Random(1234)
        alphabet = string.printable + "äöüßéñ中文"
        keys = {
            "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 40)))
            for _ in range(20000)
        }

        names = {key_mapper.map(key) for key in keys}

        assert len(names) == len(keys)

    def test_similar_keys_differ(self, key_mapper: DigestKeyMapper) -> None:
        """Test keys differing in one character map apart."""
        assert key_mapper.map("user:1") != key_mapper.map("user:2")
        assert key_mapper.map("User:1") != key_mapper.map("user:1")

    def test_is_mapped_name(self, key_mapper: DigestKeyMapper) -> None:
        """Test recognizing names the mapper produces."""
        assert key_mapper.is_mapped_name(key_mapper.map("anything"))
        assert not key_mapper.is_mapped_name("notes.txt")
        assert not key_mapper.is_mapped_name("a" * 63)
        assert not key_mapper.is_mapped_name("A" * 64)

    @pytest.mark.parametrize("algorithm", ["not-a-hash", "shake_128", "shake_256"])
    def test_unknown_algorithm(self, algorithm: str) -> None:
        """Test that unsupported or variable-length algorithms fail at construction."""
        with pytest.raises(ValueError):
            DigestKeyMapper(algorithm)

    def test_algorithm_property(self) -> None:
        """Test algorithm property."""
        assert DigestKeyMapper("md5").algorithm == "md5"
