"""
Hashing Unit Tests
Tests for flatmerkle/crypto/hashing.py

Tests:
- hash truncation to N bytes
- concat_hash buffer layout
- tag_hash / leaf_hash / node_hash composition and domain separation
- construction-time validation of (digest, N, ND)
- to_hex/from_hex
"""
import hashlib
import pytest

from flatmerkle.crypto.hashing import (
    LEAF_TAG,
    NODE_TAG,
    DEFAULT_HASHER,
    Hasher,
    resolve_digest,
    native_digest_size,
    to_hex,
    from_hex,
)
from flatmerkle.schemas.errors import (
    ConfigurationException,
    ErrorCodes,
    UnknownDigestException,
)


class TestDigestResolution:
    """Tests for resolve_digest() and native_digest_size()."""

    def test_resolve_by_name(self):
        """A hashlib name yields a factory of fresh digest objects."""
        factory = resolve_digest("sha256")
        h = factory()
        h.update(b"hello")

        assert h.digest() == hashlib.sha256(b"hello").digest()

    def test_resolve_constructor_passthrough(self):
        """A constructor is used as is."""
        assert resolve_digest(hashlib.sha512) is hashlib.sha512

    def test_factory_returns_independent_objects(self):
        """Each call produces a new, reset digest object."""
        factory = resolve_digest("sha256")
        first = factory()
        first.update(b"state")

        assert factory().digest() == hashlib.sha256(b"").digest()

    def test_unknown_name_raises(self):
        """Unknown algorithm names are rejected."""
        with pytest.raises(UnknownDigestException) as exc_info:
            resolve_digest("definitely-not-a-digest")

        assert exc_info.value.code == ErrorCodes.UNKNOWN_DIGEST
        assert exc_info.value.details["algorithm"] == "definitely-not-a-digest"

    def test_non_string_non_callable_raises(self):
        """Something that is neither a name nor a constructor is rejected."""
        with pytest.raises(UnknownDigestException):
            resolve_digest(42)

    @pytest.mark.parametrize(
        "algorithm,size",
        [("sha256", 32), ("sha512", 64), ("sha1", 20), ("blake2s", 32), (hashlib.sha384, 48)],
    )
    def test_native_digest_size(self, algorithm, size):
        """D matches the digest's native output length."""
        assert native_digest_size(algorithm) == size


class TestHasherValidation:
    """Tests for construction-time parameter checks."""

    def test_defaults(self):
        """Default hasher is sha256 with N=32, ND=64."""
        hasher = Hasher()

        assert hasher.name == "sha256"
        assert hasher.digest_size == 32
        assert hasher.hash_size == 32
        assert hasher.concat_size == 64

    def test_concat_size_defaults_to_twice_hash_size(self):
        """ND is derived from N when omitted."""
        assert Hasher("sha256", hash_size=20).concat_size == 40

    def test_concat_size_must_be_twice_hash_size(self):
        """ND != 2N is rejected."""
        with pytest.raises(ConfigurationException) as exc_info:
            Hasher("sha256", hash_size=32, concat_size=60)

        assert exc_info.value.code == ErrorCodes.INVALID_CONFIGURATION
        assert exc_info.value.details["parameter"] == "concat_size"

    def test_hash_size_cannot_exceed_digest(self):
        """N larger than the digest output (in bytes) is rejected."""
        with pytest.raises(ConfigurationException) as exc_info:
            Hasher("sha256", hash_size=33, concat_size=66)

        assert exc_info.value.details["parameter"] == "hash_size"

    def test_hash_size_equal_to_digest_is_allowed(self):
        """N == D is the widest allowed slot."""
        hasher = Hasher("sha1", hash_size=20, concat_size=40)

        assert hasher.hash_size == 20

    @pytest.mark.parametrize("hash_size", [0, -1])
    def test_hash_size_must_be_positive(self, hash_size):
        """N < 1 is rejected."""
        with pytest.raises(ConfigurationException):
            Hasher("sha256", hash_size=hash_size, concat_size=2 * hash_size)

    def test_hash_size_must_be_int(self):
        """Non-integer N is rejected."""
        with pytest.raises(ConfigurationException):
            Hasher("sha256", hash_size="32", concat_size=64)

    def test_variable_length_digest_rejected(self):
        """SHAKE has no fixed output length and cannot be truncated to N."""
        with pytest.raises(ConfigurationException) as exc_info:
            Hasher("shake_256", hash_size=32)

        assert exc_info.value.details["parameter"] == "algorithm"

    def test_unknown_digest_rejected(self):
        """Unknown digest names fail at construction."""
        with pytest.raises(ConfigurationException):
            Hasher("no-such-digest")

    def test_constructor_name(self):
        """A constructor's digest name is used for display."""
        assert Hasher(hashlib.sha512, hash_size=64).name == "sha512"


class TestHash:
    """Tests for Hasher.hash()."""

    def test_full_width_matches_digest(self, hasher):
        """With N == D the output is the plain digest."""
        assert hasher.hash(b"hello") == hashlib.sha256(b"hello").digest()

    def test_truncates_to_hash_size(self):
        """Output is the first N bytes of the digest."""
        hasher = Hasher("sha512", hash_size=16)
        full = hashlib.sha512(b"hello").digest()

        assert hasher.hash(b"hello") == full[:16]
        assert len(hasher.hash(b"hello")) == 16

    def test_deterministic(self, hasher):
        """Same input, same output, across calls."""
        assert hasher.hash(b"data") == hasher.hash(b"data")

    def test_no_state_between_calls(self, hasher):
        """A previous call never influences the next one."""
        hasher.hash(b"first")

        assert hasher.hash(b"") == hashlib.sha256(b"").digest()


class TestConcatHash:
    """Tests for Hasher.concat_hash()."""

    def test_layout(self, hasher):
        """concat_hash(a, b) == hash(a || b)."""
        a = hasher.hash(b"a")
        b = hasher.hash(b"b")

        assert hasher.concat_hash(a, b) == hashlib.sha256(a + b).digest()

    def test_order_matters(self, hasher):
        """Swapping operands changes the result."""
        a = hasher.hash(b"a")
        b = hasher.hash(b"b")

        assert hasher.concat_hash(a, b) != hasher.concat_hash(b, a)

    def test_truncated_layout(self):
        """With N < D the buffer is 2N bytes and the result N bytes."""
        hasher = Hasher("sha256", hash_size=8)
        a = bytes(range(8))
        b = bytes(range(8, 16))

        assert hasher.concat_hash(a, b) == hashlib.sha256(a + b).digest()[:8]

    def test_wrong_width_raises(self, hasher):
        """Inputs must be exactly N bytes."""
        with pytest.raises(ValueError, match="32-byte"):
            hasher.concat_hash(b"short", hasher.hash(b"x"))


class TestTagHash:
    """Tests for tag_hash(), leaf_hash() and node_hash()."""

    def test_tag_constants_distinct(self):
        """Leaf and node tags differ."""
        assert LEAF_TAG != NODE_TAG

    def test_tag_block(self, hasher):
        """Tag block is N copies of the tag byte."""
        assert hasher.tag_block(LEAF_TAG) == b"\x01" * 32
        assert hasher.tag_block(NODE_TAG) == b"\x02" * 32

    def test_tag_hash_composition(self, hasher):
        """tag_hash(t, d) == hash(t * N || hash(d))."""
        data = b"payload"
        expected = hashlib.sha256(b"\x01" * 32 + hashlib.sha256(data).digest()).digest()

        assert hasher.tag_hash(LEAF_TAG, data) == expected

    def test_leaf_hash_is_leaf_tagged(self, hasher):
        """leaf_hash uses LEAF_TAG."""
        assert hasher.leaf_hash(b"x") == hasher.tag_hash(LEAF_TAG, b"x")

    def test_node_hash_composition(self, hasher):
        """node_hash(l, r) == tag_hash(NODE_TAG, concat_hash(l, r))."""
        left = hasher.leaf_hash(b"l")
        right = hasher.leaf_hash(b"r")

        assert hasher.node_hash(left, right) == hasher.tag_hash(
            NODE_TAG, hasher.concat_hash(left, right)
        )

    @pytest.mark.parametrize(
        "payload",
        [b"", b"\x00", b"\x01", b"\x02" * 32, bytes(64), b"leaf", bytes(range(256))],
    )
    def test_domain_separation(self, hasher, payload):
        """The same payload never hashes to the same value as leaf and node."""
        assert hasher.tag_block(LEAF_TAG) != hasher.tag_block(NODE_TAG)
        assert hasher.tag_hash(LEAF_TAG, payload) != hasher.tag_hash(NODE_TAG, payload)

    def test_leaf_cannot_pose_as_node(self, hasher):
        """A leaf built from two concatenated children differs from their parent."""
        left = hasher.leaf_hash(b"a")
        right = hasher.leaf_hash(b"b")

        forged = hasher.leaf_hash(hasher.concat_hash(left, right))

        assert forged != hasher.node_hash(left, right)

    def test_default_hasher(self):
        """DEFAULT_HASHER uses the default parameters."""
        assert DEFAULT_HASHER.name == "sha256"
        assert DEFAULT_HASHER.hash_size == 32


class TestHexHelpers:
    """Tests for to_hex() / from_hex()."""

    def test_to_hex(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_from_hex(self):
        assert from_hex("0x0102") == b"\x01\x02"

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("0102")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0x123")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
