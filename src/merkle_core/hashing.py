from __future__ import annotations
import binascii
import hashlib
from typing import Optional, Protocol, Union

from .errors import UnsupportedHashAlgorithm
from .settings import settings

LeafValue = Union[bytes, bytearray, memoryview, str]


class HashEngine(Protocol):
    """Anything exposing a fixed-length ``hash(bytes) -> bytes``."""

    def hash(self, data: bytes) -> bytes: ...


class HashlibEngine:
    """HashEngine backed by a fixed-length ``hashlib`` algorithm."""

    def __init__(self, name: str = "sha256"):
        try:
            probe = hashlib.new(name)
        except (ValueError, TypeError) as e:
            raise UnsupportedHashAlgorithm(f"unknown hash algorithm: {name}") from e
        if name.lower().startswith("shake"):
            raise UnsupportedHashAlgorithm(f"variable-length hash not allowed: {name}")
        self.name = probe.name
        self.digest_size = probe.digest_size

    def hash(self, data: bytes) -> bytes:
        return hashlib.new(self.name, data).digest()

    def __repr__(self) -> str:
        return f"HashlibEngine({self.name!r})"


SHA256 = HashlibEngine("sha256")


def engine_for(name: Optional[str] = None) -> HashEngine:
    """Return an engine for ``name``, falling back to the configured default."""
    if name is None:
        name = settings.hash_algorithm
    if name.lower() == "sha256":
        return SHA256
    return HashlibEngine(name)


def to_bytes(value: LeafValue) -> bytes:
    if isinstance(value, str):
        try:
            # undecodable argv bytes arrive as U+DC80..U+DCFF
            return value.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError:
            return value.encode("utf-8", "surrogatepass")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"leaf must be bytes or str, not {type(value).__name__}")


def leaf_hash(engine: HashEngine, value: LeafValue) -> bytes:
    return engine.hash(to_bytes(value))


def node_hash(engine: HashEngine, left: bytes, right: bytes) -> bytes:
    # raw digest bytes, never their hex form
    return engine.hash(left + right)


def padding_digest(engine: HashEngine) -> bytes:
    return engine.hash(b"")


def digest_hex(digest: bytes) -> str:
    return digest.hex()


def parse_digest(text: str) -> bytes:
    """Decode a hex digest with strict validation."""
    try:
        raw = binascii.unhexlify(text.strip())
    except (binascii.Error, ValueError, AttributeError) as e:
        raise ValueError("invalid hex digest") from e
    if not raw:
        raise ValueError("empty digest")
    return raw
