"""Deterministic contract address prediction for CosmWasm instantiate2.

The address of a contract created with ``instantiate2`` depends only on the
creator, the code checksum and a caller-chosen salt:

    key = b"wasm\\0"
          || len(checksum) || checksum
          || len(creator)  || creator
          || len(salt)     || salt
          || len(msg)      || msg        (msg is always empty here)
    address = sha256(sha256(b"module") || key)

Lengths are unsigned 64-bit big-endian integers. Predicting the address lets
a contract be configured with the address of another contract that has not
been created yet, as long as the same salt is used for the real deployment.
"""

from datetime import datetime, timezone
from typing import Callable, Optional
import hashlib

from .codec import AddressCodec, AddressError, InvalidEncodingError

_CHECKSUM_LENGTH = 32
_MIN_SALT_LENGTH = 1
_MAX_SALT_LENGTH = 64


class InvalidSaltError(AddressError):
    """Raised when a salt is empty or longer than 64 bytes."""


class InvalidChecksumError(AddressError):
    """Raised when a code checksum is not a 32-byte digest."""


def instantiate2_address(checksum: bytes, creator: bytes, salt: bytes) -> bytes:
    if len(checksum) != _CHECKSUM_LENGTH:
        raise InvalidChecksumError("Code checksum must be 32 bytes.")
    if not _MIN_SALT_LENGTH <= len(salt) <= _MAX_SALT_LENGTH:
        raise InvalidSaltError("Salt must be between 1 and 64 bytes.")

    key = b"".join(
        (
            b"wasm\x00",
            _length_prefixed(checksum),
            _length_prefixed(creator),
            _length_prefixed(salt),
            _length_prefixed(b""),
        )
    )
    return _module_hash("module", key)


class AddressPredictor:
    """Predicts bech32 addresses of contracts that do not exist yet."""

    def __init__(self, codec: Optional[AddressCodec] = None) -> None:
        self._codec = codec or AddressCodec()

    def predict(self, creator: str, salt: str, code_hash: str) -> str:
        creator_canonical = self._codec.canonicalize(creator)
        checksum = decode_hex(code_hash, "code hash")
        salt_bytes = decode_hex(salt, "salt")
        predicted = instantiate2_address(checksum, creator_canonical, salt_bytes)
        return self._codec.humanize(predicted)


def predict_contract_address(
    creator: str,
    salt: str,
    code_hash: str,
    codec: Optional[AddressCodec] = None,
) -> str:
    return AddressPredictor(codec).predict(creator, salt, code_hash)


def generate_salt(clock: Optional[Callable[[], datetime]] = None) -> str:
    """Hex-encoded Unix timestamp, padded to whole bytes."""
    now = (clock or _utc_now)()
    encoded = format(int(now.timestamp()), "x")
    if len(encoded) % 2:
        encoded = "0" + encoded
    return encoded


def decode_hex(value: str, field: str = "value") -> bytes:
    try:
        return bytes.fromhex(value)
    except (TypeError, ValueError) as exc:
        raise InvalidEncodingError(f"Invalid hex encoding for {field}.") from exc


def _length_prefixed(data: bytes) -> bytes:
    return len(data).to_bytes(8, "big") + data


def _module_hash(module_type: str, key: bytes) -> bytes:
    inner = hashlib.sha256(module_type.encode("ascii")).digest()
    return hashlib.sha256(inner + key).digest()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
