"""Bech32 address codec bound to a single network prefix."""

from typing import List, Tuple

from bech32 import CHARSET, bech32_hrp_expand, bech32_polymod, convertbits

NEUTRON_BECH32_PREFIX = "neutron"

_MIN_ADDRESS_LENGTH = 1
_MAX_ADDRESS_LENGTH = 255
_CHECKSUM_LENGTH = 6


class AddressError(ValueError):
    """Base class for address conversion failures."""


class InvalidEncodingError(AddressError):
    """Raised when input is not valid bech32 or hex."""


class WrongNetworkError(AddressError):
    """Raised when an address carries a prefix other than the configured one."""


class InvalidLengthError(AddressError):
    """Raised when a canonical address is outside the accepted byte range."""


class EncodingError(AddressError):
    """Raised when the configured prefix cannot be used for encoding."""


class AddressCodec:
    """Converts between bech32 strings and canonical address bytes."""

    def __init__(self, prefix: str = NEUTRON_BECH32_PREFIX) -> None:
        self._prefix = _checked_prefix(prefix)

    @property
    def prefix(self) -> str:
        return self._prefix

    def canonicalize(self, address: str) -> bytes:
        hrp, data = _decode(address)
        if hrp != self._prefix:
            raise WrongNetworkError(
                f"Wrong bech32 prefix: expected {self._prefix}, got {hrp}."
            )
        decoded = convertbits(data, 5, 8, False)
        if decoded is None:
            raise InvalidEncodingError("Error decoding bech32: invalid padding.")
        canonical = bytes(decoded)
        validate_length(canonical)
        return canonical

    def humanize(self, canonical: bytes) -> str:
        validate_length(canonical)
        data = convertbits(list(canonical), 8, 5, True)
        if data is None:
            raise EncodingError("Bech32 encoding error.")
        combined = data + _create_checksum(self._prefix, data)
        return self._prefix + "1" + "".join(CHARSET[value] for value in combined)


def validate_length(canonical: bytes) -> None:
    if not _MIN_ADDRESS_LENGTH <= len(canonical) <= _MAX_ADDRESS_LENGTH:
        raise InvalidLengthError("Invalid canonical address length.")


def _decode(address: str) -> Tuple[str, List[int]]:
    if not isinstance(address, str) or not address:
        raise InvalidEncodingError("Error decoding bech32: empty input.")
    if any(ord(char) < 33 or ord(char) > 126 for char in address):
        raise InvalidEncodingError("Error decoding bech32: invalid character.")
    if address.lower() != address and address.upper() != address:
        raise InvalidEncodingError("Error decoding bech32: mixed case.")

    lowered = address.lower()
    separator = lowered.rfind("1")
    if separator < 1 or separator + _CHECKSUM_LENGTH + 1 > len(lowered):
        raise InvalidEncodingError("Error decoding bech32: separator misplaced.")

    hrp = lowered[:separator]
    data: List[int] = []
    for char in lowered[separator + 1 :]:
        index = CHARSET.find(char)
        if index < 0:
            raise InvalidEncodingError("Error decoding bech32: invalid data character.")
        data.append(index)

    if bech32_polymod(bech32_hrp_expand(hrp) + data) != 1:
        raise InvalidEncodingError("Error decoding bech32: invalid checksum.")
    return hrp, data[:-_CHECKSUM_LENGTH]


def _checked_prefix(prefix: str) -> str:
    if not 1 <= len(prefix) <= 83:
        raise EncodingError("Invalid bech32 prefix length.")
    if any(ord(char) < 33 or ord(char) > 126 for char in prefix):
        raise EncodingError("Invalid bech32 prefix character.")
    if prefix.lower() != prefix and prefix.upper() != prefix:
        raise EncodingError("Invalid bech32 prefix: mixed case.")
    return prefix.lower()


def _create_checksum(hrp: str, data: List[int]) -> List[int]:
    polymod = bech32_polymod(bech32_hrp_expand(hrp) + data + [0] * _CHECKSUM_LENGTH) ^ 1
    return [(polymod >> 5 * (5 - index)) & 31 for index in range(_CHECKSUM_LENGTH)]
