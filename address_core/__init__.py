from .codec import (
    NEUTRON_BECH32_PREFIX,
    AddressCodec,
    AddressError,
    EncodingError,
    InvalidEncodingError,
    InvalidLengthError,
    WrongNetworkError,
)
from .predictor import (
    AddressPredictor,
    InvalidChecksumError,
    InvalidSaltError,
    generate_salt,
    instantiate2_address,
    predict_contract_address,
)

__all__ = [
    "AddressCodec",
    "AddressError",
    "AddressPredictor",
    "EncodingError",
    "InvalidChecksumError",
    "InvalidEncodingError",
    "InvalidLengthError",
    "InvalidSaltError",
    "NEUTRON_BECH32_PREFIX",
    "WrongNetworkError",
    "generate_salt",
    "instantiate2_address",
    "predict_contract_address",
]
