from .client import (
    CONTRACT_ADDRESS_ATTRIBUTE,
    AddressNotFoundError,
    ChainClient,
    NeutronNodeClient,
    NodeError,
    UpstreamFailureError,
    run_command,
)
from .models import EventAttribute, NodeSettings, TxEvent, TxResult

__all__ = [
    "AddressNotFoundError",
    "CONTRACT_ADDRESS_ATTRIBUTE",
    "ChainClient",
    "EventAttribute",
    "NeutronNodeClient",
    "NodeError",
    "NodeSettings",
    "TxEvent",
    "TxResult",
    "UpstreamFailureError",
    "run_command",
]
