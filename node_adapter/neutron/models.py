"""Neutron node connection settings and transaction results."""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class NodeSettings:
    binary: str
    rpc: str
    chain_id: str
    home: str
    from_key: str
    gas_price: str
    gas_adjustment: str
    admin_address: str
    tx_wait_seconds: float = 5.0
    confirm_attempts: int = 5


@dataclass(frozen=True)
class EventAttribute:
    key: str
    value: str


@dataclass(frozen=True)
class TxEvent:
    type: str
    attributes: Tuple[EventAttribute, ...]


@dataclass(frozen=True)
class TxResult:
    txhash: str
    height: int
    events: Tuple[TxEvent, ...]

    def attribute_values(self, key: str) -> Tuple[str, ...]:
        return tuple(
            attribute.value
            for event in self.events
            for attribute in event.attributes
            if attribute.key == key
        )

    @staticmethod
    def from_dict(data: Dict[str, object]) -> "TxResult":
        events = tuple(
            TxEvent(
                type=str(event.get("type", "")),
                attributes=tuple(
                    EventAttribute(key=str(attr.get("key", "")), value=str(attr.get("value", "")))
                    for attr in event.get("attributes") or ()
                    if isinstance(attr, dict)
                ),
            )
            for event in data.get("events") or ()
            if isinstance(event, dict)
        )
        return TxResult(
            txhash=str(data.get("txhash", "")),
            height=int(data.get("height") or 0),
            events=events,
        )
