"""Domain models for authorization subroutines and processor messages."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple
import base64
import json

PROCESS_FUNCTION = "process_function"
LIBRARY_ACCOUNT_ADDR = "|library_account_addr|"


class LibraryFunction(Enum):
    SPLIT = "split"
    PROVIDE_DOUBLE_SIDED_LIQUIDITY = "provide_double_sided_liquidity"
    WITHDRAW_LIQUIDITY = "withdraw_liquidity"


class ProgramAction(Enum):
    DEPLOY = "deploy"
    WITHDRAW = "withdraw"

    @property
    def label_suffix(self) -> str:
        return self.value


@dataclass(frozen=True)
class MustBeIncluded:
    """Restriction: the message must contain this nested key path."""

    tokens: Tuple[str, ...]

    def to_dict(self) -> Dict[str, object]:
        return {"must_be_included": list(self.tokens)}


@dataclass(frozen=True)
class MessageDetails:
    name: str
    params_restrictions: Tuple[MustBeIncluded, ...] = ()
    message_type: str = "cosmwasm_execute_msg"

    @staticmethod
    def for_function(function: LibraryFunction) -> "MessageDetails":
        return MessageDetails(
            name=PROCESS_FUNCTION,
            params_restrictions=(MustBeIncluded(tokens=(PROCESS_FUNCTION, function.value)),),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "message_type": self.message_type,
            "message": {
                "name": self.name,
                "params_restrictions": [
                    restriction.to_dict() for restriction in self.params_restrictions
                ],
            },
        }


@dataclass(frozen=True)
class AtomicFunction:
    contract_address: str
    message_details: MessageDetails
    domain: str = "main"

    def to_dict(self) -> Dict[str, object]:
        return {
            "domain": self.domain,
            "message_details": self.message_details.to_dict(),
            "contract_address": {LIBRARY_ACCOUNT_ADDR: self.contract_address},
        }


@dataclass(frozen=True)
class Subroutine:
    """Ordered functions that execute atomically."""

    functions: Tuple[AtomicFunction, ...]
    expiration_time: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "atomic": {
                "functions": [function.to_dict() for function in self.functions],
                "retry_logic": None,
                "expiration_time": self.expiration_time,
            }
        }


@dataclass(frozen=True)
class AuthorizationInfo:
    label: str
    subroutine: Subroutine
    mode: str = "permissionless"
    max_concurrent_executions: Optional[int] = None
    priority: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "label": self.label,
            "mode": self.mode,
            "not_before": "never",
            "duration": "forever",
            "max_concurrent_executions": self.max_concurrent_executions,
            "subroutine": self.subroutine.to_dict(),
            "priority": self.priority,
        }


@dataclass(frozen=True)
class ProcessorMessage:
    """A wasm execute message queued through the authorization contract."""

    msg: bytes

    @staticmethod
    def from_json(payload: Dict[str, object]) -> "ProcessorMessage":
        return ProcessorMessage(msg=to_json_bytes(payload))

    def to_dict(self) -> Dict[str, object]:
        return {
            "cosmwasm_execute_msg": {
                "msg": base64.b64encode(self.msg).decode("ascii"),
            }
        }


def to_json_bytes(payload: object) -> bytes:
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")
