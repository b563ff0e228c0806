"""Rebuild executable processor messages from a published authorization."""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from .filter import filter_authorizations
from .models import PROCESS_FUNCTION, LibraryFunction, ProcessorMessage, ProgramAction
from .wire import AuthorizationRecord

logger = logging.getLogger(__name__)

_VOCABULARY: Dict[str, LibraryFunction] = {function.value: function for function in LibraryFunction}

_FUNCTION_MESSAGES: Dict[LibraryFunction, Dict[str, object]] = {
    LibraryFunction.SPLIT: {PROCESS_FUNCTION: {"split": {}}},
    LibraryFunction.PROVIDE_DOUBLE_SIDED_LIQUIDITY: {
        PROCESS_FUNCTION: {
            "provide_double_sided_liquidity": {"expected_pool_ratio_range": None},
        }
    },
    LibraryFunction.WITHDRAW_LIQUIDITY: {
        PROCESS_FUNCTION: {
            "withdraw_liquidity": {"expected_pool_ratio_range": None},
        }
    },
}


def extract_function_identifiers(authorization: AuthorizationRecord) -> Tuple[LibraryFunction, ...]:
    identifiers: List[LibraryFunction] = []
    for function in authorization.subroutine.functions:
        identifiers.extend(_identifiers_in_message(function.message_details.message))
    return tuple(identifiers)


def function_message(function: LibraryFunction) -> ProcessorMessage:
    return ProcessorMessage.from_json(_FUNCTION_MESSAGES[function])


def build_execute_messages(authorization: AuthorizationRecord) -> Tuple[ProcessorMessage, ...]:
    return tuple(
        function_message(function) for function in extract_function_identifiers(authorization)
    )


def send_msgs_message(
    label: str,
    messages: Sequence[ProcessorMessage],
    ttl: Optional[Dict[str, int]] = None,
) -> Dict[str, object]:
    return {
        "permissionless_action": {
            "send_msgs": {
                "label": label,
                "messages": [message.to_dict() for message in messages],
                "ttl": ttl,
            }
        }
    }


def plan_send_msgs(
    authorizations: Iterable[AuthorizationRecord], action: ProgramAction
) -> Tuple[Tuple[str, Dict[str, object]], ...]:
    """``(label, send_msgs)`` pairs for every authorization of the given phase.

    Authorizations with no recognised function are left out, since an empty
    batch would be rejected by the authorization contract.
    """
    planned: List[Tuple[str, Dict[str, object]]] = []
    for authorization in filter_authorizations(authorizations, action):
        messages = build_execute_messages(authorization)
        if not messages:
            logger.warning("Authorization %s has no recognised functions", authorization.label)
            continue
        planned.append((authorization.label, send_msgs_message(authorization.label, messages)))
    return tuple(planned)


def _identifiers_in_message(message: Any) -> Iterable[LibraryFunction]:
    if not isinstance(message, dict) or message.get("name") != PROCESS_FUNCTION:
        return
    restrictions = message.get("params_restrictions")
    if not isinstance(restrictions, list):
        return
    for restriction in restrictions:
        if not isinstance(restriction, dict):
            continue
        tokens = restriction.get("must_be_included")
        if not isinstance(tokens, list):
            continue
        for token in tokens:
            if isinstance(token, str) and token in _VOCABULARY:
                yield _VOCABULARY[token]
