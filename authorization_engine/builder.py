"""Deterministic construction of authorization subroutines."""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import (
    AtomicFunction,
    AuthorizationInfo,
    LibraryFunction,
    MessageDetails,
    ProgramAction,
    Subroutine,
)


class SubroutineBuilder:
    """Accumulates atomic functions in call order.

    The builder does not inspect step content; it only guarantees that the
    built subroutine keeps the order in which steps were added.
    """

    def __init__(self) -> None:
        self._functions: List[AtomicFunction] = []
        self._expiration_time: Optional[int] = None

    def with_function(self, function: AtomicFunction) -> "SubroutineBuilder":
        self._functions.append(function)
        return self

    def add_step(self, contract_address: str, function: LibraryFunction) -> "SubroutineBuilder":
        return self.with_function(
            AtomicFunction(
                contract_address=contract_address,
                message_details=MessageDetails.for_function(function),
            )
        )

    def with_expiration_time(self, seconds: int) -> "SubroutineBuilder":
        self._expiration_time = seconds
        return self

    def build(self) -> Subroutine:
        return Subroutine(
            functions=tuple(self._functions),
            expiration_time=self._expiration_time,
        )


def build_deploy_subroutine(split_library: str, lper_libraries: Sequence[str]) -> Subroutine:
    builder = SubroutineBuilder().add_step(split_library, LibraryFunction.SPLIT)
    for library in lper_libraries:
        builder.add_step(library, LibraryFunction.PROVIDE_DOUBLE_SIDED_LIQUIDITY)
    return builder.build()


def build_withdraw_subroutine(withdraw_libraries: Sequence[str]) -> Subroutine:
    builder = SubroutineBuilder()
    for library in withdraw_libraries:
        builder.add_step(library, LibraryFunction.WITHDRAW_LIQUIDITY)
    return builder.build()


def program_label(label_prefix: str, action: ProgramAction) -> str:
    return f"{label_prefix}_{action.label_suffix}"


def build_program_authorizations(
    label_prefix: str,
    deploy_subroutine: Subroutine,
    withdraw_subroutine: Subroutine,
) -> Tuple[AuthorizationInfo, ...]:
    return (
        AuthorizationInfo(
            label=program_label(label_prefix, ProgramAction.DEPLOY),
            subroutine=deploy_subroutine,
        ),
        AuthorizationInfo(
            label=program_label(label_prefix, ProgramAction.WITHDRAW),
            subroutine=withdraw_subroutine,
        ),
    )


def create_authorizations_message(authorizations: Iterable[AuthorizationInfo]) -> Dict[str, object]:
    return {
        "permissioned_action": {
            "create_authorizations": {
                "authorizations": [authorization.to_dict() for authorization in authorizations],
            }
        }
    }
