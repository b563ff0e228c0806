"""Parsing of authorization records returned by the authorization contract.

Only the skeleton needed to reach each function's message is validated.
Unknown fields are ignored and ``message`` is kept as raw JSON so that new
message shapes never break parsing.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator


class MalformedAuthorizationDataError(ValueError):
    """Raised when authorization data does not have the expected shape."""


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class MessageDetailsRecord(_WireModel):
    message: Any


class FunctionRecord(_WireModel):
    message_details: MessageDetailsRecord


class FunctionListRecord(_WireModel):
    functions: List[FunctionRecord]


class SubroutineRecord(_WireModel):
    atomic: Optional[FunctionListRecord] = None
    non_atomic: Optional[FunctionListRecord] = None

    @model_validator(mode="after")
    def _require_one_kind(self) -> "SubroutineRecord":
        if (self.atomic is None) == (self.non_atomic is None):
            raise ValueError("Subroutine must be exactly one of atomic or non_atomic.")
        return self

    @property
    def functions(self) -> Tuple[FunctionRecord, ...]:
        body = self.atomic if self.atomic is not None else self.non_atomic
        return tuple(body.functions)


class AuthorizationRecord(_WireModel):
    label: str
    subroutine: SubroutineRecord


class AuthorizationsResponse(_WireModel):
    data: List[AuthorizationRecord]


def parse_authorization(payload: Any) -> AuthorizationRecord:
    try:
        return AuthorizationRecord.model_validate(payload)
    except ValidationError as exc:
        raise MalformedAuthorizationDataError(_describe(exc)) from exc


def parse_authorizations(payload: Any) -> Tuple[AuthorizationRecord, ...]:
    """Accepts either a ``{"data": [...]}`` query response or a bare list."""
    if isinstance(payload, list):
        payload = {"data": payload}
    try:
        response = AuthorizationsResponse.model_validate(payload)
    except ValidationError as exc:
        raise MalformedAuthorizationDataError(_describe(exc)) from exc
    return tuple(response.data)


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"Malformed authorization data at {location}: {first['msg']}"
