"""Local-only planning API over the address and authorization core."""

from __future__ import annotations

from typing import Any, List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from address_core.codec import NEUTRON_BECH32_PREFIX, AddressCodec
from address_core.predictor import AddressPredictor, decode_hex
from authorization_engine.builder import (
    build_deploy_subroutine,
    build_program_authorizations,
    build_withdraw_subroutine,
    create_authorizations_message,
)
from authorization_engine.models import ProgramAction
from authorization_engine.reconstructor import plan_send_msgs
from authorization_engine.wire import parse_authorizations

app = FastAPI(title="Liquidity Deployment Tool", description="Local planning API")


class CanonicalizeRequest(BaseModel):
    address: str
    prefix: str = NEUTRON_BECH32_PREFIX


class HumanizeRequest(BaseModel):
    canonical_hex: str
    prefix: str = NEUTRON_BECH32_PREFIX


class PredictRequest(BaseModel):
    creator: str
    salt: str
    code_hash: str
    prefix: str = NEUTRON_BECH32_PREFIX


class PreviewRequest(BaseModel):
    label_prefix: str
    split_library: str
    lper_libraries: List[str]
    withdraw_libraries: List[str]


class MessagesRequest(BaseModel):
    authorizations: Any
    action: str


@app.middleware("http")
async def _local_only(request: Request, call_next):
    client = request.client
    if client is not None:
        host = client.host
        if host not in {"127.0.0.1", "::1", "testclient"}:
            return JSONResponse({"error": "Remote access disabled."}, status_code=403)
    return await call_next(request)


async def _handle_errors(request: Request, exc: Exception):
    return JSONResponse({"error": str(exc)}, status_code=400)


app.add_exception_handler(ValueError, _handle_errors)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.post("/api/address/canonicalize")
async def canonicalize(payload: CanonicalizeRequest):
    canonical = AddressCodec(payload.prefix).canonicalize(payload.address)
    return {"canonical_hex": canonical.hex(), "length": len(canonical)}


@app.post("/api/address/humanize")
async def humanize(payload: HumanizeRequest):
    canonical = decode_hex(payload.canonical_hex, "canonical address")
    return {"address": AddressCodec(payload.prefix).humanize(canonical)}


@app.post("/api/address/predict")
async def predict(payload: PredictRequest):
    predictor = AddressPredictor(AddressCodec(payload.prefix))
    return {"address": predictor.predict(payload.creator, payload.salt, payload.code_hash)}


@app.post("/api/authorizations/preview")
async def preview_authorizations(payload: PreviewRequest):
    if not payload.label_prefix:
        raise ValueError("Label prefix must be non-empty.")
    authorizations = build_program_authorizations(
        payload.label_prefix,
        build_deploy_subroutine(payload.split_library, payload.lper_libraries),
        build_withdraw_subroutine(payload.withdraw_libraries),
    )
    return create_authorizations_message(authorizations)


@app.post("/api/authorizations/messages")
async def authorization_messages(payload: MessagesRequest):
    action = _parse_action(payload.action)
    records = parse_authorizations(payload.authorizations)
    return {
        "action": action.value,
        "messages": [
            {"label": label, "message": message}
            for label, message in plan_send_msgs(records, action)
        ],
    }


def _parse_action(value: str) -> ProgramAction:
    normalized = value.strip().lower()
    for action in ProgramAction:
        if action.value == normalized:
            return action
    raise ValueError(f"Unsupported action: {value}")
