"""Submit, confirm and query CosmWasm transactions through the node binary."""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence
import hashlib
import json
import logging
import shlex
import subprocess
import tempfile
import time

from .models import NodeSettings, TxResult

logger = logging.getLogger(__name__)

CONTRACT_ADDRESS_ATTRIBUTE = "_contract_address"

Runner = Callable[[Sequence[str]], str]


class NodeError(RuntimeError):
    """Base class for failures reported by the node transport."""


class UpstreamFailureError(NodeError):
    """Raised when the node binary or the chain reports a failure."""


class AddressNotFoundError(NodeError):
    """Raised when a confirmed instantiation carries no contract address."""


class ChainClient(Protocol):
    def execute(self, contract_address: str, msg: Dict[str, Any]) -> TxResult:
        ...

    def instantiate(
        self,
        code_id: int,
        msg: Dict[str, Any],
        label: str,
        salt: Optional[str] = None,
    ) -> str:
        ...

    def query_smart(self, contract_address: str, query: Dict[str, Any]) -> Any:
        ...

    def code_hash(self, code_id: int) -> str:
        ...


class NeutronNodeClient:
    """Chain client backed by the ``neutrond`` command line."""

    def __init__(
        self,
        settings: NodeSettings,
        runner: Optional[Runner] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._settings = settings
        self._runner = runner or run_command
        self._sleep = sleep or time.sleep

    def execute(self, contract_address: str, msg: Dict[str, Any]) -> TxResult:
        args = [
            self._settings.binary,
            "tx",
            "wasm",
            "execute",
            contract_address,
            _to_json(msg),
            *tx_flags(self._settings),
        ]
        logger.info("Executing contract %s", contract_address)
        return self._submit_and_confirm(args)

    def instantiate(
        self,
        code_id: int,
        msg: Dict[str, Any],
        label: str,
        salt: Optional[str] = None,
    ) -> str:
        if salt is None:
            args = [self._settings.binary, "tx", "wasm", "instantiate", str(code_id), _to_json(msg)]
        else:
            args = [
                self._settings.binary,
                "tx",
                "wasm",
                "instantiate2",
                str(code_id),
                _to_json(msg),
                salt,
            ]
        args.extend(instantiate_flags(self._settings, label))
        args.extend(tx_flags(self._settings))
        logger.info("Instantiating code %s with label %s", code_id, label)

        result = self._submit_and_confirm(args)
        addresses = result.attribute_values(CONTRACT_ADDRESS_ATTRIBUTE)
        if not addresses:
            raise AddressNotFoundError(
                f"Contract address not found in events of transaction {result.txhash}."
            )
        logger.info("Instantiated %s at %s", label, addresses[0])
        return addresses[0]

    def query_smart(self, contract_address: str, query: Dict[str, Any]) -> Any:
        args = [
            self._settings.binary,
            "q",
            "wasm",
            "contract-state",
            "smart",
            contract_address,
            _to_json(query),
            *query_flags(self._settings),
        ]
        return _parse_json(self._runner(args))

    def code_hash(self, code_id: int) -> str:
        with tempfile.TemporaryDirectory() as workdir:
            target = Path(workdir) / f"wasm_code_{code_id}.wasm"
            args = [
                self._settings.binary,
                "q",
                "wasm",
                "code",
                str(code_id),
                str(target),
                *query_flags(self._settings),
            ]
            self._runner(args)
            try:
                wasm_bytes = target.read_bytes()
            except OSError as exc:
                raise UpstreamFailureError(f"Code {code_id} was not downloaded.") from exc
        return hashlib.sha256(wasm_bytes).hexdigest()

    def _submit_and_confirm(self, args: List[str]) -> TxResult:
        broadcast = _parse_object(self._runner(args))
        _raise_for_code(broadcast)
        txhash = broadcast.get("txhash")
        if not isinstance(txhash, str) or not txhash:
            raise UpstreamFailureError("Failed to extract txhash from broadcast output.")
        logger.debug("Broadcast transaction %s", txhash)

        confirmed = self._wait_for_tx(txhash)
        _raise_for_code(confirmed)
        return TxResult.from_dict(confirmed)

    def _wait_for_tx(self, txhash: str) -> Dict[str, Any]:
        args = [
            self._settings.binary,
            "q",
            "tx",
            txhash,
            "--node",
            self._settings.rpc,
            "--output",
            "json",
        ]
        last_error: Optional[UpstreamFailureError] = None
        for attempt in range(1, max(self._settings.confirm_attempts, 1) + 1):
            self._sleep(self._settings.tx_wait_seconds)
            try:
                return _parse_object(self._runner(args))
            except UpstreamFailureError as exc:
                logger.debug("Transaction %s not yet indexed (attempt %d)", txhash, attempt)
                last_error = exc
        logger.error("Transaction %s not confirmed", txhash)
        raise UpstreamFailureError(
            f"Transaction {txhash} not confirmed after {self._settings.confirm_attempts} attempts."
        ) from last_error


def tx_flags(settings: NodeSettings) -> List[str]:
    return [
        "--from",
        settings.from_key,
        "--gas",
        "auto",
        "--gas-adjustment",
        settings.gas_adjustment,
        "--gas-prices",
        settings.gas_price,
        "--chain-id",
        settings.chain_id,
        "--keyring-backend",
        "test",
        "--output",
        "json",
        "--home",
        settings.home,
        "--node",
        settings.rpc,
        "-y",
    ]


def query_flags(settings: NodeSettings) -> List[str]:
    return ["--chain-id", settings.chain_id, "--node", settings.rpc, "--output", "json"]


def instantiate_flags(settings: NodeSettings, label: str) -> List[str]:
    return ["--admin", settings.admin_address, "--label", label]


def run_command(args: Sequence[str]) -> str:
    logger.debug("Running %s", shlex.join(args))
    try:
        completed = subprocess.run(args, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise UpstreamFailureError(f"Failed to execute command: {exc}") from exc
    if completed.returncode != 0:
        logger.debug("Command exited with status %d: %s", completed.returncode, shlex.join(args))
        raise UpstreamFailureError(
            f"Command failed with status {completed.returncode}\nstderr: {completed.stderr.strip()}"
        )
    return completed.stdout


def _raise_for_code(payload: Dict[str, Any]) -> None:
    code = payload.get("code", 0)
    if code:
        raw_log = payload.get("raw_log", "")
        raise UpstreamFailureError(f"Transaction failed with code {code}: {raw_log}")


def _parse_json(output: str) -> Any:
    try:
        return json.loads(output)
    except (TypeError, ValueError) as exc:
        raise UpstreamFailureError("Node returned output that is not JSON.") from exc


def _parse_object(output: str) -> Dict[str, Any]:
    payload = _parse_json(output)
    if not isinstance(payload, dict):
        raise UpstreamFailureError("Node returned an unexpected JSON shape.")
    return payload


def _to_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"))
