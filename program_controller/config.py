"""Process configuration read once from ``LD_TOOL_*`` environment variables."""

from dataclasses import dataclass
from typing import List, Mapping, Optional
import os

from address_core.codec import NEUTRON_BECH32_PREFIX
from node_adapter.neutron.models import NodeSettings


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


_REQUIRED = (
    "LD_TOOL_BASE_ACCOUNT_CODE_ID",
    "LD_TOOL_SPLITER_CODE_ID",
    "LD_TOOL_ASTRO_LPER_CODE_ID",
    "LD_TOOL_ASTRO_WITHDRAW_CODE_ID",
    "LD_TOOL_AUTHORIZATION_CODE_ID",
    "LD_TOOL_PROCESSOR_CODE_ID",
    "LD_TOOL_OPERATOR_ADDRESS",
    "LD_TOOL_OPERATOR_MONIKER",
    "LD_TOOL_DAO_COMMITTEE_ADDRESS",
    "LD_TOOL_NEUTRON_NODE_RPC",
    "LD_TOOL_NEUTRON_NODE_BINARY",
    "LD_TOOL_NEUTRON_CHAIN_ID",
    "LD_TOOL_HOME_DIR",
    "LD_TOOL_GAS_PRICE",
    "LD_TOOL_GAS_ADJUSTMENT",
)


@dataclass(frozen=True)
class ToolConfig:
    base_account_code_id: int
    splitter_code_id: int
    astro_lper_code_id: int
    astro_withdraw_code_id: int
    authorization_code_id: int
    processor_code_id: int
    operator_address: str
    dao_committee_address: str
    node: NodeSettings
    bech32_prefix: str = NEUTRON_BECH32_PREFIX

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "ToolConfig":
        env = os.environ if environ is None else environ
        missing = [name for name in _REQUIRED if not env.get(name)]
        if missing:
            raise ConfigError(
                "Missing required environment variables: " + ", ".join(missing)
            )

        node = NodeSettings(
            binary=env["LD_TOOL_NEUTRON_NODE_BINARY"],
            rpc=env["LD_TOOL_NEUTRON_NODE_RPC"],
            chain_id=env["LD_TOOL_NEUTRON_CHAIN_ID"],
            home=env["LD_TOOL_HOME_DIR"],
            from_key=env["LD_TOOL_OPERATOR_MONIKER"],
            gas_price=env["LD_TOOL_GAS_PRICE"],
            gas_adjustment=env["LD_TOOL_GAS_ADJUSTMENT"],
            admin_address=env["LD_TOOL_DAO_COMMITTEE_ADDRESS"],
            tx_wait_seconds=_parse_float(env, "LD_TOOL_TX_WAIT_SECONDS", 5.0),
            confirm_attempts=_parse_int(env, "LD_TOOL_TX_CONFIRM_ATTEMPTS", 5),
        )
        return ToolConfig(
            base_account_code_id=_parse_int(env, "LD_TOOL_BASE_ACCOUNT_CODE_ID"),
            splitter_code_id=_parse_int(env, "LD_TOOL_SPLITER_CODE_ID"),
            astro_lper_code_id=_parse_int(env, "LD_TOOL_ASTRO_LPER_CODE_ID"),
            astro_withdraw_code_id=_parse_int(env, "LD_TOOL_ASTRO_WITHDRAW_CODE_ID"),
            authorization_code_id=_parse_int(env, "LD_TOOL_AUTHORIZATION_CODE_ID"),
            processor_code_id=_parse_int(env, "LD_TOOL_PROCESSOR_CODE_ID"),
            operator_address=env["LD_TOOL_OPERATOR_ADDRESS"],
            dao_committee_address=env["LD_TOOL_DAO_COMMITTEE_ADDRESS"],
            node=node,
            bech32_prefix=env.get("LD_TOOL_BECH32_PREFIX") or NEUTRON_BECH32_PREFIX,
        )

    def describe(self) -> List[str]:
        """Human-readable summary suitable for logs."""
        return [
            f"operator={self.operator_address}",
            f"dao_committee={self.dao_committee_address}",
            f"chain_id={self.node.chain_id}",
            f"rpc={self.node.rpc}",
        ]


def _parse_int(env: Mapping[str, str], name: str, default: Optional[int] = None) -> int:
    raw = env.get(name)
    if not raw:
        if default is None:
            raise ConfigError(f"{name} environment variable is required")
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"Failed to parse {name}: {raw!r} is not an integer") from exc
    if value < 0:
        raise ConfigError(f"Failed to parse {name}: must be non-negative")
    return value


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"Failed to parse {name}: {raw!r} is not a number") from exc
    if value < 0:
        raise ConfigError(f"Failed to parse {name}: must be non-negative")
    return value
