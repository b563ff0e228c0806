"""Pool descriptions and program deployment records."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class PoolParseError(ValueError):
    """Raised when a pool description cannot be parsed."""


class LpToken(Enum):
    CW20 = "cw20"
    NATIVE = "native"


_STANDARD_PAIR_TYPES = ("xyk", "stable")


@dataclass(frozen=True)
class PoolType:
    """Astroport pool flavour: LP token kind and pricing curve."""

    lp_token: LpToken = LpToken.CW20
    pair_type: str = "xyk"

    @staticmethod
    def parse(value: str) -> "PoolType":
        parts = value.strip().split(":", 1)
        try:
            lp_token = LpToken(parts[0].lower())
        except ValueError as exc:
            raise PoolParseError(f"Unknown LP token kind: {parts[0]!r}") from exc
        if len(parts) == 1:
            return PoolType(lp_token=lp_token)

        # custom pair names are matched on chain as given
        keyword, separator, name = parts[1].partition(":")
        if keyword.lower() == "custom" and separator:
            if not name:
                raise PoolParseError("Custom pair type requires a name.")
            return PoolType(lp_token=lp_token, pair_type=f"custom:{name}")

        pair_type = parts[1].lower()
        if pair_type not in _STANDARD_PAIR_TYPES:
            raise PoolParseError(f"Unknown pair type: {parts[1]!r}")
        return PoolType(lp_token=lp_token, pair_type=pair_type)

    def to_dict(self) -> Dict[str, object]:
        if self.pair_type.startswith("custom:"):
            pair: object = {"custom": self.pair_type[len("custom:") :]}
        else:
            pair = {self.pair_type: {}}
        token_key = "cw20_lp_token" if self.lp_token == LpToken.CW20 else "native_lp_token"
        return {token_key: pair}

    def to_string(self) -> str:
        return f"{self.lp_token.value}:{self.pair_type}"


@dataclass(frozen=True)
class PoolInfo:
    address: str
    amount_a: int
    amount_b: int
    denom_a: str
    denom_b: str
    pool_type: PoolType = PoolType()

    @staticmethod
    def parse(value: str) -> "PoolInfo":
        """Parse ``address,amount_a,amount_b,denom_a,denom_b[,pool_type]``."""
        parts = [part.strip() for part in value.split(",")]
        if len(parts) not in (5, 6):
            raise PoolParseError(
                "Invalid format. Expected: address,amount_a,amount_b,denom_a,denom_b[,pool_type]"
            )
        address, amount_a, amount_b, denom_a, denom_b = parts[:5]
        if not address or not denom_a or not denom_b:
            raise PoolParseError("Pool address and denoms must be non-empty.")
        pool_type = PoolType.parse(parts[5]) if len(parts) == 6 else PoolType()
        return PoolInfo(
            address=address,
            amount_a=_parse_amount(amount_a, "amount_a"),
            amount_b=_parse_amount(amount_b, "amount_b"),
            denom_a=denom_a,
            denom_b=denom_b,
            pool_type=pool_type,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "address": self.address,
            "amount_a": str(self.amount_a),
            "amount_b": str(self.amount_b),
            "denom_a": self.denom_a,
            "denom_b": self.denom_b,
            "pool_type": self.pool_type.to_string(),
        }


@dataclass(frozen=True)
class PoolLibraries:
    pool_address: str
    split_output_account: str
    liquidity_output_account: str
    withdrawal_account: str
    lper_library: str
    withdraw_library: str


@dataclass(frozen=True)
class ProgramDeployment:
    label_prefix: str
    authorization_address: str
    processor_address: str
    authorization_salt: str
    input_account: str
    splitter_library: str
    pools: Tuple[PoolLibraries, ...]

    @property
    def split_output_accounts(self) -> Tuple[str, ...]:
        return tuple(pool.split_output_account for pool in self.pools)

    @property
    def liquidity_output_accounts(self) -> Tuple[str, ...]:
        return tuple(pool.liquidity_output_account for pool in self.pools)

    @property
    def withdrawal_accounts(self) -> Tuple[str, ...]:
        return tuple(pool.withdrawal_account for pool in self.pools)

    @property
    def lper_libraries(self) -> Tuple[str, ...]:
        return tuple(pool.lper_library for pool in self.pools)

    @property
    def withdraw_libraries(self) -> Tuple[str, ...]:
        return tuple(pool.withdraw_library for pool in self.pools)

    def to_dict(self) -> Dict[str, object]:
        return {
            "label_prefix": self.label_prefix,
            "authorization_address": self.authorization_address,
            "processor_address": self.processor_address,
            "authorization_salt": self.authorization_salt,
            "input_account": self.input_account,
            "splitter_library": self.splitter_library,
            "pools": [
                {
                    "pool_address": pool.pool_address,
                    "split_output_account": pool.split_output_account,
                    "liquidity_output_account": pool.liquidity_output_account,
                    "withdrawal_account": pool.withdrawal_account,
                    "lper_library": pool.lper_library,
                    "withdraw_library": pool.withdraw_library,
                }
                for pool in self.pools
            ],
        }


def _parse_amount(raw: str, field: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise PoolParseError(f"Invalid {field} format") from exc
    if value < 0 or value >= 2**128:
        raise PoolParseError(f"Invalid {field} format")
    return value
