"""Instantiate and execute payloads for the program's contracts."""

from typing import Dict, List, Optional, Sequence

from authorization_engine.models import LIBRARY_ACCOUNT_ADDR

from .models import PoolInfo


def library_account(address: str) -> Dict[str, str]:
    return {LIBRARY_ACCOUNT_ADDR: address}


def base_account_instantiate_msg(admin: str) -> Dict[str, object]:
    return {"admin": admin, "approved_libraries": []}


def processor_instantiate_msg(authorization_contract: str) -> Dict[str, object]:
    return {"authorization_contract": authorization_contract}


def authorization_instantiate_msg(
    owner: str, processor: str, sub_owners: Optional[Sequence[str]] = None
) -> Dict[str, object]:
    return {
        "owner": owner,
        "processor": processor,
        "sub_owners": list(sub_owners or ()),
    }


def splitter_instantiate_msg(
    owner: str,
    processor: str,
    input_account: str,
    pools: Sequence[PoolInfo],
    output_accounts: Sequence[str],
) -> Dict[str, object]:
    """Two fixed-amount native splits per pool, both into that pool's account."""
    if len(pools) != len(output_accounts):
        raise ValueError("Each pool requires exactly one split output account.")

    splits: List[Dict[str, object]] = []
    for pool, output_account in zip(pools, output_accounts):
        splits.append(_fixed_split(pool.denom_a, output_account, pool.amount_a))
        splits.append(_fixed_split(pool.denom_b, output_account, pool.amount_b))

    return _library_instantiate_msg(
        owner,
        processor,
        {"input_addr": library_account(input_account), "splits": splits},
    )


def lper_instantiate_msg(
    owner: str,
    processor: str,
    pool: PoolInfo,
    input_account: str,
    output_account: str,
) -> Dict[str, object]:
    return _library_instantiate_msg(
        owner,
        processor,
        {
            "input_addr": library_account(input_account),
            "output_addr": library_account(output_account),
            "pool_addr": pool.address,
            "lp_config": {
                "pool_type": pool.pool_type.to_dict(),
                "asset_data": _asset_data(pool),
                "max_spread": None,
            },
        },
    )


def withdrawer_instantiate_msg(
    owner: str,
    processor: str,
    pool: PoolInfo,
    input_account: str,
    output_address: str,
) -> Dict[str, object]:
    return _library_instantiate_msg(
        owner,
        processor,
        {
            "input_addr": library_account(input_account),
            "output_addr": library_account(output_address),
            "pool_addr": pool.address,
            "withdrawer_config": {
                "pool_type": pool.pool_type.to_dict(),
                "asset_data": _asset_data(pool),
            },
        },
    )


def approve_library_msg(library: str) -> Dict[str, object]:
    return {"approve_library": {"library": library}}


def transfer_ownership_msg(new_owner: str) -> Dict[str, object]:
    return {"update_ownership": {"transfer_ownership": {"new_owner": new_owner, "expiry": None}}}


def tick_msg() -> Dict[str, object]:
    return {"permissionless_action": {"tick": {}}}


def authorizations_query(start_after: Optional[str] = None, limit: int = 100) -> Dict[str, object]:
    return {"authorizations": {"start_after": start_after, "limit": limit}}


def _library_instantiate_msg(owner: str, processor: str, config: Dict[str, object]) -> Dict[str, object]:
    return {"owner": owner, "processor": processor, "config": config}


def _fixed_split(denom: str, account: str, amount: int) -> Dict[str, object]:
    return {
        "denom": {"native": denom},
        "account": library_account(account),
        "amount": {"fixed_amount": str(amount)},
    }


def _asset_data(pool: PoolInfo) -> Dict[str, str]:
    return {"asset1": pool.denom_a, "asset2": pool.denom_b}
