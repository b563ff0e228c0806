"""Operator CLI for the liquidity deployment tool."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from address_core.codec import AddressCodec
from address_core.predictor import AddressPredictor
from authorization_engine.models import ProgramAction
from node_adapter.neutron.client import ChainClient, NeutronNodeClient, NodeError
from program_controller.config import ToolConfig
from program_controller.controller import PredictionMismatchError, ProgramController
from program_controller.models import PoolInfo

logger = logging.getLogger(__name__)


class _Runtime:
    """Loads configuration and the node client only when a command needs them."""

    def __init__(self, config: Optional[ToolConfig], client: Optional[ChainClient]) -> None:
        self._config = config
        self._client = client

    @property
    def config(self) -> ToolConfig:
        if self._config is None:
            self._config = ToolConfig.from_env()
            for line in self._config.describe():
                logger.debug("config %s", line)
        return self._config

    @property
    def client(self) -> ChainClient:
        if self._client is None:
            self._client = NeutronNodeClient(self.config.node)
        return self._client

    def controller(self) -> ProgramController:
        return ProgramController(self.config, self.client)


def main(
    argv: Optional[List[str]] = None,
    config: Optional[ToolConfig] = None,
    client: Optional[ChainClient] = None,
) -> int:
    parser = argparse.ArgumentParser(prog="liquidity-deployment-tool")
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser("create-program")
    create_parser.add_argument("--label-prefix", required=True)
    create_parser.add_argument(
        "--pools",
        action="append",
        required=True,
        help="address,amount_a,amount_b,denom_a,denom_b[,pool_type]",
    )
    create_parser.set_defaults(func=_create_program)

    execute_parser = subparsers.add_parser("execute-program")
    execute_parser.add_argument("--auth-contract-address", required=True)
    execute_parser.add_argument(
        "--action",
        required=True,
        choices=[action.value for action in ProgramAction],
    )
    execute_parser.set_defaults(func=_execute_program)

    tick_parser = subparsers.add_parser("tick-processor")
    tick_parser.add_argument("--processor-contract-address", required=True)
    tick_parser.set_defaults(func=_tick_processor)

    predict_parser = subparsers.add_parser("predict-address")
    predict_parser.add_argument("--creator", required=True)
    predict_parser.add_argument("--salt", required=True)
    code_group = predict_parser.add_mutually_exclusive_group(required=True)
    code_group.add_argument("--code-hash")
    code_group.add_argument("--code-id", type=int)
    predict_parser.set_defaults(func=_predict_address)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    runtime = _Runtime(config, client)
    try:
        return args.func(args, runtime)
    except (ValueError, NodeError, PredictionMismatchError) as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2


def _create_program(args: argparse.Namespace, runtime: _Runtime) -> int:
    pools = [PoolInfo.parse(raw) for raw in args.pools]
    deployment = runtime.controller().create_program(args.label_prefix, pools)
    print(json.dumps(deployment.to_dict(), indent=2))
    return 0


def _execute_program(args: argparse.Namespace, runtime: _Runtime) -> int:
    action = ProgramAction(args.action)
    executed = runtime.controller().execute_program(args.auth_contract_address, action)
    print(
        json.dumps(
            {
                "authorization_contract": args.auth_contract_address,
                "action": action.value,
                "executed": list(executed),
            },
            indent=2,
        )
    )
    return 0


def _tick_processor(args: argparse.Namespace, runtime: _Runtime) -> int:
    runtime.controller().tick_processor(args.processor_contract_address)
    print(json.dumps({"processor": args.processor_contract_address, "ticked": True}, indent=2))
    return 0


def _predict_address(args: argparse.Namespace, runtime: _Runtime) -> int:
    if args.code_hash is not None:
        code_hash = args.code_hash
        codec = AddressCodec()
    else:
        code_hash = runtime.client.code_hash(args.code_id)
        codec = AddressCodec(runtime.config.bech32_prefix)
    address = AddressPredictor(codec).predict(args.creator, args.salt, code_hash)
    print(
        json.dumps(
            {
                "address": address,
                "creator": args.creator,
                "salt": args.salt,
                "code_hash": code_hash,
            },
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
