"""Transport tests for the neutrond-backed chain client, without a node."""

import hashlib
import json
import logging
import sys
import unittest
from pathlib import Path

from node_adapter.neutron.client import (
    AddressNotFoundError,
    NeutronNodeClient,
    UpstreamFailureError,
    run_command,
)
from node_adapter.neutron.models import NodeSettings


def _settings(**overrides) -> NodeSettings:
    values = dict(
        binary="neutrond",
        rpc="http://localhost:26657",
        chain_id="pion-1",
        home="/tmp/home",
        from_key="operator",
        gas_price="0.0053untrn",
        gas_adjustment="1.5",
        admin_address="neutron1committee",
        tx_wait_seconds=0.5,
        confirm_attempts=3,
    )
    values.update(overrides)
    return NodeSettings(**values)


def _confirmed(*attributes, code: int = 0) -> str:
    return json.dumps(
        {
            "txhash": "ABC123",
            "height": "42",
            "code": code,
            "raw_log": "out of gas" if code else "",
            "events": [
                {
                    "type": "instantiate",
                    "attributes": [{"key": key, "value": value} for key, value in attributes],
                }
            ],
        }
    )


class ScriptedRunner:
    def __init__(self, *responses) -> None:
        self._responses = list(responses)
        self.calls = []

    def __call__(self, args):
        self.calls.append(list(args))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(args)
        return response


class NeutronNodeClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sleeps = []

    def _client(self, runner, **overrides) -> NeutronNodeClient:
        return NeutronNodeClient(_settings(**overrides), runner=runner, sleep=self.sleeps.append)

    def test_instantiate_returns_contract_address(self) -> None:
        runner = ScriptedRunner(
            json.dumps({"txhash": "ABC123", "code": 0}),
            _confirmed(("_contract_address", "neutron1new"), ("code_id", "7")),
        )
        address = self._client(runner).instantiate(7, {"admin": "x"}, "base_account")

        self.assertEqual(address, "neutron1new")
        submit = runner.calls[0]
        self.assertEqual(submit[:6], ["neutrond", "tx", "wasm", "instantiate", "7", '{"admin":"x"}'])
        self.assertIn("--label", submit)
        self.assertEqual(submit[submit.index("--label") + 1], "base_account")
        self.assertEqual(submit[submit.index("--admin") + 1], "neutron1committee")
        self.assertEqual(submit[-1], "-y")
        self.assertEqual(runner.calls[1][:4], ["neutrond", "q", "tx", "ABC123"])
        self.assertEqual(self.sleeps, [0.5])

    def test_instantiate2_passes_salt(self) -> None:
        runner = ScriptedRunner(
            json.dumps({"txhash": "ABC123"}),
            _confirmed(("_contract_address", "neutron1auth")),
        )
        self._client(runner).instantiate(9, {}, "authorization", salt="67a0b1c2")

        self.assertEqual(
            runner.calls[0][:7],
            ["neutrond", "tx", "wasm", "instantiate2", "9", "{}", "67a0b1c2"],
        )

    def test_missing_address_attribute(self) -> None:
        runner = ScriptedRunner(
            json.dumps({"txhash": "ABC123"}),
            _confirmed(("code_id", "7")),
        )
        with self.assertRaises(AddressNotFoundError):
            self._client(runner).instantiate(7, {}, "base_account")

    def test_confirmation_polls_until_indexed(self) -> None:
        runner = ScriptedRunner(
            json.dumps({"txhash": "ABC123"}),
            UpstreamFailureError("tx not found"),
            UpstreamFailureError("tx not found"),
            _confirmed(("_contract_address", "neutron1late")),
        )
        address = self._client(runner).instantiate(7, {}, "base_account")

        self.assertEqual(address, "neutron1late")
        self.assertEqual(len(self.sleeps), 3)

    def test_pending_confirmation_is_not_logged_as_error(self) -> None:
        runner = ScriptedRunner(
            json.dumps({"txhash": "ABC123"}),
            UpstreamFailureError("tx not found"),
            _confirmed(("_contract_address", "neutron1late")),
        )
        with self.assertLogs("node_adapter.neutron.client", level="DEBUG") as logs:
            self._client(runner).instantiate(7, {}, "base_account")

        self.assertFalse([record for record in logs.records if record.levelno >= logging.ERROR])

    def test_failed_command_is_logged_at_debug(self) -> None:
        with self.assertLogs("node_adapter.neutron.client", level="DEBUG") as logs:
            with self.assertRaises(UpstreamFailureError) as ctx:
                run_command([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"])

        self.assertIn("status 3", str(ctx.exception))
        self.assertIn("boom", str(ctx.exception))
        self.assertFalse([record for record in logs.records if record.levelno >= logging.ERROR])

    def test_confirmation_gives_up(self) -> None:
        runner = ScriptedRunner(
            json.dumps({"txhash": "ABC123"}),
            UpstreamFailureError("tx not found"),
            UpstreamFailureError("tx not found"),
            UpstreamFailureError("tx not found"),
        )
        with self.assertLogs("node_adapter.neutron.client", level="ERROR"):
            with self.assertRaises(UpstreamFailureError):
                self._client(runner).execute("neutron1contract", {"tick": {}})
        self.assertEqual(len(self.sleeps), 3)

    def test_rejected_broadcast_is_upstream_failure(self) -> None:
        runner = ScriptedRunner(json.dumps({"txhash": "ABC123", "code": 5, "raw_log": "insufficient funds"}))
        with self.assertRaises(UpstreamFailureError):
            self._client(runner).execute("neutron1contract", {"tick": {}})
        self.assertEqual(self.sleeps, [])

    def test_failed_delivery_is_upstream_failure(self) -> None:
        runner = ScriptedRunner(json.dumps({"txhash": "ABC123"}), _confirmed(code=11))
        with self.assertRaises(UpstreamFailureError):
            self._client(runner).execute("neutron1contract", {"tick": {}})

    def test_non_json_output_is_upstream_failure(self) -> None:
        runner = ScriptedRunner("gas estimate: 1000")
        with self.assertRaises(UpstreamFailureError):
            self._client(runner).execute("neutron1contract", {"tick": {}})

    def test_execute_exposes_events(self) -> None:
        runner = ScriptedRunner(
            json.dumps({"txhash": "ABC123"}),
            _confirmed(("action", "tick")),
        )
        result = self._client(runner).execute("neutron1contract", {"permissionless_action": {"tick": {}}})

        self.assertEqual(result.txhash, "ABC123")
        self.assertEqual(result.height, 42)
        self.assertEqual(result.attribute_values("action"), ("tick",))
        self.assertEqual(
            runner.calls[0][4:6],
            ["neutron1contract", '{"permissionless_action":{"tick":{}}}'],
        )

    def test_query_smart_decodes_response(self) -> None:
        runner = ScriptedRunner(json.dumps({"data": []}))
        payload = self._client(runner).query_smart("neutron1auth", {"authorizations": {"limit": 100}})

        self.assertEqual(payload, {"data": []})
        self.assertEqual(runner.calls[0][:6], ["neutrond", "q", "wasm", "contract-state", "smart", "neutron1auth"])
        self.assertEqual(self.sleeps, [])

    def test_code_hash_is_sha256_of_download(self) -> None:
        wasm = b"\x00asm\x01\x00\x00\x00"

        def download(args):
            Path(args[5]).write_bytes(wasm)
            return ""

        runner = ScriptedRunner(download)
        digest = self._client(runner).code_hash(12)

        self.assertEqual(digest, hashlib.sha256(wasm).hexdigest())
        self.assertFalse(Path(runner.calls[0][5]).exists())

    def test_code_hash_without_download_fails(self) -> None:
        runner = ScriptedRunner("")
        with self.assertRaises(UpstreamFailureError):
            self._client(runner).code_hash(12)


if __name__ == "__main__":
    unittest.main()
