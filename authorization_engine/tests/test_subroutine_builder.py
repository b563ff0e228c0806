"""Ordering and determinism tests for subroutine construction."""

import json
import unittest

from authorization_engine.builder import (
    SubroutineBuilder,
    build_deploy_subroutine,
    build_program_authorizations,
    build_withdraw_subroutine,
    create_authorizations_message,
)
from authorization_engine.models import AtomicFunction, LibraryFunction, MessageDetails, MustBeIncluded


def _functions_of(subroutine):
    return [
        (
            function.contract_address,
            function.message_details.params_restrictions[0].tokens[1],
        )
        for function in subroutine.functions
    ]


class SubroutineBuilderTests(unittest.TestCase):
    def test_deploy_shape_split_then_lp_per_pool(self) -> None:
        subroutine = build_deploy_subroutine("splitter", ["lper-1", "lper-2"])

        self.assertEqual(
            _functions_of(subroutine),
            [
                ("splitter", "split"),
                ("lper-1", "provide_double_sided_liquidity"),
                ("lper-2", "provide_double_sided_liquidity"),
            ],
        )

    def test_withdraw_shape_one_step_per_pool(self) -> None:
        subroutine = build_withdraw_subroutine(["withdraw-1", "withdraw-2"])

        self.assertEqual(
            _functions_of(subroutine),
            [
                ("withdraw-1", "withdraw_liquidity"),
                ("withdraw-2", "withdraw_liquidity"),
            ],
        )

    def test_restriction_names_dispatch_envelope(self) -> None:
        details = MessageDetails.for_function(LibraryFunction.SPLIT)

        self.assertEqual(details.name, "process_function")
        self.assertEqual(
            details.to_dict(),
            {
                "message_type": "cosmwasm_execute_msg",
                "message": {
                    "name": "process_function",
                    "params_restrictions": [
                        {"must_be_included": ["process_function", "split"]},
                    ],
                },
            },
        )

    def test_same_input_same_bytes(self) -> None:
        first = build_deploy_subroutine("splitter", ["lper-1", "lper-2"])
        second = build_deploy_subroutine("splitter", ["lper-1", "lper-2"])

        self.assertEqual(first, second)
        self.assertEqual(
            json.dumps(first.to_dict(), separators=(",", ":")),
            json.dumps(second.to_dict(), separators=(",", ":")),
        )

    def test_built_subroutine_is_immutable(self) -> None:
        builder = SubroutineBuilder().add_step("a", LibraryFunction.SPLIT)
        subroutine = builder.build()
        builder.add_step("b", LibraryFunction.SPLIT)

        self.assertEqual(len(subroutine.functions), 1)
        self.assertIsInstance(subroutine.functions, tuple)

    def test_builder_does_not_validate_content(self) -> None:
        details = MessageDetails(name="anything", params_restrictions=(MustBeIncluded(("x",)),))
        custom = AtomicFunction("c", details)
        subroutine = (
            SubroutineBuilder()
            .add_step("a", LibraryFunction.WITHDRAW_LIQUIDITY)
            .with_function(custom)
            .add_step("b", LibraryFunction.SPLIT)
            .build()
        )

        self.assertEqual(len(subroutine.functions), 3)
        self.assertIs(subroutine.functions[1], custom)
        wire = subroutine.to_dict()["atomic"]["functions"][1]
        self.assertEqual(wire, custom.to_dict())
        self.assertEqual(wire["contract_address"], {"|library_account_addr|": "c"})
        self.assertEqual(
            wire["message_details"]["message"],
            {"name": "anything", "params_restrictions": [{"must_be_included": ["x"]}]},
        )

    def test_atomic_wire_layout(self) -> None:
        payload = build_withdraw_subroutine(["neutron1lib"]).to_dict()
        function = payload["atomic"]["functions"][0]

        self.assertEqual(function["domain"], "main")
        self.assertEqual(function["contract_address"], {"|library_account_addr|": "neutron1lib"})
        self.assertIsNone(payload["atomic"]["retry_logic"])
        self.assertIsNone(payload["atomic"]["expiration_time"])

    def test_program_authorizations_are_labelled_by_phase(self) -> None:
        authorizations = build_program_authorizations(
            "prog",
            build_deploy_subroutine("splitter", ["lper"]),
            build_withdraw_subroutine(["withdraw"]),
        )
        message = create_authorizations_message(authorizations)
        created = message["permissioned_action"]["create_authorizations"]["authorizations"]

        self.assertEqual([item["label"] for item in created], ["prog_deploy", "prog_withdraw"])
        self.assertEqual(created[0]["mode"], "permissionless")
        self.assertEqual(created[0]["not_before"], "never")
        self.assertEqual(created[0]["duration"], "forever")


if __name__ == "__main__":
    unittest.main()
