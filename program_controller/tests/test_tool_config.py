import unittest

from program_controller.config import ConfigError, ToolConfig


def _environ(**overrides):
    env = {
        "LD_TOOL_BASE_ACCOUNT_CODE_ID": "1",
        "LD_TOOL_SPLITER_CODE_ID": "2",
        "LD_TOOL_ASTRO_LPER_CODE_ID": "3",
        "LD_TOOL_ASTRO_WITHDRAW_CODE_ID": "4",
        "LD_TOOL_AUTHORIZATION_CODE_ID": "5",
        "LD_TOOL_PROCESSOR_CODE_ID": "6",
        "LD_TOOL_OPERATOR_ADDRESS": "neutron1operator",
        "LD_TOOL_OPERATOR_MONIKER": "operator",
        "LD_TOOL_DAO_COMMITTEE_ADDRESS": "neutron1committee",
        "LD_TOOL_NEUTRON_NODE_RPC": "http://localhost:26657",
        "LD_TOOL_NEUTRON_NODE_BINARY": "neutrond",
        "LD_TOOL_NEUTRON_CHAIN_ID": "pion-1",
        "LD_TOOL_HOME_DIR": "/tmp/home",
        "LD_TOOL_GAS_PRICE": "0.0053untrn",
        "LD_TOOL_GAS_ADJUSTMENT": "1.5",
    }
    env.update(overrides)
    return env


class ToolConfigTests(unittest.TestCase):
    def test_reads_every_field(self) -> None:
        config = ToolConfig.from_env(_environ())

        self.assertEqual(config.base_account_code_id, 1)
        self.assertEqual(config.splitter_code_id, 2)
        self.assertEqual(config.astro_lper_code_id, 3)
        self.assertEqual(config.astro_withdraw_code_id, 4)
        self.assertEqual(config.authorization_code_id, 5)
        self.assertEqual(config.processor_code_id, 6)
        self.assertEqual(config.operator_address, "neutron1operator")
        self.assertEqual(config.dao_committee_address, "neutron1committee")
        self.assertEqual(config.bech32_prefix, "neutron")
        self.assertEqual(config.node.binary, "neutrond")
        self.assertEqual(config.node.from_key, "operator")
        self.assertEqual(config.node.admin_address, "neutron1committee")
        self.assertEqual(config.node.tx_wait_seconds, 5.0)
        self.assertEqual(config.node.confirm_attempts, 5)

    def test_optional_overrides(self) -> None:
        config = ToolConfig.from_env(
            _environ(
                LD_TOOL_TX_WAIT_SECONDS="0.5",
                LD_TOOL_TX_CONFIRM_ATTEMPTS="10",
                LD_TOOL_BECH32_PREFIX="osmo",
            )
        )

        self.assertEqual(config.node.tx_wait_seconds, 0.5)
        self.assertEqual(config.node.confirm_attempts, 10)
        self.assertEqual(config.bech32_prefix, "osmo")

    def test_missing_variables_are_reported_together(self) -> None:
        env = _environ()
        del env["LD_TOOL_GAS_PRICE"]
        env["LD_TOOL_HOME_DIR"] = ""

        with self.assertRaises(ConfigError) as ctx:
            ToolConfig.from_env(env)

        self.assertIn("LD_TOOL_GAS_PRICE", str(ctx.exception))
        self.assertIn("LD_TOOL_HOME_DIR", str(ctx.exception))

    def test_non_numeric_code_id(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            ToolConfig.from_env(_environ(LD_TOOL_SPLITER_CODE_ID="two"))
        self.assertIn("LD_TOOL_SPLITER_CODE_ID", str(ctx.exception))

    def test_negative_values_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            ToolConfig.from_env(_environ(LD_TOOL_PROCESSOR_CODE_ID="-1"))
        with self.assertRaises(ConfigError):
            ToolConfig.from_env(_environ(LD_TOOL_TX_WAIT_SECONDS="-2"))

    def test_describe_hides_secrets(self) -> None:
        lines = ToolConfig.from_env(_environ()).describe()

        self.assertIn("chain_id=pion-1", lines)
        self.assertFalse(any("/tmp/home" in line for line in lines))


if __name__ == "__main__":
    unittest.main()
