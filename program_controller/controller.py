"""Program workflows: create a program, execute its authorizations, tick."""

from typing import Callable, List, Optional, Sequence, Tuple
import logging

from address_core.codec import AddressCodec
from address_core.predictor import AddressPredictor, generate_salt
from authorization_engine.builder import (
    build_deploy_subroutine,
    build_program_authorizations,
    build_withdraw_subroutine,
    create_authorizations_message,
)
from authorization_engine.models import ProgramAction
from authorization_engine.reconstructor import plan_send_msgs
from authorization_engine.wire import AuthorizationRecord, parse_authorizations
from node_adapter.neutron.client import ChainClient

from .config import ToolConfig
from .messages import (
    approve_library_msg,
    authorization_instantiate_msg,
    authorizations_query,
    base_account_instantiate_msg,
    lper_instantiate_msg,
    processor_instantiate_msg,
    splitter_instantiate_msg,
    tick_msg,
    transfer_ownership_msg,
    withdrawer_instantiate_msg,
)
from .models import PoolInfo, PoolLibraries, ProgramDeployment

logger = logging.getLogger(__name__)

AUTHORIZATIONS_PAGE_SIZE = 100


class PredictionMismatchError(RuntimeError):
    """Raised when a contract lands somewhere other than its predicted address."""


class ProgramController:
    """Runs program workflows step by step; any failure aborts the run."""

    def __init__(
        self,
        config: ToolConfig,
        client: ChainClient,
        salt_provider: Optional[Callable[[], str]] = None,
    ) -> None:
        self._config = config
        self._client = client
        self._salt_provider = salt_provider or generate_salt
        self._predictor = AddressPredictor(AddressCodec(config.bech32_prefix))

    def create_program(self, label_prefix: str, pools: Sequence[PoolInfo]) -> ProgramDeployment:
        if not label_prefix:
            raise ValueError("Label prefix must be non-empty.")
        if not pools:
            raise ValueError("At least one pool is required.")
        logger.info("Creating program with label %s ...", label_prefix)

        authorization_address, processor_address, salt = self.instantiate_authorization_and_processor()

        input_account = self._create_base_account()
        logger.info("Input account address: %s", input_account)
        split_outputs = [self._create_base_account() for _ in pools]
        liquidity_outputs = [self._create_base_account() for _ in pools]
        withdrawal_accounts = [self._create_base_account() for _ in pools]

        splitter = self._instantiate_splitter(pools, input_account, split_outputs, processor_address)
        for account in [input_account, *split_outputs]:
            self._approve_library(account, splitter)

        lper_libraries: List[str] = []
        withdraw_libraries: List[str] = []
        for pool, split_output, liquidity_output in zip(pools, split_outputs, liquidity_outputs):
            lper = self._instantiate_lper(pool, split_output, liquidity_output, processor_address)
            self._approve_library(split_output, lper)
            self._approve_library(liquidity_output, lper)

            withdrawer = self._instantiate_withdrawer(pool, liquidity_output, processor_address)
            self._approve_library(liquidity_output, withdrawer)

            lper_libraries.append(lper)
            withdraw_libraries.append(withdrawer)

        self.create_authorizations(
            authorization_address,
            label_prefix,
            splitter,
            lper_libraries,
            withdraw_libraries,
        )

        self.transfer_ownership(
            [authorization_address, input_account, *split_outputs, *liquidity_outputs, *withdrawal_accounts]
        )

        deployment = ProgramDeployment(
            label_prefix=label_prefix,
            authorization_address=authorization_address,
            processor_address=processor_address,
            authorization_salt=salt,
            input_account=input_account,
            splitter_library=splitter,
            pools=tuple(
                PoolLibraries(
                    pool_address=pool.address,
                    split_output_account=split_output,
                    liquidity_output_account=liquidity_output,
                    withdrawal_account=withdrawal,
                    lper_library=lper,
                    withdraw_library=withdrawer,
                )
                for pool, split_output, liquidity_output, withdrawal, lper, withdrawer in zip(
                    pools,
                    split_outputs,
                    liquidity_outputs,
                    withdrawal_accounts,
                    lper_libraries,
                    withdraw_libraries,
                )
            ),
        )
        logger.info("Deployment completed successfully!")
        return deployment

    def instantiate_authorization_and_processor(self) -> Tuple[str, str, str]:
        """Create the processor first, pointed at the predicted authorization address."""
        salt = self._salt_provider()
        code_hash = self._client.code_hash(self._config.authorization_code_id)
        predicted = self._predictor.predict(self._config.operator_address, salt, code_hash)
        logger.info("Predicted authorization address: %s (salt %s)", predicted, salt)

        processor_address = self._client.instantiate(
            self._config.processor_code_id,
            processor_instantiate_msg(predicted),
            "processor",
        )
        logger.info("Processor address: %s", processor_address)

        authorization_address = self._client.instantiate(
            self._config.authorization_code_id,
            authorization_instantiate_msg(self._config.operator_address, processor_address),
            "authorization",
            salt=salt,
        )
        if authorization_address != predicted:
            raise PredictionMismatchError(
                f"Authorization contract created at {authorization_address}, "
                f"expected {predicted}."
            )
        logger.info("Authorization address: %s", authorization_address)
        return authorization_address, processor_address, salt

    def create_authorizations(
        self,
        authorization_address: str,
        label_prefix: str,
        splitter: str,
        lper_libraries: Sequence[str],
        withdraw_libraries: Sequence[str],
    ) -> None:
        authorizations = build_program_authorizations(
            label_prefix,
            build_deploy_subroutine(splitter, lper_libraries),
            build_withdraw_subroutine(withdraw_libraries),
        )
        logger.info(
            "Creating authorizations %s",
            ", ".join(authorization.label for authorization in authorizations),
        )
        self._client.execute(authorization_address, create_authorizations_message(authorizations))

    def transfer_ownership(self, contracts: Sequence[str]) -> None:
        new_owner = self._config.dao_committee_address
        for contract in contracts:
            logger.info("Transferring ownership of %s to %s", contract, new_owner)
            self._client.execute(contract, transfer_ownership_msg(new_owner))

    def fetch_authorizations(self, authorization_address: str) -> Tuple[AuthorizationRecord, ...]:
        records: List[AuthorizationRecord] = []
        start_after: Optional[str] = None
        while True:
            response = self._client.query_smart(
                authorization_address,
                authorizations_query(start_after, AUTHORIZATIONS_PAGE_SIZE),
            )
            page = parse_authorizations(response)
            records.extend(page)
            if len(page) < AUTHORIZATIONS_PAGE_SIZE:
                return tuple(records)
            start_after = page[-1].label

    def execute_program(self, authorization_address: str, action: ProgramAction) -> Tuple[str, ...]:
        logger.info("Executing program for contract %s ...", authorization_address)
        planned = plan_send_msgs(self.fetch_authorizations(authorization_address), action)
        if not planned:
            logger.warning("No executable authorizations labelled for %s", action.value)

        for label, message in planned:
            logger.info("Sending messages for %s", label)
            self._client.execute(authorization_address, message)
        return tuple(label for label, _ in planned)

    def tick_processor(self, processor_address: str) -> None:
        logger.info("Ticking the processor on address %s ...", processor_address)
        self._client.execute(processor_address, tick_msg())

    def _create_base_account(self) -> str:
        return self._client.instantiate(
            self._config.base_account_code_id,
            base_account_instantiate_msg(self._config.operator_address),
            "base_account",
        )

    def _instantiate_splitter(
        self,
        pools: Sequence[PoolInfo],
        input_account: str,
        output_accounts: Sequence[str],
        processor_address: str,
    ) -> str:
        return self._client.instantiate(
            self._config.splitter_code_id,
            splitter_instantiate_msg(
                self._config.dao_committee_address,
                processor_address,
                input_account,
                pools,
                output_accounts,
            ),
            "splitter",
        )

    def _instantiate_lper(
        self,
        pool: PoolInfo,
        input_account: str,
        output_account: str,
        processor_address: str,
    ) -> str:
        return self._client.instantiate(
            self._config.astro_lper_code_id,
            lper_instantiate_msg(
                self._config.dao_committee_address,
                processor_address,
                pool,
                input_account,
                output_account,
            ),
            "astro_lper",
        )

    def _instantiate_withdrawer(self, pool: PoolInfo, input_account: str, processor_address: str) -> str:
        return self._client.instantiate(
            self._config.astro_withdraw_code_id,
            withdrawer_instantiate_msg(
                self._config.dao_committee_address,
                processor_address,
                pool,
                input_account,
                self._config.dao_committee_address,
            ),
            "astro_withdrawer",
        )

    def _approve_library(self, account: str, library: str) -> None:
        logger.info("Approving library %s on account %s", library, account)
        self._client.execute(account, approve_library_msg(library))
