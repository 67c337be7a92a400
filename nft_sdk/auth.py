# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Credentials and the signing capability used by contract templates.

``Auth`` holds what a caller configures once: the chain to talk to, the wallet
private key and the API project credentials. It hands out a ``Signer``, the only
object the contract layer uses to reach the chain.

Examples:
    Infura-backed setup::

        from nft_sdk.auth import Auth

        auth = Auth(
            chain_id=11155111,
            private_key=os.environ["WALLET_PRIVATE_KEY"],
            project_id=os.environ["INFURA_PROJECT_ID"],
            secret_id=os.environ["INFURA_PROJECT_SECRET"],
        )
        signer = await auth.get_signer()
        print(signer.address)

    Custom node::

        auth = Auth(
            chain_id=31337,
            private_key=key,
            project_id=project_id,
            secret_id=secret_id,
            rpc_url="http://127.0.0.1:8545",
        )
"""

from __future__ import annotations

import base64
import logging
import unittest
import unittest.mock
from typing import Any, Dict, Optional

from typing_extensions import Protocol
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import TransactionNotFound

from .account import Account
from .account_address import is_address, to_checksum_address
from .constants import AVAILABLE_CHAINS, infura_rpc_url
from .errors import ERROR_LOG, ValidationError, error_logger
from .http_service import ClientConfig


class TransactionFunction(Protocol):
    """Anything able to build an unsigned transaction, e.g. a bound contract
    function or a contract constructor."""

    async def build_transaction(
        self, transaction: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...


class Signer:
    """Submits locally signed transactions through an async web3 provider."""

    w3: AsyncWeb3
    account: Account
    client_config: ClientConfig

    def __init__(
        self,
        w3: AsyncWeb3,
        account: Account,
        client_config: Optional[ClientConfig] = None,
    ):
        self.w3 = w3
        self.account = account
        self.client_config = client_config or ClientConfig()

    @property
    def address(self) -> str:
        return self.account.address()

    @staticmethod
    def is_address(value: Any) -> bool:
        return is_address(value)

    def contract(
        self,
        address: Optional[str] = None,
        abi: Optional[list] = None,
        bytecode: Optional[str] = None,
    ):
        """Return a web3 contract binding, deployable when ``address`` is None."""
        if address is None:
            return self.w3.eth.contract(abi=abi, bytecode=bytecode)
        return self.w3.eth.contract(address=to_checksum_address(address), abi=abi)

    async def submit(
        self, function: TransactionFunction, gas: Optional[int] = None
    ) -> str:
        """Build, sign and send a transaction. Returns the transaction hash.

        :param function: Contract function or constructor to call
        :param gas: Fixed gas limit; estimated by the node when None
        """
        params: Dict[str, Any] = {
            "from": self.address,
            "nonce": await self.w3.eth.get_transaction_count(self.address, "pending"),
            "chainId": await self.w3.eth.chain_id,
        }
        if gas is not None:
            params["gas"] = gas
        transaction = await function.build_transaction(params)
        signed_transaction = self.account.sign_transaction(transaction)
        txn_hash = Web3.to_hex(
            await self.w3.eth.send_raw_transaction(signed_transaction.raw_transaction)
        )
        logging.info(f"Submitted transaction {txn_hash} from {self.address}")
        return txn_hash

    async def wait_for_transaction(self, txn_hash: str):
        """Wait for a receipt, up to ``client_config.transaction_wait_in_seconds``."""
        return await self.w3.eth.wait_for_transaction_receipt(
            txn_hash, timeout=self.client_config.transaction_wait_in_seconds
        )

    async def get_transaction_receipt(self, txn_hash: str):
        """Return the receipt of ``txn_hash``, or None while the node does not know it."""
        try:
            return await self.w3.eth.get_transaction_receipt(txn_hash)
        except TransactionNotFound:
            return None


class Auth:
    """Wallet and API credentials for one chain."""

    _signer: Optional[Signer]

    def __init__(
        self,
        chain_id: Optional[int],
        private_key: Optional[str],
        project_id: Optional[str],
        secret_id: Optional[str],
        rpc_url: Optional[str] = None,
        client_config: Optional[ClientConfig] = None,
    ):
        location = ERROR_LOG.location.AUTH_constructor
        if not chain_id:
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.no_chain_id_supplied),
                location,
            )
        if not rpc_url and chain_id not in AVAILABLE_CHAINS:
            raise ValidationError(
                error_logger(
                    location,
                    ERROR_LOG.message.chain_id_not_supported,
                    f"chainId: {chain_id}",
                ),
                location,
            )
        if not private_key:
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.no_private_key_supplied),
                location,
            )
        if not project_id:
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.no_project_id_supplied),
                location,
            )
        if not secret_id:
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.no_secret_id_supplied),
                location,
            )

        try:
            self._account = Account.load_key(private_key)
        except Exception as e:
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.no_private_key_supplied),
                location,
            ) from e

        self._chain_id = chain_id
        self._project_id = project_id
        self._secret_id = secret_id
        self._rpc_url = rpc_url or infura_rpc_url(chain_id, project_id)
        self.client_config = client_config or ClientConfig()
        self._signer = None

    def get_chain_id(self) -> int:
        return self._chain_id

    def get_rpc_url(self) -> str:
        return self._rpc_url

    def get_api_auth(self) -> str:
        """Basic-auth token for the metadata API, base64 of ``project_id:secret_id``."""
        credentials = f"{self._project_id}:{self._secret_id}".encode()
        return base64.b64encode(credentials).decode()

    async def get_signer(self) -> Signer:
        if self._signer is None:
            w3 = AsyncWeb3(AsyncHTTPProvider(self._rpc_url))
            self._signer = Signer(w3, self._account, self.client_config)
        return self._signer


TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


async def _resolved(value):
    return value


class Test(unittest.IsolatedAsyncioTestCase):
    def test_constructor_validation(self):
        cases = [
            ({"chain_id": None}, "[AUTH.constructor] No chainId supplied."),
            (
                {"chain_id": 424242},
                "[AUTH.constructor] Chain id not supported without an explicit rpcUrl. "
                "| chainId: 424242",
            ),
            ({"private_key": None}, "[AUTH.constructor] No privateKey supplied."),
            ({"private_key": "0xnotakey"}, "[AUTH.constructor] No privateKey supplied."),
            ({"project_id": ""}, "[AUTH.constructor] No projectId supplied."),
            ({"secret_id": None}, "[AUTH.constructor] No secretId supplied."),
        ]
        for override, message in cases:
            kwargs = {
                "chain_id": 11155111,
                "private_key": TEST_PRIVATE_KEY,
                "project_id": "project",
                "secret_id": "secret",
            }
            kwargs.update(override)
            with self.assertRaises(ValidationError, msg=override) as ctx:
                Auth(**kwargs)
            self.assertEqual(str(ctx.exception), message)

    def test_rpc_url_and_api_auth(self):
        auth = Auth(11155111, TEST_PRIVATE_KEY, "project", "secret")
        self.assertEqual(auth.get_chain_id(), 11155111)
        self.assertEqual(auth.get_rpc_url(), "https://sepolia.infura.io/v3/project")
        self.assertEqual(
            base64.b64decode(auth.get_api_auth()).decode(), "project:secret"
        )

        local = Auth(31337, TEST_PRIVATE_KEY, "p", "s", rpc_url="http://127.0.0.1:8545")
        self.assertEqual(local.get_rpc_url(), "http://127.0.0.1:8545")

    async def test_get_signer_is_cached(self):
        auth = Auth(1, TEST_PRIVATE_KEY, "project", "secret")
        signer = await auth.get_signer()
        self.assertIs(signer, await auth.get_signer())
        self.assertEqual(signer.address, TEST_ADDRESS)
        self.assertTrue(signer.is_address(TEST_ADDRESS))
        self.assertFalse(signer.is_address("0x1234"))

    async def test_client_config_is_not_shared(self):
        first = Auth(1, TEST_PRIVATE_KEY, "project", "secret")
        second = Auth(1, TEST_PRIVATE_KEY, "project", "secret")
        self.assertIsNot(first.client_config, second.client_config)

        first.client_config.artifact_paths["ERC721Mintable"] = "./build.json"
        self.assertEqual(second.client_config.artifact_paths, {})
        self.assertIs((await first.get_signer()).client_config, first.client_config)

    async def test_submit(self):
        w3 = unittest.mock.MagicMock()
        w3.eth.get_transaction_count = unittest.mock.AsyncMock(return_value=7)
        w3.eth.chain_id = _resolved(1)
        w3.eth.send_raw_transaction = unittest.mock.AsyncMock(
            return_value=bytes.fromhex("ab" * 32)
        )
        function = unittest.mock.MagicMock()
        function.build_transaction = unittest.mock.AsyncMock(
            side_effect=lambda params: {
                **params,
                "to": TEST_ADDRESS,
                "value": 0,
                "data": "0x",
                "gasPrice": 1,
            }
        )

        signer = Signer(w3, Account.load_key(TEST_PRIVATE_KEY))
        txn_hash = await signer.submit(function, gas=6_000_000)

        self.assertEqual(txn_hash, "0x" + "ab" * 32)
        function.build_transaction.assert_awaited_once_with(
            {"from": TEST_ADDRESS, "nonce": 7, "chainId": 1, "gas": 6_000_000}
        )
        w3.eth.get_transaction_count.assert_awaited_once_with(TEST_ADDRESS, "pending")
        w3.eth.send_raw_transaction.assert_awaited_once()

    async def test_get_transaction_receipt(self):
        w3 = unittest.mock.MagicMock()
        w3.eth.get_transaction_receipt = unittest.mock.AsyncMock(
            side_effect=TransactionNotFound("unknown")
        )
        signer = Signer(w3, Account.generate())
        self.assertIsNone(await signer.get_transaction_receipt("0x" + "00" * 32))

        w3.eth.get_transaction_receipt = unittest.mock.AsyncMock(
            return_value={"status": 1}
        )
        self.assertEqual(
            await signer.get_transaction_receipt("0x" + "00" * 32), {"status": 1}
        )

    async def test_wait_for_transaction(self):
        w3 = unittest.mock.MagicMock()
        w3.eth.wait_for_transaction_receipt = unittest.mock.AsyncMock(
            return_value={"status": 1}
        )
        signer = Signer(w3, Account.generate(), ClientConfig(transaction_wait_in_seconds=5))
        self.assertEqual(await signer.wait_for_transaction("0x01"), {"status": 1})
        w3.eth.wait_for_transaction_receipt.assert_awaited_once_with("0x01", timeout=5)


if __name__ == "__main__":
    unittest.main()
