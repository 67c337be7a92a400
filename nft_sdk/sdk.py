# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Single entry point of the NFT SDK.

``SDK`` combines the three things an application needs: a signer for on-chain
work, the contract factory to deploy or load token contracts, and the NFT
metadata API for read-only queries about contracts, collections and owners.

Examples:
    Deploy a collection and mint the first token::

        import asyncio
        from nft_sdk import SDK, Auth, TEMPLATES

        async def main():
            auth = Auth(
                chain_id=11155111,
                private_key=WALLET_PRIVATE_KEY,
                project_id=INFURA_PROJECT_ID,
                secret_id=INFURA_PROJECT_SECRET,
            )
            sdk = SDK(auth)
            contract = await sdk.deploy(
                TEMPLATES.ERC721Mintable,
                {"name": "Lunar Cats", "symbol": "LCAT", "contract_uri": CONTRACT_URI},
            )
            txn_hash = await contract.mint(WALLET_PUBLIC_ADDRESS, TOKEN_URI)
            print(await sdk.get_status(txn_hash))
            await sdk.close()

        asyncio.run(main())

    Read-only queries::

        metadata = await sdk.get_contract_metadata(contract_address)
        owned = await sdk.get_nfts(owner, include_metadata=True)
        token = await sdk.get_token_metadata(contract_address, 1)

Error Handling:
    Caller input is validated before any request is sent and rejected with
    ``ValidationError``. Metadata API failures raise ``ApiError``; contract
    failures surface as raised by the template (see ``nft_sdk.errors``).
"""

from __future__ import annotations

import inspect
import json
import os
import tempfile
import unittest
import unittest.mock
from collections.abc import Mapping
from typing import Any, Dict, Optional

from .account_address import is_address, is_transaction_hash
from .auth import Auth, Signer
from .constants import TEMPLATES
from .contract_factory import ContractFactory
from .contract_templates import ContractTemplate, ERC721Mintable
from .errors import (
    ERROR_LOG,
    ApiError,
    ConfigurationError,
    ValidationError,
    error_logger,
)
from .http_service import ClientConfig, HttpService

L = ERROR_LOG.location
M = ERROR_LOG.message


def _invalid(location: str, message: str, options: str = "") -> ValidationError:
    return ValidationError(error_logger(location, message, options), location)


class SDK:
    """Facade over contract templates and the NFT metadata API."""

    auth: Auth
    api_path: str
    client_config: ClientConfig
    http_client: HttpService

    def __init__(self, auth: Auth, client_config: Optional[ClientConfig] = None):
        if not isinstance(auth, Auth):
            raise _invalid(L.SDK_constructor, M.invalid_auth_instance)
        client_config = client_config or auth.client_config
        self.auth = auth
        self.client_config = client_config
        self.api_path = f"/networks/{auth.get_chain_id()}"
        self.http_client = HttpService(
            client_config.api_url, auth.get_api_auth(), client_config
        )

    async def close(self):
        await self.http_client.close()

    async def get_provider(self) -> Signer:
        return await self.auth.get_signer()

    async def deploy(
        self, template: str, params: Optional[Dict[str, Any]]
    ) -> ContractTemplate:
        """Deploy a new contract from ``template`` and return the bound instance.

        :param template: Registered template name, e.g. ``TEMPLATES.ERC721Mintable``
        :param params: Keyword arguments of the template's ``deploy``
        """
        if not template:
            raise _invalid(L.SDK_deploy, M.no_template_type_supplied)
        if not isinstance(params, Mapping) or len(params) == 0:
            raise _invalid(L.SDK_deploy, M.no_parameters_supplied)

        signer = await self.get_provider()
        contract = ContractFactory.factory(template, signer)
        try:
            inspect.signature(contract.deploy).bind(**params)
        except TypeError as e:
            raise _invalid(L.SDK_deploy, M.no_parameters_supplied, str(e)) from e
        await contract.deploy(**params)
        return contract

    async def load_contract(
        self, template: str, contract_address: str
    ) -> ContractTemplate:
        if not template:
            raise _invalid(L.SDK_loadContract, M.no_template_type_supplied)
        if not contract_address:
            raise _invalid(L.SDK_loadContract, M.no_address_supplied)

        signer = await self.get_provider()
        contract = ContractFactory.factory(template, signer)
        await contract.load_contract(contract_address)
        return contract

    async def get_contract_metadata(self, contract_address: str) -> Dict[str, Any]:
        """Return the ``symbol``, ``name`` and ``tokenType`` of a contract."""
        if not is_address(contract_address):
            raise _invalid(L.SDK_getContractMetadata, M.invalid_contract_address)

        data = await self.http_client.get(f"{self.api_path}/nfts/{contract_address}")
        return {
            "symbol": data.get("symbol"),
            "name": data.get("name"),
            "tokenType": data.get("tokenType"),
        }

    async def get_nfts(
        self, public_address: str, include_metadata: bool = False
    ) -> Dict[str, Any]:
        """Return the NFTs owned by ``public_address``.

        Unless ``include_metadata`` is True, the ``metadata`` entry of every asset
        is removed; the rest of the payload is returned unchanged.
        """
        if not is_address(public_address):
            raise _invalid(L.SDK_getNFTs, M.invalid_account_address)

        data = await self.http_client.get(
            f"{self.api_path}/accounts/{public_address}/assets/nfts"
        )
        if include_metadata or "assets" not in data:
            return data
        return {
            **data,
            "assets": [
                {key: value for key, value in asset.items() if key != "metadata"}
                for asset in data["assets"]
            ],
        }

    async def get_nfts_for_collection(self, contract_address: str) -> Dict[str, Any]:
        if not is_address(contract_address):
            raise _invalid(L.SDK_getNFTsForCollection, M.invalid_contract_address)

        return await self.http_client.get(
            f"{self.api_path}/nfts/{contract_address}/tokens"
        )

    async def get_token_metadata(
        self, contract_address: str, token_id: int
    ) -> Dict[str, Any]:
        if not is_address(contract_address):
            raise _invalid(L.SDK_getTokenMetadata, M.invalid_contract_address)
        if not isinstance(token_id, int) or isinstance(token_id, bool) or token_id < 0:
            raise _invalid(L.SDK_getTokenMetadata, M.no_tokenId_supplied)

        return await self.http_client.get(
            f"{self.api_path}/nfts/{contract_address}/tokens/{token_id}"
        )

    async def get_status(self, tx_hash: str):
        """Return the receipt of ``tx_hash``, or None while it is not mined."""
        if not is_transaction_hash(tx_hash):
            raise _invalid(L.SDK_getStatus, M.invalid_transaction_hash)

        signer = await self.get_provider()
        return await signer.get_transaction_receipt(tx_hash)


TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
OWNER = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


class Test(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        patcher = unittest.mock.patch(
            "nft_sdk.metadata.Metadata.get_nft_sdk_header_val",
            return_value="nft-python-sdk/0.0.0",
        )
        patcher.start()
        self.addCleanup(patcher.stop)

        self.auth = Auth(11155111, TEST_PRIVATE_KEY, "project", "secret")
        self.signer = unittest.mock.MagicMock()
        self.signer.client_config = self.auth.client_config
        self.auth.get_signer = unittest.mock.AsyncMock(return_value=self.signer)
        self.sdk = SDK(self.auth)
        self.sdk.http_client.get = unittest.mock.AsyncMock()

    async def asyncTearDown(self):
        await self.sdk.close()

    def test_invalid_auth(self):
        with self.assertRaises(ValidationError) as ctx:
            SDK({"project_id": "project"})
        self.assertEqual(
            str(ctx.exception), "[SDK.constructor] Invalid auth instance supplied."
        )

    def test_api_configuration(self):
        self.assertEqual(self.sdk.api_path, "/networks/11155111")
        self.assertEqual(
            self.sdk.http_client.client.headers["Authorization"],
            f"Basic {self.auth.get_api_auth()}",
        )

    async def test_get_provider(self):
        self.assertIs(await self.sdk.get_provider(), self.signer)

    async def test_deploy_validation(self):
        with self.assertRaises(ValidationError) as ctx:
            await self.sdk.deploy(None, {"name": "Cats"})
        self.assertEqual(str(ctx.exception), "[SDK.deploy] No template type supplied.")

        for params in ({}, None):
            with self.assertRaises(ValidationError) as ctx:
                await self.sdk.deploy(TEMPLATES.ERC721Mintable, params)
            self.assertEqual(str(ctx.exception), "[SDK.deploy] No parameters supplied.")
        self.auth.get_signer.assert_not_awaited()

    async def test_deploy(self):
        with unittest.mock.patch.object(
            ERC721Mintable, "deploy", unittest.mock.AsyncMock()
        ) as deploy:
            contract = await self.sdk.deploy(
                TEMPLATES.ERC721Mintable,
                {"name": "Cats", "symbol": "CAT", "contract_uri": "ipfs://c.json"},
            )
        self.assertIsInstance(contract, ERC721Mintable)
        deploy.assert_awaited_once_with(
            name="Cats", symbol="CAT", contract_uri="ipfs://c.json"
        )

    async def test_deploy_rejects_incomplete_or_unknown_params(self):
        with self.assertRaises(ValidationError) as ctx:
            await self.sdk.deploy(TEMPLATES.ERC721Mintable, {"name": "Cats"})
        self.assertEqual(
            str(ctx.exception), "[ERC721Mintable.deploy] Symbol cannot be undefined."
        )

        with self.assertRaises(ValidationError) as ctx:
            await self.sdk.deploy(
                TEMPLATES.ERC721Mintable,
                {"name": "Cats", "symbol": "C", "contractURI": "x"},
            )
        self.assertTrue(
            str(ctx.exception).startswith("[SDK.deploy] No parameters supplied. |")
        )
        self.assertIn("contractURI", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, TypeError)
        self.signer.submit.assert_not_called()

    async def test_deploy_from_configured_artifact(self):
        (file, path) = tempfile.mkstemp(suffix=".json")
        with os.fdopen(file, "w") as handle:
            json.dump(
                {
                    "contractName": "ERC721Mintable",
                    "abi": ERC721Mintable.artifact.abi,
                    "bytecode": "0x6080",
                },
                handle,
            )
        self.addCleanup(os.remove, path)
        self.auth.client_config.artifact_paths["ERC721Mintable"] = path
        self.signer.submit = unittest.mock.AsyncMock(return_value="0x" + "ab" * 32)
        self.signer.wait_for_transaction = unittest.mock.AsyncMock(
            return_value={"status": 1, "contractAddress": CONTRACT}
        )

        contract = await self.sdk.deploy(
            TEMPLATES.ERC721Mintable,
            {"name": "Cats", "symbol": "CAT", "contract_uri": "ipfs://c.json"},
        )

        self.assertIsInstance(contract, ERC721Mintable)
        self.assertEqual(contract.contract_address, CONTRACT)
        self.signer.contract.assert_any_call(
            abi=ERC721Mintable.artifact.abi, bytecode="0x6080"
        )
        self.signer.contract.return_value.constructor.assert_called_once_with(
            "Cats", "CAT", "ipfs://c.json"
        )
        self.signer.submit.assert_awaited_once()

    async def test_deploy_with_unreadable_artifact(self):
        path = os.path.join(tempfile.gettempdir(), "missing-ERC721Mintable.json")
        self.auth.client_config.artifact_paths["ERC721Mintable"] = path
        with self.assertRaises(ConfigurationError) as ctx:
            await self.sdk.deploy(
                TEMPLATES.ERC721Mintable,
                {"name": "Cats", "symbol": "CAT", "contract_uri": "ipfs://c.json"},
            )
        self.assertEqual(
            str(ctx.exception),
            "[ERC721Mintable.deploy] The contract artifact could not be loaded. "
            f"| {path}",
        )
        self.signer.submit.assert_not_called()

    async def test_client_config_defaults_to_auth(self):
        self.assertIs(self.sdk.client_config, self.auth.client_config)
        other = SDK(Auth(11155111, TEST_PRIVATE_KEY, "project", "secret"))
        self.assertIsNot(other.client_config, self.sdk.client_config)

        config = ClientConfig(timeout=5)
        explicit = SDK(self.auth, config)
        self.assertIs(explicit.client_config, config)
        self.assertEqual(explicit.http_client.client_config, config)
        await other.close()
        await explicit.close()

    async def test_load_contract(self):
        with self.assertRaises(ValidationError) as ctx:
            await self.sdk.load_contract(TEMPLATES.ERC721Mintable, None)
        self.assertEqual(str(ctx.exception), "[SDK.loadContract] No address supplied.")
        with self.assertRaises(ValidationError):
            await self.sdk.load_contract("", CONTRACT)

        contract = await self.sdk.load_contract(TEMPLATES.ERC721Mintable, CONTRACT)
        self.assertEqual(contract.contract_address, CONTRACT)

    async def test_get_contract_metadata(self):
        self.sdk.http_client.get.return_value = {
            "contract": CONTRACT,
            "name": "Cats",
            "symbol": "CAT",
            "tokenType": "ERC721",
        }
        self.assertEqual(
            await self.sdk.get_contract_metadata(CONTRACT),
            {"symbol": "CAT", "name": "Cats", "tokenType": "ERC721"},
        )
        self.sdk.http_client.get.assert_awaited_once_with(
            f"/networks/11155111/nfts/{CONTRACT}"
        )

        with self.assertRaises(ValidationError) as ctx:
            await self.sdk.get_contract_metadata("0x1234")
        self.assertEqual(
            str(ctx.exception), "[SDK.getContractMetadata] Invalid contract address."
        )

    async def test_get_nfts(self):
        payload = {
            "total": 2,
            "account": OWNER,
            "assets": [
                {"contract": CONTRACT, "tokenId": "1", "metadata": {"name": "one"}},
                {"contract": CONTRACT, "tokenId": "2", "metadata": None},
            ],
        }
        self.sdk.http_client.get.return_value = payload

        stripped = await self.sdk.get_nfts(OWNER)
        self.assertEqual(
            stripped,
            {
                "total": 2,
                "account": OWNER,
                "assets": [
                    {"contract": CONTRACT, "tokenId": "1"},
                    {"contract": CONTRACT, "tokenId": "2"},
                ],
            },
        )
        self.assertIn("metadata", payload["assets"][0])
        self.sdk.http_client.get.assert_awaited_with(
            f"/networks/11155111/accounts/{OWNER}/assets/nfts"
        )

        self.assertEqual(await self.sdk.get_nfts(OWNER, include_metadata=True), payload)

        self.sdk.http_client.get.return_value = {"total": 0, "account": OWNER}
        self.assertEqual(
            await self.sdk.get_nfts(OWNER), {"total": 0, "account": OWNER}
        )

        with self.assertRaises(ValidationError) as ctx:
            await self.sdk.get_nfts(None)
        self.assertEqual(str(ctx.exception), "[SDK.getNFTs] Invalid account address.")

    async def test_get_nfts_for_collection(self):
        self.sdk.http_client.get.return_value = {"assets": []}
        self.assertEqual(
            await self.sdk.get_nfts_for_collection(CONTRACT), {"assets": []}
        )
        self.sdk.http_client.get.assert_awaited_once_with(
            f"/networks/11155111/nfts/{CONTRACT}/tokens"
        )
        with self.assertRaises(ValidationError):
            await self.sdk.get_nfts_for_collection("")

    async def test_get_token_metadata(self):
        self.sdk.http_client.get.return_value = {"tokenId": "7"}
        self.assertEqual(
            await self.sdk.get_token_metadata(CONTRACT, 7), {"tokenId": "7"}
        )
        self.sdk.http_client.get.assert_awaited_once_with(
            f"/networks/11155111/nfts/{CONTRACT}/tokens/7"
        )

        for token_id in (None, "7", 1.5, True, -1):
            with self.assertRaises(ValidationError, msg=token_id) as ctx:
                await self.sdk.get_token_metadata(CONTRACT, token_id)
            self.assertEqual(
                str(ctx.exception), "[SDK.getTokenMetadata] No valid tokenId supplied."
            )
        with self.assertRaises(ValidationError):
            await self.sdk.get_token_metadata("0x0", 7)

    async def test_api_error_propagates(self):
        self.sdk.http_client.get.side_effect = ApiError("not found", 404)
        with self.assertRaises(ApiError):
            await self.sdk.get_nfts_for_collection(CONTRACT)

    async def test_get_status(self):
        txn_hash = "0x" + "ab" * 32
        self.signer.get_transaction_receipt = unittest.mock.AsyncMock(
            return_value={"status": 1, "transactionHash": txn_hash}
        )
        self.assertEqual(
            await self.sdk.get_status(txn_hash),
            {"status": 1, "transactionHash": txn_hash},
        )
        self.signer.get_transaction_receipt.assert_awaited_once_with(txn_hash)

        for value in ("0x1234", "ab" * 32, None, 12):
            with self.assertRaises(ValidationError, msg=value) as ctx:
                await self.sdk.get_status(value)
            self.assertEqual(
                str(ctx.exception), "[SDK.getStatus] Invalid transaction hash."
            )
        self.assertEqual(self.signer.get_transaction_receipt.await_count, 1)


if __name__ == "__main__":
    unittest.main()
