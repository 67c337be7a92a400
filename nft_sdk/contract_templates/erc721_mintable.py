# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
ERC-721 token contract with role-based minting, EIP-2981 royalties and a
contract-level metadata URI.

Access control follows the OpenZeppelin AccessControl model: ``ADMIN_ROLE``
(the default admin role) administers every role, ``MINTER_ROLE`` may mint. The
deployer holds both.

Examples:
    Deploy, mint and transfer::

        from nft_sdk.contract_templates import ERC721Mintable

        contract = ERC721Mintable(await auth.get_signer())
        await contract.deploy(
            name="Lunar Cats",
            symbol="LCAT",
            contract_uri="ipfs://bafybeih.../contract.json",
        )
        txn_hash = await contract.mint(owner, "ipfs://bafybeih.../1.json")
        await contract.transfer(owner, buyer, 0)

    Work with an existing contract::

        contract = ERC721Mintable(signer)
        await contract.load_contract("0x1a4C6E9...")
        if not await contract.is_minter(partner):
            await contract.add_minter(partner)

    Royalties, expressed in basis points (1/10000)::

        await contract.set_royalties(creator, 500)  # 5%
        receiver, amount = await contract.royalty_info(0, 10**18)

Every mutating operation returns the hash of the submitted transaction and does
not wait for it to be mined; use ``SDK.get_status`` to follow it.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import unittest
import unittest.mock
from typing import Any, Optional, Tuple

from ..constants import ADMIN_ROLE, MINTER_ROLE, ROYALTY_FEE_DENOMINATOR
from ..errors import (
    ERROR_LOG,
    ConfigurationError,
    ContractExecutionError,
    PreconditionError,
    UnknownNetworkError,
    ValidationError,
    error_logger,
)
from ..http_service import ClientConfig
from .base import ContractArtifact, ContractTemplate

ARTIFACT = ContractArtifact.load_bundled("ERC721Mintable.json")

L = ERROR_LOG.location
M = ERROR_LOG.message


class ERC721Mintable(ContractTemplate):
    artifact = ARTIFACT

    ADMIN_ROLE = ADMIN_ROLE
    MINTER_ROLE = MINTER_ROLE

    async def deploy(
        self,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        contract_uri: Optional[str] = None,
    ):
        """Deploy a new contract owned by the signer and bind this instance to it.

        :param name: Collection name, must not be empty
        :param symbol: Collection symbol, may be empty
        :param contract_uri: Link to a JSON file describing the collection
        """
        location = L.ERC721Mintable_deploy
        self._require_unbound(location, M.contract_already_deployed)
        self._require_signer(location)
        if not name:
            raise ValidationError(error_logger(location, M.no_name_supplied), location)
        if symbol is None:
            raise ValidationError(
                error_logger(location, M.no_symbol_supplied), location
            )
        if contract_uri is None:
            raise ValidationError(
                error_logger(location, M.no_contract_uri_supplied), location
            )

        address, contract = await self._deploy_artifact(
            location, name, symbol, contract_uri
        )
        self._bind(location, M.contract_already_deployed, address, contract)
        logging.info(f"Deployed {self.artifact.contract_name} at {address}")

    async def load_contract(self, contract_address: str):
        """Bind this instance to an already deployed contract."""
        location = L.ERC721Mintable_loadContract
        self._require_unbound(location, M.contract_already_loaded)
        address = self._checked_address(
            location, contract_address, M.invalid_contract_address
        )
        signer = self._require_signer(location)
        artifact = self._resolve_artifact(location)

        async def load():
            return signer.contract(address=address, abi=artifact.abi)

        contract = await self._execute(location, load)
        self._bind(location, M.contract_already_loaded, address, contract)
        logging.info(f"Loaded {self.artifact.contract_name} at {address}")

    async def mint(self, public_address: str, token_uri: str) -> str:
        location = L.ERC721Mintable_mint
        self._require_bound(location)
        to = self._checked_address(location, public_address, M.invalid_account_address)
        if not token_uri:
            raise ValidationError(error_logger(location, M.invalid_token_uri), location)

        return await self._transact(
            location, "mintWithTokenURI", to, token_uri, gas=self._gas_ceiling()
        )

    async def transfer(self, from_address: str, to_address: str, token_id: int) -> str:
        location = L.ERC721Mintable_transfer
        self._require_bound(location)
        sender = self._checked_address(location, from_address, M.invalid_from_address)
        to = self._checked_address(location, to_address, M.invalid_to_address)
        token_id = self._checked_token_id(location, token_id)

        return await self._transact(
            location,
            "safeTransferFrom(address,address,uint256)",
            sender,
            to,
            token_id,
            gas=self._gas_ceiling(),
        )

    async def approve_transfer(self, to: str, token_id: int) -> str:
        """Allow ``to`` to transfer ``token_id`` on behalf of its owner."""
        location = L.ERC721Mintable_approveTransfer
        self._require_bound(location)
        to = self._checked_address(location, to, M.invalid_to_address)
        token_id = self._checked_token_id(location, token_id)

        return await self._transact(
            location, "approve", to, token_id, gas=self._gas_ceiling()
        )

    async def set_approval_for_all(self, to: str, approval_status: bool) -> str:
        """Give (True) or revoke (False) ``to`` the right to transfer every token
        of the signer."""
        location = L.ERC721Mintable_setApprovalForAll
        self._require_bound(location)
        to = self._checked_address(location, to, M.invalid_to_address)
        if not isinstance(approval_status, bool):
            raise ValidationError(
                error_logger(location, M.invalid_approval_status), location
            )

        return await self._transact(
            location, "setApprovalForAll", to, approval_status, gas=self._gas_ceiling()
        )

    async def add_minter(self, public_address: str) -> str:
        return await self._role_transaction(
            L.ERC721Mintable_addMinter, "grantRole", MINTER_ROLE, public_address
        )

    async def remove_minter(self, public_address: str) -> str:
        return await self._role_transaction(
            L.ERC721Mintable_removeMinter, "revokeRole", MINTER_ROLE, public_address
        )

    async def renounce_minter(self, public_address: str) -> str:
        """Give up the minter role. Only effective for the signer's own address."""
        return await self._role_transaction(
            L.ERC721Mintable_renounceMinter, "renounceRole", MINTER_ROLE, public_address
        )

    async def is_minter(self, public_address: str) -> bool:
        return await self._has_role(L.ERC721Mintable_isMinter, MINTER_ROLE, public_address)

    async def add_admin(self, public_address: str) -> str:
        return await self._role_transaction(
            L.ERC721Mintable_addAdmin, "grantRole", ADMIN_ROLE, public_address
        )

    async def remove_admin(self, public_address: str) -> str:
        return await self._role_transaction(
            L.ERC721Mintable_removeAdmin, "revokeRole", ADMIN_ROLE, public_address
        )

    async def renounce_admin(self, public_address: str) -> str:
        return await self._role_transaction(
            L.ERC721Mintable_renounceAdmin, "renounceRole", ADMIN_ROLE, public_address
        )

    async def is_admin(self, public_address: str) -> bool:
        return await self._has_role(L.ERC721Mintable_isAdmin, ADMIN_ROLE, public_address)

    async def set_royalties(self, address: str, fee: int) -> str:
        """Set the royalty receiver and fee for every token of the collection.

        :param address: Royalty receiver
        :param fee: Fee in basis points, strictly between 0 and 10000
        """
        location = L.ERC721Mintable_setRoyalties
        self._require_bound(location)
        receiver = self._checked_address(location, address, M.invalid_account_address)
        if (
            not isinstance(fee, int)
            or isinstance(fee, bool)
            or not 0 < fee < ROYALTY_FEE_DENOMINATOR
        ):
            raise ValidationError(
                error_logger(location, M.invalid_royalty_fee, f"fee: {fee}"), location
            )

        return await self._transact(location, "setRoyalties", receiver, fee)

    async def royalty_info(self, token_id: int, sell_price: int) -> Tuple[str, int]:
        """Return ``(receiver, royalty_amount)`` owed when ``token_id`` sells for
        ``sell_price``."""
        location = L.ERC721Mintable_royaltyInfo
        self._require_bound(location)
        token_id = self._checked_token_id(location, token_id)
        if (
            not isinstance(sell_price, int)
            or isinstance(sell_price, bool)
            or sell_price <= 0
        ):
            raise ValidationError(
                error_logger(location, M.invalid_sell_price), location
            )

        receiver, amount = await self._call(location, "royaltyInfo", token_id, sell_price)
        return receiver, amount

    async def set_contract_uri(self, contract_uri: str) -> str:
        location = L.ERC721Mintable_setContractURI
        self._require_bound(location)
        if not contract_uri:
            raise ValidationError(
                error_logger(location, M.invalid_contract_uri), location
            )

        return await self._transact(location, "setContractURI", contract_uri)

    async def _role_transaction(
        self, location: str, function: str, role: str, public_address: Any
    ) -> str:
        self._require_bound(location)
        account = self._checked_address(
            location, public_address, M.invalid_account_address
        )
        return await self._transact(location, function, role, account)

    async def _has_role(self, location: str, role: str, public_address: Any) -> bool:
        self._require_bound(location)
        account = self._checked_address(
            location, public_address, M.invalid_account_address
        )
        return bool(await self._call(location, "hasRole", role, account))


OWNER = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
BUYER = "0x52908400098527886E0F7030069857D2E4169EE7"
CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TXN_HASH = "0x" + "ab" * 32


def write_artifact(data) -> str:
    (file, path) = tempfile.mkstemp(suffix=".json")
    with os.fdopen(file, "w") as handle:
        json.dump(data, handle)
    return path


def mock_signer() -> unittest.mock.MagicMock:
    signer = unittest.mock.MagicMock()
    signer.client_config = ClientConfig()
    signer.submit = unittest.mock.AsyncMock(return_value=TXN_HASH)
    signer.wait_for_transaction = unittest.mock.AsyncMock(
        return_value={"status": 1, "contractAddress": CONTRACT}
    )
    return signer


class Test(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.signer = mock_signer()
        self.contract = self.signer.contract.return_value

    async def loaded(self) -> ERC721Mintable:
        template = ERC721Mintable(self.signer)
        await template.load_contract(CONTRACT.lower())
        return template

    def test_artifact(self):
        names = {entry.get("name") for entry in ARTIFACT.abi}
        for name in (
            "mintWithTokenURI",
            "safeTransferFrom",
            "approve",
            "setApprovalForAll",
            "grantRole",
            "revokeRole",
            "renounceRole",
            "hasRole",
            "setRoyalties",
            "royaltyInfo",
            "setContractURI",
        ):
            self.assertIn(name, names)
        self.assertEqual(ERC721Mintable.MINTER_ROLE, MINTER_ROLE)

    async def test_load_contract(self):
        template = await self.loaded()
        self.assertEqual(template.contract_address, CONTRACT)
        self.signer.contract.assert_called_once_with(address=CONTRACT, abi=ARTIFACT.abi)

        with self.assertRaises(PreconditionError) as ctx:
            await template.load_contract(BUYER)
        self.assertEqual(
            str(ctx.exception),
            "[ERC721Mintable.loadContract] The contract has already been loaded!",
        )
        self.assertEqual(template.contract_address, CONTRACT)

    async def test_load_contract_invalid_address(self):
        template = ERC721Mintable(self.signer)
        for address in (None, "", "0x1234", "not an address"):
            with self.assertRaises(ValidationError, msg=address):
                await template.load_contract(address)
        self.assertIsNone(template.contract_address)
        self.signer.contract.assert_not_called()

    async def test_contract_address_is_read_only(self):
        template = await self.loaded()
        with self.assertRaises(AttributeError):
            template.contract_address = BUYER

    async def test_deploy_without_bytecode(self):
        template = ERC721Mintable(self.signer)
        with self.assertRaises(ConfigurationError):
            await template.deploy("Lunar Cats", "LCAT", "ipfs://contract.json")
        self.signer.submit.assert_not_awaited()
        self.assertIsNone(template.contract_address)

    async def test_deploy(self):
        artifact = ContractArtifact("ERC721Mintable", ARTIFACT.abi, "0x6080")
        with unittest.mock.patch.object(ERC721Mintable, "artifact", artifact):
            template = ERC721Mintable(self.signer)
            await template.deploy("Lunar Cats", "", "ipfs://contract.json")

            self.assertEqual(template.contract_address, CONTRACT)
            self.signer.contract.assert_any_call(abi=ARTIFACT.abi, bytecode="0x6080")
            self.contract.constructor.assert_called_once_with(
                "Lunar Cats", "", "ipfs://contract.json"
            )
            self.signer.wait_for_transaction.assert_awaited_once_with(TXN_HASH)

            with self.assertRaises(PreconditionError) as ctx:
                await template.deploy("Lunar Cats", "LCAT", "ipfs://contract.json")
            self.assertEqual(
                str(ctx.exception),
                "[ERC721Mintable.deploy] The contract has already been deployed!",
            )
            self.assertEqual(self.signer.submit.await_count, 1)

    async def test_deploy_from_configured_artifact(self):
        # Foundry layout, creation code nested under "object"
        path = write_artifact(
            {
                "contractName": "ERC721Mintable",
                "abi": ARTIFACT.abi,
                "bytecode": {"object": "0x6080"},
            }
        )
        self.addCleanup(os.remove, path)
        self.signer.client_config = ClientConfig(
            artifact_paths={"ERC721Mintable": path}
        )

        template = ERC721Mintable(self.signer)
        await template.deploy("Lunar Cats", "LCAT", "ipfs://contract.json")

        self.assertEqual(template.contract_address, CONTRACT)
        self.signer.contract.assert_any_call(abi=ARTIFACT.abi, bytecode="0x6080")
        self.signer.contract.assert_called_with(address=CONTRACT, abi=ARTIFACT.abi)

    async def test_configured_artifact_cannot_be_loaded(self):
        path = write_artifact({"abi": []})
        self.addCleanup(os.remove, path)
        missing = os.path.join(os.path.dirname(path), "missing-artifact.json")
        for artifact_path in (missing, path):
            self.signer.client_config = ClientConfig(
                artifact_paths={"ERC721Mintable": artifact_path}
            )
            template = ERC721Mintable(self.signer)
            with self.assertRaises(ConfigurationError, msg=artifact_path) as ctx:
                await template.deploy("Lunar Cats", "LCAT", "ipfs://contract.json")
            self.assertEqual(
                str(ctx.exception),
                "[ERC721Mintable.deploy] The contract artifact could not be loaded. "
                f"| {artifact_path}",
            )
            with self.assertRaises(ConfigurationError):
                await template.load_contract(CONTRACT)
            self.assertIsNone(template.contract_address)
        self.signer.submit.assert_not_awaited()
        self.signer.contract.assert_not_called()

    async def test_deploy_validation(self):
        artifact = ContractArtifact("ERC721Mintable", ARTIFACT.abi, "0x6080")
        with unittest.mock.patch.object(ERC721Mintable, "artifact", artifact):
            cases = [
                (("", "LCAT", "uri"), "[ERC721Mintable.deploy] Name cannot be empty."),
                (
                    ("Cats", None, "uri"),
                    "[ERC721Mintable.deploy] Symbol cannot be undefined.",
                ),
                (
                    ("Cats", "LCAT", None),
                    "[ERC721Mintable.deploy] ContractURI cannot be undefined.",
                ),
            ]
            for args, message in cases:
                with self.assertRaises(ValidationError) as ctx:
                    await ERC721Mintable(self.signer).deploy(*args)
                self.assertEqual(str(ctx.exception), message)

            with self.assertRaises(ValidationError) as ctx:
                await ERC721Mintable(None).deploy("Cats", "LCAT", "uri")
            self.assertEqual(
                str(ctx.exception),
                "[ERC721Mintable.deploy] Signer instance is required to interact "
                "with contract.",
            )
        self.signer.submit.assert_not_awaited()

    async def test_deploy_failures_leave_instance_unbound(self):
        artifact = ContractArtifact("ERC721Mintable", ARTIFACT.abi, "0x6080")
        with unittest.mock.patch.object(ERC721Mintable, "artifact", artifact):
            template = ERC721Mintable(self.signer)

            cause = Exception("insufficient funds")
            self.signer.submit.side_effect = cause
            with self.assertRaises(UnknownNetworkError) as ctx:
                await template.deploy("Cats", "LCAT", "uri")
            self.assertIs(ctx.exception.__cause__, cause)
            self.assertIsNone(template.contract_address)

            self.signer.submit.side_effect = None
            self.signer.wait_for_transaction.return_value = {
                "status": 0,
                "contractAddress": None,
            }
            with self.assertRaises(ContractExecutionError) as ctx:
                await template.deploy("Cats", "LCAT", "uri")
            self.assertEqual(
                str(ctx.exception),
                f"[ERC721Mintable.deploy] The transaction was reverted. | {TXN_HASH}",
            )
            self.assertIsNone(template.contract_address)

    async def test_concurrent_bind(self):
        artifact = ContractArtifact("ERC721Mintable", ARTIFACT.abi, "0x6080")
        with unittest.mock.patch.object(ERC721Mintable, "artifact", artifact):
            template = ERC721Mintable(self.signer)

            async def mined_after_load(txn_hash):
                await template.load_contract(BUYER)
                return {"status": 1, "contractAddress": CONTRACT}

            self.signer.wait_for_transaction.side_effect = mined_after_load
            with self.assertRaises(PreconditionError):
                await template.deploy("Cats", "LCAT", "uri")
            self.assertEqual(template.contract_address, BUYER)

    async def test_operations_require_bound_state(self):
        template = ERC721Mintable(self.signer)
        operations = [
            ("mint", lambda: template.mint(OWNER, "ipfs://1.json")),
            ("mint", lambda: template.mint("bad", "")),
            ("transfer", lambda: template.transfer(OWNER, BUYER, 1)),
            ("approveTransfer", lambda: template.approve_transfer(BUYER, 1)),
            ("setApprovalForAll", lambda: template.set_approval_for_all(BUYER, True)),
            ("addMinter", lambda: template.add_minter(BUYER)),
            ("removeMinter", lambda: template.remove_minter(BUYER)),
            ("renounceMinter", lambda: template.renounce_minter(OWNER)),
            ("isMinter", lambda: template.is_minter(BUYER)),
            ("addAdmin", lambda: template.add_admin(BUYER)),
            ("removeAdmin", lambda: template.remove_admin(BUYER)),
            ("renounceAdmin", lambda: template.renounce_admin(OWNER)),
            ("isAdmin", lambda: template.is_admin(BUYER)),
            ("setRoyalties", lambda: template.set_royalties(OWNER, 500)),
            ("royaltyInfo", lambda: template.royalty_info(1, 10_000)),
            ("setContractURI", lambda: template.set_contract_uri("ipfs://c.json")),
        ]
        for operation, call in operations:
            with self.assertRaises(PreconditionError, msg=operation) as ctx:
                await call()
            self.assertEqual(
                str(ctx.exception),
                f"[ERC721Mintable.{operation}] A contract should be deployed or "
                "loaded first.",
            )
        self.signer.submit.assert_not_awaited()

    async def test_mint(self):
        template = await self.loaded()
        txn_hash = await template.mint(BUYER.lower(), "ipfs://1.json")

        self.assertEqual(txn_hash, TXN_HASH)
        self.contract.functions.mintWithTokenURI.assert_called_once_with(
            BUYER, "ipfs://1.json"
        )
        self.signer.submit.assert_awaited_once_with(
            self.contract.functions.mintWithTokenURI.return_value, gas=6_000_000
        )

    async def test_mint_validation(self):
        template = await self.loaded()
        with self.assertRaises(ValidationError):
            await template.mint("0x1234", "ipfs://1.json")
        with self.assertRaises(ValidationError) as ctx:
            await template.mint(BUYER, "")
        self.assertEqual(
            str(ctx.exception), "[ERC721Mintable.mint] A tokenURI is required to mint."
        )
        self.signer.submit.assert_not_awaited()

    async def test_transfer(self):
        template = await self.loaded()
        await template.transfer(OWNER, BUYER, 0)

        self.contract.get_function_by_signature.assert_called_once_with(
            "safeTransferFrom(address,address,uint256)"
        )
        function = self.contract.get_function_by_signature.return_value
        function.assert_called_once_with(OWNER, BUYER, 0)
        self.signer.submit.assert_awaited_once_with(
            function.return_value, gas=6_000_000
        )

    async def test_transfer_validation(self):
        template = await self.loaded()
        cases = [
            (("0x1234", BUYER, 1), 'A valid address "from" is required.'),
            ((OWNER, None, 1), 'A valid address "to" is required.'),
            ((OWNER, BUYER, -1), "TokenId should be a non-negative integer."),
            ((OWNER, BUYER, 1.5), "TokenId should be a non-negative integer."),
            ((OWNER, BUYER, "1"), "TokenId should be a non-negative integer."),
            ((OWNER, BUYER, True), "TokenId should be a non-negative integer."),
        ]
        for args, message in cases:
            with self.assertRaises(ValidationError, msg=args) as ctx:
                await template.transfer(*args)
            self.assertEqual(str(ctx.exception), f"[ERC721Mintable.transfer] {message}")
        self.signer.submit.assert_not_awaited()

    async def test_approvals(self):
        template = await self.loaded()
        await template.approve_transfer(BUYER, 3)
        self.contract.functions.approve.assert_called_once_with(BUYER, 3)

        await template.set_approval_for_all(BUYER, False)
        self.contract.functions.setApprovalForAll.assert_called_once_with(BUYER, False)

        for status in ("true", 1, None):
            with self.assertRaises(ValidationError, msg=status):
                await template.set_approval_for_all(BUYER, status)
        self.assertEqual(self.signer.submit.await_count, 2)

    async def test_roles(self):
        template = await self.loaded()
        functions = self.contract.functions

        await template.add_minter(BUYER)
        functions.grantRole.assert_called_with(MINTER_ROLE, BUYER)
        await template.remove_minter(BUYER)
        functions.revokeRole.assert_called_with(MINTER_ROLE, BUYER)
        await template.renounce_minter(OWNER)
        functions.renounceRole.assert_called_with(MINTER_ROLE, OWNER)
        await template.add_admin(BUYER)
        functions.grantRole.assert_called_with(ADMIN_ROLE, BUYER)
        await template.remove_admin(BUYER)
        functions.revokeRole.assert_called_with(ADMIN_ROLE, BUYER)
        await template.renounce_admin(OWNER)
        functions.renounceRole.assert_called_with(ADMIN_ROLE, OWNER)
        self.assertEqual(self.signer.submit.await_count, 6)

        functions.hasRole.return_value.call = unittest.mock.AsyncMock(
            return_value=True
        )
        self.assertIs(await template.is_minter(BUYER), True)
        functions.hasRole.assert_called_with(MINTER_ROLE, BUYER)
        self.assertIs(await template.is_admin(BUYER), True)
        functions.hasRole.assert_called_with(ADMIN_ROLE, BUYER)

        with self.assertRaises(ValidationError) as ctx:
            await template.add_minter("0x0")
        self.assertEqual(
            str(ctx.exception), "[ERC721Mintable.addMinter] Invalid account address."
        )

    async def test_set_royalties(self):
        template = await self.loaded()
        for fee in (0, 10_000, 9999.5, -1, True, None, "500"):
            with self.assertRaises(ValidationError, msg=fee):
                await template.set_royalties(OWNER, fee)
        with self.assertRaises(ValidationError):
            await template.set_royalties("0x0", 500)
        self.signer.submit.assert_not_awaited()

        for fee in (1, 9999):
            await template.set_royalties(OWNER, fee)
            self.contract.functions.setRoyalties.assert_called_with(OWNER, fee)
        self.assertEqual(self.signer.submit.await_count, 2)

    async def test_royalty_info(self):
        template = await self.loaded()
        self.contract.functions.royaltyInfo.return_value.call = (
            unittest.mock.AsyncMock(return_value=[OWNER, 500])
        )
        self.assertEqual(await template.royalty_info(0, 10_000), (OWNER, 500))
        self.contract.functions.royaltyInfo.assert_called_once_with(0, 10_000)

        for args in ((-1, 100), (1, 0), (1, -5), (1, 1.5), (None, 100)):
            with self.assertRaises(ValidationError, msg=args):
                await template.royalty_info(*args)

    async def test_set_contract_uri(self):
        template = await self.loaded()
        await template.set_contract_uri("ipfs://new.json")
        self.contract.functions.setContractURI.assert_called_once_with("ipfs://new.json")

        with self.assertRaises(ValidationError) as ctx:
            await template.set_contract_uri("")
        self.assertEqual(
            str(ctx.exception),
            "[ERC721Mintable.setContractURI] A valid contract uri is required!",
        )

    async def test_malformed_addresses_never_reach_the_chain(self):
        template = await self.loaded()
        functions = self.contract.functions
        functions.hasRole.return_value.call = unittest.mock.AsyncMock()
        functions.royaltyInfo.return_value.call = unittest.mock.AsyncMock()
        operations = {
            "mint": lambda a: template.mint(a, "ipfs://1.json"),
            "transfer from": lambda a: template.transfer(a, BUYER, 1),
            "transfer to": lambda a: template.transfer(OWNER, a, 1),
            "approve_transfer": lambda a: template.approve_transfer(a, 1),
            "set_approval_for_all": lambda a: template.set_approval_for_all(a, True),
            "add_minter": template.add_minter,
            "remove_minter": template.remove_minter,
            "renounce_minter": template.renounce_minter,
            "is_minter": template.is_minter,
            "add_admin": template.add_admin,
            "remove_admin": template.remove_admin,
            "renounce_admin": template.renounce_admin,
            "is_admin": template.is_admin,
            "set_royalties": lambda a: template.set_royalties(a, 500),
            "load_contract": lambda a: ERC721Mintable(self.signer).load_contract(a),
        }
        for address in (
            None,
            "",
            "0x1234",
            "0xzz908400098527886e0f7030069857d2e4169ee7",
            "0x52908400098527886E0F7030069857D2E4169eE7",
        ):
            for name, operation in operations.items():
                with self.assertRaises(ValidationError, msg=(name, address)):
                    await operation(address)

        self.signer.submit.assert_not_awaited()
        functions.hasRole.return_value.call.assert_not_awaited()
        functions.royaltyInfo.return_value.call.assert_not_awaited()
        # Only the binding made by loaded()
        self.assertEqual(self.signer.contract.call_count, 1)

    async def test_execution_failure_is_wrapped(self):
        template = await self.loaded()

        class ProviderError(Exception):
            code = "UNPREDICTABLE_GAS_LIMIT"
            reason = "cannot estimate gas"

        cause = ProviderError()
        self.signer.submit.side_effect = cause
        with self.assertRaises(ContractExecutionError) as ctx:
            await template.mint(BUYER, "ipfs://1.json")
        self.assertNotIsInstance(ctx.exception, UnknownNetworkError)
        self.assertIs(ctx.exception.__cause__, cause)
        self.assertEqual(
            str(ctx.exception),
            "[ERC721Mintable.mint] An error occured. | code: UNPREDICTABLE_GAS_LIMIT, "
            "message: cannot estimate gas",
        )


if __name__ == "__main__":
    unittest.main()
