# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Lifecycle shared by every contract template.

A template instance wraps exactly one on-chain contract. It is created unbound,
holding only a signer, and becomes bound once, by deploying a new contract or by
loading an existing one. Every other operation requires the bound state.

Binding happens after an await (deploy waits for its receipt), so the unbound
state is checked again right before binding: when two coroutines race on the
same instance the first one wins and the other raises ``PreconditionError``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from ..account_address import is_address, to_checksum_address
from ..auth import Signer
from ..errors import (
    ERROR_LOG,
    ConfigurationError,
    ContractExecutionError,
    NftSdkError,
    PreconditionError,
    ValidationError,
    error_logger,
    raise_contract_error,
)

T = TypeVar("T")


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract: ABI plus creation bytecode."""

    contract_name: str
    abi: List[Dict[str, Any]]
    bytecode: str

    @staticmethod
    def load(path: str) -> ContractArtifact:
        with open(path) as file:
            data = json.load(file)
        bytecode = data.get("bytecode") or ""
        # Foundry nests the creation code under "object"
        if isinstance(bytecode, dict):
            bytecode = bytecode.get("object") or ""
        return ContractArtifact(data["contractName"], data["abi"], bytecode)

    @staticmethod
    def load_bundled(file_name: str) -> ContractArtifact:
        """Load an artifact shipped in this package."""
        return ContractArtifact.load(os.path.join(os.path.dirname(__file__), file_name))

    def has_bytecode(self) -> bool:
        return self.bytecode not in ("", "0x")


class ContractTemplate:
    """Base class for contract templates. Subclasses set ``artifact``."""

    artifact: ContractArtifact

    _signer: Optional[Signer]
    _contract_address: Optional[str]
    _contract: Any

    def __init__(self, signer: Optional[Signer]):
        self._signer = signer
        self._contract_address = None
        self._contract = None

    @property
    def contract_address(self) -> Optional[str]:
        return self._contract_address

    @property
    def is_bound(self) -> bool:
        return self._contract is not None

    def _require_unbound(self, location: str, message: str):
        if self.is_bound:
            raise PreconditionError(error_logger(location, message), location)

    def _require_bound(self, location: str):
        if not self.is_bound:
            raise PreconditionError(
                error_logger(
                    location, ERROR_LOG.message.contract_not_deployed_or_loaded
                ),
                location,
            )

    def _require_signer(self, location: str) -> Signer:
        if self._signer is None:
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.no_signer_instance_supplied),
                location,
            )
        return self._signer

    def _bind(self, location: str, message: str, address: str, contract: Any):
        self._require_unbound(location, message)
        self._contract_address = address
        self._contract = contract

    async def _execute(self, location: str, operation: Callable[[], Awaitable[T]]) -> T:
        """Run an on-chain operation, wrapping any failure in ContractExecutionError."""
        try:
            return await operation()
        except NftSdkError:
            raise
        except Exception as e:
            raise_contract_error(location, e)

    def _resolve_artifact(self, location: str) -> ContractArtifact:
        """Return the artifact configured for this contract, else the bundled one."""
        path = None
        if self._signer is not None:
            path = self._signer.client_config.artifact_paths.get(
                self.artifact.contract_name
            )
        if not path:
            return self.artifact
        try:
            return ContractArtifact.load(path)
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise ConfigurationError(
                error_logger(location, ERROR_LOG.message.invalid_artifact, path),
                location,
            ) from e

    async def _deploy_artifact(self, location: str, *constructor_args: Any):
        """Deploy the contract artifact. Returns the new address and its binding."""
        signer = self._require_signer(location)
        artifact = self._resolve_artifact(location)
        if not artifact.has_bytecode():
            raise ConfigurationError(
                error_logger(
                    location,
                    ERROR_LOG.message.no_bytecode_in_artifact,
                    artifact.contract_name,
                ),
                location,
            )

        async def deploy():
            factory = signer.contract(abi=artifact.abi, bytecode=artifact.bytecode)
            txn_hash = await signer.submit(factory.constructor(*constructor_args))
            return txn_hash, await signer.wait_for_transaction(txn_hash)

        txn_hash, receipt = await self._execute(location, deploy)
        if receipt["status"] == 0:
            message = error_logger(
                location, ERROR_LOG.message.transaction_reverted, txn_hash
            )
            logging.error(message)
            raise ContractExecutionError(message, location)
        address = receipt["contractAddress"]
        return address, signer.contract(address=address, abi=artifact.abi)

    def _function(self, name: str):
        """Resolve a contract function by name, or by signature for overloads."""
        if "(" in name:
            return self._contract.get_function_by_signature(name)
        return getattr(self._contract.functions, name)

    async def _transact(
        self, location: str, name: str, *args: Any, gas: Optional[int] = None
    ) -> str:
        signer = self._require_signer(location)

        async def transact():
            return await signer.submit(self._function(name)(*args), gas=gas)

        return await self._execute(location, transact)

    async def _call(self, location: str, name: str, *args: Any) -> Any:
        async def call():
            return await self._function(name)(*args).call()

        return await self._execute(location, call)

    def _gas_ceiling(self) -> Optional[int]:
        if self._signer is None:
            return None
        return self._signer.client_config.max_gas_amount

    @staticmethod
    def _checked_address(location: str, value: Any, message: str) -> str:
        if not value or not is_address(value):
            raise ValidationError(error_logger(location, message), location)
        return to_checksum_address(value)

    @staticmethod
    def _checked_token_id(location: str, value: Any) -> int:
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.invalid_token_id), location
            )
        return value
