# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Error taxonomy and diagnostic rendering for the NFT SDK.

Every failure raised by the SDK belongs to one of a small set of categories, and
every message follows the same greppable shape::

    <location> <message>[ | <options>]

Categories:
    ValidationError: Malformed or missing caller input, detected before any
        network call. No side effect has happened.
    PreconditionError: The operation was invoked in the wrong lifecycle state,
        e.g. minting on a contract that was never deployed or loaded.
    ContractExecutionError: The on-chain call path failed (network, gas,
        revert). The original cause is chained.
    UnknownNetworkError: A ContractExecutionError whose cause did not expose
        the usual ``{code, reason}`` shape.
    UnknownTemplateError: The contract factory was asked for a template name
        that is not registered.
    ConfigurationError: The SDK itself is misconfigured (e.g. an artifact
        without bytecode).
    ApiError: The metadata REST API returned a non-success status code.

Examples:
    Rendering a validation message::

        from nft_sdk.errors import ERROR_LOG, error_logger

        error_logger(
            location=ERROR_LOG.location.SDK_deploy,
            message=ERROR_LOG.message.no_template_type_supplied,
        )
        # '[SDK.deploy] No template type supplied.'

    Classifying a provider failure::

        network_error_handler({"code": "UNPREDICTABLE_GAS_LIMIT", "reason": "..."})
        # 'code: UNPREDICTABLE_GAS_LIMIT, message: ...'
"""

from __future__ import annotations

import logging
import unittest
from collections.abc import Mapping
from typing import Any, NoReturn, Optional


class ErrorLocation:
    """Fixed location tags, one per operation that can fail."""

    SDK_constructor = "[SDK.constructor]"
    SDK_deploy = "[SDK.deploy]"
    SDK_loadContract = "[SDK.loadContract]"
    SDK_getContractMetadata = "[SDK.getContractMetadata]"
    SDK_getNFTs = "[SDK.getNFTs]"
    SDK_getNFTsForCollection = "[SDK.getNFTsForCollection]"
    SDK_getTokenMetadata = "[SDK.getTokenMetadata]"
    SDK_getStatus = "[SDK.getStatus]"

    AUTH_constructor = "[AUTH.constructor]"

    HTTP_constructor = "[httpService.constructor]"
    HTTP_request = "[httpService.request]"

    CONTRACT_FACTORY_factory = "[ContractFactory.factory]"
    CONTRACT_FACTORY_register = "[ContractFactory.register]"

    ERC721Mintable_deploy = "[ERC721Mintable.deploy]"
    ERC721Mintable_loadContract = "[ERC721Mintable.loadContract]"
    ERC721Mintable_mint = "[ERC721Mintable.mint]"
    ERC721Mintable_transfer = "[ERC721Mintable.transfer]"
    ERC721Mintable_approveTransfer = "[ERC721Mintable.approveTransfer]"
    ERC721Mintable_setApprovalForAll = "[ERC721Mintable.setApprovalForAll]"
    ERC721Mintable_addMinter = "[ERC721Mintable.addMinter]"
    ERC721Mintable_removeMinter = "[ERC721Mintable.removeMinter]"
    ERC721Mintable_renounceMinter = "[ERC721Mintable.renounceMinter]"
    ERC721Mintable_isMinter = "[ERC721Mintable.isMinter]"
    ERC721Mintable_addAdmin = "[ERC721Mintable.addAdmin]"
    ERC721Mintable_removeAdmin = "[ERC721Mintable.removeAdmin]"
    ERC721Mintable_renounceAdmin = "[ERC721Mintable.renounceAdmin]"
    ERC721Mintable_isAdmin = "[ERC721Mintable.isAdmin]"
    ERC721Mintable_setRoyalties = "[ERC721Mintable.setRoyalties]"
    ERC721Mintable_royaltyInfo = "[ERC721Mintable.royaltyInfo]"
    ERC721Mintable_setContractURI = "[ERC721Mintable.setContractURI]"


class ErrorMessage:
    """Fixed message bodies shared by every location."""

    # Facade
    invalid_auth_instance = "Invalid auth instance supplied."
    no_template_type_supplied = "No template type supplied."
    no_parameters_supplied = "No parameters supplied."
    no_address_supplied = "No address supplied."
    invalid_contract_address = "Invalid contract address."
    invalid_account_address = "Invalid account address."
    no_tokenId_supplied = "No valid tokenId supplied."
    invalid_transaction_hash = "Invalid transaction hash."

    # Auth / transport
    no_chain_id_supplied = "No chainId supplied."
    chain_id_not_supported = "Chain id not supported without an explicit rpcUrl."
    no_private_key_supplied = "No privateKey supplied."
    no_project_id_supplied = "No projectId supplied."
    no_secret_id_supplied = "No secretId supplied."
    base_url_missing = "baseURL is missing!"
    api_key_missing = "apiKey is missing!"
    request_failed = "Request failed."

    # Factory
    unknown_template = "Unknown template."
    invalid_template_class = "Template must be a class accepting a signer."

    # Contract lifecycle
    contract_already_deployed = "The contract has already been deployed!"
    contract_already_loaded = "The contract has already been loaded!"
    contract_not_deployed_or_loaded = (
        "A contract should be deployed or loaded first."
    )
    no_signer_instance_supplied = (
        "Signer instance is required to interact with contract."
    )
    no_bytecode_in_artifact = "The contract artifact does not carry any bytecode."
    invalid_artifact = "The contract artifact could not be loaded."
    no_name_supplied = "Name cannot be empty."
    no_symbol_supplied = "Symbol cannot be undefined."
    no_contract_uri_supplied = "ContractURI cannot be undefined."
    invalid_contract_uri = "A valid contract uri is required!"
    invalid_token_uri = "A tokenURI is required to mint."
    invalid_to_address = 'A valid address "to" is required.'
    invalid_from_address = 'A valid address "from" is required.'
    invalid_token_id = "TokenId should be a non-negative integer."
    invalid_approval_status = "approvalStatus param should be a boolean."
    invalid_royalty_fee = (
        "Fee as integer value strictly between 0 and 10000 is required."
    )
    invalid_sell_price = "Sell price should be a positive integer."
    an_error_occured = "An error occured."
    transaction_reverted = "The transaction was reverted."


class ERROR_LOG:
    """Namespace grouping the fixed enumerations used to build messages."""

    location = ErrorLocation
    message = ErrorMessage


def network_error_handler(error: Any) -> str:
    """Render a failure coming from the chain provider.

    If ``error`` carries both a ``code`` and a ``reason`` (as mapping keys or as
    attributes), both are surfaced verbatim. Anything else is stringified and
    tagged ``UNKNOWN_ERROR``. Never raises.
    """
    code, reason = _code_and_reason(error)
    if code is not None and reason is not None:
        return f"code: {code}, message: {reason}"
    return f"code: UNKNOWN_ERROR, message: {error}"


def error_logger(location: str, message: str, options: Optional[str] = "") -> str:
    """Render ``{location} {message}`` with `` | {options}`` when options is non-empty."""
    if isinstance(options, str) and len(options) > 0:
        return f"{location} {message} | {options}"
    return f"{location} {message}"


def _code_and_reason(error: Any):
    if isinstance(error, Mapping):
        return error.get("code"), error.get("reason")
    return getattr(error, "code", None), getattr(error, "reason", None)


class NftSdkError(Exception):
    """Base class for every error raised by the SDK."""

    category: str = "NFT_SDK_ERROR"
    location: Optional[str]

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(message)
        self.location = location


class ValidationError(NftSdkError, ValueError):
    """Caller input is malformed or missing. Raised before any network call."""

    category = "VALIDATION_ERROR"


class PreconditionError(NftSdkError, RuntimeError):
    """The operation was invoked in the wrong lifecycle state."""

    category = "PRECONDITION_ERROR"


class ContractExecutionError(NftSdkError):
    """The on-chain call path failed; the original failure is chained as the cause."""

    category = "CONTRACT_EXECUTION_ERROR"


class UnknownNetworkError(ContractExecutionError):
    """The on-chain call path failed with an error lacking a ``{code, reason}`` shape."""

    category = "UNKNOWN_NETWORK_ERROR"


class UnknownTemplateError(NftSdkError, LookupError):
    """The contract factory does not know the requested template."""

    category = "UNKNOWN_TEMPLATE_ERROR"


class ConfigurationError(NftSdkError):
    """The SDK is misconfigured."""

    category = "CONFIGURATION_ERROR"


class ApiError(NftSdkError):
    """The API returned a non-success status code, e.g., >= 400"""

    category = "API_ERROR"
    status_code: int

    def __init__(self, message: str, status_code: int, location: Optional[str] = None):
        super().__init__(message, location)
        self.status_code = status_code


def raise_contract_error(location: str, error: Exception) -> NoReturn:
    """Wrap a failure of the on-chain call path and raise it from ``error``."""
    code, reason = _code_and_reason(error)
    message = error_logger(
        location, ERROR_LOG.message.an_error_occured, network_error_handler(error)
    )
    logging.error(message, exc_info=error)
    if code is None or reason is None:
        raise UnknownNetworkError(message, location) from error
    raise ContractExecutionError(message, location) from error


class Test(unittest.TestCase):
    def test_network_error_with_code_and_reason(self):
        network_error = {
            "reason": "cannot estimate gas; transaction may fail or may require manual gas limit",
            "code": "UNPREDICTABLE_GAS_LIMIT",
        }
        self.assertEqual(
            network_error_handler(network_error),
            "code: UNPREDICTABLE_GAS_LIMIT, message: cannot estimate gas; "
            "transaction may fail or may require manual gas limit",
        )

    def test_network_error_attributes(self):
        class ProviderError(Exception):
            code = "CALL_EXCEPTION"
            reason = "execution reverted"

        self.assertEqual(
            network_error_handler(ProviderError()),
            "code: CALL_EXCEPTION, message: execution reverted",
        )

    def test_unknown_network_error(self):
        self.assertEqual(
            network_error_handler("unknown error"),
            "code: UNKNOWN_ERROR, message: unknown error",
        )
        self.assertEqual(
            network_error_handler({"code": "ONLY_CODE"}),
            "code: UNKNOWN_ERROR, message: {'code': 'ONLY_CODE'}",
        )

    def test_error_logger(self):
        self.assertEqual(
            error_logger(location="Test", message="test", options="test"),
            "Test test | test",
        )
        self.assertEqual(error_logger(location="Test", message="test"), "Test test")
        self.assertEqual(
            error_logger(location="Test", message="test", options=""), "Test test"
        )
        self.assertEqual(
            error_logger(location="Test", message="test", options=None), "Test test"
        )

    def test_raise_contract_error(self):
        cause = Exception("boom")
        with self.assertRaises(UnknownNetworkError) as ctx:
            raise_contract_error(ERROR_LOG.location.ERC721Mintable_mint, cause)
        self.assertIs(ctx.exception.__cause__, cause)
        self.assertEqual(
            str(ctx.exception),
            "[ERC721Mintable.mint] An error occured. | code: UNKNOWN_ERROR, message: boom",
        )

        class GasError(Exception):
            code = "UNPREDICTABLE_GAS_LIMIT"
            reason = "cannot estimate gas"

        with self.assertRaises(ContractExecutionError) as ctx:
            raise_contract_error(ERROR_LOG.location.ERC721Mintable_mint, GasError())
        self.assertNotIsInstance(ctx.exception, UnknownNetworkError)
        self.assertEqual(ctx.exception.category, "CONTRACT_EXECUTION_ERROR")
        self.assertEqual(ctx.exception.location, "[ERC721Mintable.mint]")

    def test_categories(self):
        self.assertTrue(issubclass(ValidationError, ValueError))
        self.assertTrue(issubclass(UnknownNetworkError, ContractExecutionError))
        self.assertEqual(ApiError("nope", 404).status_code, 404)


if __name__ == "__main__":
    unittest.main()
