# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
NFT SDK - deploy and operate ERC-721 token contracts and query NFT metadata.

Core Features:
- **Contract Templates**: Deploy or load a token contract and mint, transfer,
  approve and manage roles and royalties through a small async API
- **Strict Lifecycle**: A template is bound exactly once, by deploy or load;
  every other operation requires the bound state
- **Input Validation**: Addresses, token ids, fees and URIs are checked before
  any network call
- **Metadata API**: Contract metadata, NFTs owned by an account, NFTs of a
  collection and single token metadata
- **Typed Errors**: Every failure carries a category and a greppable
  ``location message | options`` text

Supported Networks:
- Ethereum mainnet, Goerli and Sepolia
- Polygon mainnet and Mumbai
- Linea mainnet and Goerli
- Any EVM node through an explicit ``rpc_url``

Quick Start::

    import asyncio
    from nft_sdk import SDK, Auth, TEMPLATES

    async def main():
        auth = Auth(11155111, private_key, project_id, secret_id)
        sdk = SDK(auth)

        contract = await sdk.deploy(
            TEMPLATES.ERC721Mintable,
            {"name": "Lunar Cats", "symbol": "LCAT", "contract_uri": contract_uri},
        )
        txn_hash = await contract.mint(owner, token_uri)
        print(await sdk.get_status(txn_hash))

        await sdk.close()

    asyncio.run(main())
"""

from .auth import Auth, Signer
from .constants import TEMPLATES
from .contract_factory import ContractFactory
from .contract_templates import ERC721Mintable
from .errors import (
    ApiError,
    ConfigurationError,
    ContractExecutionError,
    NftSdkError,
    PreconditionError,
    UnknownNetworkError,
    UnknownTemplateError,
    ValidationError,
)
from .http_service import ClientConfig
from .sdk import SDK

__all__ = [
    "SDK",
    "Auth",
    "Signer",
    "ClientConfig",
    "ContractFactory",
    "ERC721Mintable",
    "TEMPLATES",
    "NftSdkError",
    "ValidationError",
    "PreconditionError",
    "ContractExecutionError",
    "UnknownNetworkError",
    "UnknownTemplateError",
    "ConfigurationError",
    "ApiError",
]
