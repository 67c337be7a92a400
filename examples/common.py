# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Common configuration for the NFT SDK examples.

Every setting is read from the environment so that no credential is ever
written into an example script.

Environment Variables:
    WALLET_PRIVATE_KEY: Hex private key of the wallet that signs transactions
    WALLET_PUBLIC_ADDRESS: Address of that wallet, receives the minted tokens
    INFURA_PROJECT_ID: Project id, used for the RPC URL and the metadata API
    INFURA_PROJECT_SECRET: Project secret, used for the metadata API
    CHAIN_ID: Chain to use (default: 11155111, Sepolia)
    EVM_RPC_URL: Explicit RPC endpoint, required for chains without an
        Infura endpoint (e.g. a local node)
    CONTRACT_ARTIFACT_PATH: Compiled ERC721Mintable artifact (JSON with
        ``contractName``, ``abi`` and ``bytecode``), needed to deploy
    CONTRACT_ADDRESS: Existing contract to load instead of deploying

Usage Examples:
    Sepolia through Infura::

        export WALLET_PRIVATE_KEY=0x...
        export WALLET_PUBLIC_ADDRESS=0x...
        export INFURA_PROJECT_ID=...
        export INFURA_PROJECT_SECRET=...
        python -m examples.erc721_mintable

    Local node::

        export CHAIN_ID=31337
        export EVM_RPC_URL=http://127.0.0.1:8545
"""

import os

WALLET_PRIVATE_KEY = os.getenv("WALLET_PRIVATE_KEY")
WALLET_PUBLIC_ADDRESS = os.getenv("WALLET_PUBLIC_ADDRESS")

INFURA_PROJECT_ID = os.getenv("INFURA_PROJECT_ID")
INFURA_PROJECT_SECRET = os.getenv("INFURA_PROJECT_SECRET")

CHAIN_ID = int(os.getenv("CHAIN_ID", "11155111"))
# None selects the Infura endpoint of CHAIN_ID
EVM_RPC_URL = os.getenv("EVM_RPC_URL")

CONTRACT_ARTIFACT_PATH = os.getenv("CONTRACT_ARTIFACT_PATH")
CONTRACT_ADDRESS = os.getenv("CONTRACT_ADDRESS")
