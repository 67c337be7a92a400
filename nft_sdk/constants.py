# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Fixed values shared across the NFT SDK.

Role identifiers must match, byte for byte, the role constants compiled into the
token contract. A mismatch does not fail on-chain: ``grantRole`` on an unknown
role simply records a role nobody checks. The ``Test`` class below pins both
identifiers to their keccak derivation.
"""

from __future__ import annotations

import unittest
from typing import Dict

from web3 import Web3

# NFT metadata REST API
NFT_API_URL = "https://nft.api.infura.io"

# OpenZeppelin AccessControl DEFAULT_ADMIN_ROLE
ADMIN_ROLE = "0x0000000000000000000000000000000000000000000000000000000000000000"
# keccak256("MINTER_ROLE")
MINTER_ROLE = "0x9f2df0fed2c77648de5860a4cc508cd0818c85b8b8a1ab4ceeef8d981c8956a6"

# Gas ceiling used for mint, transfer and approvals so that estimation never
# rejects a valid call.
DEFAULT_GAS_LIMIT = 6_000_000

# Seconds to wait for a receipt after submitting a transaction.
DEFAULT_TRANSACTION_WAIT_IN_SECONDS = 120

ROYALTY_FEE_DENOMINATOR = 10_000


class TEMPLATES:
    """Names under which contract templates are registered with the factory."""

    ERC721Mintable = "ERC721Mintable"


# chain id -> Infura network name
AVAILABLE_CHAINS: Dict[int, str] = {
    1: "mainnet",
    5: "goerli",
    11155111: "sepolia",
    137: "polygon-mainnet",
    80001: "polygon-mumbai",
    59144: "linea-mainnet",
    59140: "linea-goerli",
}


def infura_rpc_url(chain_id: int, project_id: str) -> str:
    return f"https://{AVAILABLE_CHAINS[chain_id]}.infura.io/v3/{project_id}"


def derive_role(name: str) -> str:
    """Return the AccessControl identifier of a named role, keccak256(name)."""
    return Web3.to_hex(Web3.keccak(text=name))


class Test(unittest.TestCase):
    def test_minter_role_matches_derivation(self):
        self.assertEqual(MINTER_ROLE, derive_role("MINTER_ROLE"))

    def test_admin_role_is_default_admin(self):
        self.assertEqual(Web3.to_bytes(hexstr=ADMIN_ROLE), b"\x00" * 32)

    def test_roles_are_32_bytes(self):
        for role in (ADMIN_ROLE, MINTER_ROLE):
            self.assertEqual(len(Web3.to_bytes(hexstr=role)), 32)

    def test_infura_rpc_url(self):
        self.assertEqual(
            infura_rpc_url(11155111, "abc"), "https://sepolia.infura.io/v3/abc"
        )


if __name__ == "__main__":
    unittest.main()
