# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
ERC721Mintable walkthrough: deploy (or load) a collection, mint a token, manage
roles and royalties, then read everything back from the metadata API.

Examples:
    Deploy a new collection from a compiled artifact::

        export CONTRACT_ARTIFACT_PATH=./build/ERC721Mintable.json
        python -m examples.erc721_mintable

    Reuse a collection deployed earlier::

        export CONTRACT_ADDRESS=0x...
        python -m examples.erc721_mintable

Note:
    Mined transactions take a few seconds to be indexed by the metadata API, so
    freshly minted tokens may not be listed right away.
"""

import asyncio
import logging

from nft_sdk import SDK, TEMPLATES, Auth, ClientConfig

from .common import (
    CHAIN_ID,
    CONTRACT_ADDRESS,
    CONTRACT_ARTIFACT_PATH,
    EVM_RPC_URL,
    INFURA_PROJECT_ID,
    INFURA_PROJECT_SECRET,
    WALLET_PRIVATE_KEY,
    WALLET_PUBLIC_ADDRESS,
)

CONTRACT_URI = "ipfs://bafybeidkzm6ioteyvmxyqbzu6yhpbsdvt3ymvqmxvxurlsvgmzv6u4ytae/contract.json"
TOKEN_URI = "ipfs://bafybeidkzm6ioteyvmxyqbzu6yhpbsdvt3ymvqmxvxurlsvgmzv6u4ytae/1.json"


async def main():
    logging.basicConfig(level=logging.INFO)

    auth = Auth(
        chain_id=CHAIN_ID,
        private_key=WALLET_PRIVATE_KEY,
        project_id=INFURA_PROJECT_ID,
        secret_id=INFURA_PROJECT_SECRET,
        rpc_url=EVM_RPC_URL,
        client_config=ClientConfig(
            artifact_paths={"ERC721Mintable": CONTRACT_ARTIFACT_PATH}
            if CONTRACT_ARTIFACT_PATH
            else {}
        ),
    )
    sdk = SDK(auth)

    # :!:>section_1
    if CONTRACT_ADDRESS:
        contract = await sdk.load_contract(TEMPLATES.ERC721Mintable, CONTRACT_ADDRESS)
    else:
        if not CONTRACT_ARTIFACT_PATH:
            raise SystemExit("Set CONTRACT_ADDRESS or CONTRACT_ARTIFACT_PATH")

        contract = await sdk.deploy(
            TEMPLATES.ERC721Mintable,
            {"name": "Lunar Cats", "symbol": "LCAT", "contract_uri": CONTRACT_URI},
        )
    print(f"Contract: {contract.contract_address}")
    # <:!:section_1

    # :!:>section_2
    txn_hash = await contract.mint(WALLET_PUBLIC_ADDRESS, TOKEN_URI)
    print(f"Mint: {txn_hash}")
    signer = await sdk.get_provider()
    receipt = await signer.wait_for_transaction(txn_hash)
    print(f"Mint status: {receipt['status']}")
    # <:!:section_2

    print(f"Signer is minter: {await contract.is_minter(WALLET_PUBLIC_ADDRESS)}")
    print(f"Signer is admin: {await contract.is_admin(WALLET_PUBLIC_ADDRESS)}")

    # 5% royalties to the wallet
    txn_hash = await contract.set_royalties(WALLET_PUBLIC_ADDRESS, 500)
    await signer.wait_for_transaction(txn_hash)
    receiver, amount = await contract.royalty_info(0, 10**18)
    print(f"Royalties on a 1 ETH sale: {amount} wei to {receiver}")

    print(f"Status: {await sdk.get_status(txn_hash)}")

    print("\n=== Metadata API ===")
    print(await sdk.get_contract_metadata(contract.contract_address))
    print(await sdk.get_nfts(WALLET_PUBLIC_ADDRESS))
    print(await sdk.get_nfts_for_collection(contract.contract_address))

    await sdk.close()


if __name__ == "__main__":
    asyncio.run(main())
