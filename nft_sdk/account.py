# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import tempfile
import unittest
from typing import Any, Dict

from eth_account import Account as EthAccount
from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount

from .account_address import AccountAddress


class Account:
    """A locally held secp256k1 key able to sign EVM transactions.

    The SDK never sends private keys anywhere: transactions are built by the
    signer, signed here, and only the raw signed bytes leave the process.

    Examples:
        Generate, persist and reload::

            account = Account.generate()
            account.store("./wallet.json")
            same = Account.load("./wallet.json")
            assert account == same

        Import a key exported from a wallet::

            account = Account.load_key("0x4c0883a6...")
            print(account.address())
    """

    account_address: AccountAddress
    private_key: LocalAccount

    def __init__(self, account_address: AccountAddress, private_key: LocalAccount):
        self.account_address = account_address
        self.private_key = private_key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return (
            self.account_address == other.account_address
            and self.private_key.key == other.private_key.key
        )

    @staticmethod
    def generate() -> Account:
        """Generate a new Account from a cryptographically secure random key."""
        private_key = EthAccount.create()
        return Account(AccountAddress.from_str(private_key.address), private_key)

    @staticmethod
    def load_key(key: str) -> Account:
        """Create an Account from a hex-encoded private key, with or without ``0x``."""
        private_key = EthAccount.from_key(key)
        return Account(AccountAddress.from_str(private_key.address), private_key)

    @staticmethod
    def load(path: str) -> Account:
        """Load an Account from a JSON file written by :meth:`store`.

        Expected JSON structure::

            {
                "account_address": "0x52908400098527886E0F7030069857D2E4169EE7",
                "private_key": "0x4c0883a69102937d6231471b5dbb6204fe512961..."
            }
        """
        with open(path) as file:
            data = json.load(file)
        account = Account.load_key(data["private_key"])
        if account.account_address != AccountAddress.from_str(data["account_address"]):
            raise ValueError("Stored account_address does not match private_key")
        return account

    def store(self, path: str):
        data = {
            "account_address": str(self.account_address),
            "private_key": self.private_key.key.hex(),
        }
        with open(path, "w") as file:
            json.dump(data, file)

    def address(self) -> str:
        """Checksummed address of this account."""
        return str(self.account_address)

    def sign_transaction(self, transaction: Dict[str, Any]) -> SignedTransaction:
        return self.private_key.sign_transaction(transaction)


class Test(unittest.TestCase):
    def test_load_and_store(self):
        (file, path) = tempfile.mkstemp()
        start = Account.generate()
        start.store(path)
        load = Account.load(path)

        self.assertEqual(start, load)
        self.assertEqual(start.address(), load.address())

    def test_load_key(self):
        # Well-known test key, see eth-account documentation
        account = Account.load_key(
            "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
        )
        self.assertEqual(
            account.address(), "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
        )

    def test_sign_transaction(self):
        account = Account.generate()
        signed = account.sign_transaction(
            {
                "to": "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23",
                "value": 0,
                "gas": 21000,
                "gasPrice": 1,
                "nonce": 0,
                "chainId": 1,
            }
        )
        self.assertEqual(
            EthAccount.recover_transaction(signed.raw_transaction), account.address()
        )


if __name__ == "__main__":
    unittest.main()
