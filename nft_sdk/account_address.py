# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
EVM account address and transaction hash handling.

Addresses are 20-byte identifiers written as ``0x`` followed by 40 hex
characters. Mixed-case strings must carry a valid EIP-55 checksum; all-lowercase
or all-uppercase strings are accepted as-is. Parsed addresses always render in
checksummed form.

Examples:
    Parsing and formatting::

        addr = AccountAddress.from_str("0x52908400098527886e0f7030069857d2e4169ee7")
        str(addr)  # "0x52908400098527886E0F7030069857D2E4169EE7"

    Quick checks used by every validating operation::

        is_address("0x0")               # False
        is_transaction_hash("0x" + "ab" * 32)  # True
"""

from __future__ import annotations

import re
import unittest
from typing import Any

from web3 import Web3

_TX_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


class ParseAddressError(Exception):
    """Raised when a string cannot be parsed into an AccountAddress."""


class AccountAddress:
    """A 20-byte EVM account or contract address."""

    address: bytes
    LENGTH: int = 20

    def __init__(self, address: bytes):
        self.address = address

        if len(address) != AccountAddress.LENGTH:
            raise ParseAddressError("Expected address of length 20")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountAddress):
            return NotImplemented
        return self.address == other.address

    def __hash__(self) -> int:
        return hash(self.address)

    def __str__(self):
        return Web3.to_checksum_address(self.address)

    def __repr__(self):
        return self.__str__()

    @staticmethod
    def from_str(address: str) -> AccountAddress:
        """Create an AccountAddress from a ``0x``-prefixed hex string.

        Raises:
            ParseAddressError: If the string is not ``0x`` + 40 hex characters, or
                if it is mixed-case with an invalid checksum.
        """
        if not isinstance(address, str) or not address.startswith("0x"):
            raise ParseAddressError("Hex string must start with a leading 0x.")
        if len(address) != AccountAddress.LENGTH * 2 + 2:
            raise ParseAddressError("The given hex string must be 0x + 40 chars.")
        if not Web3.is_address(address):
            raise ParseAddressError("The given hex string is not a valid address.")
        hex_part = address[2:]
        if (
            hex_part != hex_part.lower()
            and hex_part != hex_part.upper()
            and not Web3.is_checksum_address(address)
        ):
            raise ParseAddressError("The given hex string has a bad EIP-55 checksum.")
        return AccountAddress(Web3.to_bytes(hexstr=address))


def is_address(value: Any) -> bool:
    """Return True when ``value`` is a syntactically valid EVM address string."""
    try:
        AccountAddress.from_str(value)
    except ParseAddressError:
        return False
    return True


def to_checksum_address(value: str) -> str:
    return str(AccountAddress.from_str(value))


def is_transaction_hash(value: Any) -> bool:
    """Return True when ``value`` is ``0x`` followed by exactly 64 hex characters."""
    return isinstance(value, str) and _TX_HASH_PATTERN.match(value) is not None


class Test(unittest.TestCase):
    def test_from_str(self):
        lower = "0x52908400098527886e0f7030069857d2e4169ee7"
        checksummed = "0x52908400098527886E0F7030069857D2E4169EE7"

        self.assertEqual(str(AccountAddress.from_str(lower)), checksummed)
        self.assertEqual(
            AccountAddress.from_str(lower), AccountAddress.from_str(checksummed)
        )

    def test_from_str_invalid(self):
        for value in (
            "",
            "0x",
            "0x0",
            "52908400098527886e0f7030069857d2e4169ee7",
            "0x52908400098527886e0f7030069857d2e4169ee",
            "0x52908400098527886e0f7030069857d2e4169ee7aa",
            "0xzz908400098527886e0f7030069857d2e4169ee7",
            # Checksum with one letter flipped to lowercase
            "0x52908400098527886E0F7030069857D2E4169eE7",
        ):
            with self.assertRaises(ParseAddressError, msg=value):
                AccountAddress.from_str(value)

    def test_is_address(self):
        self.assertTrue(is_address("0x" + "ab" * 20))
        self.assertFalse(is_address(None))
        self.assertFalse(is_address(1234))
        self.assertFalse(is_address("not an address"))

    def test_bad_checksum(self):
        checksummed = "0x52908400098527886E0F7030069857D2E4169EE7"
        # Every single-letter case flip of a mixed-case address breaks EIP-55
        for index, char in enumerate(checksummed[2:], start=2):
            if not char.isalpha():
                continue
            flipped = checksummed[:index] + char.swapcase() + checksummed[index + 1 :]
            if flipped[2:] in (flipped[2:].lower(), flipped[2:].upper()):
                continue
            self.assertFalse(is_address(flipped), msg=flipped)
            with self.assertRaises(ParseAddressError, msg=flipped):
                to_checksum_address(flipped)

        self.assertTrue(is_address(checksummed.lower()))
        self.assertTrue(is_address("0x" + checksummed[2:].upper()))

    def test_is_transaction_hash(self):
        self.assertTrue(is_transaction_hash("0x" + "ab" * 32))
        self.assertFalse(is_transaction_hash("0x" + "ab" * 31))
        self.assertFalse(is_transaction_hash("ab" * 32))
        self.assertFalse(is_transaction_hash("0x" + "zz" * 32))
        self.assertFalse(is_transaction_hash(None))


if __name__ == "__main__":
    unittest.main()
