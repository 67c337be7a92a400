# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

from .base import ContractArtifact, ContractTemplate
from .erc721_mintable import ERC721Mintable

__all__ = ["ContractArtifact", "ContractTemplate", "ERC721Mintable"]
