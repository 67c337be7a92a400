# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import unittest
import unittest.mock
from typing import Dict, Optional, Type

from .auth import Signer
from .constants import TEMPLATES
from .contract_templates import ContractTemplate, ERC721Mintable
from .errors import ERROR_LOG, UnknownTemplateError, ValidationError, error_logger


class ContractFactory:
    """Registry of contract templates, keyed by template name.

    Examples:
        Register a custom template and instantiate it::

            class SoulBound(ERC721Mintable):
                artifact = ContractArtifact.load("./SoulBound.json")

            ContractFactory.register("SoulBound", SoulBound)
            contract = ContractFactory.factory("SoulBound", signer)
    """

    templates: Dict[str, Type[ContractTemplate]] = {
        TEMPLATES.ERC721Mintable: ERC721Mintable,
    }

    @classmethod
    def factory(cls, template: str, signer: Optional[Signer]) -> ContractTemplate:
        """Return a new, unbound instance of the template registered as ``template``."""
        location = ERROR_LOG.location.CONTRACT_FACTORY_factory
        template_cls = cls.templates.get(template)
        if template_cls is None:
            raise UnknownTemplateError(
                error_logger(
                    location, ERROR_LOG.message.unknown_template, f"template: {template}"
                ),
                location,
            )
        return template_cls(signer)

    @classmethod
    def register(cls, name: str, template_cls: Type[ContractTemplate]):
        location = ERROR_LOG.location.CONTRACT_FACTORY_register
        if not name:
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.no_template_type_supplied),
                location,
            )
        if not isinstance(template_cls, type) or not issubclass(
            template_cls, ContractTemplate
        ):
            raise ValidationError(
                error_logger(location, ERROR_LOG.message.invalid_template_class),
                location,
            )
        cls.templates[name] = template_cls


class Test(unittest.TestCase):
    def setUp(self):
        patcher = unittest.mock.patch.dict(ContractFactory.templates)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_factory(self):
        signer = unittest.mock.MagicMock()
        first = ContractFactory.factory(TEMPLATES.ERC721Mintable, signer)
        second = ContractFactory.factory(TEMPLATES.ERC721Mintable, signer)

        self.assertIsInstance(first, ERC721Mintable)
        self.assertIsNot(first, second)
        self.assertIsNone(first.contract_address)

    def test_unknown_template(self):
        with self.assertRaises(UnknownTemplateError) as ctx:
            ContractFactory.factory("ERC1155", None)
        self.assertEqual(
            str(ctx.exception),
            "[ContractFactory.factory] Unknown template. | template: ERC1155",
        )

    def test_register(self):
        class SoulBound(ERC721Mintable):
            pass

        ContractFactory.register("SoulBound", SoulBound)
        self.assertIsInstance(ContractFactory.factory("SoulBound", None), SoulBound)

        with self.assertRaises(ValidationError):
            ContractFactory.register("", SoulBound)
        with self.assertRaises(ValidationError):
            ContractFactory.register("Broken", SoulBound(None))
        with self.assertRaises(ValidationError):
            ContractFactory.register("Broken", dict)


if __name__ == "__main__":
    unittest.main()
