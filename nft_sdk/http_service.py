# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Asynchronous HTTP client for the NFT metadata REST API.

The metadata API is read-mostly: contract metadata, NFTs owned by an account,
NFTs of a collection and single token metadata. Responses are JSON and are
returned decoded, without further parsing.

Examples:
    Direct usage::

        from nft_sdk.http_service import ClientConfig, HttpService

        service = HttpService("https://nft.api.infura.io", api_key)
        data = await service.get("/networks/1/nfts/0xBC4CA0EdA7647A8aB7C2061c2E118A18a936f13D")
        await service.close()

Error Handling:
    - ValidationError: the base URL or API key is missing
    - ApiError: the API answered with a status code >= 400 (``status_code`` is kept)

Note:
    All requests are async and must be awaited. A single ``httpx.AsyncClient`` is
    shared by every request so connections are pooled; call ``close()`` when done.
"""

from __future__ import annotations

import unittest
import unittest.mock
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from .constants import (
    DEFAULT_GAS_LIMIT,
    DEFAULT_TRANSACTION_WAIT_IN_SECONDS,
    NFT_API_URL,
)
from .errors import ERROR_LOG, ApiError, ValidationError, error_logger
from .metadata import Metadata


@dataclass
class ClientConfig:
    """Configuration shared by the SDK, its signer and its HTTP service.

    Transaction Parameters:
        max_gas_amount: Gas ceiling set on mint, transfer and approval calls
            (default: 6,000,000) so that estimation never rejects a valid call.
        transaction_wait_in_seconds: Timeout when waiting for a receipt
            (default: 120).

    Contract Parameters:
        artifact_paths: Compiled artifacts (JSON with ``contractName``, ``abi``
            and ``bytecode``) keyed by contract name. A template deploys from
            the configured artifact instead of its bundled one.

    Network Parameters:
        api_url: Base URL of the NFT metadata API.
        http2: Enable HTTP/2 for the metadata API (default: True).
        timeout: Per-request timeout in seconds (default: 60).

    Examples:
        Longer receipts wait on a congested network::

            config = ClientConfig(transaction_wait_in_seconds=600)
            auth = Auth(chain_id, private_key, project_id, secret_id, client_config=config)
            sdk = SDK(auth)

        Deploy from a compiled artifact::

            config = ClientConfig(
                artifact_paths={"ERC721Mintable": "./build/ERC721Mintable.json"}
            )
            auth = Auth(chain_id, private_key, project_id, secret_id, client_config=config)
            contract = await SDK(auth).deploy(TEMPLATES.ERC721Mintable, params)
    """

    api_url: str = NFT_API_URL
    http2: bool = True
    timeout: float = 60.0
    max_gas_amount: int = DEFAULT_GAS_LIMIT
    transaction_wait_in_seconds: int = DEFAULT_TRANSACTION_WAIT_IN_SECONDS
    artifact_paths: Dict[str, str] = field(default_factory=dict)


class HttpService:
    """Thin async JSON client authenticated with the project API key."""

    base_url: str
    client: httpx.AsyncClient
    client_config: ClientConfig

    def __init__(
        self,
        base_url: Optional[str],
        api_key: Optional[str],
        client_config: Optional[ClientConfig] = None,
    ):
        client_config = client_config or ClientConfig()
        if not base_url:
            raise ValidationError(
                error_logger(
                    location=ERROR_LOG.location.HTTP_constructor,
                    message=ERROR_LOG.message.base_url_missing,
                ),
                ERROR_LOG.location.HTTP_constructor,
            )
        if not api_key:
            raise ValidationError(
                error_logger(
                    location=ERROR_LOG.location.HTTP_constructor,
                    message=ERROR_LOG.message.api_key_missing,
                ),
                ERROR_LOG.location.HTTP_constructor,
            )

        self.base_url = base_url.rstrip("/")
        # Do not set a pool timeout, requests wait as long as progress is being made.
        timeout = httpx.Timeout(client_config.timeout, pool=None)
        headers = {
            Metadata.NFT_SDK_HEADER: Metadata.get_nft_sdk_header_val(),
            "Authorization": f"Basic {api_key}",
        }
        self.client = httpx.AsyncClient(
            http2=client_config.http2,
            timeout=timeout,
            headers=headers,
        )
        self.client_config = client_config

    async def close(self):
        await self.client.aclose()

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        # format params:
        params = {} if params is None else params
        params = {key: val for key, val in params.items() if val is not None}
        response = await self.client.get(url=f"{self.base_url}{path}", params=params)
        return self._handle_response(response, path)

    async def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        response = await self.client.post(url=f"{self.base_url}{path}", json=data)
        return self._handle_response(response, path)

    def _handle_response(self, response: httpx.Response, path: str) -> Any:
        if response.status_code >= 400:
            raise ApiError(
                error_logger(
                    location=ERROR_LOG.location.HTTP_request,
                    message=ERROR_LOG.message.request_failed,
                    options=f"{response.status_code} {path} - {response.text}",
                ),
                response.status_code,
                ERROR_LOG.location.HTTP_request,
            )
        return response.json()


TEST_BASE_URL = "http://base.url.com"
TEST_API_KEY = "APIKEY"


class Test(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        patcher = unittest.mock.patch(
            "nft_sdk.metadata.Metadata.get_nft_sdk_header_val",
            return_value="nft-python-sdk/0.0.0",
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_base_url(self):
        with self.assertRaises(ValidationError) as ctx:
            HttpService(None, TEST_API_KEY)
        self.assertEqual(
            str(ctx.exception), "[httpService.constructor] baseURL is missing!"
        )

    def test_missing_api_key(self):
        with self.assertRaises(ValidationError) as ctx:
            HttpService(TEST_BASE_URL, None)
        self.assertEqual(
            str(ctx.exception), "[httpService.constructor] apiKey is missing!"
        )

    async def test_default_config_is_not_shared(self):
        first = HttpService(TEST_BASE_URL, TEST_API_KEY)
        second = HttpService(TEST_BASE_URL, TEST_API_KEY)
        self.assertIsNot(first.client_config, second.client_config)

        first.client_config.artifact_paths["ERC721Mintable"] = "./build.json"
        self.assertEqual(second.client_config.artifact_paths, {})
        self.assertEqual(ClientConfig().artifact_paths, {})
        await first.close()
        await second.close()

    async def test_get(self):
        service = HttpService(TEST_BASE_URL, TEST_API_KEY)
        self.assertEqual(service.client.headers["Authorization"], f"Basic {TEST_API_KEY}")

        response = httpx.Response(
            200,
            json={"name": "people"},
            request=httpx.Request("GET", f"{TEST_BASE_URL}/api/people/1"),
        )
        with unittest.mock.patch.object(
            service.client, "get", return_value=response
        ) as get:
            data = await service.get("/api/people/1", {"cursor": None, "page": 2})

        self.assertEqual(data, {"name": "people"})
        get.assert_awaited_once_with(
            url=f"{TEST_BASE_URL}/api/people/1", params={"page": 2}
        )
        await service.close()

    async def test_post(self):
        service = HttpService(TEST_BASE_URL, TEST_API_KEY)
        response = httpx.Response(
            201, json={"id": 1}, request=httpx.Request("POST", f"{TEST_BASE_URL}/api/people")
        )
        with unittest.mock.patch.object(
            service.client, "post", return_value=response
        ) as post:
            data = await service.post("/api/people", {"name": "luke"})

        self.assertEqual(data, {"id": 1})
        post.assert_awaited_once_with(
            url=f"{TEST_BASE_URL}/api/people", json={"name": "luke"}
        )
        await service.close()

    async def test_api_error(self):
        service = HttpService(TEST_BASE_URL, TEST_API_KEY)
        response = httpx.Response(
            404, text="not found", request=httpx.Request("GET", f"{TEST_BASE_URL}/missing")
        )
        with unittest.mock.patch.object(service.client, "get", return_value=response):
            with self.assertRaises(ApiError) as ctx:
                await service.get("/missing")

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(
            str(ctx.exception),
            "[httpService.request] Request failed. | 404 /missing - not found",
        )
        await service.close()


if __name__ == "__main__":
    unittest.main()
