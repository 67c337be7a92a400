"""
SDK identification for outgoing HTTP requests.

Every request sent to the NFT metadata API carries a client header naming the
SDK and its installed version, which helps the service operators tell Python SDK
traffic apart when debugging or rate limiting.

Examples:
    Use in a custom HTTP client::

        import httpx
        from nft_sdk.metadata import Metadata

        headers = {Metadata.NFT_SDK_HEADER: Metadata.get_nft_sdk_header_val()}
        async with httpx.AsyncClient(headers=headers) as client:
            ...

Note:
    Version information is detected from the installed package metadata, so
    the package must be installed (``pip install -e .`` is enough).
"""

import importlib.metadata as metadata

# Package name constant for metadata lookup
PACKAGE_NAME = "nft-sdk"


class Metadata:
    """Constants and helpers for SDK identification headers."""

    NFT_SDK_HEADER = "x-nft-sdk-client"

    @staticmethod
    def get_nft_sdk_header_val():
        """Return ``nft-python-sdk/{version}`` for the installed package.

        Raises:
            PackageNotFoundError: If the nft-sdk package is not installed.
        """
        version = metadata.version(PACKAGE_NAME)
        return f"nft-python-sdk/{version}"
