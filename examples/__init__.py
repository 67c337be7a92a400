"""
NFT SDK examples.

    - common.py: Environment-based configuration shared by the examples
    - erc721_mintable.py: Deploy or load a collection, mint, grant roles, set
      royalties and query the metadata API

Run from the repository root::

    python -m examples.erc721_mintable
"""
