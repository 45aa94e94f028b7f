"""
NFT metadata module.
"""

from modules.metadata.builder import build_nft_metadata, write_nft_metadata

__all__ = ["build_nft_metadata", "write_nft_metadata"]
