"""
Mint registry module.

Owns mint records and their JSON snapshot.
"""

from modules.mint_registry.registry import MintRegistry

__all__ = ["MintRegistry"]
