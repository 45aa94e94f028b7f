"""
Solana keypair helpers.

Mint keypairs are stored as the raw 64-byte secret key (32-byte seed followed
by the 32-byte public key), the layout used by Solana wallets and web3 clients.
"""

from solders.keypair import Keypair
from solders.pubkey import Pubkey

SECRET_KEY_LENGTH = 64


def generate_keypair() -> bytes:
    """Generate a fresh keypair and return its 64-byte secret key."""
    return bytes(Keypair())


def public_key_from_secret(secret_key: bytes) -> str:
    """
    Derive the base58 public key from a 64-byte secret key.

    Raises:
        ValueError: If the secret key is malformed
    """
    if len(secret_key) != SECRET_KEY_LENGTH:
        raise ValueError(
            f"Secret key must be {SECRET_KEY_LENGTH} bytes (got {len(secret_key)})"
        )
    return str(Keypair.from_bytes(secret_key).pubkey())


def is_valid_public_key(address: str) -> bool:
    """Check whether a string parses as a base58 Solana public key."""
    if not address or not isinstance(address, str):
        return False
    try:
        Pubkey.from_string(address)
        return True
    except ValueError:
        return False
