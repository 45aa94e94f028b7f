"""
Keypair reveal.

The only path that discloses a mint's secret keypair.
"""
from datetime import datetime, timezone
from typing import Optional

from shared.errors import AlreadyMintedError, MintNotOpenError
from shared.keypair import public_key_from_secret
from shared.logging import get_logger
from shared.models import RevealPayload
from modules.mint_registry import MintRegistry

logger = get_logger("access_gate.reveal")


def reveal_keypair(
    registry: MintRegistry,
    mint_id: str,
    now: Optional[datetime] = None
) -> RevealPayload:
    """
    Disclose the secret keypair of an open, not yet minted mint.

    Reading does not change the record; repeated reveals return the same keypair.

    Args:
        registry: Mint registry
        mint_id: Mint ID
        now: Current time (default: datetime.now(timezone.utc))

    Returns:
        RevealPayload with the secret key bytes and derived public key

    Raises:
        MintNotFoundError: If the id is unknown
        AlreadyMintedError: If the mint is already minted
        MintNotOpenError: If the open time has not passed
    """
    mint = registry.get(mint_id)
    if mint.minted:
        raise AlreadyMintedError(mint_id)

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if mint.open_time and now < mint.open_time:
        raise MintNotOpenError(mint_id)

    logger.info("Keypair revealed", extra={"mint_id": mint_id})
    return RevealPayload(
        keypair=list(mint.keypair),
        asset_pubkey=public_key_from_secret(mint.keypair)
    )
