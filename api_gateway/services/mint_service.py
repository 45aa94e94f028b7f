"""
Mint creation service.

Validates a create-mint request, composes the video and stores the record.
"""

from datetime import datetime, timezone
from typing import Tuple

from shared.errors import CompositionError, StorageError, ValidationError
from shared.keypair import generate_keypair, public_key_from_secret
from shared.logging import get_logger, mint_context
from shared.models import CreateMintRequest, Mint
from shared.storage import UploadStorage, UPLOADS_URL_PREFIX
from shared.validation import (
    validate_required_fields,
    validate_wallet_address,
    validate_mint_price,
    validate_duration
)
from modules.composer import process as compose_video
from modules.mint_registry import MintRegistry

logger = get_logger(__name__)


async def create_mint(
    request: CreateMintRequest,
    registry: MintRegistry,
    storage: UploadStorage
) -> Tuple[Mint, str]:
    """
    Create a mint: validate input, compose the MP4, persist the record.

    Nothing is stored when validation or composition fails.

    Args:
        request: Create-mint request body
        registry: Mint registry
        storage: Uploads store holding the image and music

    Returns:
        Tuple of (created mint, asset public key)

    Raises:
        ValidationError: If required fields are missing or invalid
        CompositionError: If the video cannot be composed
        PersistenceError: If the registry cannot be saved
    """
    validate_required_fields(request.missing_fields())
    creator_wallet = validate_wallet_address(request.creator_wallet)
    mint_price = validate_mint_price(request.mint_price)
    duration = validate_duration(request.duration)

    try:
        image_path = storage.path_for_url(request.image_url)
        music_path = storage.path_for_url(request.music_url)
    except StorageError as e:
        raise ValidationError(e.message) from e

    mint_id = registry.reserve_id()
    with mint_context(mint_id):
        try:
            keypair = generate_keypair()

            try:
                video_path = await compose_video(
                    mint_id=mint_id,
                    image_path=image_path,
                    audio_path=music_path,
                    output_dir=storage.root,
                    duration=duration
                )
            except CompositionError as e:
                logger.error("MP4 generation failed", exc_info=e, extra={"mint_id": mint_id})
                raise

            mint = Mint(
                id=mint_id,
                creator_wallet=creator_wallet,
                mint_price=mint_price,
                page_title=request.page_title,
                page_text=request.page_text,
                page_image_url=request.page_image_url,
                title=request.title,
                description=request.description,
                image_url=request.image_url,
                music_url=request.music_url,
                mp4_url=f"{UPLOADS_URL_PREFIX}{video_path.name}",
                open_time=request.open_time,
                keypair=keypair,
                minted=False,
                created_at=datetime.now(timezone.utc)
            )
            registry.create(mint)
        finally:
            registry.release_id(mint_id)

    return mint, public_key_from_secret(mint.keypair)
