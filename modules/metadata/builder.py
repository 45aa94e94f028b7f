"""
NFT metadata documents.

Builds the Metaplex-style JSON document for a mint and stores it beside the
uploads, where the access gate always serves it.
"""
import time
from typing import Any, Dict, Optional

from shared.errors import AlreadyMintedError
from shared.logging import get_logger
from shared.models import Mint, format_price
from shared.storage import UploadStorage, UPLOADS_URL_PREFIX
from .config import (
    NFT_SYMBOL,
    SELLER_FEE_BASIS_POINTS,
    VIDEO_MIME_TYPE,
    NFT_CATEGORY,
    NFT_TYPE_TRAIT,
    METADATA_FILENAME_TEMPLATE
)

logger = get_logger("metadata")


def build_nft_metadata(
    mint: Mint,
    name: str,
    image: str,
    base_url: str,
    description: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the metadata document for a mint.

    Args:
        mint: Mint record
        name: NFT name
        image: Image path relative to base_url (e.g. /uploads/123-cover.png)
        base_url: Public base URL, without trailing slash
        description: Optional NFT description

    Returns:
        Metadata document as a dict
    """
    video_url = f"{base_url}{mint.mp4_url}"
    return {
        "name": name,
        "symbol": NFT_SYMBOL,
        "description": description or "",
        "seller_fee_basis_points": SELLER_FEE_BASIS_POINTS,
        "image": f"{base_url}{image}",
        "animation_url": video_url,
        "external_url": base_url,
        "attributes": [
            {"trait_type": "Type", "value": NFT_TYPE_TRAIT},
            {"trait_type": "Creator", "value": mint.creator_wallet},
            {"trait_type": "Price", "value": f"{format_price(mint.mint_price)} SOL"}
        ],
        "properties": {
            "files": [
                {
                    "uri": video_url,
                    "type": VIDEO_MIME_TYPE
                }
            ],
            "category": NFT_CATEGORY
        }
    }


def write_nft_metadata(
    storage: UploadStorage,
    mint: Mint,
    name: str,
    image: str,
    base_url: str,
    description: Optional[str] = None
) -> str:
    """
    Build and store the metadata document for a mint.

    Args:
        storage: Uploads store
        mint: Mint record, must not be minted yet
        name: NFT name
        image: Image path relative to base_url
        base_url: Public base URL, without trailing slash
        description: Optional NFT description

    Returns:
        Public URL of the stored document

    Raises:
        AlreadyMintedError: If the mint is already minted
        StorageError: If the document cannot be written
    """
    if mint.minted:
        raise AlreadyMintedError(mint.id)

    metadata = build_nft_metadata(mint, name, image, base_url, description)
    filename = METADATA_FILENAME_TEMPLATE.format(
        mint_id=mint.id,
        timestamp=int(time.time() * 1000)
    )
    storage.write_json(filename, metadata)

    metadata_url = f"{base_url}{UPLOADS_URL_PREFIX}{filename}"
    logger.info("NFT metadata written", extra={"mint_id": mint.id, "metadata_url": metadata_url})
    return metadata_url
