"""
Mint endpoints.

Mint creation, listing, reveal, minting and NFT metadata generation.
"""

from fastapi import APIRouter, Path, Depends

from shared.config import Settings
from shared.logging import get_logger, set_mint_id
from shared.models import CreateMintRequest, MarkMintedRequest, NftMetadataRequest
from shared.storage import UploadStorage
from modules.access_gate import reveal_keypair
from modules.metadata import write_nft_metadata
from modules.mint_registry import MintRegistry
from api_gateway.dependencies import get_registry, get_settings, get_storage
from api_gateway.services.mint_service import create_mint as create_mint_service

logger = get_logger(__name__)

router = APIRouter()


@router.post("/create-mint")
async def create_mint(
    body: CreateMintRequest,
    registry: MintRegistry = Depends(get_registry),
    storage: UploadStorage = Depends(get_storage)
):
    """
    Create a mint from previously uploaded image and music.

    Returns:
        New mint ID and the asset public key
    """
    mint, asset_pubkey = await create_mint_service(body, registry, storage)
    return {"success": True, "mint_id": mint.id, "asset_pubkey": asset_pubkey}


@router.get("/api/mints")
async def list_mints(registry: MintRegistry = Depends(get_registry)):
    """List all mints, newest first, without secrets or asset details."""
    return {"success": True, "mints": registry.list_public()}


@router.get("/mint/{mint_id}")
async def get_mint(
    mint_id: str = Path(...),
    registry: MintRegistry = Depends(get_registry)
):
    """Get one mint without its keypair."""
    set_mint_id(mint_id)
    return {"success": True, "mint": registry.public_view(mint_id)}


@router.post("/api/create-nft-metadata")
async def create_nft_metadata(
    body: NftMetadataRequest,
    registry: MintRegistry = Depends(get_registry),
    storage: UploadStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings)
):
    """
    Write the NFT metadata document for a mint that has not been minted yet.

    Returns:
        Public URL of the metadata document
    """
    set_mint_id(body.mint_id)
    mint = registry.get(body.mint_id)
    metadata_url = write_nft_metadata(
        storage,
        mint,
        name=body.name,
        image=body.image,
        base_url=settings.public_base_url,
        description=body.description
    )
    return {"success": True, "metadata_url": metadata_url}


@router.get("/api/keypair/{mint_id}")
async def get_keypair(
    mint_id: str = Path(...),
    registry: MintRegistry = Depends(get_registry)
):
    """
    Reveal the asset keypair once the mint is open and not yet minted.

    Returns:
        Secret key bytes and asset public key
    """
    set_mint_id(mint_id)
    payload = reveal_keypair(registry, mint_id)
    return {"success": True, **payload.model_dump()}


@router.post("/api/mark-minted/{mint_id}")
async def mark_minted(
    body: MarkMintedRequest,
    mint_id: str = Path(...),
    registry: MintRegistry = Depends(get_registry)
):
    """Record the transaction signature of a completed mint."""
    set_mint_id(mint_id)
    registry.mark_minted(mint_id, body.tx_signature)
    return {"success": True}
