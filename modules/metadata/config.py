"""
NFT metadata configuration.

Fixed values embedded in every metadata document.
"""

NFT_SYMBOL = "MUSIC"
SELLER_FEE_BASIS_POINTS = 500  # 5% royalty
VIDEO_MIME_TYPE = "video/mp4"
NFT_CATEGORY = "video"
NFT_TYPE_TRAIT = "Music NFT"

METADATA_FILENAME_TEMPLATE = "metadata-{mint_id}-{timestamp}.json"
