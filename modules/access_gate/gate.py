"""
File access policy.

Decides whether a stored upload may be served, from the owning mint's state
and the file's role.
"""
from enum import Enum

from shared.logging import get_logger
from modules.mint_registry import MintRegistry

logger = get_logger("access_gate")

METADATA_PREFIX = "metadata-"


class AccessDecision(str, Enum):
    """Outcome of a file access check."""

    ALLOW = "allow"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


def check_file_access(registry: MintRegistry, filename: str) -> AccessDecision:
    """
    Decide whether a stored file may be served.

    Rules, first match wins:
    1. metadata documents are always public;
    2. a mint's page image is always public;
    3. a file not owned by any mint is not found;
    4. an asset of an unminted mint is forbidden;
    5. an asset of a minted mint is served.

    Args:
        registry: Mint registry
        filename: Bare stored file name

    Returns:
        AccessDecision
    """
    if filename.startswith(METADATA_PREFIX):
        return AccessDecision.ALLOW

    if registry.is_page_image(filename):
        return AccessDecision.ALLOW

    mint = registry.find_by_asset(filename)
    if mint is None:
        return AccessDecision.NOT_FOUND

    if not mint.minted:
        logger.info(
            "Asset requested before mint",
            extra={"mint_id": mint.id, "requested_file": filename}
        )
        return AccessDecision.FORBIDDEN

    return AccessDecision.ALLOW
