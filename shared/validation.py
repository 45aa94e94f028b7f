"""
Validation utilities.

Shared validation utilities for common input validation tasks.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from shared.errors import ValidationError
from shared.keypair import is_valid_public_key
from shared.models import format_price

MAX_MINT_PRICE = Decimal("1000")

IMAGE_EXTENSIONS = ["png", "jpg", "jpeg", "gif", "webp"]
AUDIO_EXTENSIONS = ["mp3", "wav", "flac", "ogg", "m4a"]


def validate_wallet_address(address: Optional[str]) -> str:
    """
    Validate a Solana wallet address.

    Args:
        address: Base58 public key string

    Returns:
        The address, unchanged

    Raises:
        ValidationError: If the address does not parse as a public key
    """
    if not address or not is_valid_public_key(address.strip()):
        raise ValidationError("Invalid creator wallet address")
    return address.strip()


def validate_mint_price(price: Any) -> Decimal:
    """
    Validate and normalize a mint price.

    Args:
        price: Price as string or number (SOL)

    Returns:
        Price as Decimal in plain fixed-point form (1e2 -> 100, 0.50 -> 0.5)

    Raises:
        ValidationError: If the price is not a number, negative, or above 1000
    """
    if price is None or isinstance(price, bool):
        raise ValidationError("Invalid mint price format")

    if isinstance(price, float) and not math.isfinite(price):
        raise ValidationError("Invalid mint price format")

    try:
        value = Decimal(str(price).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Invalid mint price format")

    if not value.is_finite():
        raise ValidationError("Invalid mint price format")
    if value < 0:
        raise ValidationError("Mint price cannot be negative")
    if value > MAX_MINT_PRICE:
        raise ValidationError(f"Mint price cannot exceed {MAX_MINT_PRICE} SOL")

    return Decimal(format_price(value))


def validate_required_fields(missing: List[str]) -> None:
    """
    Reject a request with missing required fields.

    Args:
        missing: Names of absent fields

    Raises:
        ValidationError: If any field is missing
    """
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def validate_duration(duration: Optional[float]) -> Optional[float]:
    """
    Validate an optional video duration limit.

    Raises:
        ValidationError: If duration is zero, negative, or not finite
    """
    if duration is None:
        return None
    if isinstance(duration, bool) or not math.isfinite(duration) or duration <= 0:
        raise ValidationError(f"Duration must be a positive number of seconds (got {duration})")
    return float(duration)


def validate_file_size(
    file_size_bytes: int,
    max_size_bytes: int
) -> None:
    """
    Validate file size.

    Args:
        file_size_bytes: File size in bytes
        max_size_bytes: Maximum allowed size in bytes

    Raises:
        ValidationError: If file size exceeds maximum
    """
    if file_size_bytes < 0:
        raise ValidationError("File size cannot be negative")

    if file_size_bytes > max_size_bytes:
        max_size_mb = max_size_bytes / (1024 * 1024)
        file_size_mb = file_size_bytes / (1024 * 1024)
        raise ValidationError(
            f"File size ({file_size_mb:.2f} MB) exceeds maximum "
            f"of {max_size_mb:.2f} MB"
        )


def validate_file_extension(filename: Optional[str], allowed: List[str], kind: str) -> str:
    """
    Validate an uploaded file's extension.

    Args:
        filename: Original client file name
        allowed: Allowed lowercase extensions
        kind: "image" or "music", used in the error message

    Returns:
        Lowercase extension

    Raises:
        ValidationError: If the extension is missing or not allowed
    """
    ext = filename.rsplit('.', 1)[-1].lower() if filename and '.' in filename else ''
    if ext not in allowed:
        raise ValidationError(
            f"Invalid {kind} file extension. Supported: {', '.join(allowed)}. "
            f"Received: {ext or 'none'}"
        )
    return ext


def sanitize_filename(filename: str, default_stem: str = "file") -> str:
    """
    Make a client file name safe for the uploads directory.

    Keeps word characters and hyphens in the stem, lowercases the extension.
    """
    if '.' in filename:
        name_part, ext = filename.rsplit('.', 1)
        ext = re.sub(r'[^\w]', '', ext).lower()
    else:
        name_part, ext = filename, ''

    sanitized = re.sub(r'[^\w\-]', '_', name_part)  # Keep word chars and hyphens
    sanitized = re.sub(r'_+', '_', sanitized).strip('_') or default_stem
    return f"{sanitized}.{ext}" if ext else sanitized
