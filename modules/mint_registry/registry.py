"""
Mint registry.

In-memory map of mint id to Mint record, persisted as one JSON array that is
rewritten on every mutation. Methods never await, so under the asyncio event
loop every mutation runs to completion before another request touches the map.
"""
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set

from pydantic import ValidationError as PydanticValidationError

from shared.errors import (
    AlreadyMintedError,
    DuplicateMintError,
    MintNotFoundError,
    PersistenceError
)
from shared.logging import get_logger
from shared.models import Mint, LIST_HIDDEN_FIELDS

logger = get_logger("mint_registry")


def _basename(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    return url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]


class MintRegistry:
    """Mint records keyed by id, backed by a JSON snapshot file."""

    def __init__(self, snapshot_path: Path):
        """
        Args:
            snapshot_path: JSON file holding the registry snapshot
        """
        self.snapshot_path = Path(snapshot_path)
        self._mints: Dict[str, Mint] = {}
        self._reserved: Set[str] = set()

    def __len__(self) -> int:
        return len(self._mints)

    def __contains__(self, mint_id: str) -> bool:
        return mint_id in self._mints

    def __iter__(self) -> Iterator[Mint]:
        return iter(list(self._mints.values()))

    def load(self) -> int:
        """
        Repopulate the registry from the snapshot file.

        A missing or unreadable snapshot leaves the registry empty.

        Returns:
            Number of mints loaded
        """
        self._mints = {}
        if not self.snapshot_path.exists():
            logger.info(
                "No existing mints file found, starting fresh",
                extra={"snapshot_path": str(self.snapshot_path)}
            )
            return 0

        try:
            raw = json.loads(self.snapshot_path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("snapshot is not a JSON array")
            mints = [Mint.model_validate(item) for item in raw]
        except (OSError, ValueError, PydanticValidationError) as e:
            logger.warning(
                "Mints file unreadable, starting fresh",
                exc_info=e,
                extra={"snapshot_path": str(self.snapshot_path)}
            )
            return 0

        for mint in mints:
            self._mints[mint.id] = mint

        logger.info(
            f"Loaded {len(self._mints)} mints from file",
            extra={"snapshot_path": str(self.snapshot_path), "count": len(self._mints)}
        )
        return len(self._mints)

    def save(self) -> None:
        """
        Rewrite the whole snapshot (temp file + atomic rename).

        Raises:
            PersistenceError: If the snapshot cannot be written
        """
        payload = json.dumps(
            [mint.model_dump(mode="json") for mint in self._mints.values()],
            indent=2
        )
        directory = self.snapshot_path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.snapshot_path.name}.",
                suffix=".tmp",
                delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.snapshot_path)
        except OSError as e:
            if tmp_name:
                Path(tmp_name).unlink(missing_ok=True)
            logger.error(
                "Failed to save mints",
                exc_info=e,
                extra={"snapshot_path": str(self.snapshot_path)}
            )
            raise PersistenceError(f"Failed to save mints: {e}") from e

    def reserve_id(self) -> str:
        """
        Allocate a timestamp-derived id not used by any stored or reserved mint.

        The id stays reserved until create() stores it or release_id() drops it.
        """
        candidate = int(time.time() * 1000)
        while str(candidate) in self._mints or str(candidate) in self._reserved:
            candidate += 1
        mint_id = str(candidate)
        self._reserved.add(mint_id)
        return mint_id

    def release_id(self, mint_id: str) -> None:
        """Drop a reservation made by reserve_id()."""
        self._reserved.discard(mint_id)

    def create(self, mint: Mint) -> Mint:
        """
        Insert a new mint and persist the registry.

        Raises:
            DuplicateMintError: If the id already exists
            PersistenceError: If the snapshot cannot be written (insert is rolled back)
        """
        if mint.id in self._mints:
            raise DuplicateMintError(mint.id)

        self._mints[mint.id] = mint
        try:
            self.save()
        except PersistenceError:
            del self._mints[mint.id]
            raise
        self._reserved.discard(mint.id)

        logger.info("Mint created", extra={"mint_id": mint.id})
        return mint

    def get(self, mint_id: str) -> Mint:
        """
        Raises:
            MintNotFoundError: If the id is unknown
        """
        mint = self._mints.get(mint_id)
        if mint is None:
            raise MintNotFoundError(mint_id)
        return mint

    def public_view(self, mint_id: str) -> dict:
        """Single mint without its secret keypair."""
        return self.get(mint_id).public_view()

    def list_public(self) -> List[dict]:
        """
        All mints, most recently created first, without keypairs or asset details.
        """
        return [
            mint.public_view(exclude=LIST_HIDDEN_FIELDS)
            for mint in reversed(list(self._mints.values()))
        ]

    def mark_minted(self, mint_id: str, tx_signature: str) -> Mint:
        """
        Record a completed on-chain mint.

        Raises:
            MintNotFoundError: If the id is unknown
            AlreadyMintedError: If the mint was already marked minted
            PersistenceError: If the snapshot cannot be written (change is rolled back)
        """
        mint = self.get(mint_id)
        if mint.minted:
            raise AlreadyMintedError(mint_id)

        updated = mint.model_copy(update={"minted": True, "tx_signature": tx_signature})
        self._mints[mint_id] = updated
        try:
            self.save()
        except PersistenceError:
            self._mints[mint_id] = mint
            raise

        logger.info("Mint marked minted", extra={"mint_id": mint_id, "tx_signature": tx_signature})
        return updated

    def is_page_image(self, filename: str) -> bool:
        """True if some mint uses this file as its public page image."""
        return any(_basename(mint.page_image_url) == filename for mint in self._mints.values())

    def find_by_asset(self, filename: str) -> Optional[Mint]:
        """
        Find the mint owning a gated asset (image, music or composed video).

        Linear scan over all mints.
        """
        for mint in self._mints.values():
            if filename in (_basename(mint.image_url), _basename(mint.music_url), _basename(mint.mp4_url)):
                return mint
        return None
