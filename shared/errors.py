"""
Error taxonomy.

Every error raised by the service derives from PipelineError so the API
gateway can map it to a status code and the uniform error body.
"""

from typing import Optional


class PipelineError(Exception):
    """Base exception for all service errors."""

    def __init__(self, message: str, mint_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.mint_id = mint_id


class ConfigError(PipelineError):
    """Invalid or missing configuration."""
    pass


class ValidationError(PipelineError):
    """Invalid user input (missing fields, malformed address, bad price, bad upload)."""
    pass


class StorageError(PipelineError):
    """Upload store failure (bad file name, write failure)."""
    pass


class CompositionError(PipelineError):
    """Media composition failed."""
    pass


class SourceFileNotFoundError(CompositionError):
    """A composer input does not exist on disk. Raised before ffmpeg is started."""

    def __init__(self, role: str, path: str, mint_id: Optional[str] = None):
        super().__init__(f"{role.capitalize()} file not found: {path}", mint_id=mint_id)
        self.role = role
        self.path = path


class EncoderLaunchError(CompositionError):
    """The ffmpeg process could not be started."""
    pass


class EncoderFailedError(CompositionError):
    """ffmpeg exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str, mint_id: Optional[str] = None):
        super().__init__(f"FFmpeg failed with code {returncode}: {stderr}", mint_id=mint_id)
        self.returncode = returncode
        self.stderr = stderr


class RegistryError(PipelineError):
    """Mint registry state conflict."""
    pass


class MintNotFoundError(RegistryError):
    """No mint with the requested id."""

    def __init__(self, mint_id: str):
        super().__init__("Mint not found", mint_id=mint_id)


class DuplicateMintError(RegistryError):
    """A mint with this id already exists."""

    def __init__(self, mint_id: str):
        super().__init__(f"Mint already exists: {mint_id}", mint_id=mint_id)


class AlreadyMintedError(RegistryError):
    """The mint has already been minted."""

    def __init__(self, mint_id: str):
        super().__init__("Already minted", mint_id=mint_id)


class MintNotOpenError(RegistryError):
    """The mint's open time has not passed yet."""

    def __init__(self, mint_id: str):
        super().__init__("Mint not open yet", mint_id=mint_id)


class PersistenceError(RegistryError):
    """The registry snapshot could not be written."""
    pass
