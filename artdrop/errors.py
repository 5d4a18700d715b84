"""
ArtDrop error types.
"""


class ArtDropError(Exception):
    """Base class for imaging core errors."""
    pass


class InvalidInput(ArtDropError, ValueError):
    """Raised for malformed hex strings, bad pixel buffers or out-of-range parameters."""
    pass


class NoContentDetected(ArtDropError):
    """Raised when auto-crop finds no pixel distinguishable from the background."""
    pass


class ProviderUnavailable(ArtDropError, RuntimeError):
    """Raised by a segmentation engine that cannot run in this environment."""
    pass
