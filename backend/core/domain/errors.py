"""
Domain Errors
"""


class InvalidInputError(ValueError):
    """A pose sequence handed to the comparison core is empty."""

    def __init__(self, message: str = "Invalid pose data for comparison"):
        super().__init__(message)


class KeypointProducerError(RuntimeError):
    """A keypoint producer failed before signalling completion."""
