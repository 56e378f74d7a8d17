"""Errors raised while reading inline source maps."""


class InlineSourceMapError(Exception):
    """Base exception for inline source map errors."""


class SourceMapDecodeError(InlineSourceMapError, ValueError):
    """Raised when a tagged inline source map trailer cannot be decoded.

    The trailer is only ever written by ``with_inline_sourcemap``, so a
    payload that is not valid base64 or does not hold valid JSON means the
    code was corrupted after inlining. Callers decide whether to treat it
    as a missing map or to abort.
    """

    def __init__(self, payload: str, reason: str) -> None:
        """Initialize decode error.

        Args:
            payload: The base64 payload captured from the trailer.
            reason: Description of the decoding failure.

        """
        self.payload = payload
        self.reason = reason
        super().__init__(f"Failed to decode inline source map: {reason}")
