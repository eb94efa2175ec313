"""Exception taxonomy for the conversion pipeline.

Every failure a caller can see derives from ReflowError so the HTTP layer
can map the whole family in one place.
"""


class ReflowError(Exception):
    """Base class for pipeline errors."""

    pass


class ExtractionFailed(ReflowError):
    """The source document could not be read.

    Examples: empty upload, missing PDF header, corrupt xref, a page whose
    text stream cannot be decoded.
    """

    pass


class ParseFailure(ReflowError):
    """Input handed to a reflow strategy has the wrong shape."""

    pass


class GenerationUnavailable(ReflowError):
    """The text-generation model is misconfigured or returned an error."""

    pass


class MalformedGenerationResponse(ReflowError):
    """A generation response parsed as JSON but held no recoverable text.

    Never reaches the caller: salvage falls back to the raw response.
    """

    pass


class PublishRejected(ReflowError):
    """The document database refused the page."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
