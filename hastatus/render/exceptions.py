"""Exception hierarchy for the status rendering engine.

The engine has a single error category: contract violations. Anything the
caller could reasonably send (unparsable states, missing attributes,
unavailable entities, tiny gauge regions) is rendered through an explicit
fallback instead of raising.
"""


class RenderError(Exception):
    """Base exception for all rendering engine errors."""


class RenderContractError(RenderError, ValueError):
    """A render request violated the engine's pre-validated bounds.

    Raised when:
    - The entity count is outside the range allowed for the render mode
    - A canvas dimension is outside MIN_DIMENSION..MAX_DIMENSION
    - An explicit canvas height is too small to hold the requested rows

    This is a programmer error in the caller. The HTTP layer validates the
    same bounds before the engine runs and answers with HTTP 400.
    """
