from dataclasses import dataclass


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a token -> target URL mapping.

    Attributes:
        target (str):
            The original long URL that the token redirects to, in canonical
            (decoded) form.
        token (str):
            The unique fixed-length identifier derived from the target.

    Example:
        >>> link = ShortLinkModel(target='https://example.com/article/123', token='Gh71WPTaq0Zx')
        >>> link.target
        'https://example.com/article/123'
        >>> link.token
        'Gh71WPTaq0Zx'
    """

    target: str
    token: str


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of a shorten request.

    Attributes:
        created (bool):
            True if this request inserted the row, False if it already existed.
        token (str):
            Token of the link.
        target (str):
            Canonical target now stored for the token.
    """

    created: bool
    token: str
    target: str
