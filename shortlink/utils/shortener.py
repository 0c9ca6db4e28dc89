"""Token generation utility

This module derives short, deterministic, URL-safe tokens from target URLs.
The same target always maps to the same token, across processes and restarts.

Functions:
    generate_token(target, length=12):
        Derive a fixed-length Base62 token from a target URL.
    is_valid_token(token, length=12):
        Check whether a string has the shape of a token.

Example:
    >>> from shortlink.utils import generate_token
    >>> token = generate_token('https://example.com/a')
    >>> len(token)
    12

NOTE (collision bound):
    Tokens are truncated SHA-512 digests written in Base62. With L = 12 the
    token space is 62**12 ~= 3.2e21 (about 71 bits). For n stored links the
    probability that any two of them share a token is roughly
    n**2 / (2 * 62**12): ~1.5e-8 at 10^7 links, ~1.5e-2 at 10^10 links, and
    about 50% near 6.7e10 links. Collisions are never resolved silently: the
    store's uniqueness on the token surfaces them as TokenCollisionError.
"""

import hashlib
import string

from beartype import beartype

from shortlink.utils.constants import TOKEN_LENGTH


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits

_ALPHABET_SET = frozenset(ALPHABET)


@beartype
def generate_token(target: str, length: int = TOKEN_LENGTH) -> str:
    """Derive a short, deterministic token from a target URL.

    The target is hashed with SHA-512, the digest is read as a big-endian
    integer, reduced into the fixed Base62 space of `length` digits and
    encoded with the most significant digit first.

    Args:
        target (str):
            Target URL in its canonical (decoded) form.

        length (int, optional):
            Exact length of the resulting token. Defaults to 12.

    Returns:
        str: A `length`-character Base62 token.

    Raises:
        ValueError:
            If target is empty or length is not positive.

    Example:
        >>> generate_token('https://example.com/a') == generate_token('https://example.com/a')
        True
    """
    if not target:
        raise ValueError('Target must be a non-empty string.')
    if length <= 0:
        raise ValueError(f'Token length must be a positive integer (given value: {length}).')

    digest = hashlib.sha512(target.encode('utf-8')).digest()
    value = int.from_bytes(digest, 'big') % BASE**length

    # Base62 encode the low-order digits of the digest, most significant first.
    # Low-order digits are uniformly distributed, unlike the leading digit of
    # the full 512-bit number.
    return ''.join(reversed([ALPHABET[(value // BASE**i) % BASE] for i in range(length)]))


def is_valid_token(token: object, length: int = TOKEN_LENGTH) -> bool:
    """Return True if `token` is a string of exactly `length` Base62 characters."""
    return isinstance(token, str) and len(token) == length and all(c in _ALPHABET_SET for c in token)
