"""Target URL normalization at the service boundary

The canonical representation of a target is the decoded URL string. Callers
may deliver targets in a Base64 transport form; they are decoded here, once,
before reaching the shortener service.

Functions:
    normalize_target(raw, encoding='plain') -> str
        Decode and clean an inbound target into its canonical form.
    is_transport_form(stored, target) -> bool
        True if `stored` is the Base64 transport form of `target`.

Example:
    >>> normalize_target('aHR0cHM6Ly9leGFtcGxlLmNvbS9h', encoding='base64')
    'https://example.com/a'
    >>> is_transport_form('aHR0cHM6Ly9leGFtcGxlLmNvbS9h', 'https://example.com/a')
    True
"""

import base64
import binascii

from shortlink.exceptions import MalformedInputError


PLAIN = 'plain'
BASE64 = 'base64'
ENCODINGS = frozenset({PLAIN, BASE64})


def _decode_base64(value: str) -> str:
    """Strictly decode a standard Base64 string into UTF-8 text."""
    return base64.b64decode(value.encode('ascii'), validate=True).decode('utf-8')


def normalize_target(raw: object, encoding: str = PLAIN) -> str:
    """Decode and clean an inbound target URL

    Args:
        raw (object):
            Target as received from the transport.
        encoding (str):
            Either 'plain' (default) or 'base64'.

    Returns:
        str: Canonical (decoded, whitespace-stripped) target URL.

    Raises:
        MalformedInputError:
            If the target is not a string, is blank, uses an unknown encoding,
            or is not valid Base64 when encoding='base64'.
    """
    if not isinstance(encoding, str) or encoding not in ENCODINGS:
        raise MalformedInputError(f"Unsupported target encoding '{encoding}'.")
    if not isinstance(raw, str):
        raise MalformedInputError(f'Target must be a string (given type: {type(raw)}).')

    target = raw.strip()
    if encoding == BASE64:
        try:
            target = _decode_base64(target).strip()
        except (binascii.Error, UnicodeError, ValueError) as e:
            raise MalformedInputError('Target is not valid Base64.') from e

    if not target:
        raise MalformedInputError('Target must be a non-empty string.')
    return target


def is_transport_form(stored: str, target: str) -> bool:
    """Return True if `stored` is the Base64 transport form of `target`

    Used to tell legacy rows written in transport form apart from genuine
    token collisions.
    """
    try:
        return _decode_base64(stored) == target
    except (binascii.Error, UnicodeError, ValueError):
        return False
