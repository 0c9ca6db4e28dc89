"""Unit tests for target normalization in encoding.py

Test coverage includes:

1. Plain targets
   - Whitespace is stripped, content otherwise untouched.

2. Base64 targets
   - Transport form is decoded into the canonical URL.
   - Invalid Base64 raises MalformedInputError.

3. Rejection
   - Blank, non-string targets and unknown encodings raise MalformedInputError.

4. Transport form detection
   - is_transport_form() recognizes Base64 copies and rejects unrelated values.
"""

import base64

import pytest

from shortlink.exceptions import MalformedInputError
from shortlink.utils.encoding import normalize_target, is_transport_form


def _b64(value: str) -> str:
    return base64.b64encode(value.encode('utf-8')).decode('ascii')


# -------------------------------
# 1. Plain targets
# -------------------------------


def test_normalize_plain_target():
    assert normalize_target('https://example.com/a') == 'https://example.com/a'


def test_normalize_plain_target_strips_whitespace():
    assert normalize_target('  https://example.com/a\n') == 'https://example.com/a'


def test_plain_target_that_looks_like_base64_is_kept():
    """A plain target is never decoded, even when it is valid Base64."""
    assert normalize_target('YWJj') == 'YWJj'


# -------------------------------
# 2. Base64 targets
# -------------------------------


def test_normalize_base64_target():
    encoded = _b64('https://example.com/a?q=1&r=2')
    assert normalize_target(encoded, encoding='base64') == 'https://example.com/a?q=1&r=2'


def test_normalize_base64_unicode_target():
    encoded = _b64('https://例え.jp/パス')
    assert normalize_target(encoded, encoding='base64') == 'https://例え.jp/パス'


@pytest.mark.parametrize('raw', ['not base64!!', 'YWJj$', '/w=='])
def test_normalize_invalid_base64_raises(raw):
    """Invalid Base64 alphabet, padding or UTF-8 is rejected."""
    with pytest.raises(MalformedInputError):
        normalize_target(raw, encoding='base64')


# -------------------------------
# 3. Rejection
# -------------------------------


@pytest.mark.parametrize('raw', ['', '   ', '\t\n'])
def test_normalize_blank_target_raises(raw):
    with pytest.raises(MalformedInputError):
        normalize_target(raw)


def test_normalize_blank_decoded_target_raises():
    with pytest.raises(MalformedInputError):
        normalize_target(_b64('   '), encoding='base64')


@pytest.mark.parametrize('raw', [None, 42, ['https://example.com'], b'https://example.com'])
def test_normalize_non_string_target_raises(raw):
    with pytest.raises(MalformedInputError):
        normalize_target(raw)


def test_normalize_unknown_encoding_raises():
    with pytest.raises(MalformedInputError, match='Unsupported target encoding'):
        normalize_target('https://example.com', encoding='rot13')


@pytest.mark.parametrize('encoding', [['base64'], {}, None, 64])
def test_normalize_non_string_encoding_raises(encoding):
    """Encodings taken from JSON bodies may be any JSON type."""
    with pytest.raises(MalformedInputError, match='Unsupported target encoding'):
        normalize_target('https://example.com', encoding=encoding)


def test_malformed_input_error_is_value_error():
    """Callers catching ValueError still see malformed targets."""
    with pytest.raises(ValueError):
        normalize_target('')


# -------------------------------
# 4. Transport form detection
# -------------------------------


def test_is_transport_form_detects_base64_copy():
    target = 'https://example.com/a'
    assert is_transport_form(_b64(target), target)


def test_is_transport_form_rejects_unrelated_value():
    assert not is_transport_form('https://example.com/other', 'https://example.com/a')


def test_is_transport_form_rejects_base64_of_other_target():
    assert not is_transport_form(_b64('https://example.com/other'), 'https://example.com/a')


def test_is_transport_form_rejects_identical_value():
    assert not is_transport_form('https://example.com/a', 'https://example.com/a')