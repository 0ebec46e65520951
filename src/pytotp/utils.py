import base64
import binascii
from hmac import compare_digest
from urllib.parse import quote, unquote

from .exceptions import DecodingError


def b32decode_secret(secret: str) -> bytes:
    """
    Decodes a Base32 secret into raw key bytes.

    The otpauth scheme does not use Base32 padding, so missing padding is
    restored before decoding; padded input is accepted as-is.

    :param secret: the Base32 secret, any letter case
    :returns: raw key bytes
    """
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(secret, casefold=True)
    except (binascii.Error, ValueError) as e:
        raise DecodingError("Secret is not valid Base32") from e


def b32encode_secret(key: bytes) -> str:
    """Encodes raw key bytes as an unpadded Base32 secret."""
    return base64.b32encode(key).decode("ascii").rstrip("=")


def url_encode(value: str) -> str:
    # UTF-8 percent-encoding, spaces as %20 rather than +
    return quote(value, safe="")


def url_decode(value: str) -> str:
    return unquote(value)


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length. No Unicode normalization is applied: only exactly equal
    strings match.
    """
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
