import hashlib
import hmac
import logging
import struct
from typing import Any, Union

from . import utils
from .exceptions import InvalidArgumentError, InvalidKeyError, UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

DEFAULT_HMAC_ALGORITHM = "HmacSHA1"
DEFAULT_TOKEN_LENGTH = 6

# dynamic truncation reads 4 bytes at an offset of up to 15
MIN_DIGEST_SIZE = 19

_COUNTER_MASK = 0xFFFFFFFFFFFFFFFF


def resolve_digest(algorithm: Any) -> Any:
    """
    Turns an HMAC algorithm identifier into a digest usable by :mod:`hmac`.

    Accepts ``HmacSHA1``-style names, bare names in any case (``SHA256``,
    ``sha-512``) or a :mod:`hashlib` constructor.

    :param algorithm: the algorithm identifier
    :returns: a hashlib digest name or constructor
    """
    if callable(algorithm):
        digest = algorithm
        try:
            size = digest().digest_size
        except (TypeError, ValueError) as e:
            raise UnsupportedAlgorithmError("{!r} is not a usable hashlib constructor".format(algorithm)) from e
    else:
        name = str(algorithm)
        if name.lower().startswith("hmac"):
            name = name[4:]
        name = name.lower()
        # SHA-256 -> sha256, SHA3-256 -> sha3_256
        candidates = [c for c in (name.replace("-", ""), name.replace("-", "_")) if c in hashlib.algorithms_available]
        if not candidates:
            raise UnsupportedAlgorithmError("Unsupported HMAC algorithm: {}".format(algorithm))
        digest = candidates[0]
        try:
            size = hashlib.new(digest).digest_size
        except (TypeError, ValueError) as e:
            raise UnsupportedAlgorithmError("Unsupported HMAC algorithm: {}".format(algorithm)) from e

    if size < MIN_DIGEST_SIZE:
        raise UnsupportedAlgorithmError(
            "selected digest function must generate digest size greater than or equals to {} bytes".format(
                MIN_DIGEST_SIZE
            )
        )
    return digest


class OTP(object):
    """
    Base class for OTP handlers.

    Handlers only carry algorithm parameters; the secret is passed to every
    call, so one handler serves any number of secrets. Parameters are fixed
    at construction.
    """

    def __init__(self, hmac_algorithm: Any = DEFAULT_HMAC_ALGORITHM, token_length: int = DEFAULT_TOKEN_LENGTH) -> None:
        """
        :param hmac_algorithm: HMAC algorithm, e.g. ``HmacSHA1``, ``SHA256`` or ``hashlib.sha512``
        :param token_length: number of digits in the generated token
        """
        if token_length < 1:
            raise InvalidArgumentError("token_length must be at least 1")
        self._hmac_algorithm = hmac_algorithm
        self._digest = resolve_digest(hmac_algorithm)
        self._token_length = token_length
        logger.debug(
            "%s handler: algorithm=%s token_length=%d", type(self).__name__, hmac_algorithm, token_length
        )

    @property
    def hmac_algorithm(self) -> Any:
        return self._hmac_algorithm

    @property
    def digest(self) -> Any:
        return self._digest

    @property
    def token_length(self) -> int:
        return self._token_length

    def compute_token(self, key: bytes, counter: int) -> str:
        """
        Computes the token for a raw key and counter value (RFC 4226).

        :param key: raw key bytes
        :param counter: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the interval count derived from the Unix timestamp
        :returns: the token, exactly ``token_length`` decimal digits
        """
        if not isinstance(key, (bytes, bytearray)):
            raise InvalidKeyError("key must be bytes")
        if not key:
            raise InvalidKeyError("key must not be empty")

        hmac_hash = bytearray(hmac.new(bytes(key), self.int_to_bytestring(counter), self._digest).digest())
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        return self.format_token(code)

    def format_token(self, code: int) -> str:
        """
        Pads ``code`` with leading zeros to ``token_length`` digits, or keeps
        only its rightmost ``token_length`` digits when it is longer.
        """
        token = str(code)
        if len(token) < self._token_length:
            return token.rjust(self._token_length, "0")
        return token[-self._token_length :]

    @staticmethod
    def byte_secret(secret: Union[str, bytes]) -> bytes:
        """
        Returns raw key bytes for ``secret``: bytes pass through unchanged,
        text is decoded as Base32.
        """
        if isinstance(secret, (bytes, bytearray)):
            return bytes(secret)
        return utils.b32decode_secret(secret)

    @staticmethod
    def int_to_bytestring(i: int) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        # 64-bit two's complement, so counters below zero still encode
        return struct.pack(">Q", i & _COUNTER_MASK)
