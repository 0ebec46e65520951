"""
Key-URI configuration for OTP generators.

The format is documented at
https://github.com/google/google-authenticator/wiki/Key-Uri-Format ::

    otpauth://TYPE/ISSUER?secret=SECRET&algorithm=SHA1&digits=6&counter=0&period=30

TYPE is conventionally ``totp`` or ``hotp``, but any value without a ``/``
is kept as-is. Parameters equal to their default are left out when
serializing.
"""
import logging
import re
from typing import Dict, NamedTuple, Optional

from . import utils
from .exceptions import FormatError, MissingSecretError

logger = logging.getLogger(__name__)

# These are the defaults of the URI format, not preferences.
DEFAULT_ALGORITHM = "SHA1"
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_COUNTER = 0

MIN_DIGITS = 6
MAX_DIGITS = 20
MIN_PERIOD = 10
MAX_PERIOD = 120

URI_PREFIX = "otpauth://"

# integer parameters must fit a signed 64-bit value
MIN_INT = -(2**63)
MAX_INT = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


class OTPConfig(NamedTuple):
    """
    Immutable OTP configuration.

    :param type: kind of OTP, e.g. ``totp`` or ``hotp``
    :param issuer: label shown by authenticators, or None
    :param secret: Base32 secret without padding
    :param algorithm: HMAC algorithm, e.g. ``SHA1`` or ``SHA256``
    :param digits: number of token digits
    :param period: seconds per time step (TOTP only)
    :param counter: initial counter value (HOTP only)
    """

    type: str
    issuer: Optional[str]
    secret: str
    algorithm: str = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    counter: int = DEFAULT_COUNTER

    def to_uri(self) -> str:
        """
        Returns the otpauth URI for this configuration, omitting any
        parameter left at its default.
        """
        uri = URI_PREFIX + utils.url_encode(self.type) + "/"
        # issuer goes in unencoded
        if self.issuer is not None:
            uri += self.issuer
        uri += "?secret=" + utils.url_encode(self.secret)

        if self.algorithm != DEFAULT_ALGORITHM:
            uri += "&algorithm=" + utils.url_encode(self.algorithm)
        if self.digits != DEFAULT_DIGITS:
            uri += "&digits={}".format(self.digits)
        if self.counter != DEFAULT_COUNTER:
            uri += "&counter={}".format(self.counter)
        if self.period != DEFAULT_PERIOD:
            uri += "&period={}".format(self.period)
        return uri

    def __str__(self) -> str:
        return self.to_uri()

    @classmethod
    def parse(cls, uri: str) -> "OTPConfig":
        return parse_otp_config(uri)


def _parse_int(params: Dict[str, str], key: str, default: int) -> int:
    value = params.get(key)
    if value is None:
        return default
    if not _INTEGER.fullmatch(value):
        raise FormatError("Invalid value for {}: {!r}".format(key, value))
    number = int(value)
    if not MIN_INT <= number <= MAX_INT:
        raise FormatError("Value for {} out of range: {}".format(key, value))
    return number


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def parse_otp_config(uri: str) -> OTPConfig:
    """
    Parses an otpauth URI into an :class:`OTPConfig`.

    Out-of-range ``digits`` and ``period`` values are clamped rather than
    rejected.

    :param uri: the otpauth URI to parse
    :returns: OTPConfig
    """
    if not uri.startswith(URI_PREFIX):
        raise FormatError("Not an otpauth URI")

    slash = uri.find("/", len(URI_PREFIX))
    if slash < 0:
        raise FormatError("Unrecognized otpauth URI format: no type")
    otp_type = utils.url_decode(uri[len(URI_PREFIX) : slash])

    question = uri.find("?", slash + 1)
    if question < 0:
        raise FormatError("Unrecognized otpauth URI format: no parameters")
    issuer: Optional[str] = uri[slash + 1 : question] or None

    # Given a URI like:
    # otpauth://totp/Example?secret=JBSWY3DPEHPK3PXP&digits=8
    # the query string is split into {"secret": "JBSWY3DPEHPK3PXP", "digits": "8"},
    # the last of any repeated key wins.
    params: Dict[str, str] = {}
    for piece in uri[question + 1 :].split("&"):
        key, _, value = piece.partition("=")
        params[key] = utils.url_decode(value)

    secret = params.get("secret")
    if not secret:
        raise MissingSecretError("No secret found in URI")

    algorithm = params.get("algorithm", DEFAULT_ALGORITHM)
    digits = _clamp(_parse_int(params, "digits", DEFAULT_DIGITS), MIN_DIGITS, MAX_DIGITS)
    period = _clamp(_parse_int(params, "period", DEFAULT_PERIOD), MIN_PERIOD, MAX_PERIOD)
    counter = _parse_int(params, "counter", DEFAULT_COUNTER)

    logger.debug("parsed otpauth URI: type=%s issuer=%s", otp_type, issuer)
    return OTPConfig(
        type=otp_type,
        issuer=issuer,
        secret=secret,
        algorithm=algorithm,
        digits=digits,
        period=period,
        counter=counter,
    )
