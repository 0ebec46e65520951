from .config import OTPConfig as OTPConfig
from .config import parse_otp_config as parse_otp_config
from .exceptions import DecodingError as DecodingError
from .exceptions import FormatError as FormatError
from .exceptions import InvalidArgumentError as InvalidArgumentError
from .exceptions import InvalidKeyError as InvalidKeyError
from .exceptions import MissingSecretError as MissingSecretError
from .exceptions import OTPError as OTPError
from .exceptions import UnsupportedAlgorithmError as UnsupportedAlgorithmError
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .totp import TOTP as TOTP


def from_config(config: OTPConfig) -> OTP:
    """
    Builds the handler matching an :class:`OTPConfig`.

    The secret stays in the config; pass ``config.secret`` to the handler's
    methods.

    :param config: the OTP configuration
    :returns: TOTP or HOTP handler
    """
    if config.type == "totp":
        return TOTP(hmac_algorithm=config.algorithm, token_length=config.digits, interval=config.period * 1000)
    elif config.type == "hotp":
        return HOTP(hmac_algorithm=config.algorithm, token_length=config.digits, initial_count=config.counter)
    raise FormatError("Not a supported OTP type: {}".format(config.type))


def parse_uri(uri: str) -> OTP:
    """
    Parses an otpauth URI and returns the matching handler; works for
    either TOTP or HOTP.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the hotp/totp URI to parse
    :returns: OTP object
    """
    return from_config(parse_otp_config(uri))
