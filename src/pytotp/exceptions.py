class OTPError(ValueError):
    """
    Base class for every error raised by pytotp.

    Subclasses ValueError so code that guards OTP calls with
    ``except ValueError`` keeps working.
    """


class FormatError(OTPError):
    """Malformed otpauth URI, or a numeric field that is not a number."""


class MissingSecretError(FormatError):
    """The otpauth URI carries no ``secret`` parameter."""


class DecodingError(OTPError):
    """The secret is not valid Base32 text."""


class UnsupportedAlgorithmError(OTPError):
    """The requested HMAC digest is unknown or cannot be truncated."""


class InvalidKeyError(OTPError):
    """The key material is unusable for HMAC."""


class InvalidArgumentError(OTPError):
    """An engine parameter or call argument is out of range."""
