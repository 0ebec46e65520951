from typing import Any, Union

from . import utils
from .otp import DEFAULT_HMAC_ALGORITHM, DEFAULT_TOKEN_LENGTH, OTP


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        hmac_algorithm: Any = DEFAULT_HMAC_ALGORITHM,
        token_length: int = DEFAULT_TOKEN_LENGTH,
        initial_count: int = 0,
    ) -> None:
        """
        :param hmac_algorithm: HMAC algorithm, e.g. ``HmacSHA1`` or ``SHA256``
        :param token_length: number of digits in the token. Some apps expect this to be 6 digits, others support more.
        :param initial_count: starting HMAC counter value, defaults to 0
        """
        self._initial_count = initial_count
        super().__init__(hmac_algorithm=hmac_algorithm, token_length=token_length)

    @property
    def initial_count(self) -> int:
        return self._initial_count

    def at(self, secret: Union[str, bytes], count: int) -> str:
        """
        Generates the token for the given count.

        :param secret: Base32 secret, or raw key bytes
        :param count: the OTP HMAC counter, relative to ``initial_count``
        :returns: token
        """
        return self.compute_token(self.byte_secret(secret), self._initial_count + count)

    def verify(self, secret: Union[str, bytes], token: Any, counter: int) -> bool:
        """
        Verifies the token passed in against the token for ``counter``.
        Nothing is recorded, so the same token verifies again.

        :param secret: Base32 secret, or raw key bytes
        :param token: the token to check against
        :param counter: the OTP HMAC counter
        """
        return utils.strings_equal(str(token), self.at(secret, counter))
