import datetime
import logging
import time
from typing import Any, List, Union

from . import utils
from .exceptions import InvalidArgumentError
from .otp import DEFAULT_HMAC_ALGORITHM, DEFAULT_TOKEN_LENGTH, OTP

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30000  # milliseconds
DEFAULT_EPOCH = 0  # Unix epoch, milliseconds
DEFAULT_VALID_INTERVALS = 2
MAX_INTERVALS = 5

ForTime = Union[None, int, float, datetime.datetime]


class TOTP(OTP):
    """
    Handler for time-based OTP counters (RFC 6238).

    Safe for concurrent use: nothing is mutated after construction and each
    call builds its own HMAC.
    """

    def __init__(
        self,
        hmac_algorithm: Any = DEFAULT_HMAC_ALGORITHM,
        token_length: int = DEFAULT_TOKEN_LENGTH,
        interval: int = DEFAULT_INTERVAL,
        epoch: int = DEFAULT_EPOCH,
        valid_intervals: int = DEFAULT_VALID_INTERVALS,
    ) -> None:
        """
        :param hmac_algorithm: HMAC algorithm, e.g. ``HmacSHA1`` or ``SHA256``
        :param token_length: number of digits in the generated token
        :param interval: length of one time step, in milliseconds
        :param epoch: start of the first time step (T0), in milliseconds since the Unix epoch
        :param valid_intervals: number of intervals around now in which a token is
            accepted; allows for clock skew and transcription lag
        """
        if interval <= 0:
            raise InvalidArgumentError("interval must be positive")
        if valid_intervals > MAX_INTERVALS:
            raise InvalidArgumentError("Too many intervals")
        self._interval = interval
        self._epoch = epoch
        self._valid_intervals = valid_intervals
        super().__init__(hmac_algorithm=hmac_algorithm, token_length=token_length)

    @property
    def interval(self) -> int:
        return self._interval

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def valid_intervals(self) -> int:
        return self._valid_intervals

    @staticmethod
    def millis(for_time: ForTime = None) -> int:
        """
        Milliseconds since the Unix epoch for ``for_time``.

        :param for_time: ``None`` for the current time, a number of
            milliseconds, or a datetime (naive datetimes are local time)
        """
        if for_time is None:
            return int(time.time() * 1000)
        if isinstance(for_time, datetime.datetime):
            return int(for_time.timestamp() * 1000)
        return int(for_time)

    def timecode(self, for_time: ForTime = None) -> int:
        """
        Number of whole intervals between the epoch and ``for_time``,
        truncated toward zero.
        """
        elapsed = self.millis(for_time) - self._epoch
        count = abs(elapsed) // self._interval
        return count if elapsed >= 0 else -count

    def remaining(self, for_time: ForTime = None) -> float:
        """Seconds left before the token for ``for_time`` expires."""
        elapsed = self.millis(for_time) - self._epoch
        return (self._interval - elapsed % self._interval) / 1000.0

    def get_token(self, secret: Union[str, bytes], for_time: ForTime = None) -> str:
        """
        Gets the token valid at ``for_time`` (now by default).

        :param secret: Base32 secret, or raw key bytes
        :param for_time: the time to generate the token for
        :returns: the token
        """
        return self.compute_token(self.byte_secret(secret), self.timecode(for_time))

    def get_tokens(self, secret: Union[str, bytes], intervals: int, for_time: ForTime = None) -> List[str]:
        """
        Gets the tokens for ``intervals`` consecutive time steps around
        ``for_time``, oldest first. The currently valid token sits at index
        ``intervals // 2``.

        :param secret: Base32 secret, or raw key bytes
        :param intervals: number of tokens to return, at most 5
        :param for_time: the time to centre the window on
        :returns: list of tokens
        """
        if intervals > MAX_INTERVALS:
            raise InvalidArgumentError("Too many intervals")
        if intervals <= 0:
            return []

        key = self.byte_secret(secret)
        start = self.timecode(for_time) - intervals // 2
        logger.debug("token window: counters %d..%d", start, start + intervals - 1)
        return [self.compute_token(key, start + i) for i in range(intervals)]

    def is_token_valid(self, secret: Union[str, bytes], token: Any, for_time: ForTime = None) -> bool:
        """
        Checks whether ``token`` is valid in any of the ``valid_intervals``
        time steps around ``for_time``.

        :param secret: Base32 secret, or raw key bytes
        :param token: the token to check
        :param for_time: the time to check against (now by default)
        :returns: True if the token is currently valid
        """
        token = str(token)
        valid = False
        for candidate in self.get_tokens(secret, self._valid_intervals, for_time):
            # no early exit, every candidate is compared
            valid = utils.strings_equal(token, candidate) or valid
        return valid
