import time

import pytest

# RFC 4226 / RFC 6238 test seeds
RFC_KEY_SHA1 = b"12345678901234567890"
RFC_KEY_SHA256 = b"12345678901234567890123456789012"
RFC_KEY_SHA512 = b"1234567890123456789012345678901234567890123456789012345678901234"
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"  # Base32 of RFC_KEY_SHA1

# RFC 4226 appendix D, HOTP values for counters 0-9
RFC_HOTP_TOKENS = [
    "755224",
    "287082",
    "359152",
    "969429",
    "338314",
    "254676",
    "287922",
    "162583",
    "399871",
    "520489",
]


@pytest.fixture
def frozen_time(monkeypatch):
    """Pins time.time() to the given number of seconds."""

    def freeze(seconds):
        monkeypatch.setattr(time, "time", lambda: float(seconds))

    return freeze
