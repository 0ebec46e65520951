"""
Command-line wrapper: prints the previous, current and next tokens for a
Base32 secret or an otpauth URI.
"""
import argparse
import logging
import sys
from typing import List, Optional, Sequence

from . import from_config
from .config import URI_PREFIX, parse_otp_config
from .exceptions import InvalidArgumentError, OTPError
from .hotp import HOTP
from .totp import MAX_INTERVALS, TOTP

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 3


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pytotp",
        description="Print the previous, current and next TOTP tokens for a secret.",
    )
    p.add_argument("secret", nargs="?", help="Base32-encoded TOTP seed, or an otpauth:// URI")
    p.add_argument(
        "--intervals",
        type=int,
        default=DEFAULT_WINDOW,
        help="Number of tokens to print, at most {} (default: %(default)s)".format(MAX_INTERVALS),
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def tokens_for(secret: str, intervals: int) -> List[str]:
    if not secret.startswith(URI_PREFIX):
        return TOTP().get_tokens(secret, intervals)

    config = parse_otp_config(secret)
    handler = from_config(config)
    if isinstance(handler, HOTP):
        if intervals > MAX_INTERVALS:
            raise InvalidArgumentError("Too many intervals")
        return [handler.at(config.secret, i) for i in range(intervals)]
    return handler.get_tokens(config.secret, intervals)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.secret is None:
        parser.print_help()
        return 0

    try:
        tokens = tokens_for(args.secret, args.intervals)
    except OTPError as e:
        logger.debug("token generation failed", exc_info=True)
        print("error: {}".format(e), file=sys.stderr)
        return 1

    print(" ".join(tokens))
    return 0


if __name__ == "__main__":
    sys.exit(main())
