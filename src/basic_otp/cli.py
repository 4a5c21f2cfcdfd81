"""Command-line interface for basic-otp."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from basic_otp.encoding import decode_secret
from basic_otp.errors import OTPError
from basic_otp.hotp import HOTP
from basic_otp.keyed_hash import HashAlgorithm
from basic_otp.otp import OtpParameters
from basic_otp.totp import DEFAULT_STEP_SECONDS, TOTP


def _parameters(args: argparse.Namespace) -> OtpParameters:
    return OtpParameters(decode_secret(args.secret), args.digits, args.algorithm)


def _totp(args: argparse.Namespace) -> TOTP:
    return TOTP(_parameters(args), step_seconds=args.period)


def hotp_command(args: argparse.Namespace) -> int:
    """Handle the hotp command."""
    try:
        hotp = HOTP(_parameters(args), counter=args.counter, sync_window=args.window)
        if args.verify is None:
            print(hotp.generate())
            return 0

        if hotp.validate(args.verify):
            print(f"✓ Valid code (next counter: {hotp.counter})")
            return 0
        print("✗ Invalid code", file=sys.stderr)
        return 1
    except OTPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


def totp_command(args: argparse.Namespace) -> int:
    """Handle the totp command."""
    try:
        totp = _totp(args)
        timestamp = totp.clock() if args.at is None else args.at
        if args.verify is None:
            print(totp.generate_at(timestamp))
            return 0

        if totp.validate_at(timestamp, args.verify, window=args.window):
            print("✓ Valid code")
            return 0
        print("✗ Invalid code", file=sys.stderr)
        return 1
    except OTPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


def uri_command(args: argparse.Namespace) -> int:
    """Handle the uri command."""
    try:
        if args.type == "hotp":
            generator = HOTP(_parameters(args), counter=args.counter)
        else:
            generator = _totp(args)
        print(generator.uri(args.label, args.issuer))
        return 0
    except OTPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--secret",
        "-s",
        required=True,
        help="Shared secret, Base32 (preferred) or Base64 encoded",
    )
    parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=6,
        help="Number of digits in the code (default: 6)",
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        default=HashAlgorithm.SHA1.value,
        help="Hash algorithm: SHA1, SHA256 or SHA512 (default: SHA1)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="basic-otp",
        description="HOTP/TOTP one-time password generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # HOTP command
    hotp_parser = subparsers.add_parser(
        "hotp",
        aliases=["h"],
        help="Generate or verify a counter-based code",
    )
    _add_common_arguments(hotp_parser)
    hotp_parser.add_argument(
        "--counter",
        "-c",
        type=int,
        default=0,
        help="Counter value (default: 0)",
    )
    hotp_parser.add_argument(
        "--window",
        "-w",
        type=int,
        default=0,
        help="Look-ahead window when verifying (default: 0)",
    )
    hotp_parser.add_argument(
        "--verify",
        metavar="CODE",
        default=None,
        help="Verify CODE instead of generating one",
    )

    # TOTP command
    totp_parser = subparsers.add_parser(
        "totp",
        aliases=["t"],
        help="Generate or verify a time-based code",
    )
    _add_common_arguments(totp_parser)
    totp_parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=DEFAULT_STEP_SECONDS,
        help=f"Time step in seconds (default: {DEFAULT_STEP_SECONDS})",
    )
    totp_parser.add_argument(
        "--at",
        type=float,
        default=None,
        help="Unix timestamp to use instead of the current time",
    )
    totp_parser.add_argument(
        "--window",
        "-w",
        type=int,
        default=0,
        help="Adjacent time steps accepted when verifying (default: 0)",
    )
    totp_parser.add_argument(
        "--verify",
        metavar="CODE",
        default=None,
        help="Verify CODE instead of generating one",
    )

    # URI command
    uri_parser = subparsers.add_parser(
        "uri",
        help="Print an otpauth:// provisioning URI",
    )
    _add_common_arguments(uri_parser)
    uri_parser.add_argument(
        "--type",
        "-t",
        choices=["hotp", "totp"],
        default="totp",
        help="Credential type (default: totp)",
    )
    uri_parser.add_argument("--label", "-l", required=True, help="Account label")
    uri_parser.add_argument("--issuer", "-i", default="", help="Issuer name")
    uri_parser.add_argument(
        "--counter",
        "-c",
        type=int,
        default=0,
        help="Counter value for HOTP (default: 0)",
    )
    uri_parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=DEFAULT_STEP_SECONDS,
        help=f"Time step in seconds for TOTP (default: {DEFAULT_STEP_SECONDS})",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    if args.command in ("hotp", "h"):
        return hotp_command(args)
    elif args.command in ("totp", "t"):
        return totp_command(args)
    elif args.command == "uri":
        return uri_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
