"""Command-line interface for minimal-otp."""

import argparse
import sys
import time
from typing import Callable, Optional

from minimal_otp.errors import OtpError
from minimal_otp.hashing import HashAlgorithmKind
from minimal_otp import otp


SAMPLE_SECRET = "ONSWG4TFOQ======"


def _algorithm(value: str) -> HashAlgorithmKind:
    try:
        return HashAlgorithmKind.from_name(value)
    except OtpError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def totp_command(args: argparse.Namespace) -> int:
    """Handle the totp command."""
    code = otp.generate_totp(
        args.secret,
        time_step=args.period,
        algorithm=args.algorithm,
        unix_time=args.time,
        otp_length=args.digits,
    )
    print(code)
    return 0


def hotp_command(args: argparse.Namespace) -> int:
    """Handle the hotp command."""
    code = otp.generate_hotp(
        args.secret,
        args.counter,
        algorithm=args.algorithm,
        otp_length=args.digits,
    )
    print(code)
    return 0


def verify_totp_command(args: argparse.Namespace) -> int:
    """Handle the verify-totp command."""
    valid = otp.validate_totp(
        args.secret,
        args.code,
        time_step=args.period,
        algorithm=args.algorithm,
        unix_time=args.time,
        otp_length=args.digits,
    )
    return _report(valid)


def verify_hotp_command(args: argparse.Namespace) -> int:
    """Handle the verify-hotp command."""
    valid = otp.validate_hotp(
        args.secret,
        args.code,
        args.counter,
        algorithm=args.algorithm,
        otp_length=args.digits,
    )
    return _report(valid)


def _report(valid: bool) -> int:
    if valid:
        print("✓ valid")
        return 0
    print("✗ invalid")
    return 1


def watch_command(
    args: argparse.Namespace, sleep: Callable[[float], None] = time.sleep
) -> int:
    """
    Handle the watch command.

    Prints the SHA1, SHA256 and SHA512 codes for the current time every
    interval until interrupted or until ``--count`` lines have been printed.
    """
    print("Press Ctrl-C to stop the TOTP generator")
    printed = 0
    try:
        while args.count is None or printed < args.count:
            now = int(time.time())
            codes = [
                otp.generate_totp(
                    args.secret,
                    time_step=args.period,
                    algorithm=kind,
                    unix_time=now,
                    otp_length=args.digits,
                )
                for kind in HashAlgorithmKind
            ]
            print(f"TOTP: {' - '.join(codes)} at {now}", flush=True)
            printed += 1
            if args.count is None or printed < args.count:
                sleep(args.interval)
    except KeyboardInterrupt:
        print()
    return 0


def _add_code_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--algorithm",
        "-a",
        type=_algorithm,
        default=otp.DEFAULT_ALGORITHM,
        help="HMAC hash: sha1, sha256 or sha512 (default: sha1)",
    )
    parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=otp.DEFAULT_OTP_LENGTH,
        help="Number of digits in the code (default: 6)",
    )


def _add_time_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=otp.DEFAULT_TIME_STEP,
        help="Time step in seconds (default: 30)",
    )
    parser.add_argument(
        "--time",
        "-t",
        type=int,
        default=0,
        help="Unix time to generate the code for (default: 0, the current time)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="minimal-otp",
        description="HOTP/TOTP one-time password generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # TOTP command
    totp_parser = subparsers.add_parser("totp", help="Generate a TOTP code")
    totp_parser.add_argument("secret", help="Base32 encoded shared secret")
    _add_time_options(totp_parser)
    _add_code_options(totp_parser)
    totp_parser.set_defaults(handler=totp_command)

    # HOTP command
    hotp_parser = subparsers.add_parser("hotp", help="Generate an HOTP code")
    hotp_parser.add_argument("secret", help="Base32 encoded shared secret")
    hotp_parser.add_argument("counter", type=int, help="Counter value")
    _add_code_options(hotp_parser)
    hotp_parser.set_defaults(handler=hotp_command)

    # Verify commands
    verify_totp_parser = subparsers.add_parser(
        "verify-totp",
        help="Check a TOTP code",
    )
    verify_totp_parser.add_argument("secret", help="Base32 encoded shared secret")
    verify_totp_parser.add_argument("code", help="Code to check")
    _add_time_options(verify_totp_parser)
    _add_code_options(verify_totp_parser)
    verify_totp_parser.set_defaults(handler=verify_totp_command)

    verify_hotp_parser = subparsers.add_parser(
        "verify-hotp",
        help="Check an HOTP code",
    )
    verify_hotp_parser.add_argument("secret", help="Base32 encoded shared secret")
    verify_hotp_parser.add_argument("code", help="Code to check")
    verify_hotp_parser.add_argument("counter", type=int, help="Counter value")
    _add_code_options(verify_hotp_parser)
    verify_hotp_parser.set_defaults(handler=verify_hotp_command)

    # Watch command
    watch_parser = subparsers.add_parser(
        "watch",
        help="Print TOTP codes for all algorithms until interrupted",
    )
    watch_parser.add_argument(
        "secret",
        nargs="?",
        default=SAMPLE_SECRET,
        help=f"Base32 encoded shared secret (default: {SAMPLE_SECRET})",
    )
    watch_parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=otp.DEFAULT_TIME_STEP,
        help="Time step in seconds (default: 30)",
    )
    watch_parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=otp.DEFAULT_OTP_LENGTH,
        help="Number of digits in the code (default: 6)",
    )
    watch_parser.add_argument(
        "--interval",
        "-i",
        type=float,
        default=1.0,
        help="Seconds between lines (default: 1)",
    )
    watch_parser.add_argument(
        "--count",
        "-c",
        type=int,
        default=None,
        help="Stop after this many lines (default: run until interrupted)",
    )
    watch_parser.set_defaults(handler=watch_command)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.handler(args)
    except (OtpError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
