"""
Command line front-end for the seal codec.

Usage:
    seal-codec check-digit 362142069
    seal-codec c40-encode "XK CD"
    seal-codec c40-decode EB0466A9
    seal-codec decode-seal DC03...
"""

from __future__ import annotations

import argparse
import json
import sys

from seal_codec.logging_config import get_logger, setup_logging
from seal_codec.seal.digital_seal import decode_seal
from seal_codec.types import SealCodecError
from seal_codec.utils.c40 import c40_decode, c40_encode
from seal_codec.utils.check_digit import compute_check_digit

logger = get_logger(__name__)

EXIT_CODEC_ERROR = 2


def _hex_argument(value: str) -> bytes:
    try:
        return bytes.fromhex(value.replace(" ", ""))
    except ValueError as e:
        msg = f"not a hex string: {value!r}"
        raise argparse.ArgumentTypeError(msg) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seal-codec", description="ICAO 9303 MRZ and digital seal codec")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR, OFF)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check-digit", help="Compute the MRZ check digit of a field")
    check.add_argument("text")

    encode = subparsers.add_parser("c40-encode", help="Encode text as C40 and print it as hex")
    encode.add_argument("text")

    decode = subparsers.add_parser("c40-decode", help="Decode hex C40 bytes to text")
    decode.add_argument("data", type=_hex_argument)

    seal = subparsers.add_parser("decode-seal", help="Decode a hex digital seal and print its fields as JSON")
    seal.add_argument("data", type=_hex_argument)
    seal.add_argument("--unsigned", action="store_true", help="The seal has no signature zone")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(component="seal-codec-cli", log_level=args.log_level)

    try:
        if args.command == "check-digit":
            print(compute_check_digit(args.text.upper()))
        elif args.command == "c40-encode":
            print(c40_encode(args.text).hex().upper())
        elif args.command == "c40-decode":
            print(c40_decode(args.data))
        elif args.command == "decode-seal":
            seal = decode_seal(args.data, signed=not args.unsigned)
            print(json.dumps(seal.to_dict(), indent=2))
    except SealCodecError as e:
        logger.error("%s: %s", e.error_code, e.message)
        return EXIT_CODEC_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
