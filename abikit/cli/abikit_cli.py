#!/usr/bin/env python3
import argparse
import json
import sys
import warnings

import abikit
from abikit.abi_types import ABI_Bool, ABI_BytesM, ABI_GIntM, ABIType
from abikit.contract import Contract
from abikit.exceptions import InvalidType
from abikit.method import ContractMethod
from abikit.settings import ABIKIT_TRACEBACK_LIMIT, Settings, anchor_settings
from abikit.warnings import warnings_filter
from abikit.word import ByteWord

commands_help = """Command to run, one of:
selector    - Method selector of a signature
encode      - Call data for a signature and its arguments
decode      - Decode response data using the output types of a signature
identifiers - Dictionary of method signature to method identifier for a JSON ABI file
"""


def _parse_cli_args():
    return _parse_args(sys.argv[1:])


def _parse_value(typ: ABIType, text: str):
    # command line arguments are strings, convert them to the python
    # value each ABI type expects
    if isinstance(typ, ABI_GIntM):
        try:
            return int(text, 0)
        except ValueError:
            raise InvalidType(f"Invalid integer for {typ}: {text!r}") from None
    if isinstance(typ, ABI_Bool):
        if text.lower() not in ("true", "false"):
            raise InvalidType(f"Invalid bool: {text!r}")
        return text.lower() == "true"
    if isinstance(typ, ABI_BytesM):
        return ByteWord.from_hex(text).bytes
    return text


def _format_value(value):
    if isinstance(value, bytes):
        return "0x" + value.hex()
    return value


def _selector(args):
    method = ContractMethod.from_signature(args.signature)
    print(method.selector.to_hex())


def _encode(args):
    method = ContractMethod.from_signature(args.signature)
    values = [_parse_value(typ, text) for typ, text in zip(method.inputs, args.values)]
    # arity is checked by the encoder
    values += args.values[len(values) :]
    print(method.encode_call(*values).to_hex())


def _decode(args):
    method = ContractMethod.from_signature(args.signature)
    decoded = method.decode_response(args.data)
    print(json.dumps([_format_value(v) for v in decoded]))


def _identifiers(args):
    with open(args.abi_file) as f:
        contract = Contract.from_json_abi(f.read())
    print(json.dumps(contract.method_identifiers(), indent=2))


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Contract ABI encoding tools",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=abikit.__version__)
    parser.add_argument(
        "--traceback-limit",
        help="Set the traceback limit for error messages",
        type=int,
    )
    parser.add_argument("-v", "--verbose", help="Turn on verbose output", action="store_true")
    parser.add_argument(
        "-W", help="Control warnings", dest="warnings_control", choices=["error", "none"]
    )
    parser.add_argument(
        "--no-checksum",
        help="Decode addresses in lowercase instead of EIP-55 checksummed form",
        action="store_true",
    )

    subparsers = parser.add_subparsers(dest="command", help=commands_help, required=True)

    p = subparsers.add_parser("selector", help="Print the method selector of SIGNATURE")
    p.add_argument("signature")
    p.set_defaults(func=_selector)

    p = subparsers.add_parser("encode", help="Print call data for SIGNATURE and VALUES")
    p.add_argument("signature")
    p.add_argument("values", nargs="*")
    p.set_defaults(func=_encode)

    p = subparsers.add_parser("decode", help="Decode DATA with the output types of SIGNATURE")
    p.add_argument("signature")
    p.add_argument("data")
    p.set_defaults(func=_decode)

    p = subparsers.add_parser("identifiers", help="Print method identifiers of a JSON ABI file")
    p.add_argument("abi_file")
    p.set_defaults(func=_identifiers)

    args = parser.parse_args(argv)

    if args.traceback_limit is not None:
        sys.tracebacklimit = args.traceback_limit
    elif ABIKIT_TRACEBACK_LIMIT is not None:
        sys.tracebacklimit = ABIKIT_TRACEBACK_LIMIT
    elif args.verbose:
        sys.tracebacklimit = 1000
    else:
        # only report the error message, not where in abikit it was raised
        sys.tracebacklimit = 0

    settings = Settings()
    if args.no_checksum:
        settings.checksum_addresses = False

    if args.verbose:
        print(f"cli specified: `{settings}`", file=sys.stderr)

    warnings.simplefilter("always")
    with warnings_filter(args.warnings_control), anchor_settings(settings):
        args.func(args)


if __name__ == "__main__":
    _parse_cli_args()
