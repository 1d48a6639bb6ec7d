"""
Soupnazi CLI - Thin entrypoint for license store commands.

Commands:
- path: Print where the license file lives
- list: Print stored licenses
- add:  Store a license (no-op if already present)

Design Principles:
==================
- CLI is a dispatcher only
- No store logic inside CLI
- Surface errors verbatim from the store
- Exit non-zero on failure
- No interactive prompts
- No repair of corrupt files

Exit Codes:
===========
- 0: Success
- 1: Invalid token
- 3: License file corrupted
- 4: System error (path unresolved, file not found, permissions, etc.)
"""

import argparse
import logging
import sys
from typing import List, NoReturn, Optional

from .errors import CorruptFileError, InvalidTokenError, LicenseStoreError
from .license_store import LicenseStore


EXIT_OK = 0
EXIT_INVALID_TOKEN = 1
EXIT_CORRUPT = 3
EXIT_SYSTEM = 4


def _exit_code_for(error: LicenseStoreError) -> int:
    if isinstance(error, InvalidTokenError):
        return EXIT_INVALID_TOKEN
    if isinstance(error, CorruptFileError):
        return EXIT_CORRUPT
    return EXIT_SYSTEM


def _fail(error: LicenseStoreError) -> NoReturn:
    print(f"ERROR: {error}", file=sys.stderr)
    sys.exit(_exit_code_for(error))


def _store(args: argparse.Namespace) -> LicenseStore:
    if args.no_check:
        return LicenseStore(validator=lambda token: True)
    return LicenseStore()


def cmd_path(args: argparse.Namespace) -> NoReturn:
    """
    Print the resolved license file path.

    Exit codes:
        0: Path printed
        4: No location could be determined
    """
    try:
        lfile = LicenseStore().license_file()
    except LicenseStoreError as e:
        _fail(e)
    print(lfile)
    sys.exit(EXIT_OK)


def cmd_list(args: argparse.Namespace) -> NoReturn:
    """
    Print stored licenses, one per line or as JSON.

    Exit codes:
        0: Success (including an empty store)
        3: License file corrupted
        4: License file missing or unreadable
    """
    store = LicenseStore()
    try:
        listing = store.listing(args.file)
    except LicenseStoreError as e:
        _fail(e)

    if args.json:
        print(listing.model_dump_json(indent=2))
    else:
        for lic in listing.licenses:
            print(lic)
    sys.exit(EXIT_OK)


def cmd_add(args: argparse.Namespace) -> NoReturn:
    """
    Add a license to the license file.

    Exit codes:
        0: Added, or already present
        1: Token failed syntax checking
        3: License file corrupted
        4: Path, create, read or write failure
    """
    store = _store(args)
    try:
        added = store.add_license(args.token, args.file)
    except LicenseStoreError as e:
        _fail(e)

    if added:
        print("✓ License added")
    else:
        print("✓ License already present")
    sys.exit(EXIT_OK)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='soupnazi',
        description='Soupnazi - Local license store',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log each store step to stderr'
    )

    subparsers = parser.add_subparsers(dest='command', required=True, help='Command to execute')

    # Path command
    parser_path = subparsers.add_parser(
        'path',
        help='Print the license file location'
    )
    parser_path.set_defaults(func=cmd_path)

    # List command
    parser_list = subparsers.add_parser(
        'list',
        help='Print stored licenses'
    )
    parser_list.add_argument(
        '--file',
        default=None,
        help='License file to read (default: resolved location)'
    )
    parser_list.add_argument(
        '--json',
        action='store_true',
        help='Print licenses as a JSON document'
    )
    parser_list.set_defaults(func=cmd_list)

    # Add command
    parser_add = subparsers.add_parser(
        'add',
        help='Add a license to the license file'
    )
    parser_add.add_argument(
        'token',
        help='License token to store'
    )
    parser_add.add_argument(
        '--file',
        default=None,
        help='License file to write (default: resolved location)'
    )
    parser_add.add_argument(
        '--no-check',
        action='store_true',
        help='Skip JWT syntax checking (line safety is still enforced)'
    )
    parser_add.set_defaults(func=cmd_add)

    return parser


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """
    Main CLI entrypoint.

    Parses arguments and dispatches to subcommands.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )

    args.func(args)


if __name__ == '__main__':
    main()
