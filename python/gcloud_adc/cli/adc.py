#!/usr/bin/env python3
"""
gcloud_adc/cli/adc.py

Inspect the Application Default Credentials this machine would use.

Usage example:
  python -m gcloud_adc.cli.adc show
  python -m gcloud_adc.cli.adc show --file ./sa.json
  python -m gcloud_adc.cli.adc check-key --file ./sa.json

Nothing secret is printed: no private key, client secret or refresh token.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, NoReturn, Optional

from gcloud_adc.credentials.locator import well_known_credentials_path
from gcloud_adc.credentials.parser import load_credentials, load_credentials_from_file
from gcloud_adc.credentials.project import resolve_project_id
from gcloud_adc.errors import CredentialsError
from gcloud_adc.models.credentials_file import CredentialsFile


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """
    Entry point for the 'show' and 'check-key' subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="gcloud-adc",
        description="Inspect Google Cloud Application Default Credentials.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log which credential source was used.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser(
        "show", help="Print a secret-free summary of the resolved credentials."
    )
    show_parser.add_argument(
        "--file",
        help="Read this credentials file instead of resolving from the environment.",
    )
    show_parser.set_defaults(func=_run_show)

    key_parser = subparsers.add_parser(
        "check-key", help="Verify the credentials carry a usable RSA signing key."
    )
    key_parser.add_argument(
        "--file",
        help="Read this credentials file instead of resolving from the environment.",
    )
    key_parser.set_defaults(func=_run_check_key)

    path_parser = subparsers.add_parser(
        "well-known-path", help="Print the gcloud well-known credentials path."
    )
    path_parser.set_defaults(func=_run_well_known_path)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    try:
        asyncio.run(args.func(args))
    except CredentialsError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    else:
        sys.exit(0)


async def _load(args: argparse.Namespace) -> CredentialsFile:
    if args.file is not None:
        return await load_credentials_from_file(args.file)
    return await load_credentials()


async def _run_show(args: argparse.Namespace) -> None:
    creds = await _load(args)
    summary: Dict[str, Any] = creds.summary()
    project = resolve_project_id(creds)
    if project is not None:
        summary["effective_project_id"] = project
    print(json.dumps(summary, indent=2, sort_keys=True))


async def _run_check_key(args: argparse.Namespace) -> None:
    creds = await _load(args)
    key = creds.try_to_private_key()
    key_id = creds.private_key_id or "<no private_key_id>"
    print(f"RSA signing key OK: {key.key_size} bits, id {key_id}")


async def _run_well_known_path(args: argparse.Namespace) -> None:
    print(well_known_credentials_path())


if __name__ == "__main__":
    main()
