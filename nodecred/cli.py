"""nodecred.cli

Command line interface entry point for nodecred.

Design constraints:
- argparse-based.
- Lazy imports: parsing arguments must not pull in protobuf or cryptography.
- Secrets come from the environment, never from flags.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2
EXIT_INTERNAL = 3

FORMATS = ("json", "token", "binary")
OPERATOR_TYPES = ("solo", "rocketpool")


@dataclass(frozen=True)
class CliContext:
    repo_root: Path
    config_path: Path | None


def _repo_root_from_cwd() -> Path:
    return Path.cwd()


def _add_credential_source(p: argparse.ArgumentParser) -> None:
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--json", dest="json_doc", help="JSON credential document")
    src.add_argument("--token", nargs=2, metavar=("USERNAME", "PASSWORD"), help="Token pair")
    src.add_argument("--binary", help="Binary credential, base64url encoded")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodecred",
        description="Issue and verify node credentials.",
        epilog="The secret key is read from NODECRED_CREDENTIALS__SECRET_KEY (hex).",
    )
    parser.add_argument("--version", action="store_true", help="Print version and exit.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a YAML config file.")

    sub = parser.add_subparsers(dest="command")

    p_create = sub.add_parser("create", help="Issue a credential")
    p_create.add_argument("--node-id", required=True, help="20-byte node id as hex (0x prefix optional)")
    p_create.add_argument("--operator-type", choices=OPERATOR_TYPES, default="solo")
    p_create.add_argument("--timestamp", type=int, default=None, help="Unix seconds (default: now)")
    p_create.add_argument("--format", choices=FORMATS, default="json")

    p_verify = sub.add_parser("verify", help="Check a credential's MAC")
    _add_credential_source(p_verify)

    p_inspect = sub.add_parser("inspect", help="Decode a credential without verifying it")
    _add_credential_source(p_inspect)

    return parser


def _print_version() -> None:
    from nodecred import __version__

    print(f"nodecred v{__version__}")


def _load_config(ctx: CliContext):
    from nodecred.core.config import Config

    if ctx.config_path is not None:
        return Config.from_yaml(ctx.config_path)
    default = ctx.repo_root / "config" / "default.yaml"
    return Config.from_yaml(default) if default.exists() else Config.from_env()


def _decode_source(args: argparse.Namespace):
    from nodecred.security.codec import b64url_decode, decode_json, decode_token_pair
    from nodecred.security.wire import decode_binary

    if args.json_doc is not None:
        return decode_json(args.json_doc)
    if args.token is not None:
        username, password = args.token
        return decode_token_pair(username, password)
    return decode_binary(b64url_decode(args.binary))


def _cmd_create(ctx: CliContext, args: argparse.Namespace, config) -> int:
    from nodecred.core.time import utc_now
    from nodecred.security.codec import b64url_encode, encode_json, encode_token_pair, hex_decode
    from nodecred.security.credentials import OperatorType
    from nodecred.security.manager import CredentialManager
    from nodecred.security.wire import encode_binary

    manager = CredentialManager.from_config(config)
    timestamp = args.timestamp if args.timestamp is not None else utc_now()
    cred = manager.create(timestamp, hex_decode(args.node_id), OperatorType[args.operator_type.upper()])

    if args.format == "token":
        username, password = encode_token_pair(cred)
        print(json.dumps({"username": username, "password": password}))
    elif args.format == "binary":
        print(b64url_encode(encode_binary(cred)))
    else:
        print(encode_json(cred))
    return EXIT_OK


def _cmd_verify(ctx: CliContext, args: argparse.Namespace, config) -> int:
    from nodecred.core.exceptions import AuthenticationError
    from nodecred.security.manager import CredentialManager

    manager = CredentialManager.from_config(config)
    cred = _decode_source(args)
    try:
        manager.verify(cred)
    except AuthenticationError as e:
        print(f"invalid: {e}", file=sys.stderr)
        return EXIT_REJECTED
    print("valid")
    return EXIT_OK


def _cmd_inspect(ctx: CliContext, args: argparse.Namespace, config) -> int:
    from nodecred.security.codec import to_document

    cred = _decode_source(args)
    doc = to_document(cred).model_dump(mode="json")
    try:
        doc["issued_at"] = cred.credential.issued_at.isoformat()
    except (OverflowError, OSError, ValueError):
        doc["issued_at"] = None  # outside the platform datetime range
    print(json.dumps(doc, indent=2))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return EXIT_OK

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    ctx = CliContext(repo_root=_repo_root_from_cwd(), config_path=args.config)

    dispatch: dict[str, Callable[[CliContext, argparse.Namespace, object], int]] = {
        "create": _cmd_create,
        "verify": _cmd_verify,
        "inspect": _cmd_inspect,
    }

    fn = dispatch.get(str(args.command))
    if fn is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_USAGE

    from nodecred.core.exceptions import ConfigError, CredentialError, InternalError
    from nodecred.core.log import configure_logging

    try:
        config = _load_config(ctx)
        configure_logging(config.logging)
        return int(fn(ctx, args, config))
    except InternalError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INTERNAL
    except (ConfigError, CredentialError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
