# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""netlayer CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from ..config import NetworkSettings, load_network_settings
from ..errors import NetworkError
from ..http.models import RequestResult
from ..log import setup_logging
from ..manager import NetworkManager
from ..models import RegisterDomainModel
from ..viewmodel import RegistrationViewModel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="netlayer client for the sample authentication API")
    parser.add_argument("--log-level", default=None, help="Logging level (default: NETLAYER_LOG_LEVEL or WARNING)")
    subcommands = parser.add_subparsers(dest="command", required=True)

    register = subcommands.add_parser("register", help="Register a new user")
    register.add_argument("--username", required=True)
    register.add_argument("--password", required=True)
    register.add_argument("--base-url", default=None, help="API base URL (default: NETLAYER_BASE_URL)")
    register.add_argument("--token", default=None, help="Bearer token attached to every attempt")
    register.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly lines",
    )
    register.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed servers)",
    )
    return parser


def _error_payload(error: NetworkError) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "category": error.category.value,
        "message": str(error),
        "attempts": error.attempts,
        "retry_exhausted": error.retry_exhausted,
    }
    status_code = getattr(error, "status_code", None)
    if status_code is not None:
        payload["status_code"] = status_code
    return payload


def _print_json(result: RequestResult[RegisterDomainModel]) -> None:
    payload: dict[str, Any] = {"ok": result.ok, "attempts": result.attempts}
    if result.value is not None:
        payload["model"] = result.value.to_dict()
    if result.error is not None:
        payload["error"] = _error_payload(result.error)
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _bind(view_model: RegistrationViewModel) -> None:
    def on_loading(is_loading: bool) -> None:
        if is_loading:
            print("Loading...")

    def on_error(error: NetworkError | None) -> None:
        if error is not None:
            print(f"Error: {error}")

    def on_model(model: RegisterDomainModel | None) -> None:
        if model is not None:
            print(f"Model: {model}")

    view_model.loading.subscribe(on_loading)
    view_model.error.subscribe(on_error)
    view_model.register_model.subscribe(on_model)


async def _register(args: argparse.Namespace, settings: NetworkSettings) -> int:
    view_model = RegistrationViewModel(NetworkManager(settings))
    if not args.json:
        _bind(view_model)

    completed = asyncio.Event()
    outcome: list[RequestResult[RegisterDomainModel]] = []

    def on_complete(result: RequestResult[RegisterDomainModel]) -> None:
        outcome.append(result)
        completed.set()

    try:
        handle = view_model.register_user(args.username, args.password)
        handle.add_done_callback(on_complete)
        await completed.wait()
    finally:
        await view_model.aclose()

    result = outcome[0]
    if args.json:
        _print_json(result)
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: NetworkSettings = load_network_settings()
    if args.base_url:
        settings.base_url = args.base_url
    if args.token:
        settings.auth_token = args.token
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    if args.command == "register":
        return asyncio.run(_register(args, settings))
    parser.error(f"unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
