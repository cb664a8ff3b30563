# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from netlayer.cli.main import build_parser, main
from netlayer.http.adapters import StubHttpClient
from netlayer.http.models import HttpResponse
from netlayer.manager import NetworkManager

PAYLOAD = {"user_id": "9", "username": "morpheus"}


def _response(code, payload):
    body = json.dumps(payload).encode()
    return HttpResponse(ok=True, status_code=code, text=body.decode(), content=body)


@pytest.fixture
def stub_manager(monkeypatch):
    monkeypatch.setenv("NETLAYER_RETRY_LIMIT", "0")
    captured = {"settings": [], "clients": [], "responses": [_response(200, PAYLOAD)]}

    def factory(settings):
        captured["settings"].append(settings)

        def client_factory(_settings):
            client = StubHttpClient(sequence=captured["responses"])
            captured["clients"].append(client)
            return client

        return NetworkManager(settings, http_client_factory=client_factory)

    monkeypatch.setattr("netlayer.cli.main.NetworkManager", factory)
    return captured


def test_parser_requires_credentials():
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["register", "--username", "only"])


def test_register_prints_bound_cells(stub_manager, capsys):
    exit_code = main(["register", "--username", "morpheus", "--password", "pw"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Loading..." in out
    assert "Model: RegisterDomainModel(user_id='9', username='morpheus'" in out
    assert "Error:" not in out
    assert stub_manager["clients"][0].closed is True


def test_register_reports_errors_with_exit_code(stub_manager, capsys):
    stub_manager["responses"] = [_response(409, {"detail": "exists"})]
    exit_code = main(["register", "--username", "morpheus", "--password", "pw"])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "Error: Response status code was unacceptable: 409" in out


def test_register_json_output_and_overrides(stub_manager, capsys):
    exit_code = main(
        [
            "register",
            "--username",
            "morpheus",
            "--password",
            "pw",
            "--json",
            "--base-url",
            "https://api.test/v9",
            "--token",
            "tok",
            "--ignore-ssl-errors",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    settings = stub_manager["settings"][0]
    request = stub_manager["clients"][0].requests[0]

    assert exit_code == 0
    assert payload["ok"] is True
    assert payload["attempts"] == 1
    assert payload["model"]["username"] == "morpheus"
    assert settings.base_url == "https://api.test/v9"
    assert settings.verify_ssl is False
    assert request.url == "https://api.test/v9/authentication/register"
    assert request.headers["Authorization"] == "Bearer tok"


def test_register_json_error_payload(stub_manager, capsys):
    stub_manager["responses"] = [_response(500, {})]
    exit_code = main(["register", "--username", "u", "--password", "p", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["error"]["category"] == "VALIDATION"
    assert payload["error"]["status_code"] == 500
    assert payload["error"]["retry_exhausted"] is True
