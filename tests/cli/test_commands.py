"""Tests for CLI command functions."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from incidentio.api.models import Severity
from incidentio.api.resources import Client
from incidentio.cli.commands import (
    KindName,
    accessor_for,
    create_command,
    delete_command,
    get_command,
    load_data,
    update_command,
)

SEVERITY_JSON = '{"name": "Minor", "description": "Small blast radius", "rank": 1}'


# --- load_data ---


def test_load_data_inline() -> None:
    assert load_data(SEVERITY_JSON)["rank"] == 1


def test_load_data_from_file(tmp_path: Path) -> None:
    p = tmp_path / "severity.json"
    p.write_text(SEVERITY_JSON)
    assert load_data(f"@{p}")["name"] == "Minor"


def test_load_data_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="File not found"):
        load_data(f"@{tmp_path / 'nope.json'}")


def test_load_data_invalid_json() -> None:
    with pytest.raises(ValueError, match="Invalid JSON"):
        load_data("{not json")


def test_load_data_requires_object() -> None:
    with pytest.raises(ValueError, match="JSON object"):
        load_data("[1, 2]")


# --- accessor_for ---


def test_accessor_for_every_kind(fake_client: Client) -> None:
    paths = {kind: accessor_for(fake_client, kind).kind.path for kind in KindName}
    assert paths == {
        KindName.incident_role: "incident_roles",
        KindName.severity: "severities",
        KindName.custom_field: "custom_fields",
        KindName.custom_field_option: "custom_field_options",
    }


# --- create / get / update / delete ---


def test_create_command_json(fake_client: Client, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = create_command(fake_client, KindName.severity, SEVERITY_JSON, format="json")

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["name"] == "Minor"
    assert output["id"]


def test_create_command_invalid_fields(
    fake_client: Client, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = create_command(
        fake_client,
        KindName.custom_field,
        '{"name": "Team", "description": "d", "field_type": "number"}',
    )
    assert exit_code == 1
    assert "Invalid custom-field" in capsys.readouterr().out


def test_create_command_api_error(make_client, respond, capsys) -> None:
    client, _ = make_client(
        lambda request: respond(
            422,
            {
                "type": "validation_error",
                "status": 422,
                "request_id": "r1",
                "errors": [
                    {
                        "code": "invalid_value",
                        "message": "Shortform must be unique",
                        "source": {"field": "", "pointer": "shortform"},
                    }
                ],
            },
        )
    )
    data = '{"name": "Lead", "description": "d", "instructions": "i", "shortform": "lead"}'

    exit_code = create_command(client, KindName.incident_role, data)

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "422" in out
    assert "shortform" in out
    assert "r1" in out


def test_get_command_human(fake_client: Client, capsys: pytest.CaptureFixture[str]) -> None:
    created = fake_client.severities().create(Severity(name="Major", rank=3))

    exit_code = get_command(fake_client, KindName.severity, created.id)

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Major" in out
    assert "rank" in out


def test_get_command_not_found(fake_client: Client, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = get_command(fake_client, KindName.severity, "missing")
    assert exit_code == 1
    assert "not found" in capsys.readouterr().out


def test_get_command_empty_id(make_client, respond, capsys) -> None:
    client, handler = make_client(lambda request: respond(200, {}))
    exit_code = get_command(client, KindName.custom_field, "")
    assert exit_code == 1
    assert handler.call_count == 0
    assert "must specify the ID" in capsys.readouterr().out


def test_get_command_transport_error(make_client, capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(handler)
    exit_code = get_command(client, KindName.severity, "sev-1")
    assert exit_code == 1
    assert "refused" in capsys.readouterr().out


def test_update_command(fake_client: Client, capsys: pytest.CaptureFixture[str]) -> None:
    created = fake_client.severities().create(Severity(name="Minor", rank=1))

    exit_code = update_command(
        fake_client,
        KindName.severity,
        created.id,
        '{"name": "Minor", "rank": 2}',
        format="json",
    )

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["rank"] == 2


def test_update_command_bad_json(fake_client: Client, capsys) -> None:
    exit_code = update_command(fake_client, KindName.severity, "sev-1", "{oops")
    assert exit_code == 1
    assert "Invalid JSON" in capsys.readouterr().out


def test_delete_command(fake_client: Client, capsys: pytest.CaptureFixture[str]) -> None:
    created = fake_client.severities().create(Severity(name="Minor", rank=1))

    exit_code = delete_command(fake_client, KindName.severity, created.id)

    assert exit_code == 0
    assert "Deleted severity" in capsys.readouterr().out


def test_delete_command_missing(fake_client: Client, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = delete_command(fake_client, KindName.incident_role, "missing", format="json")
    assert exit_code == 1
    assert "404" in capsys.readouterr().out
