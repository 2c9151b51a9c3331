"""Tests for the vcd-metadata CLI."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from vcd_cli.config import ConfigManager
from vcd_cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path

    from pytest_httpx import HTTPXMock

BASE_URL = "https://vcd.example.com/api"
VM_HREF = f"{BASE_URL}/vApp/vm-1"
TASK_HREF = f"{BASE_URL}/task/5e7a1c2d-9b3f-4e8a-a1b2-c3d4e5f60718"


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    manager = ConfigManager(tmp_path / "config.json")
    manager.set("url", BASE_URL)
    manager.set("task_poll_interval", "0")
    return manager


@pytest.fixture
def invoke(config_manager: ConfigManager):
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(cli, list(args), obj={"config_manager": config_manager})

    return _invoke


def test_config_set_and_get(invoke, config_manager):
    result = invoke("config", "set", "timeout", "60")
    assert result.exit_code == 0
    assert config_manager.load().timeout == 60.0

    result = invoke("config", "get", "url")
    assert BASE_URL in result.output


def test_config_set_unknown_key(invoke):
    result = invoke("config", "set", "colour", "blue")
    assert result.exit_code == 1
    assert "Unknown configuration key" in result.output


def test_config_list_masks_token(invoke, config_manager):
    config_manager.set("token", "abcdefghijklmnopqrstuvwxyz")
    result = invoke("config", "list")
    assert result.exit_code == 0
    assert "abcdefghijklmnopqrstuvwxyz" not in result.output


def test_config_delete_resets_default(invoke, config_manager):
    config_manager.set("api_version", "38.0")
    result = invoke("config", "delete", "api_version")
    assert result.exit_code == 0
    assert config_manager.load().api_version == "36.0"


def test_metadata_list(invoke, httpx_mock: HTTPXMock, metadata_xml):
    httpx_mock.add_response(
        method="GET",
        url=f"{VM_HREF}/metadata/",
        text=metadata_xml([("env", "prod", "MetadataStringValue", "GENERAL", "READWRITE")]),
    )

    result = invoke("metadata", "list", VM_HREF)
    assert result.exit_code == 0
    assert "env" in result.output
    assert "prod" in result.output


def test_metadata_get_json(invoke, config_manager, httpx_mock: HTTPXMock, metadata_value_xml):
    config_manager.set("output_format", "json")
    httpx_mock.add_response(method="GET", url=f"{VM_HREF}/metadata/env", text=metadata_value_xml("prod"))

    result = invoke("metadata", "get", VM_HREF, "env")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["typed_value"]["value"] == "prod"
    assert data["domain"]["domain"] == "GENERAL"


def test_metadata_get_not_found(invoke, httpx_mock: HTTPXMock, error_xml):
    httpx_mock.add_response(method="GET", url=f"{VM_HREF}/metadata/missing", status_code=404, text=error_xml("missing", 404))

    result = invoke("metadata", "get", VM_HREF, "missing")
    assert result.exit_code == 1
    assert "missing" in result.output


def test_metadata_add_waits(invoke, httpx_mock: HTTPXMock, task_xml):
    httpx_mock.add_response(method="PUT", url=f"{VM_HREF}/metadata/SYSTEM/owner", status_code=202, text=task_xml())
    httpx_mock.add_response(method="GET", url=TASK_HREF, text=task_xml("success"))

    result = invoke("metadata", "add", VM_HREF, "owner", "ops", "--system", "--visibility", "READONLY")
    assert result.exit_code == 0, result.output
    assert "added" in result.output


def test_metadata_add_no_wait(invoke, httpx_mock: HTTPXMock, task_xml):
    httpx_mock.add_response(method="PUT", url=f"{VM_HREF}/metadata/env", status_code=202, text=task_xml())

    result = invoke("metadata", "add", VM_HREF, "env", "prod", "--no-wait")
    assert result.exit_code == 0, result.output
    assert "Task accepted" in result.output


def test_metadata_merge_from_file(invoke, httpx_mock: HTTPXMock, task_xml, tmp_path: Path):
    entries = tmp_path / "metadata.json"
    entries.write_text(json.dumps({"env": {"value": "prod"}, "replicas": {"value": 3, "type": "MetadataNumberValue"}}))
    httpx_mock.add_response(method="POST", url=f"{VM_HREF}/metadata", status_code=202, text=task_xml("success"))

    result = invoke("metadata", "merge", VM_HREF, str(entries))
    assert result.exit_code == 0, result.output
    assert "Merged 2 entries" in result.output
    assert b"MetadataNumberValue" in httpx_mock.get_request().content


def test_metadata_delete_task_failure(invoke, httpx_mock: HTTPXMock, task_xml):
    httpx_mock.add_response(method="DELETE", url=f"{VM_HREF}/metadata/env", status_code=202, text=task_xml())
    httpx_mock.add_response(method="GET", url=TASK_HREF, text=task_xml("error", error="delete failed"))

    result = invoke("metadata", "delete", VM_HREF, "env")
    assert result.exit_code == 1
    assert "delete failed" in result.output
