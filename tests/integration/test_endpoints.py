"""Integration tests exercising the public HTTP endpoints over real sockets."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import requests

pytestmark = pytest.mark.integration

if TYPE_CHECKING:
    from tests.conftest import ServerProcessInfo


def test_root_endpoint_returns_empty_text_plain(base_url: str) -> None:
    response = requests.get(f"{base_url}/", timeout=5)
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/plain"
    assert response.headers["Content-Length"] == "0"
    assert response.content == b""


@pytest.mark.parametrize("payload", ["sample", "abc123", "x"])
def test_echo_endpoint_round_trips_payload(base_url: str, payload: str) -> None:
    response = requests.get(f"{base_url}/echo/{payload}", timeout=5)
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/plain"
    assert response.headers["Content-Length"] == str(len(payload))
    assert response.text == payload


def test_user_agent_endpoint_reflects_header(base_url: str) -> None:
    headers = {"User-Agent": "pytest-agent/1.0"}
    response = requests.get(f"{base_url}/user-agent", headers=headers, timeout=5)
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/plain"
    assert response.text == "pytest-agent/1.0"


def test_file_round_trip_preserves_binary_payload(
    base_url: str, server_process: "ServerProcessInfo"
) -> None:
    payload = bytes(range(256)) * 8 + b"\r\n\r\n\xff\xfe"
    post_response = requests.post(
        f"{base_url}/files/report.bin",
        data=payload,
        headers={"Content-Type": "application/octet-stream"},
        timeout=5,
    )
    assert post_response.status_code == 201
    assert post_response.content == b""

    get_response = requests.get(f"{base_url}/files/report.bin", timeout=5)
    assert get_response.status_code == 200
    assert get_response.headers["Content-Type"] == "application/octet-stream"
    assert get_response.headers["Content-Length"] == str(len(payload))
    assert get_response.content == payload

    stored_path = Path(server_process["directory"]) / "report.bin"
    assert stored_path.read_bytes() == payload


def test_file_get_missing_returns_404(base_url: str) -> None:
    response = requests.get(f"{base_url}/files/does-not-exist", timeout=5)
    assert response.status_code == 404
    assert response.content == b""


def test_file_post_without_octet_stream_is_rejected(
    base_url: str, server_process: "ServerProcessInfo"
) -> None:
    response = requests.post(
        f"{base_url}/files/x",
        data=b"payload",
        headers={"Content-Type": "text/plain"},
        timeout=5,
    )
    assert response.status_code == 400
    assert not (Path(server_process["directory"]) / "x").exists()


def test_file_post_does_not_modify_existing_file_on_rejection(
    base_url: str, server_process: "ServerProcessInfo"
) -> None:
    target = Path(server_process["directory"]) / "keep.bin"
    target.write_bytes(b"original")
    response = requests.post(f"{base_url}/files/keep.bin", data=b"changed", timeout=5)
    assert response.status_code == 400
    assert target.read_bytes() == b"original"


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/unknown"),
        ("POST", "/unknown"),
        ("DELETE", "/files/x"),
        ("PUT", "/echo/x"),
        ("POST", "/user-agent"),
        ("GET", "/echoes/x"),
    ],
)
def test_unknown_routes_return_404(base_url: str, method: str, path: str) -> None:
    response = requests.request(method, f"{base_url}{path}", timeout=5)
    assert response.status_code == 404
