"""Tests for the requests-backed HTTP client."""

from __future__ import annotations

from typing import Any

import pytest
import requests
from pytest_mock import MockerFixture

from msupack.platform.http import HTTPResult, RequestsHTTPClient


def _response(mocker: MockerFixture, status: int, content: bytes = b"", headers: dict[str, str] | None = None) -> Any:
    response = mocker.Mock()
    response.status_code = status
    response.content = content
    response.headers = headers or {}
    return response


def test_get_returns_body_and_sends_user_agent(mocker: MockerFixture) -> None:
    session = mocker.Mock()
    session.get.return_value = _response(mocker, 200, b"[]", {"Content-Type": "application/json"})
    client = RequestsHTTPClient(user_agent="msupack-test", timeout=5.0, session=session)

    result = client.get("https://example.invalid/sprites")

    assert result.ok
    assert result.content == b"[]"
    assert result.headers["Content-Type"] == "application/json"
    session.get.assert_called_once_with(
        "https://example.invalid/sprites",
        headers={"User-Agent": "msupack-test"},
        timeout=5.0,
    )


def test_get_retries_once_on_server_error(mocker: MockerFixture) -> None:
    sleep = mocker.patch("msupack.platform.http.client.time.sleep")
    session = mocker.Mock()
    session.get.side_effect = [
        _response(mocker, 503, headers={"Retry-After": "3"}),
        _response(mocker, 200, b"ok"),
    ]
    client = RequestsHTTPClient(session=session)

    result = client.get("https://example.invalid")

    assert result.ok
    assert session.get.call_count == 2
    sleep.assert_called_once_with(3.0)


def test_get_gives_up_after_second_rate_limit(mocker: MockerFixture) -> None:
    _ = mocker.patch("msupack.platform.http.client.time.sleep")
    session = mocker.Mock()
    session.get.return_value = _response(mocker, 429, headers={"Retry-After": "120"})
    client = RequestsHTTPClient(session=session)

    result = client.get("https://example.invalid")

    assert not result.ok
    assert result.status == 429
    assert result.content is None
    assert session.get.call_count == 2


def test_get_does_not_retry_client_errors(mocker: MockerFixture) -> None:
    session = mocker.Mock()
    session.get.return_value = _response(mocker, 404)
    client = RequestsHTTPClient(session=session)

    result = client.get("https://example.invalid")

    assert result.status == 404
    assert not result.ok
    assert session.get.call_count == 1


def test_network_errors_become_status_zero(mocker: MockerFixture) -> None:
    session = mocker.Mock()
    session.get.side_effect = requests.ConnectionError("offline")
    client = RequestsHTTPClient(session=session)

    result = client.get("https://example.invalid")

    assert result == HTTPResult(status=0, headers={}, content=None)


def test_json_decodes_payload() -> None:
    result = HTTPResult(status=200, headers={}, content=b'[{"name": "Link"}]')
    assert result.json() == [{"name": "Link"}]


def test_json_without_body_raises_value_error() -> None:
    with pytest.raises(ValueError):
        _ = HTTPResult(status=500, headers={}, content=None).json()
