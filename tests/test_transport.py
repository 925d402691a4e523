"""HttpxTransport のユニットテスト（respx モック）"""

import httpx
import pytest
import respx

from k1s0_elastic_client import ClientConfig, HttpxTransport, TransportError

BASE_URL = "http://es-node:9200"


def make_transport() -> HttpxTransport:
    return HttpxTransport.from_config(ClientConfig(host="es-node"))


@respx.mock
def test_send_returns_status_and_body() -> None:
    route = respx.post(f"{BASE_URL}/_bulk").mock(
        return_value=httpx.Response(200, content=b'{"errors":false}')
    )
    result = make_transport().send(
        "POST",
        f"{BASE_URL}/_bulk",
        params=[("refresh", "true"), ("refresh", "false")],
        content=b"line\n",
        headers={"Content-Type": "application/x-ndjson"},
    )
    assert result.status == 200
    assert result.body == b'{"errors":false}'
    request = route.calls.last.request
    assert request.url.params.get_list("refresh") == ["true", "false"]
    assert request.content == b"line\n"


@respx.mock
def test_send_does_not_follow_redirects() -> None:
    respx.get(f"{BASE_URL}/idx").mock(
        return_value=httpx.Response(301, headers={"Location": f"{BASE_URL}/other"})
    )
    result = make_transport().send("GET", f"{BASE_URL}/idx")
    assert result.status == 301


@respx.mock
def test_send_timeout_raises_transport_error() -> None:
    """タイムアウト時に status=0 の TransportError が発生すること。"""
    respx.get(f"{BASE_URL}/idx").mock(side_effect=httpx.ReadTimeout("timed out"))
    with pytest.raises(TransportError) as exc_info:
        make_transport().send("GET", f"{BASE_URL}/idx")
    assert exc_info.value.status == 0
    assert exc_info.value.code == "TRANSPORT_ERROR"


def test_close() -> None:
    transport = make_transport()
    transport.close()
    with pytest.raises(RuntimeError):
        transport.send("GET", f"{BASE_URL}/idx")
