"""
Unit tests for IntegrationConnector

Author: Kivio
Date: 2026-03-05
"""
import httpx
import pytest

from kivio_ecommerce.connectors.integration_connector import IntegrationConnector
from kivio_ecommerce.core.exceptions import DecodeError, TransportError, UnexpectedStatusError

REGISTRY_URL = "https://integrations.test"


def registry(handler, token="registry-token"):
    requests = []

    def recording_handler(request):
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
    return IntegrationConnector(client, base_url=REGISTRY_URL, token=token), requests


@pytest.mark.asyncio
async def test_fetches_integrations_in_order():
    payload = [
        {"integrationId": "a", "posId": "pos-1", "type": "other", "status": "Active", "configs": []},
        {
            "integrationId": "b",
            "posId": "pos-1",
            "type": "kivio_ecommerce",
            "status": "Active",
            "createdAt": "2026-01-01T00:00:00Z",
            "configs": [{"integrationConfigId": "c1", "key": "apiUrl", "value": "https://shop.test"}],
        },
    ]
    connector, requests = registry(lambda request: httpx.Response(200, json=payload))

    integrations = await connector.get_integrations_by_pos_id("pos-1")

    assert [i.integration_id for i in integrations] == ["a", "b"]
    assert integrations[1].config_value("apiUrl") == "https://shop.test"
    assert requests[0].url.path == "/api/integrations/pos/pos-1"
    assert requests[0].headers["Authorization"] == "Bearer registry-token"


@pytest.mark.asyncio
async def test_no_token_sends_no_authorization():
    connector, requests = registry(lambda request: httpx.Response(200, json=[]), token="")

    assert await connector.get_integrations_by_pos_id("pos-1") == []
    assert "Authorization" not in requests[0].headers


@pytest.mark.asyncio
async def test_custom_path_template():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[])

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    connector = IntegrationConnector(client, base_url=REGISTRY_URL + "/", path_template="/v2/pos/{pos_id}/integrations")

    await connector.get_integrations_by_pos_id("pos-9")

    assert str(requests[0].url) == "https://integrations.test/v2/pos/pos-9/integrations"


@pytest.mark.asyncio
async def test_non_200_raises_unexpected_status():
    connector, _ = registry(lambda request: httpx.Response(500, text="registry down"))

    with pytest.raises(UnexpectedStatusError) as exc_info:
        await connector.get_integrations_by_pos_id("pos-1")

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_bad_payload_raises_decode_error():
    connector, _ = registry(lambda request: httpx.Response(200, json={"integrations": "nope"}))

    with pytest.raises(DecodeError):
        await connector.get_integrations_by_pos_id("pos-1")


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    connector, _ = registry(handler)

    with pytest.raises(TransportError):
        await connector.get_integrations_by_pos_id("pos-1")


def test_requires_base_url():
    with pytest.raises(ValueError, match="INTEGRATION_SERVICE_URL"):
        IntegrationConnector(httpx.AsyncClient(), base_url="")
