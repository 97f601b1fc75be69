# nosec B101

from unittest.mock import patch

import httpx
import pytest

from domain.exceptions.crypto import (
    DecodeFailureError,
    InvalidRequestError,
    NetworkFailureError,
    NoDataError,
)
from domain.models.crypto import Asset
from infrastructure.providers.coingecko import CoinGeckoPriceSource
from tests.fixtures.api_responses import PRICE_RESPONSES
from tests.helpers import make_response, make_status_error


@pytest.mark.asyncio
async def test_fetch_prices_success_returns_all_six_assets(mock_client):
    mock_client.get.return_value = make_response(PRICE_RESPONSES["success"])
    source = CoinGeckoPriceSource(client=mock_client)

    prices = await source.fetch_prices()

    assert set(prices) == set(Asset)
    assert prices[Asset.BITCOIN] == 50000.0
    assert prices[Asset.DOGECOIN] == 0.12
    mock_client.get.assert_called_once()
    call_args = mock_client.get.call_args
    assert call_args[0][0] == "https://api.coingecko.com/api/v3/simple/price"
    assert call_args[1]["params"]["vs_currencies"] == "usd"
    assert call_args[1]["params"]["ids"] == "bitcoin,ethereum,litecoin,dogecoin,ripple,cardano"


@pytest.mark.asyncio
async def test_fetch_prices_ignores_assets_outside_the_fixed_set(mock_client):
    mock_client.get.return_value = make_response(PRICE_RESPONSES["success_with_extra_asset"])
    source = CoinGeckoPriceSource(client=mock_client)

    prices = await source.fetch_prices()

    assert len(prices) == 6
    assert "solana" not in prices


@pytest.mark.asyncio
async def test_fetch_prices_uses_configured_url(mock_client):
    mock_client.get.return_value = make_response(PRICE_RESPONSES["success"])
    source = CoinGeckoPriceSource(base_url="http://prices.local/simple", client=mock_client)

    await source.fetch_prices()

    assert mock_client.get.call_args[0][0] == "http://prices.local/simple"


@pytest.mark.asyncio
@pytest.mark.parametrize("fixture_name", ["missing_asset", "missing_usd_field", "rate_limited"])
async def test_fetch_prices_incomplete_response_is_decode_failure(mock_client, fixture_name):
    mock_client.get.return_value = make_response(PRICE_RESPONSES[fixture_name])
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(DecodeFailureError) as exc_info:
        await source.fetch_prices()

    assert str(exc_info.value).startswith("Failed to decode crypto data.")


@pytest.mark.asyncio
async def test_fetch_prices_negative_price_is_decode_failure(mock_client):
    payload = dict(PRICE_RESPONSES["success"], bitcoin={"usd": -1})
    mock_client.get.return_value = make_response(payload)
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(DecodeFailureError) as exc_info:
        await source.fetch_prices()

    assert "bitcoin.usd" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_prices_invalid_json_is_decode_failure(mock_client):
    mock_client.get.return_value = make_response(content=b"<html>oops</html>")
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(DecodeFailureError):
        await source.fetch_prices()


@pytest.mark.asyncio
async def test_fetch_prices_empty_body_is_no_data(mock_client):
    mock_client.get.return_value = make_response(content=b"")
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(NoDataError) as exc_info:
        await source.fetch_prices()

    assert str(exc_info.value) == "No data received"


@pytest.mark.asyncio
async def test_fetch_prices_network_timeout(mock_client):
    mock_client.get.side_effect = httpx.ReadTimeout("timed out")
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(NetworkFailureError) as exc_info:
        await source.fetch_prices()

    assert str(exc_info.value) == "Network Error: timed out"
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


@pytest.mark.asyncio
async def test_fetch_prices_connection_error(mock_client):
    mock_client.get.side_effect = httpx.ConnectError("")
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(NetworkFailureError) as exc_info:
        await source.fetch_prices()

    assert str(exc_info.value) == "Network Error: ConnectError"


@pytest.mark.asyncio
async def test_fetch_prices_http_429(mock_client):
    mock_client.get.side_effect = make_status_error(429, "Rate limit exceeded")
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(NetworkFailureError) as exc_info:
        await source.fetch_prices()

    assert "429" in str(exc_info.value)
    assert "Rate limit exceeded" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_prices_invalid_url(mock_client):
    mock_client.get.side_effect = httpx.UnsupportedProtocol("Request URL has an unsupported protocol")
    source = CoinGeckoPriceSource(base_url="ftp//broken", client=mock_client)

    with pytest.raises(InvalidRequestError) as exc_info:
        await source.fetch_prices()

    assert str(exc_info.value) == "Invalid URL"


@pytest.mark.asyncio
async def test_close_closes_client(mock_client):
    source = CoinGeckoPriceSource(client=mock_client)

    await source.close()

    mock_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "bad_quote",
    [
        {"usd": "50000"},  # numeric string
        {"usd": True},     # boolean
        {"usd": None},
    ],
)
async def test_fetch_prices_non_number_price_is_decode_failure(mock_client, bad_quote):
    payload = dict(PRICE_RESPONSES["success"], ethereum=bad_quote)
    mock_client.get.return_value = make_response(payload)
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(DecodeFailureError) as exc_info:
        await source.fetch_prices()

    assert "ethereum.usd" in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("literal", [b"NaN", b"Infinity", b"1e400"])
async def test_fetch_prices_non_finite_price_is_decode_failure(mock_client, literal):
    body = (
        b'{"bitcoin": {"usd": ' + literal + b'}, "ethereum": {"usd": 3000}, '
        b'"litecoin": {"usd": 90.5}, "dogecoin": {"usd": 0.12}, '
        b'"ripple": {"usd": 0.6}, "cardano": {"usd": 0.45}}'
    )
    mock_client.get.return_value = make_response(content=body)
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(DecodeFailureError):
        await source.fetch_prices()


@pytest.mark.asyncio
async def test_fetch_prices_integer_price_is_accepted(mock_client):
    payload = dict(PRICE_RESPONSES["success"], bitcoin={"usd": 50000})
    mock_client.get.return_value = make_response(payload)
    source = CoinGeckoPriceSource(client=mock_client)

    prices = await source.fetch_prices()

    assert prices[Asset.BITCOIN] == 50000.0


@pytest.mark.asyncio
async def test_fetch_prices_unexpected_client_error_is_network_failure(mock_client):
    mock_client.get.side_effect = RuntimeError("boom")
    source = CoinGeckoPriceSource(client=mock_client)

    with pytest.raises(NetworkFailureError) as exc_info:
        await source.fetch_prices()

    assert str(exc_info.value) == "Network Error: boom"
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_fetch_prices_unexpected_decode_error_is_decode_failure(mock_client):
    mock_client.get.return_value = make_response(PRICE_RESPONSES["success"])
    source = CoinGeckoPriceSource(client=mock_client)

    with patch("infrastructure.providers.coingecko.SimplePricePayload") as payload_model:
        payload_model.model_validate_json.side_effect = ValueError("bad payload")
        with pytest.raises(DecodeFailureError) as exc_info:
            await source.fetch_prices()

    assert str(exc_info.value) == "Failed to decode crypto data. bad payload"
    assert isinstance(exc_info.value.__cause__, ValueError)
