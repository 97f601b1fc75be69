import logging

import httpx
from pydantic import ValidationError

from domain.exceptions.crypto import DecodeFailureError
from domain.models.crypto import Asset, PriceSnapshot

from .base import JSONSource
from .schemas import SimplePricePayload, describe_error

logger = logging.getLogger(__name__)

VS_CURRENCY = 'usd'


class CoinGeckoPriceSource(JSONSource):
	BASE_URL = 'https://api.coingecko.com/api/v3/simple/price'

	def __init__(self, base_url: str | None = None, client: httpx.AsyncClient | None = None, timeout: float = 10):
		super().__init__(client=client, timeout=timeout)
		self.base_url = base_url or self.BASE_URL

	@property
	def name(self) -> str:
		return 'coingecko'

	async def fetch_prices(self) -> PriceSnapshot:
		params = {
			'ids': ','.join(asset.value for asset in Asset),
			'vs_currencies': VS_CURRENCY,
		}
		body = await self._request(self.base_url, params)

		try:
			payload = SimplePricePayload.model_validate_json(body)
		except ValidationError as e:
			logger.error(f'{self.name}: undecodable price response: {e.error_count()} error(s)')
			raise DecodeFailureError(f'Failed to decode crypto data. {describe_error(e)}') from e
		except Exception as e:
			logger.error(f'{self.name}: unexpected error decoding prices: {e!r}')
			raise DecodeFailureError(f'Failed to decode crypto data. {e}') from e

		prices = payload.to_snapshot()
		logger.info(f'{self.name}: fetched USD prices for {len(prices)} assets')
		return prices
