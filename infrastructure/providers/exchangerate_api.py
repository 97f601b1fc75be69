import logging
import re

import httpx
from pydantic import ValidationError

from domain.exceptions.crypto import DecodeFailureError, InvalidRequestError
from domain.models.crypto import ExchangeRateTable

from .base import JSONSource
from .schemas import LatestRatesPayload, describe_error

logger = logging.getLogger(__name__)

_UNSAFE_SEGMENT = re.compile(r'[/?#\s]')


class ExchangeRateAPISource(JSONSource):
	URL_TEMPLATE = 'https://api.exchangerate-api.com/v4/latest/{base}'

	def __init__(self, url_template: str | None = None, client: httpx.AsyncClient | None = None, timeout: float = 10):
		super().__init__(client=client, timeout=timeout)
		self.url_template = url_template or self.URL_TEMPLATE

	@property
	def name(self) -> str:
		return 'exchangerate-api'

	def _build_url(self, base_currency: str) -> str:
		if not base_currency or _UNSAFE_SEGMENT.search(base_currency):
			raise InvalidRequestError()
		try:
			return self.url_template.format(base=base_currency)
		except (KeyError, IndexError, ValueError) as e:
			raise InvalidRequestError() from e

	async def fetch_rates(self, base_currency: str) -> ExchangeRateTable:
		url = self._build_url(base_currency)
		body = await self._request(url)

		try:
			payload = LatestRatesPayload.model_validate_json(body)
		except ValidationError as e:
			logger.error(f'{self.name}: undecodable rates response for {base_currency}')
			raise DecodeFailureError(f'Failed to decode exchange rate data. {describe_error(e)}') from e
		except Exception as e:
			logger.error(f'{self.name}: unexpected error decoding rates: {e!r}')
			raise DecodeFailureError(f'Failed to decode exchange rate data. {e}') from e

		table = ExchangeRateTable(base=payload.base, rates=payload.rates, date=payload.date)
		logger.info(f'Available currencies: {table.currencies}')
		return table
