import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from domain.exceptions.crypto import InvalidRequestError, NetworkFailureError, NoDataError

logger = logging.getLogger(__name__)


class JSONSource(ABC):
	"""A base class for read-only JSON feeds, handling common HTTP logic."""

	def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 10):
		self.timeout = timeout
		self._client = client or httpx.AsyncClient(
			timeout=httpx.Timeout(timeout),
			headers={'accept': 'application/json'},
		)

	@property
	@abstractmethod
	def name(self) -> str:
		...

	async def _request(self, url: str, params: dict[str, Any] | None = None) -> bytes:
		"""GET ``url`` and return the raw body, mapping failures onto the fetch error taxonomy."""
		try:
			response = await self._client.get(url, params=params)
			response.raise_for_status()
		except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
			logger.error(f'{self.name}: invalid request URL {url!r}: {e}')
			raise InvalidRequestError() from e
		except httpx.HTTPStatusError as e:
			logger.error(f'{self.name}: HTTP error {e.response.status_code} from {url}')
			raise NetworkFailureError(
				f'HTTP {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			logger.error(f'{self.name}: request to {url} failed: {e.__class__.__name__}')
			raise NetworkFailureError(str(e) or e.__class__.__name__) from e
		except Exception as e:
			logger.error(f'{self.name}: unexpected error requesting {url}: {e!r}')
			raise NetworkFailureError(str(e) or e.__class__.__name__) from e

		if not response.content:
			logger.error(f'{self.name}: empty response body from {url}')
			raise NoDataError()

		return response.content

	async def close(self) -> None:
		"""Cleanly close the HTTP client."""
		await self._client.aclose()
