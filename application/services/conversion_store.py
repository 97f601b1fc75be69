import asyncio
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Protocol

from domain.conversion import convert
from domain.exceptions.crypto import FetchError, MissingDataError
from domain.models.crypto import Asset, ConversionRequest, ExchangeRateTable, PriceSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]

_EMPTY: Mapping = MappingProxyType({})


class PriceSource(Protocol):
	async def fetch_prices(self) -> PriceSnapshot: ...

	async def close(self) -> None: ...


class RateSource(Protocol):
	async def fetch_rates(self, base_currency: str) -> ExchangeRateTable: ...

	async def close(self) -> None: ...


class ConversionStore:
	"""
	Owner of the cached prices, exchange rates, converted values and the
	current error message.

	Every field is replaced by a new immutable object in one assignment, so a
	reader never observes a half-written value. Fields are independent of each
	other: fresh prices may sit next to an older rate table.

	All mutation happens on the event loop that owns the store. Fetches
	suspend at the network boundary and resume on that loop before writing.
	"""

	def __init__(self, price_source: PriceSource, rate_source: RateSource, base_currency: str = 'USD'):
		self.price_source = price_source
		self.rate_source = rate_source
		self.base_currency = base_currency

		self._crypto_prices: Mapping[Asset, float] = _EMPTY
		self._exchange_rates: ExchangeRateTable | None = None
		self._converted_prices: Mapping[Asset, float] = _EMPTY
		self._error_message: str | None = None

		self._listeners: list[Listener] = []
		self._loop: asyncio.AbstractEventLoop | None = None
		self._tasks: set[asyncio.Task] = set()
		self._initialized: asyncio.Future | None = None

	# Published fields

	@property
	def crypto_prices(self) -> Mapping[Asset, float]:
		return self._crypto_prices

	@property
	def exchange_rates(self) -> ExchangeRateTable | None:
		return self._exchange_rates

	@property
	def converted_prices(self) -> Mapping[Asset, float]:
		return self._converted_prices

	@property
	def error_message(self) -> str | None:
		return self._error_message

	@property
	def available_currencies(self) -> list[str]:
		if self._exchange_rates is None:
			return []
		return self._exchange_rates.currencies

	def subscribe(self, listener: Listener) -> Callable[[], None]:
		"""Register ``listener(field_name, new_value)``; returns a function that unregisters it."""
		self._listeners.append(listener)

		def unsubscribe() -> None:
			if listener in self._listeners:
				self._listeners.remove(listener)

		return unsubscribe

	# Lifecycle

	def initialize(self, base_currency: str | None = None) -> asyncio.Future:
		"""
		Start the price and rate fetches concurrently and return immediately.

		The returned awaitable resolves once both fetches have finished, in
		whatever order they complete. Calling this again returns the same
		awaitable without starting new fetches.
		"""
		if self._initialized is not None:
			return self._initialized

		self._loop = asyncio.get_running_loop()
		base = base_currency or self.base_currency
		logger.info(f'Initializing conversion store (base currency {base})')

		prices = self._spawn(self.fetch_crypto_prices())
		rates = self._spawn(self.fetch_exchange_rates(base))
		self._initialized = asyncio.gather(prices, rates, return_exceptions=True)
		return self._initialized

	async def wait_until_settled(self) -> None:
		while self._tasks:
			await asyncio.gather(*self._tasks, return_exceptions=True)

	async def close(self) -> None:
		for task in list(self._tasks):
			task.cancel()
		await asyncio.gather(*self._tasks, return_exceptions=True)
		await self.price_source.close()
		await self.rate_source.close()
		logger.info('Conversion store closed')

	def _spawn(self, coro) -> asyncio.Task:
		task = asyncio.ensure_future(coro)
		self._tasks.add(task)
		task.add_done_callback(self._tasks.discard)
		task.add_done_callback(_log_unexpected_failure)
		return task

	# Operations

	async def fetch_crypto_prices(self) -> None:
		try:
			prices = await self.price_source.fetch_prices()
		except FetchError as e:
			self._report(e)
			return
		except Exception as e:
			self._report_unexpected(e)
			return
		self._set('crypto_prices', MappingProxyType(dict(prices)))

	async def fetch_exchange_rates(self, base_currency: str) -> None:
		try:
			table = await self.rate_source.fetch_rates(base_currency)
		except FetchError as e:
			self._report(e)
			return
		except Exception as e:
			self._report_unexpected(e)
			return
		self._set('exchange_rates', table)

	def convert_crypto_price(self, asset: str | Asset, amount: float, target_currency: str) -> float | None:
		"""
		Convert ``amount`` of ``asset`` into ``target_currency`` from the cached
		snapshot and store the result. Nothing is fetched; returns None and sets
		the error message when the price or the rate is not cached.
		"""
		try:
			key, value = self._compute(asset, amount, target_currency)
		except MissingDataError as e:
			self._report(e)
			return None

		converted = dict(self._converted_prices)
		converted[key] = value
		self._set('converted_prices', MappingProxyType(converted))
		return value

	def request_conversion(self, request: ConversionRequest) -> float | None:
		return self.convert_crypto_price(request.asset, request.amount, request.target_currency)

	def _compute(self, asset: str | Asset, amount: float, target_currency: str) -> tuple[Asset, float]:
		key = Asset.parse(asset)
		price = self._crypto_prices.get(key) if key is not None else None
		rate = None
		if target_currency and self._exchange_rates is not None:
			rate = self._exchange_rates.rate_for(target_currency)

		if price is None or rate is None:
			raise MissingDataError()
		return key, convert(price, amount, rate)

	# State changes

	def _report(self, error: Exception) -> None:
		logger.warning(f'{error.__class__.__name__}: {error}')
		self._set('error_message', str(error))

	def _report_unexpected(self, error: Exception) -> None:
		logger.error(f'Unexpected fetch failure: {error!r}', exc_info=error)
		self._report(FetchError(str(error) or error.__class__.__name__))

	def _set(self, field: str, value: Any) -> None:
		self._check_owner()
		setattr(self, f'_{field}', value)
		for listener in list(self._listeners):
			try:
				listener(field, value)
			except Exception:
				logger.exception(f'Listener failed while handling {field} update')

	def _check_owner(self) -> None:
		if self._loop is None:
			return
		try:
			running = asyncio.get_running_loop()
		except RuntimeError:
			running = None
		if running is None and not self._loop.is_running():
			return
		if running is not self._loop:
			raise RuntimeError('ConversionStore mutated outside its owning event loop')


def _log_unexpected_failure(task: asyncio.Task) -> None:
	if task.cancelled() or task.exception() is None:
		return
	logger.error('Background fetch failed unexpectedly', exc_info=task.exception())
