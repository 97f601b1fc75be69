import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

DEFAULT_AMOUNT = 1.0


class Asset(str, Enum):
	"""Supported cryptocurrencies, identified by their price-feed id."""

	BITCOIN = 'bitcoin'
	ETHEREUM = 'ethereum'
	LITECOIN = 'litecoin'
	DOGECOIN = 'dogecoin'
	RIPPLE = 'ripple'
	CARDANO = 'cardano'

	@classmethod
	def parse(cls, value: 'str | Asset') -> 'Asset | None':
		try:
			return cls(value)
		except ValueError:
			return None


# USD price per asset, always covering every Asset member once populated
PriceSnapshot = Mapping[Asset, float]


@dataclass(frozen=True)
class ExchangeRateTable:
	base: str
	rates: Mapping[str, float]
	date: str

	def __post_init__(self):
		object.__setattr__(self, 'rates', MappingProxyType(dict(self.rates)))

	def rate_for(self, currency: str) -> float | None:
		return self.rates.get(currency)

	@property
	def currencies(self) -> list[str]:
		return sorted(self.rates)


@dataclass(frozen=True)
class ConversionRequest:
	asset: str
	target_currency: str
	amount: float = field(default=DEFAULT_AMOUNT)

	@classmethod
	def from_input(cls, asset: str, amount_text: str | None, target_currency: str) -> 'ConversionRequest':
		"""Build a request from raw user input, falling back to an amount of 1."""
		return cls(asset=asset, target_currency=target_currency, amount=parse_amount(amount_text))


def parse_amount(text: str | float | None) -> float:
	if text is None:
		return DEFAULT_AMOUNT
	try:
		amount = float(str(text).strip().replace(',', '.'))
	except ValueError:
		return DEFAULT_AMOUNT
	if not math.isfinite(amount) or amount < 0:
		return DEFAULT_AMOUNT
	return amount
