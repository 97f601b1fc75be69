from .requests import ConvertRequest
from .responses import (
	ConversionResponse,
	ConvertedPricesResponse,
	ExchangeRatesResponse,
	PricesResponse,
	StoreStateResponse,
)

__all__ = [
	'ConvertRequest',
	'ConversionResponse',
	'ConvertedPricesResponse',
	'ExchangeRatesResponse',
	'PricesResponse',
	'StoreStateResponse',
]
