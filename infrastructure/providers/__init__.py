from .base import JSONSource
from .coingecko import CoinGeckoPriceSource
from .exchangerate_api import ExchangeRateAPISource

__all__ = ['JSONSource', 'CoinGeckoPriceSource', 'ExchangeRateAPISource']
