from .conversion_store import ConversionStore, PriceSource, RateSource

__all__ = ['ConversionStore', 'PriceSource', 'RateSource']
