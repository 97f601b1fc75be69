from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, Strict, ValidationError, field_validator

from domain.models.crypto import Asset, PriceSnapshot

# JSON numbers only: no booleans, no numeric strings, no NaN or infinity
FiniteNumber = Annotated[float, Strict(), Field(allow_inf_nan=False)]


class UsdQuote(BaseModel):
	model_config = ConfigDict(extra='ignore', strict=True)

	usd: FiniteNumber = Field(..., ge=0)


class SimplePricePayload(BaseModel):
	"""Body of the simple price endpoint; every supported asset is required."""

	model_config = ConfigDict(extra='ignore', strict=True)

	bitcoin: UsdQuote
	ethereum: UsdQuote
	litecoin: UsdQuote
	dogecoin: UsdQuote
	ripple: UsdQuote
	cardano: UsdQuote

	def to_snapshot(self) -> PriceSnapshot:
		return {asset: getattr(self, asset.value).usd for asset in Asset}


class LatestRatesPayload(BaseModel):
	model_config = ConfigDict(extra='ignore', strict=True)

	base: str
	date: str
	rates: dict[str, FiniteNumber]

	@field_validator('rates')
	@classmethod
	def currency_codes_not_empty(cls, v: dict[str, float]):
		if any(not code.strip() for code in v):
			raise ValueError('currency codes must be non-empty')
		return v


def describe_error(error: ValidationError) -> str:
	"""Short human readable summary of the first validation failure."""
	first = error.errors()[0]
	location = '.'.join(str(part) for part in first['loc']) or 'body'
	return f'{location}: {first["msg"]}'
