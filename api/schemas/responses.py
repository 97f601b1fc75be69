from pydantic import BaseModel, ConfigDict, Field

from application.services import ConversionStore


class PricesResponse(BaseModel):
	prices: dict[str, float] = Field(..., description='USD price per asset')


class ExchangeRatesResponse(BaseModel):
	base: str = Field(..., description='Base currency of the multipliers')
	date: str = Field(..., description='Date label reported by the rates feed')
	rates: dict[str, float] = Field(..., description='Currency code to multiplier')


class ConvertedPricesResponse(BaseModel):
	converted_prices: dict[str, float] = Field(..., description='Last converted value per asset')


class ConversionResponse(BaseModel):
	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'asset': 'bitcoin',
				'target_currency': 'EUR',
				'amount': 2.0,
				'converted_amount': 90000.0,
			}
		}
	)

	asset: str
	target_currency: str
	amount: float
	converted_amount: float


class StoreStateResponse(BaseModel):
	prices: dict[str, float]
	exchange_rates: ExchangeRatesResponse | None
	converted_prices: dict[str, float]
	error_message: str | None
	available_currencies: list[str]

	@classmethod
	def from_store(cls, store: ConversionStore) -> 'StoreStateResponse':
		table = store.exchange_rates
		return cls(
			prices={asset.value: price for asset, price in store.crypto_prices.items()},
			exchange_rates=(
				ExchangeRatesResponse(base=table.base, date=table.date, rates=dict(table.rates))
				if table is not None
				else None
			),
			converted_prices={asset.value: value for asset, value in store.converted_prices.items()},
			error_message=store.error_message,
			available_currencies=store.available_currencies,
		)
