from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from api.dependencies import get_conversion_store
from api.schemas import (
	ConversionResponse,
	ConvertedPricesResponse,
	ConvertRequest,
	ExchangeRatesResponse,
	PricesResponse,
	StoreStateResponse,
)
from application.services import ConversionStore
from domain.exceptions.crypto import MissingDataError

router = APIRouter(prefix='/api', tags=['crypto'])

Store = Annotated[ConversionStore, Depends(get_conversion_store)]


@router.get(
	'/prices',
	response_model=PricesResponse,
	status_code=status.HTTP_200_OK,
	summary='Cached USD prices',
)
async def get_prices(store: Store) -> PricesResponse:
	return PricesResponse(prices={asset.value: price for asset, price in store.crypto_prices.items()})


@router.get(
	'/rates',
	response_model=ExchangeRatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Cached exchange rate table',
)
async def get_rates(store: Store) -> ExchangeRatesResponse:
	table = store.exchange_rates
	if table is None:
		raise HTTPException(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail='Exchange rates not available'
		)
	return ExchangeRatesResponse(base=table.base, date=table.date, rates=dict(table.rates))


@router.get(
	'/conversions',
	response_model=ConvertedPricesResponse,
	status_code=status.HTTP_200_OK,
	summary='Last converted value per asset',
)
async def get_conversions(store: Store) -> ConvertedPricesResponse:
	return ConvertedPricesResponse(
		converted_prices={asset.value: value for asset, value in store.converted_prices.items()}
	)


@router.get(
	'/state',
	response_model=StoreStateResponse,
	status_code=status.HTTP_200_OK,
	summary='Everything the store currently publishes',
)
async def get_state(store: Store) -> StoreStateResponse:
	return StoreStateResponse.from_store(store)


@router.post(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert an asset amount with the cached price and rate',
)
async def convert_asset(request: ConvertRequest, store: Store) -> ConversionResponse:
	conversion = request.to_domain()
	converted = store.request_conversion(conversion)
	if converted is None:
		raise MissingDataError()
	return ConversionResponse(
		asset=conversion.asset,
		target_currency=conversion.target_currency,
		amount=conversion.amount,
		converted_amount=converted,
	)


@router.post(
	'/refresh/prices',
	response_model=StoreStateResponse,
	status_code=status.HTTP_200_OK,
	summary='Fetch prices again',
)
async def refresh_prices(store: Store) -> StoreStateResponse:
	await store.fetch_crypto_prices()
	return StoreStateResponse.from_store(store)


@router.post(
	'/refresh/rates/{base_currency}',
	response_model=StoreStateResponse,
	status_code=status.HTTP_200_OK,
	summary='Fetch exchange rates for a base currency',
)
async def refresh_rates(
	base_currency: Annotated[str, Path(min_length=1, max_length=10)],
	store: Store,
) -> StoreStateResponse:
	await store.fetch_exchange_rates(base_currency)
	return StoreStateResponse.from_store(store)
