from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	PRICE_API_URL: str = 'https://api.coingecko.com/api/v3/simple/price'
	RATES_API_URL: str = 'https://api.exchangerate-api.com/v4/latest/{base}'

	BASE_CURRENCY: str = 'USD'
	HTTP_TIMEOUT_SECONDS: float = 10.0

	# Application
	APP_NAME: str = 'Crypto Converter API'
	LOG_LEVEL: str = 'INFO'
	LOG_FORMAT: str = 'text'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
