import logging

from application.services import ConversionStore
from config.settings import get_settings
from infrastructure.providers import CoinGeckoPriceSource, ExchangeRateAPISource

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	store: ConversionStore | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Build the sources and the conversion store. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.store = ConversionStore(
		price_source=CoinGeckoPriceSource(
			base_url=settings.PRICE_API_URL, timeout=settings.HTTP_TIMEOUT_SECONDS
		),
		rate_source=ExchangeRateAPISource(
			url_template=settings.RATES_API_URL, timeout=settings.HTTP_TIMEOUT_SECONDS
		),
		base_currency=settings.BASE_CURRENCY,
	)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.store:
		await deps.store.close()
		deps.store = None

	logger.info('Cleanup complete')


def get_conversion_store() -> ConversionStore:
	if deps.store is None:
		raise RuntimeError('Conversion store not initialized')
	return deps.store
