import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.dependencies import cleanup_dependencies, get_conversion_store, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import crypto
from config.log_config import configure_logging
from config.settings import get_settings

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info('Starting Crypto Converter API...')

	init_dependencies()
	# Fetches run in the background; requests are served from whatever is cached.
	get_conversion_store().initialize()

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
	logger.error(f'Unhandled exception: {exc}', exc_info=True)
	return JSONResponse(status_code=500, content={'detail': 'Internal server error'})


app.include_router(crypto.router)
register_exception_handlers(app)
