import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.crypto import MissingDataError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(MissingDataError)
	async def missing_data_handler(request: Request, exc: MissingDataError):
		return JSONResponse(status_code=409, content={'detail': str(exc)})
