MISSING_DATA_MESSAGE = 'Invalid currencies or rates not available'


class ConverterException(Exception):
	pass


class FetchError(ConverterException):
	pass


class InvalidRequestError(FetchError):
	def __init__(self, message: str = 'Invalid URL'):
		super().__init__(message)


class NetworkFailureError(FetchError):
	def __init__(self, detail: str):
		super().__init__(f'Network Error: {detail}')


class NoDataError(FetchError):
	def __init__(self, message: str = 'No data received'):
		super().__init__(message)


class DecodeFailureError(FetchError):
	pass


class MissingDataError(ConverterException):
	def __init__(self, message: str = MISSING_DATA_MESSAGE):
		super().__init__(message)
