from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from domain.models.crypto import ConversionRequest


class ConvertRequest(BaseModel):
	model_config = ConfigDict(
		json_schema_extra={
			'example': {'asset': 'bitcoin', 'target_currency': 'EUR', 'amount': '2'}
		}
	)

	asset: str = Field(..., min_length=1, description='Asset id, e.g. bitcoin')
	target_currency: str = Field(..., min_length=1, description='Currency code as returned by the rates feed')
	# text or a JSON number; booleans are rejected
	amount: StrictStr | StrictInt | StrictFloat | None = Field(
		'1', description='Amount as entered by the user; falls back to 1'
	)

	def to_domain(self) -> ConversionRequest:
		return ConversionRequest.from_input(self.asset, self.amount, self.target_currency)
