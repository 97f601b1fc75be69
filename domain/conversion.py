def convert(price_usd: float, amount: float, rate: float) -> float:
	"""Value of ``amount`` units of an asset priced at ``price_usd``, expressed via ``rate``."""
	return price_usd * amount * rate
