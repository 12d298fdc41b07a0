from bigmoney.domain.monetary.currency import Currency


# ISO 4217 codes known out of the box; more can be added with `Currency.register`
USD = Currency("USD")
EUR = Currency("EUR")
GBP = Currency("GBP")
CHF = Currency("CHF")
CAD = Currency("CAD")
AUD = Currency("AUD")
SEK = Currency("SEK")
NOK = Currency("NOK")
DKK = Currency("DKK")
PLN = Currency("PLN")
CZK = Currency("CZK")
JPY = Currency("JPY")
KRW = Currency("KRW")
KWD = Currency("KWD")
BHD = Currency("BHD")

PREDEFINED_CURRENCIES = (USD, EUR, GBP, CHF, CAD, AUD, SEK, NOK, DKK, PLN, CZK, JPY, KRW, KWD, BHD)

# Register all predefined currencies
for _currency in PREDEFINED_CURRENCIES:
    Currency.register(_currency, overwrite=True)
