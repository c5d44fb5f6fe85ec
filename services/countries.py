# FILE: services/countries.py
"""
Static country lookups used by the payment path.

- country names and major cities -> ISO alpha-2
- alpha-2 -> local currency (corridor derivation)
"""

from typing import Optional

# ISO alpha-2 -> local currency
LOCAL_CURRENCIES = {
    "US": "USD",
    "CA": "CAD",
    "MX": "MXN",
    "BR": "BRL",
    "AR": "ARS",
    "CO": "COP",
    "PE": "PEN",
    "CL": "CLP",
    "GB": "GBP",
    "IE": "EUR",
    "FR": "EUR",
    "DE": "EUR",
    "ES": "EUR",
    "IT": "EUR",
    "PT": "EUR",
    "NL": "EUR",
    "BE": "EUR",
    "CH": "CHF",
    "PL": "PLN",
    "TR": "TRY",
    "MA": "MAD",
    "NG": "NGN",
    "GH": "GHS",
    "KE": "KES",
    "ZA": "ZAR",
    "EG": "EGP",
    "SN": "XOF",
    "AE": "AED",
    "SA": "SAR",
    "IN": "INR",
    "PK": "PKR",
    "BD": "BDT",
    "PH": "PHP",
    "VN": "VND",
    "TH": "THB",
    "ID": "IDR",
    "MY": "MYR",
    "SG": "SGD",
    "CN": "CNY",
    "JP": "JPY",
    "KR": "KRW",
    "AU": "AUD",
    "NZ": "NZD",
}

# lower-cased name -> alpha-2
# Names that are also common first names (Jordan, Chad, Georgia) are left out.
COUNTRY_NAMES = {
    # Americas
    "united states": "US",
    "united states of america": "US",
    "usa": "US",
    "america": "US",
    "new york": "US",
    "los angeles": "US",
    "miami": "US",
    "canada": "CA",
    "toronto": "CA",
    "mexico": "MX",
    "mexico city": "MX",
    "brazil": "BR",
    "sao paulo": "BR",
    "argentina": "AR",
    "colombia": "CO",
    "bogota": "CO",
    "peru": "PE",
    "lima": "PE",
    "chile": "CL",
    # Europe
    "united kingdom": "GB",
    "uk": "GB",
    "great britain": "GB",
    "britain": "GB",
    "england": "GB",
    "london": "GB",
    "ireland": "IE",
    "dublin": "IE",
    "france": "FR",
    "paris": "FR",
    "germany": "DE",
    "berlin": "DE",
    "spain": "ES",
    "madrid": "ES",
    "barcelona": "ES",
    "italy": "IT",
    "rome": "IT",
    "portugal": "PT",
    "lisbon": "PT",
    "netherlands": "NL",
    "holland": "NL",
    "amsterdam": "NL",
    "belgium": "BE",
    "switzerland": "CH",
    "poland": "PL",
    "turkey": "TR",
    "istanbul": "TR",
    # Africa
    "morocco": "MA",
    "casablanca": "MA",
    "rabat": "MA",
    "marrakech": "MA",
    "nigeria": "NG",
    "lagos": "NG",
    "abuja": "NG",
    "ghana": "GH",
    "accra": "GH",
    "kenya": "KE",
    "nairobi": "KE",
    "south africa": "ZA",
    "johannesburg": "ZA",
    "cape town": "ZA",
    "egypt": "EG",
    "cairo": "EG",
    "senegal": "SN",
    "dakar": "SN",
    # Middle East
    "united arab emirates": "AE",
    "uae": "AE",
    "dubai": "AE",
    "abu dhabi": "AE",
    "saudi arabia": "SA",
    "riyadh": "SA",
    # Asia / Pacific
    "india": "IN",
    "mumbai": "IN",
    "delhi": "IN",
    "new delhi": "IN",
    "pakistan": "PK",
    "karachi": "PK",
    "bangladesh": "BD",
    "dhaka": "BD",
    "philippines": "PH",
    "the philippines": "PH",
    "manila": "PH",
    "cebu": "PH",
    "davao": "PH",
    "vietnam": "VN",
    "hanoi": "VN",
    "thailand": "TH",
    "bangkok": "TH",
    "indonesia": "ID",
    "jakarta": "ID",
    "malaysia": "MY",
    "kuala lumpur": "MY",
    "singapore": "SG",
    "china": "CN",
    "beijing": "CN",
    "shanghai": "CN",
    "japan": "JP",
    "tokyo": "JP",
    "south korea": "KR",
    "korea": "KR",
    "seoul": "KR",
    "australia": "AU",
    "sydney": "AU",
    "melbourne": "AU",
    "new zealand": "NZ",
    "auckland": "NZ",
}


def country_code_for_name(name: Optional[str]) -> Optional[str]:
    """
    Resolve a country name, city or alpha-2 code to an alpha-2 code.
    Case-insensitive. Returns None when unknown.
    """
    if not name:
        return None

    key = " ".join(name.strip().lower().split())
    if not key:
        return None

    code = COUNTRY_NAMES.get(key)
    if code:
        return code

    if len(key) == 2 and key.upper() in LOCAL_CURRENCIES:
        return key.upper()

    return None


def local_currency_for_country(country: Optional[str]) -> Optional[str]:
    if not country:
        return None
    return LOCAL_CURRENCIES.get(country.strip().upper())


def corridor_for(currency: Optional[str], country: Optional[str]) -> Optional[str]:
    """`USD` + `PH` -> `USD-PHP`; None if either side is missing or unmapped."""
    if not currency or not country:
        return None

    local = local_currency_for_country(country)
    if not local:
        return None

    return f"{currency.upper()}-{local}"
