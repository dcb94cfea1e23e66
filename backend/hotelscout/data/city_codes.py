"""City codes — city name ⇄ IATA city code lookup for the search form."""

CITY_CODES: dict[str, str] = {
    # India
    "Delhi": "DEL", "Mumbai": "BOM", "Bangalore": "BLR", "Chennai": "MAA",
    "Kolkata": "CCU", "Hyderabad": "HYD", "Pune": "PNQ", "Ahmedabad": "AMD",
    "Jaipur": "JAI", "Goa": "GOI",
    # Europe
    "London": "LON", "Paris": "PAR", "Amsterdam": "AMS", "Barcelona": "BCN",
    "Rome": "ROM", "Madrid": "MAD", "Berlin": "BER",
    # Americas
    "New York": "NYC", "Los Angeles": "LAX", "San Francisco": "SFO",
    "Chicago": "CHI", "Boston": "BOS", "Miami": "MIA", "Las Vegas": "LAS",
    # Middle East / Asia-Pacific
    "Dubai": "DXB", "Singapore": "SIN", "Tokyo": "TYO", "Sydney": "SYD",
    "Melbourne": "MEL", "Bangkok": "BKK", "Hong Kong": "HKG", "Seoul": "SEL",
    "Shanghai": "SHA", "Beijing": "BJS",
}

POPULAR_CITIES: list[dict[str, str]] = [
    {"name": name, "code": CITY_CODES[name]}
    for name in ("Delhi", "Mumbai", "Bangalore", "London", "Paris", "New York", "Dubai", "Singapore")
]


def get_city_code(city_name: str) -> str:
    """City code for a known city name, else the input upper-cased (assumed to be a code)."""
    city_name = city_name.strip()
    for name, code in CITY_CODES.items():
        if name.lower() == city_name.lower():
            return code
    return city_name.upper()


def get_city_name(code: str) -> str:
    for name, city_code in CITY_CODES.items():
        if city_code == code.upper():
            return name
    return code
