from typing import Dict, Any, List, Optional

COUNTRY_MAPPING: Dict[str, Dict[str, Any]] = {
    "India": {
        "name": "India",
        "code": "IND",
        "iso2": "IN",
        "states": [
            {"name": "Delhi", "code": "DL", "cities": ["New Delhi", "Delhi", "Central Delhi", "East Delhi", "North Delhi", "South Delhi", "West Delhi"]},
            {"name": "Maharashtra", "code": "MH", "cities": ["Mumbai", "Pune", "Nagpur", "Thane", "Nashik"]},
            {"name": "West Bengal", "code": "WB", "cities": ["Kolkata", "Howrah", "Asansol"]},
            {"name": "Tamil Nadu", "code": "TN", "cities": ["Chennai", "Coimbatore", "Madurai"]},
            {"name": "Karnataka", "code": "KA", "cities": ["Bangalore", "Mysore", "Hubli"]},
            {"name": "Telangana", "code": "TG", "cities": ["Hyderabad", "Warangal"]},
            {"name": "Gujarat", "code": "GJ", "cities": ["Ahmedabad", "Surat", "Vadodara"]},
            {"name": "Rajasthan", "code": "RJ", "cities": ["Jaipur", "Jodhpur", "Udaipur"]},
            {"name": "Uttar Pradesh", "code": "UP", "cities": ["Lucknow", "Kanpur", "Agra", "Varanasi"]},
        ],
    },
    "United States": {
        "name": "United States",
        "code": "USA",
        "iso2": "US",
        "states": [
            {"name": "California", "code": "CA", "cities": ["Los Angeles", "San Francisco", "San Diego", "Sacramento"]},
            {"name": "New York", "code": "NY", "cities": ["New York", "Buffalo", "Rochester"]},
            {"name": "Texas", "code": "TX", "cities": ["Houston", "Dallas", "Austin", "San Antonio"]},
            {"name": "Illinois", "code": "IL", "cities": ["Chicago", "Aurora", "Naperville"]},
            {"name": "Florida", "code": "FL", "cities": ["Miami", "Orlando", "Tampa", "Jacksonville"]},
        ],
    },
    "United Kingdom": {
        "name": "United Kingdom",
        "code": "GBR",
        "iso2": "GB",
        "states": [
            {"name": "England", "code": "ENG", "cities": ["London", "Manchester", "Birmingham", "Leeds", "Liverpool"]},
            {"name": "Scotland", "code": "SCT", "cities": ["Edinburgh", "Glasgow", "Aberdeen"]},
            {"name": "Wales", "code": "WLS", "cities": ["Cardiff", "Swansea", "Newport"]},
        ],
    },
    "Brazil": {
        "name": "Brazil",
        "code": "BRA",
        "iso2": "BR",
        "states": [
            {"name": "São Paulo", "code": "SP", "cities": ["São Paulo", "Campinas", "Santos"]},
            {"name": "Rio de Janeiro", "code": "RJ", "cities": ["Rio de Janeiro", "Niterói"]},
            {"name": "Bahia", "code": "BA", "cities": ["Salvador", "Feira de Santana"]},
        ],
    },
    "Germany": {
        "name": "Germany",
        "code": "DEU",
        "iso2": "DE",
        "states": [
            {"name": "Bavaria", "code": "BY", "cities": ["Munich", "Nuremberg"]},
            {"name": "Berlin", "code": "BE", "cities": ["Berlin"]},
            {"name": "North Rhine-Westphalia", "code": "NW", "cities": ["Cologne", "Düsseldorf", "Dortmund"]},
        ],
    },
    "France": {
        "name": "France",
        "code": "FRA",
        "iso2": "FR",
        "states": [
            {"name": "Île-de-France", "code": "IDF", "cities": ["Paris", "Versailles"]},
            {"name": "Provence-Alpes-Côte d'Azur", "code": "PAC", "cities": ["Marseille", "Nice"]},
            {"name": "Auvergne-Rhône-Alpes", "code": "ARA", "cities": ["Lyon", "Grenoble"]},
        ],
    },
    "Japan": {
        "name": "Japan",
        "code": "JPN",
        "iso2": "JP",
        "states": [
            {"name": "Tokyo", "code": "13", "cities": ["Tokyo", "Shibuya", "Shinjuku"]},
            {"name": "Osaka", "code": "27", "cities": ["Osaka", "Sakai"]},
            {"name": "Kyoto", "code": "26", "cities": ["Kyoto"]},
        ],
    },
    "Australia": {
        "name": "Australia",
        "code": "AUS",
        "iso2": "AU",
        "states": [
            {"name": "New South Wales", "code": "NSW", "cities": ["Sydney", "Newcastle", "Wollongong"]},
            {"name": "Victoria", "code": "VIC", "cities": ["Melbourne", "Geelong"]},
            {"name": "Queensland", "code": "QLD", "cities": ["Brisbane", "Gold Coast"]},
        ],
    },
}

def get_country_code(country_name: str) -> str:
    info = COUNTRY_MAPPING.get(country_name)
    return info["iso2"] if info else country_name

def get_country_iso3(country_name: str) -> str:
    info = COUNTRY_MAPPING.get(country_name)
    return info["code"] if info else country_name

def get_states_for_country(country_name: str) -> List[Dict[str, Any]]:
    info = COUNTRY_MAPPING.get(country_name)
    return list(info["states"]) if info else []

def get_cities_for_state(country_name: str, state_name: str) -> List[str]:
    for state in get_states_for_country(country_name):
        if state["name"] == state_name:
            return list(state["cities"])
    return []

def get_all_cities_for_country(country_name: str) -> List[str]:
    return [city for state in get_states_for_country(country_name) for city in state["cities"]]

def get_country_list() -> List[str]:
    return list(COUNTRY_MAPPING.keys())

def resolve_country(identifier: Optional[str]) -> Optional[Dict[str, Any]]:
    """Look a country up by name, ISO3 or ISO2 code (case-insensitive)."""
    if not identifier:
        return None
    needle = identifier.strip().lower()
    for info in COUNTRY_MAPPING.values():
        if needle in (info["name"].lower(), info["code"].lower(), info["iso2"].lower()):
            return info
    return None
