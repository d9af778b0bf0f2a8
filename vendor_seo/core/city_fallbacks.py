"""Well-known shopping areas used when the map data has thin coverage."""

from typing import Dict, List, Tuple

CITY_FALLBACKS: Dict[str, Tuple[str, ...]] = {
    "lagos": ("Yaba", "Surulere", "Ikeja", "Lekki", "Victoria Island", "Balogun Market", "Ikoyi"),
    "abuja": ("Wuse", "Garki", "Maitama", "Asokoro", "Gwarinpa", "Jabi"),
    "port harcourt": ("GRA", "Rumuokoro", "Trans Amadi", "D-Line", "Mile 1 Market"),
    "ibadan": ("Bodija", "Dugbe", "Challenge", "Ring Road", "Mokola"),
    "kano": ("Sabon Gari", "Kantin Kwari", "Nassarawa", "Fagge"),
    "enugu": ("Ogui", "Independence Layout", "Ogbete Main Market", "New Haven"),
    "benin city": ("GRA", "Ugbowo", "Oba Market", "Sapele Road"),
}


def fallback_neighborhoods(city: str) -> List[str]:
    return list(CITY_FALLBACKS.get((city or "").strip().lower(), ()))
