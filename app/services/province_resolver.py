"""
PayrollHub - Province Resolver

Assigns a Pakistani province to an imported city.

Resolution order:
1. exact match against the table of known cities
2. no coordinates -> Punjab
3. ordered bounding-box rules, first match wins
4. Punjab

The boxes overlap, so the rule order is the tie-break. Narrow regions
(the Islamabad capital territory) come before the larger boxes that
contain them.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


PUNJAB = "Punjab"
SINDH = "Sindh"
KHYBER_PAKHTUNKHWA = "Khyber Pakhtunkhwa"
BALOCHISTAN = "Balochistan"
AZAD_KASHMIR = "Azad Kashmir"
FANA = "Fana"
FATA = "Fata"

DEFAULT_PROVINCE = PUNJAB

PROVINCES: Tuple[str, ...] = (
    AZAD_KASHMIR,
    BALOCHISTAN,
    FANA,
    FATA,
    KHYBER_PAKHTUNKHWA,
    PUNJAB,
    SINDH,
)


KNOWN_CITIES: Dict[str, str] = {
    # Federal capital
    "Islamabad": FANA,
    # Sindh
    "Karachi": SINDH,
    "Hyderabad": SINDH,
    "Sukkur": SINDH,
    "Larkana": SINDH,
    "Nawabshah": SINDH,
    "Kotri": SINDH,
    "Jacobabad": SINDH,
    "Shikarpur": SINDH,
    "Mirpur Khas": SINDH,
    # Punjab
    "Lahore": PUNJAB,
    "Faisalabad": PUNJAB,
    "Rawalpindi": PUNJAB,
    "Multan": PUNJAB,
    "Gujranwala": PUNJAB,
    "Sargodha": PUNJAB,
    "Sialkot": PUNJAB,
    "Bahawalpur": PUNJAB,
    "Sheikhupura": PUNJAB,
    "Jhang": PUNJAB,
    "Rahim Yar Khan": PUNJAB,
    "Gujrat": PUNJAB,
    "Kasur": PUNJAB,
    "Sahiwal": PUNJAB,
    "Chiniot": PUNJAB,
    "Khanpur": PUNJAB,
    "Hafizabad": PUNJAB,
    "Muzaffargarh": PUNJAB,
    "Khanewal": PUNJAB,
    "Gojra": PUNJAB,
    "Mandi Bahauddin": PUNJAB,
    "Dera Ghazi Khan": PUNJAB,
    # Khyber Pakhtunkhwa
    "Peshawar": KHYBER_PAKHTUNKHWA,
    "Mardan": KHYBER_PAKHTUNKHWA,
    "Kohat": KHYBER_PAKHTUNKHWA,
    "Abbottabad": KHYBER_PAKHTUNKHWA,
    "Dera Ismail Khan": KHYBER_PAKHTUNKHWA,
    "Swat": KHYBER_PAKHTUNKHWA,
    "Mingora": KHYBER_PAKHTUNKHWA,
    "Bannu": KHYBER_PAKHTUNKHWA,
    "Mansehra": KHYBER_PAKHTUNKHWA,
    # Balochistan
    "Quetta": BALOCHISTAN,
    "Chaman": BALOCHISTAN,
    "Sibi": BALOCHISTAN,
    "Turbat": BALOCHISTAN,
    "Gwadar": BALOCHISTAN,
    "Zhob": BALOCHISTAN,
    # Azad Kashmir
    "Muzaffarabad": AZAD_KASHMIR,
    "Mirpur": AZAD_KASHMIR,
    "Rawalakot": AZAD_KASHMIR,
}


@dataclass(frozen=True)
class BoundingBox:
    """Latitude/longitude rectangle. Minimums are inclusive; maximums are
    inclusive unless the matching ``*_exclusive`` flag is set."""
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float
    lat_max_exclusive: bool = False
    lng_max_exclusive: bool = False

    def contains(self, lat: float, lng: float) -> bool:
        if lat < self.min_lat or lng < self.min_lng:
            return False
        if lat > self.max_lat or (self.lat_max_exclusive and lat == self.max_lat):
            return False
        if lng > self.max_lng or (self.lng_max_exclusive and lng == self.max_lng):
            return False
        return True


@dataclass(frozen=True)
class ProvinceRule:
    priority: int
    province: str
    box: BoundingBox


PROVINCE_RULES: List[ProvinceRule] = sorted(
    [
        ProvinceRule(1, FANA, BoundingBox(33.5, 34.0, 72.8, 73.2)),
        ProvinceRule(2, PUNJAB, BoundingBox(29.0, 33.0, 70.0, 75.0)),
        ProvinceRule(3, SINDH, BoundingBox(24.0, 29.0, 67.0, 71.0, lat_max_exclusive=True)),
        ProvinceRule(4, FATA, BoundingBox(33.0, 35.0, 70.0, 71.5)),
        ProvinceRule(5, KHYBER_PAKHTUNKHWA, BoundingBox(31.0, 36.0, 70.0, 72.0, lng_max_exclusive=True)),
        ProvinceRule(6, KHYBER_PAKHTUNKHWA, BoundingBox(31.0, 33.5, 70.0, 74.0, lat_max_exclusive=True)),
        ProvinceRule(7, BALOCHISTAN, BoundingBox(25.0, 32.0, 60.0, 70.0, lng_max_exclusive=True)),
        ProvinceRule(8, AZAD_KASHMIR, BoundingBox(33.0, 36.0, 73.0, 75.0)),
    ],
    key=lambda rule: rule.priority,
)


def province_for_coordinates(lat: Optional[float], lng: Optional[float]) -> str:
    """Province whose box first contains the point, by rule priority."""
    if not lat or not lng:
        return DEFAULT_PROVINCE
    for rule in PROVINCE_RULES:
        if rule.box.contains(lat, lng):
            return rule.province
    return DEFAULT_PROVINCE


def resolve_province(city_name: str, lat: Optional[float] = None, lng: Optional[float] = None) -> str:
    """Known city first, then coordinates, then the default province."""
    known = KNOWN_CITIES.get(city_name)
    if known:
        return known
    return province_for_coordinates(lat, lng)
