# navi_travel/api/locations.py
"""Static reference data for Navi Mumbai places.

These tables are read-only: they are wrapped in ``MappingProxyType`` at
import time and never mutated afterwards.
"""

from types import MappingProxyType

# (longitude, latitude)
DEFAULT_CENTER = (73.0169, 19.0330)
DEFAULT_ZOOM = 12

LOCATION_COORDINATES = MappingProxyType({
    "Vashi": (73.0071, 19.0754),
    "Belapur": (73.0358, 19.0235),
    "Kharghar": (73.0785, 19.0477),
    "Nerul": (73.0157, 19.0377),
    "Panvel": (73.1088, 18.9894),
    "Airoli": (72.9985, 19.1557),
    "Ghansoli": (73.0085, 19.1162),
    "Kopar Khairane": (73.0071, 19.1050),
    "Sanpada": (73.0119, 19.0506),
    "Turbhe": (73.0224, 19.0897),
    "Seawoods": (73.0185, 19.0142),
    "DY Patil Stadium": (73.0282, 19.0446),
    "Central Park": (73.0169, 19.0343),
    "Inorbit Mall": (73.0169, 19.0343),
    "Wonder Park": (73.0074, 19.0137),
    "Mini Seashore": (73.0215, 19.0240),
    "Akshar Dhaam": (72.9962, 19.1030),
    "Wonders Park": (73.0074, 19.0137),
    "APMC Market": (73.0166, 19.0680),
    "Parsik Hill": (73.0299, 19.0303),
    "Palm Beach Road": (73.0222, 19.0037),
    "Jewel of Navi Mumbai": (73.0173, 19.0340),
    "Sagar Vihar": (73.0083, 19.0633),
    "Golf Course": (73.0081, 19.0157),
    "Nerul Balaji Temple": (73.0206, 19.0377),
    "Flamingo Sanctuary": (73.0165, 19.0380),
    "Science Centre": (73.0174, 19.0390),
    "Raghuleela Mall": (73.0077, 19.0720),
    "Belapur Fort": (73.0358, 19.0235),
})

# One colour per itinerary day, reused cyclically.
DAY_COLORS = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#EC4899",
    "#06B6D4",
)

DEFAULT_PLACE_IMAGE = "https://images.unsplash.com/photo-1518770660439-4636190af475?ixlib=rb-4.0.3"

CATEGORY_IMAGES = MappingProxyType({
    "Parks & Gardens": "https://images.unsplash.com/photo-1584479898061-15742e14f50d?ixlib=rb-4.0.3&q=80&w=800",
    "Natural Attractions": "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?ixlib=rb-4.0.3&q=80&w=800",
    "Shopping": "https://images.unsplash.com/photo-1605267994962-015b59d59ea9?ixlib=rb-4.0.3&q=80&w=800",
    "Historical Sites": "https://images.unsplash.com/photo-1564566500014-459a2967f00c?ixlib=rb-4.0.3&q=80&w=800",
    "Religious Sites": "https://images.unsplash.com/photo-1561361058-c12e14fc165e?ixlib=rb-4.0.3&q=80&w=800",
    "Sports": "https://images.unsplash.com/photo-1540747913346-19e32dc3e97e?ixlib=rb-4.0.3&q=80&w=800",
    "Wildlife": "https://images.unsplash.com/photo-1564171149171-88ba9136cdc8?ixlib=rb-4.0.3&q=80&w=800",
    "Educational": "https://images.unsplash.com/photo-1576086135878-bd1e26313586?ixlib=rb-4.0.3&q=80&w=800",
    "Amusement": "https://images.unsplash.com/photo-1513889961551-628c1e5e2ee9?ixlib=rb-4.0.3&q=80&w=800",
    "Cultural": "https://images.unsplash.com/photo-1460925895917-afdab827c52f?ixlib=rb-4.0.3&q=80&w=800",
    "Food & Dining": "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?ixlib=rb-4.0.3&q=80&w=800",
    "Entertainment": "https://images.unsplash.com/photo-1603739903239-8b6e64c3b185?ixlib=rb-4.0.3&q=80&w=800",
    "Landmark": "https://images.unsplash.com/photo-1477959858617-67f85cf4f1df?ixlib=rb-4.0.3&q=80&w=800",
    "Waterfront": "https://images.unsplash.com/photo-1507525428034-b723cf961d3e?ixlib=rb-4.0.3&q=80&w=800",
    "Museum": "https://images.unsplash.com/photo-1554907984-153a35182a04?ixlib=rb-4.0.3&q=80&w=800",
})

# Checked in order; the first key contained in the place name or location wins.
SPECIFIC_LOCATION_IMAGES = MappingProxyType({
    "Nerul Balaji Temple": "https://images.unsplash.com/photo-1553164700-3cae46c2243f?q=80&w=800",
    "Flamingo Sanctuary": "https://images.unsplash.com/photo-1573722719733-7a27b909a07d?q=80&w=800",
    "Science Centre": "https://images.unsplash.com/photo-1576086135878-bd1e26313586?q=80&w=800",
    "Raghuleela Mall": "https://images.unsplash.com/photo-1567958451986-2de427a3a0fc?q=80&w=800",
    "Belapur Fort": "https://images.unsplash.com/photo-1599408587288-6f9ef85db0ab?q=80&w=800",
    "Inorbit Mall": "https://images.unsplash.com/photo-1581417478175-a9ef18f210c2?q=80&w=800",
    "DLF Mall": "https://images.unsplash.com/photo-1441986300917-64674bd600d8?q=80&w=800",
    "Vashi": "https://images.unsplash.com/photo-1599359969577-a5611718a25e?q=80&w=800",
    "Belapur": "https://images.unsplash.com/photo-1599408587288-6f9ef85db0ab?q=80&w=800",
    "Kharghar": "https://images.unsplash.com/photo-1506744476757-8407c4647c7f?q=80&w=800",
    "Nerul": "https://images.unsplash.com/photo-1614930337616-72c3f183097f?q=80&w=800",
    "Panvel": "https://images.unsplash.com/photo-1561789474-cb8a3cb4dea9?q=80&w=800",
    "Airoli": "https://images.unsplash.com/photo-1618001789034-25fd141f5ae3?q=80&w=800",
    "DY Patil Stadium": "https://images.unsplash.com/photo-1505307112588-69289757a94c?q=80&w=800",
    "Central Park": "https://images.unsplash.com/photo-1571633554068-d1c5b250da46?q=80&w=800",
    "Wonder Park": "https://images.unsplash.com/photo-1617143207675-e7e6371f5f5d?q=80&w=800",
    "Mini Seashore": "https://images.unsplash.com/photo-1471922694854-ff1b63b20054?q=80&w=800",
    "APMC Market": "https://images.unsplash.com/photo-1513704519535-f5c81aa78d0d?q=80&w=800",
    "Parsik Hill": "https://images.unsplash.com/photo-1499678329028-101435549a4e?q=80&w=800",
    "Palm Beach Road": "https://images.unsplash.com/photo-1610641818989-bcd0bd756e93?q=80&w=800",
    "Shivaji Park": "https://images.unsplash.com/photo-1521138054413-5a47d349b7af?q=80&w=800",
    "Nerul Lake": "https://images.unsplash.com/photo-1497436072909-60f360e1d4b1?q=80&w=800",
    "Pandavkada Falls": "https://images.unsplash.com/photo-1462470371455-6e3fb709d02c?q=80&w=800",
    "Kharghar Hills": "https://images.unsplash.com/photo-1446329813274-7c9036bd9a1f?q=80&w=800",
    "Kharghar Valley": "https://images.unsplash.com/photo-1565938525338-659bf7ab20da?q=80&w=800",
})
