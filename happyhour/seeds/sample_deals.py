# happyhour/seeds/sample_deals.py
# Demo data for `flask nearby`; nothing is persisted.

ESTABLISHMENTS = [
    {"id": 1, "name": "Level 33",            "latitude": 1.2806, "longitude": 103.8540, "area": "Marina Bay"},
    {"id": 2, "name": "Smoke & Mirrors",     "latitude": 1.2905, "longitude": 103.8520, "area": "City Hall"},
    {"id": 3, "name": "Harry's Boat Quay",   "latitude": 1.2866, "longitude": 103.8497, "area": "Boat Quay"},
    {"id": 4, "name": "Brewerkz Riverside",  "latitude": 1.2884, "longitude": 103.8466, "area": "Clarke Quay"},
    {"id": 5, "name": "Changi Taproom",      "latitude": 1.3644, "longitude": 103.9915, "area": "Changi"},
]


def _deal(deal_id, establishment_id, drink_name, standard_price, happy_hour_price,
          valid_days, start, end, sort_order=None):
    return {
        "id": deal_id,
        "establishment_id": establishment_id,
        "establishment": next(e for e in ESTABLISHMENTS if e["id"] == establishment_id),
        "drink_name": drink_name,
        "standard_price": standard_price,
        "happy_hour_price": happy_hour_price,
        "savings_percentage": round((standard_price - happy_hour_price) / standard_price * 100),
        "valid_days": valid_days,
        "hh_start_time": start,
        "hh_end_time": end,
        "sort_order": sort_order,
    }


SAMPLE_DEALS = [
    _deal(1, 1, "House Pour Red Wine",  15.0, 8.0,  "Mon-Fri",       "1700",  "2000", sort_order=1),
    _deal(2, 1, "Craft Lager Pint",     16.0, 10.0, "All Days",      "16:00", "19:00"),
    _deal(3, 2, "Signature Martini",    24.0, 18.0, "Weekdays",      "17:00", "21:00"),
    _deal(4, 3, "Tiger Tower",          98.0, 68.0, "Daily",         "1100",  "2100"),
    _deal(5, 3, "House Spirits",        14.0, 13.0, "Mon, Wed, Fri", "930",   "1200"),
    _deal(6, 4, "Brewerkz IPA",         15.0, 9.0,  "fri-sun",       "22:00", "02:00"),
    _deal(7, 5, "Airport Pilsner",      14.0, 11.0, "Everyday",      "15:00", "18:00"),
]
