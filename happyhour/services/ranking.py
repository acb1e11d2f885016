import logging
from collections import defaultdict
from datetime import datetime

from happyhour.utils.geo import bounding_box, distance_km, format_distance, walking_minutes
from happyhour.utils.heat import heat_score
from happyhour.utils.parsing import parse_float
from happyhour.utils.hours import (
    ACTIVE,
    DEFAULT_TIMEZONE,
    TimeWindow,
    days_display,
    deal_status,
    format_countdown,
    format_time_range,
    minutes_remaining,
)

log = logging.getLogger(__name__)


def _establishment(deal) -> dict:
    est = deal.get("establishment")
    return est if isinstance(est, dict) else {}


def deal_coords(deal):
    """(lat, lng) from the deal itself or its nested establishment; None if missing."""
    lat, lng = parse_float(deal.get("lat")), parse_float(deal.get("lng"))
    if lat is None or lng is None:
        est = _establishment(deal)
        lat, lng = parse_float(est.get("latitude")), parse_float(est.get("longitude"))
    if lat is None or lng is None:
        return None
    return lat, lng


def annotate_deal(deal, now: datetime, lat=None, lng=None, tz=DEFAULT_TIMEZONE):
    """Copy of ``deal`` with status and, given a user position, distance fields."""
    window = TimeWindow.from_deal(deal)
    status = deal_status(window, now, tz)
    out = dict(deal)
    out.update(
        status=status,
        is_active=status == ACTIVE,
        time_range=format_time_range(window.start_time, window.end_time),
        days_display=days_display(window.valid_days),
    )
    remaining = minutes_remaining(window, now, tz)
    out["countdown"] = format_countdown(remaining) if remaining is not None else None

    coords = deal_coords(deal)
    if lat is not None and lng is not None and coords is not None:
        dist = distance_km(lat, lng, coords[0], coords[1])
        out.update(
            distance_km=dist,
            distance_display=format_distance(dist),
            walking_minutes=walking_minutes(dist),
        )
    return out


def sort_value(deal) -> float:
    """Ordering weight: active first, then sort_order, distance, price."""
    value = 0.0
    if deal.get("is_active"):
        value += 1000
    # client fields may be strings ("8.00"); unparseable ones are skipped
    sort_order = parse_float(deal.get("sort_order"))
    if sort_order is not None:
        # lower sort_order first
        value += 100 - min(99, sort_order)
    distance = parse_float(deal.get("distance_km"))
    if distance is not None:
        # 0-50 km -> 10-0 points
        value += max(0.0, 10 - distance / 5)
    price = parse_float(deal.get("happy_hour_price"))
    if price is not None:
        # $0-$100 -> 1-0 points
        value += max(0.0, 1 - price / 100)
    return value


def rank_deals(deals, now: datetime, tz=DEFAULT_TIMEZONE):
    """Annotate deals without a position and order them by ``sort_value``."""
    items = [annotate_deal(d, now, tz=tz) for d in deals]
    for item in items:
        item["sort_value"] = sort_value(item)
    items.sort(key=lambda x: x["sort_value"], reverse=True)
    return items


def nearby_deals(deals, lat: float, lng: float, radius_km: float, now: datetime, tz=DEFAULT_TIMEZONE):
    """Deals within ``radius_km`` of (lat, lng), annotated and ranked."""
    box = bounding_box(lat, lng, radius_km)
    items = []
    skipped = 0
    for deal in deals:
        coords = deal_coords(deal)
        if coords is None:
            skipped += 1
            continue
        if not box.contains(*coords):
            continue
        item = annotate_deal(deal, now, lat, lng, tz)
        if item["distance_km"] > radius_km:
            continue
        item["sort_value"] = sort_value(item)
        items.append(item)

    if skipped:
        log.info("Skipped %d deals without coordinates", skipped)
    items.sort(key=lambda x: x["sort_value"], reverse=True)
    return items


def venue_heat(deals, now: datetime, tz=DEFAULT_TIMEZONE):
    """Heat per establishment, scored from its currently active deals."""
    by_venue = defaultdict(list)
    for deal in deals:
        venue_id = deal.get("establishment_id")
        if venue_id is None:
            venue_id = _establishment(deal).get("id")
        by_venue[venue_id].append(deal)

    out = []
    for venue_id, venue_deals in by_venue.items():
        active = [d for d in venue_deals
                  if deal_status(TimeWindow.from_deal(d), now, tz) == ACTIVE]
        score = heat_score(active)
        out.append({
            "establishment_id": venue_id,
            "deal_count": len(venue_deals),
            "active_count": len(active),
            "level": score.level,
            "label": score.label,
            "bar_width": score.bar_width,
        })
    out.sort(key=lambda x: x["level"], reverse=True)
    return out
