# happyhour/routes.py
from flask import Blueprint, abort, current_app, jsonify, request

from .services.ranking import annotate_deal, nearby_deals, rank_deals, venue_heat
from .utils import (
    bounding_box,
    distance_km,
    format_distance,
    heat_score,
    now_in,
    parse_float,
    parse_when,
    truthy,
    walking_minutes,
)

bp = Blueprint("main", __name__)


@bp.errorhandler(400)
def bad_request(e):
    return jsonify(error=e.description), 400


# ---- request helpers ----
def _tz():
    return current_app.config["HAPPYHOUR_TIMEZONE"]


def _number(source, name, default=None):
    raw = source.get(name)
    if raw is None and default is not None:
        return default
    value = parse_float(raw)
    if value is None:
        abort(400, f"Invalid or missing {name}")
    return value


def _now(raw):
    try:
        when = parse_when(raw)
    except ValueError:
        abort(400, f"Invalid now: {raw!r}")
    return when or now_in(_tz())


def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, "JSON object body required")
    return data


def _deals(data):
    deals = data.get("deals")
    if not isinstance(deals, list) or not all(isinstance(d, dict) for d in deals):
        abort(400, "deals must be a list of objects")
    return deals


@bp.route("/api/health")
def health():
    return jsonify(status="ok", timezone=_tz())


@bp.route("/api/distance")
def distance():
    lat1 = _number(request.args, "lat1")
    lng1 = _number(request.args, "lng1")
    lat2 = _number(request.args, "lat2")
    lng2 = _number(request.args, "lng2")
    dist = distance_km(lat1, lng1, lat2, lng2)
    return jsonify(
        distance_km=dist,
        display=format_distance(dist),
        walking_minutes=walking_minutes(dist),
    )


@bp.route("/api/bbox")
def bbox():
    lat = _number(request.args, "lat")
    lng = _number(request.args, "lng")
    radius_km = _number(request.args, "radius_km", current_app.config["DEFAULT_RADIUS_KM"])
    return jsonify(bounding_box(lat, lng, radius_km)._asdict())


@bp.post("/api/deals/status")
def deals_status():
    data = _payload()
    deals = _deals(data)
    now = _now(data.get("now"))
    if truthy(data.get("ranked", "false")):
        items = rank_deals(deals, now, _tz())
    else:
        items = [annotate_deal(d, now, tz=_tz()) for d in deals]
    return jsonify(now=now.isoformat(), deals=items)


@bp.post("/api/deals/nearby")
def deals_nearby():
    data = _payload()
    deals = _deals(data)
    lat = _number(data, "lat", current_app.config["DEFAULT_LAT"])
    lng = _number(data, "lng", current_app.config["DEFAULT_LNG"])
    radius_km = _number(data, "radius_km", current_app.config["DEFAULT_RADIUS_KM"])
    if radius_km < 0:
        abort(400, "radius_km must be non-negative")
    now = _now(data.get("now"))

    items = nearby_deals(deals, lat, lng, radius_km, now, _tz())
    if truthy(data.get("active_only", "false")):
        items = [d for d in items if d["is_active"]]
    current_app.logger.info(f"Nearby: {len(items)} of {len(deals)} deals within {radius_km} km of {lat},{lng}")
    return jsonify(count=len(items), deals=items)


@bp.post("/api/heat")
def heat():
    data = _payload()
    deals = _deals(data) if "deals" in data else []
    popularity = data.get("popularity")
    if popularity is not None:
        popularity = _number(data, "popularity")
    score = heat_score(deals, popularity)
    return jsonify(level=score.level, label=score.label, bar_width=score.bar_width)


@bp.post("/api/venues/heat")
def venues_heat():
    data = _payload()
    deals = _deals(data)
    now = _now(data.get("now"))
    return jsonify(venues=venue_heat(deals, now, _tz()))
