from .geo import (
    BoundingBox,
    bounding_box,
    distance_km,
    format_distance,
    haversine_km,
    walking_minutes,
)
from .heat import HeatScore, heat_label, heat_score
from .hours import (
    TimeWindow,
    deal_status,
    days_display,
    format_countdown,
    format_time,
    format_time_range,
    is_valid_day,
    is_within_window,
    minutes_remaining,
    now_in,
    parse_days,
    time_to_minutes,
)
from .parsing import parse_float, parse_savings, parse_when, truthy
