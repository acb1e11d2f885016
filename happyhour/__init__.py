import json
import os

import click
from dotenv import load_dotenv
from flask import Flask


def create_app(test_config=None):
    load_dotenv()

    app = Flask(__name__)

    # Basic config
    app.config.from_mapping(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev"),
        HAPPYHOUR_TIMEZONE=os.getenv("HAPPYHOUR_TIMEZONE", "Asia/Singapore"),
        # Marina Bay
        DEFAULT_LAT=float(os.getenv("DEFAULT_LAT", "1.2804")),
        DEFAULT_LNG=float(os.getenv("DEFAULT_LNG", "103.8509")),
        DEFAULT_RADIUS_KM=float(os.getenv("DEFAULT_RADIUS_KM", "5")),
    )
    if test_config:
        app.config.from_mapping(test_config)

    from .routes import bp as main_bp
    app.register_blueprint(main_bp)

    # ---------- CLI: distance between two points ----------
    @app.cli.command("distance")
    @click.option("--lat1", type=float, required=True)
    @click.option("--lng1", type=float, required=True)
    @click.option("--lat2", type=float, required=True)
    @click.option("--lng2", type=float, required=True)
    def distance_command(lat1, lng1, lat2, lng2):
        """Haversine distance between two points."""
        from .utils import distance_km, format_distance, walking_minutes

        dist = distance_km(lat1, lng1, lat2, lng2)
        click.echo(f"{dist} km ({format_distance(dist)}, ~{walking_minutes(dist)} min walk)")

    # ---------- CLI: is a happy hour window on? ----------
    @app.cli.command("check-window")
    @click.option("--days", "valid_days", type=str, required=True, help='e.g. "Mon-Fri", "All Days"')
    @click.option("--start", "start_time", type=str, required=True, help='"17:00", "1700" or "930"')
    @click.option("--end", "end_time", type=str, required=True)
    @click.option("--at", "at", type=click.DateTime(["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]),
                  default=None, help="Local wall-clock time to check (default: now)")
    def check_window(valid_days, start_time, end_time, at):
        """Show whether a deal window is active."""
        from .utils import TimeWindow, deal_status, days_display, format_time_range, now_in

        tz = app.config["HAPPYHOUR_TIMEZONE"]
        now = at or now_in(tz)
        window = TimeWindow(valid_days=valid_days, start_time=start_time, end_time=end_time)
        status = deal_status(window, now, tz)
        click.echo(f"{days_display(valid_days)} {format_time_range(start_time, end_time)} "
                   f"at {now:%a %H:%M}: {status}")

    # ---------- CLI: heat score ----------
    @app.cli.command("heat")
    @click.option("--savings", type=str, default="", help='Comma list of savings %: "50,10,25"')
    @click.option("--popularity", type=float, default=None, help="Explicit level, overrides --savings")
    def heat_command(savings, popularity):
        """Heat level and label for a venue's deals."""
        from .utils import heat_score, parse_savings

        deals = [{"savings_percentage": s} for s in parse_savings(savings)]
        score = heat_score(deals, popularity)
        click.echo(f"{score.level:.1f}/10 {score.label}")

    # ---------- CLI: nearby sample deals ----------
    @app.cli.command("nearby")
    @click.option("--lat", type=float, default=None)
    @click.option("--lng", type=float, default=None)
    @click.option("--radius-km", type=float, default=None)
    @click.option("--at", "at", type=click.DateTime(["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]), default=None)
    @click.option("--file", "path", type=click.Path(exists=True, dir_okay=False), default=None,
                  help="JSON list of deals (default: built-in sample deals)")
    def nearby_command(lat, lng, radius_km, at, path):
        """Rank deals around a point."""
        from .services.ranking import nearby_deals
        from .utils import now_in

        if path:
            with open(path, "r", encoding="utf-8") as f:
                deals = json.load(f)
        else:
            from .seeds.sample_deals import SAMPLE_DEALS
            deals = SAMPLE_DEALS

        lat = app.config["DEFAULT_LAT"] if lat is None else lat
        lng = app.config["DEFAULT_LNG"] if lng is None else lng
        radius_km = app.config["DEFAULT_RADIUS_KM"] if radius_km is None else radius_km
        tz = app.config["HAPPYHOUR_TIMEZONE"]
        now = at or now_in(tz)

        items = nearby_deals(deals, lat, lng, radius_km, now, tz)
        click.echo(f"{len(items)} deals within {radius_km} km of {lat},{lng}")
        for d in items:
            name = d.get("drink_name") or d.get("title") or f"deal {d.get('id')}"
            flag = "*" if d["is_active"] else " "
            click.echo(f" {flag} {name:<24} {d['distance_display']:>7}  {d['days_display']} {d['time_range']}  [{d['status']}]")

    return app
