"""Pytest configuration and shared fixtures"""

import os
from datetime import datetime

import pytest

# Set test environment variables
os.environ['HAPPYHOUR_TIMEZONE'] = 'Asia/Singapore'
os.environ['DEFAULT_LAT'] = '1.2804'
os.environ['DEFAULT_LNG'] = '103.8509'
os.environ['DEFAULT_RADIUS_KM'] = '5'

from happyhour import create_app  # noqa: E402


@pytest.fixture
def app():
    app = create_app({'TESTING': True})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def wednesday_evening():
    """Wednesday 15 Jan 2025, 18:30 Singapore wall-clock time"""
    return datetime(2025, 1, 15, 18, 30)


@pytest.fixture
def sample_deals():
    """Deals around Marina Bay plus one at Changi and one without coordinates"""
    return [
        {
            'id': 1, 'establishment_id': 1, 'drink_name': 'House Red',
            'lat': 1.2806, 'lng': 103.8540,
            'valid_days': 'Mon-Fri', 'hh_start_time': '1700', 'hh_end_time': '2000',
            'happy_hour_price': 8.0, 'savings_percentage': 47,
        },
        {
            'id': 2, 'establishment_id': 3, 'drink_name': 'Tiger Tower',
            'establishment': {'id': 3, 'latitude': 1.2866, 'longitude': 103.8497},
            'valid_days': 'Daily', 'hh_start_time': '11:00', 'hh_end_time': '21:00',
            'happy_hour_price': 68.0, 'savings_percentage': 31,
        },
        {
            'id': 3, 'establishment_id': 4, 'drink_name': 'Late IPA',
            'lat': 1.2884, 'lng': 103.8466,
            'valid_days': 'fri-sun', 'hh_start_time': '22:00', 'hh_end_time': '02:00',
            'happy_hour_price': 9.0, 'savings_percentage': 40,
        },
        {
            'id': 4, 'establishment_id': 5, 'drink_name': 'Airport Pilsner',
            'lat': 1.3644, 'lng': 103.9915,
            'valid_days': 'Everyday', 'hh_start_time': '15:00', 'hh_end_time': '19:00',
            'savings_percentage': 21,
        },
        {
            'id': 5, 'establishment_id': 6, 'drink_name': 'Mystery Shot',
            'valid_days': 'All Days', 'hh_start_time': '12:00', 'hh_end_time': '23:00',
            'savings_percentage': 10,
        },
    ]
