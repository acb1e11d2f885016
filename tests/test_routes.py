"""Tests for the JSON API blueprint"""


class TestHealth:

    def test_health(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok', 'timezone': 'Asia/Singapore'}


class TestDistance:

    def test_distance(self, client):
        response = client.get('/api/distance', query_string={
            'lat1': 1.2834, 'lng1': 103.8607, 'lat2': 1.3644, 'lng2': 103.9915,
        })
        assert response.status_code == 200
        body = response.get_json()
        assert 16 < body['distance_km'] < 18
        assert body['display'].endswith('km')
        assert body['walking_minutes'] == round(body['distance_km'] * 12)

    def test_missing_parameter(self, client):
        response = client.get('/api/distance', query_string={'lat1': 1.28, 'lng1': 103.86, 'lat2': 1.36})
        assert response.status_code == 400
        assert 'lng2' in response.get_json()['error']

    def test_non_numeric_parameter(self, client):
        response = client.get('/api/distance', query_string={
            'lat1': 'north', 'lng1': 103.86, 'lat2': 1.36, 'lng2': 103.99,
        })
        assert response.status_code == 400

    def test_non_finite_parameter(self, client):
        response = client.get('/api/distance', query_string={
            'lat1': 'nan', 'lng1': 103.86, 'lat2': 1.36, 'lng2': 103.99,
        })
        assert response.status_code == 400


class TestBoundingBox:

    def test_bbox(self, client):
        response = client.get('/api/bbox', query_string={'lat': 0, 'lng': 0, 'radius_km': 111})
        assert response.status_code == 200
        body = response.get_json()
        assert body['max_lat'] == 1.0
        assert body['min_lng'] == -1.0

    def test_default_radius(self, client):
        body = client.get('/api/bbox', query_string={'lat': 0, 'lng': 0}).get_json()
        assert round(body['max_lat'], 4) == round(5 / 111.0, 4)


class TestDealStatus:

    def test_status(self, client, sample_deals):
        response = client.post('/api/deals/status', json={
            'deals': sample_deals[:3], 'now': '2025-01-15T18:30:00',
        })
        assert response.status_code == 200
        body = response.get_json()
        assert [d['status'] for d in body['deals']] == ['active', 'active', 'inactive']
        assert body['deals'][0]['countdown'] == 'Ends in 1h 30m'

    def test_aware_now(self, client, sample_deals):
        response = client.post('/api/deals/status', json={
            'deals': sample_deals[:1], 'now': '2025-01-15T10:30:00+00:00',
        })
        assert response.get_json()['deals'][0]['status'] == 'active'

    def test_ranked(self, client, sample_deals):
        body = client.post('/api/deals/status', json={
            'deals': sample_deals, 'now': '2025-01-15T18:30:00', 'ranked': True,
        }).get_json()
        actives = [d['is_active'] for d in body['deals']]
        assert actives == sorted(actives, reverse=True)

    def test_ranked_string_fields(self, client):
        deals = [
            {'id': 1, 'valid_days': 'Daily', 'hh_start_time': '12:00', 'hh_end_time': '20:00',
             'happy_hour_price': 'n/a', 'sort_order': '1'},
            {'id': 2, 'valid_days': 'Daily', 'hh_start_time': '12:00', 'hh_end_time': '20:00',
             'happy_hour_price': '8.00', 'sort_order': '1'},
        ]
        response = client.post('/api/deals/status', json={
            'deals': deals, 'now': '2025-01-15T18:30:00', 'ranked': True,
        })
        assert response.status_code == 200
        assert [d['id'] for d in response.get_json()['deals']] == [2, 1]

    def test_now_defaults_to_current_time(self, client, sample_deals):
        response = client.post('/api/deals/status', json={'deals': sample_deals[:1]})
        assert response.status_code == 200
        assert response.get_json()['now'].endswith('+08:00')

    def test_bad_now(self, client, sample_deals):
        response = client.post('/api/deals/status', json={'deals': sample_deals, 'now': 'teatime'})
        assert response.status_code == 400

    def test_bad_deals(self, client):
        assert client.post('/api/deals/status', json={'deals': 'all'}).status_code == 400
        assert client.post('/api/deals/status', json={'deals': [1, 2]}).status_code == 400

    def test_body_required(self, client):
        assert client.post('/api/deals/status', data='nope').status_code == 400


class TestNearby:

    def test_nearby(self, client, sample_deals):
        response = client.post('/api/deals/nearby', json={
            'lat': 1.2804, 'lng': 103.8509, 'radius_km': 5,
            'deals': sample_deals, 'now': '2025-01-15T18:30:00',
        })
        assert response.status_code == 200
        body = response.get_json()
        assert body['count'] == 3
        assert [d['id'] for d in body['deals']] == [1, 2, 3]

    def test_defaults_to_configured_location(self, client, sample_deals):
        body = client.post('/api/deals/nearby', json={
            'deals': sample_deals, 'now': '2025-01-15T18:30:00',
        }).get_json()
        assert body['count'] == 3

    def test_active_only(self, client, sample_deals):
        body = client.post('/api/deals/nearby', json={
            'deals': sample_deals, 'now': '2025-01-15T18:30:00', 'active_only': 'true',
        }).get_json()
        assert [d['id'] for d in body['deals']] == [1, 2]

    def test_negative_radius(self, client, sample_deals):
        response = client.post('/api/deals/nearby', json={'deals': sample_deals, 'radius_km': -1})
        assert response.status_code == 400


class TestHeat:

    def test_heat(self, client):
        response = client.post('/api/heat', json={
            'deals': [{'savings_percentage': 100}, {'savings_percentage': 100}],
        })
        assert response.get_json() == {'level': 6.0, 'label': 'Popular', 'bar_width': 60.0}

    def test_empty_is_new(self, client):
        assert client.post('/api/heat', json={}).get_json()['label'] == 'New'

    def test_popularity_overrides(self, client):
        body = client.post('/api/heat', json={'deals': [], 'popularity': 9.5}).get_json()
        assert body == {'level': 9.5, 'label': 'Hot Spot!', 'bar_width': 95.0}

    def test_bad_popularity(self, client):
        assert client.post('/api/heat', json={'popularity': 'lots'}).status_code == 400

    def test_unparseable_savings(self, client):
        response = client.post('/api/heat', json={'deals': [{'savings_percentage': 'n/a'}]})
        assert response.status_code == 200
        assert response.get_json() == {'level': 0.5, 'label': 'Regular', 'bar_width': 5.0}

    def test_venues(self, client, sample_deals):
        body = client.post('/api/venues/heat', json={
            'deals': sample_deals, 'now': '2025-01-15T18:30:00',
        }).get_json()
        venues = {v['establishment_id']: v for v in body['venues']}
        assert venues[1]['active_count'] == 1
        assert venues[4]['label'] == 'New'

    def test_venues_unparseable_savings(self, client):
        deals = [{'establishment_id': 3, 'valid_days': 'Daily', 'hh_start_time': '12:00',
                  'hh_end_time': '20:00', 'savings_percentage': ['50']}]
        response = client.post('/api/venues/heat', json={'deals': deals, 'now': '2025-01-15T18:30:00'})
        assert response.status_code == 200
        assert response.get_json()['venues'][0]['level'] == 0.5
