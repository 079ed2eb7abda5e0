"""
Tests for the Flask routes with the stores and external APIs mocked out
"""
import unittest
from datetime import date, datetime, timedelta
from unittest.mock import patch

import jwt
import pytz

import config
from app import create_app
from models.transportation_mode import TransportationMode
from models.trip import Trip
from models.user import User
from utils.auth import issue_token, decode_token
from utils.errors import AuthenticationFailed, InvalidInput, NotFound


def recent_trips():
    today = datetime.now(pytz.utc).date()
    return [
        Trip(1, 7, 1, 4.0, 2.0, today),
        Trip(2, 7, 1, 6.0, 3.0, today),
        Trip(3, 7, 2, 12.0, 1.0, today - timedelta(days=3)),
    ]


class RouteTestCase(unittest.TestCase):

    def setUp(self):
        self.app = create_app()
        self.app.config['TESTING'] = True
        self.client = self.app.test_client()
        self.headers = {'Authorization': f"Bearer {issue_token(7)}"}


class TestTokens(unittest.TestCase):

    def test_round_trip(self):
        self.assertEqual(decode_token(issue_token(12)), 12)

    def test_expired_token(self):
        payload = {'user_id': 12, 'exp': datetime.now(pytz.utc) - timedelta(minutes=1)}
        token = jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)
        with self.assertRaises(AuthenticationFailed):
            decode_token(token)

    def test_wrong_secret(self):
        token = jwt.encode({'user_id': 12}, 'another-secret', algorithm=config.JWT_ALGORITHM)
        with self.assertRaises(AuthenticationFailed):
            decode_token(token)


class TestAuthRoutes(RouteTestCase):

    @patch('models.user.User.register', return_value=3)
    def test_register(self, mock_register):
        response = self.client.post('/register', json={
            'email': 'ada@example.com', 'username': 'ada', 'password': 's3cret'
        })

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json(), {'message': 'user registered', 'user_id': 3})
        mock_register.assert_called_once_with(email='ada@example.com', username='ada', password='s3cret')

    @patch('models.user.User.register', side_effect=InvalidInput("email already exists"))
    def test_register_duplicate(self, mock_register):
        response = self.client.post('/register', json={'email': 'a', 'username': 'b', 'password': 'c'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {'error': 'email already exists'})

    def test_register_requires_json(self):
        response = self.client.post('/register', data='email=a')
        self.assertEqual(response.status_code, 400)

    @patch('models.user.User.check_credentials', return_value=5)
    def test_login(self, mock_check):
        response = self.client.post('/auth/login', json={'email': 'ada@example.com', 'password': 's3cret'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(decode_token(response.get_json()['token']), 5)

    @patch('models.user.User.check_credentials', side_effect=AuthenticationFailed("incorrect password"))
    def test_login_bad_password(self, mock_check):
        response = self.client.post('/auth/login', json={'email': 'ada@example.com', 'password': 'nope'})

        self.assertEqual(response.status_code, 401)

    @patch('models.user.User.check_credentials', return_value=5)
    def test_login_cookie(self, mock_check):
        response = self.client.post('/auth/login/cookie', json={'email': 'ada@example.com', 'password': 's3cret'})

        self.assertEqual(response.status_code, 302)
        cookie = response.headers['Set-Cookie']
        self.assertTrue(cookie.startswith('jwt='))
        self.assertIn('HttpOnly', cookie)

    @patch('models.trip.Trip.find_by_user', return_value=[])
    def test_cookie_authenticates_requests(self, mock_find):
        self.client.set_cookie('jwt', issue_token(7))

        response = self.client.get('/trips/impact')

        self.assertEqual(response.status_code, 200)
        mock_find.assert_called_once_with(7)

    def test_missing_token(self):
        response = self.client.get('/trips/')

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json(), {'error': 'unauthorized'})

    def test_garbage_token(self):
        response = self.client.get('/trips/', headers={'Authorization': 'Bearer not-a-token'})
        self.assertEqual(response.status_code, 401)


class TestUserRoutes(RouteTestCase):

    @patch('models.user.User.get')
    def test_get_me(self, mock_get):
        mock_get.return_value = User(7, 'ada@example.com', 'ada', 'hash', created_at=datetime(2025, 1, 1))

        response = self.client.get('/users/me', headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['user']['username'], 'ada')
        self.assertNotIn('password_hash', response.get_json()['user'])

    @patch('models.user.User.delete')
    def test_delete_me(self, mock_delete):
        response = self.client.delete('/users/me', headers=self.headers)

        self.assertEqual(response.status_code, 200)
        mock_delete.assert_called_once_with(7)


class TestTripRoutes(RouteTestCase):

    @patch('models.trip.Trip.find_by_user', side_effect=lambda user_id: recent_trips())
    def test_list_trips(self, mock_find):
        response = self.client.get('/trips/', headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.get_json()['trips']), 3)
        mock_find.assert_called_once_with(7)

    @patch('models.trip.Trip.create', return_value=11)
    @patch('models.trip.get_carbon_impact', return_value=1.5)
    def test_create_trip(self, mock_impact, mock_create):
        response = self.client.post('/trips/', headers=self.headers, json={
            'distance_km': 10, 'mode_id': 4, 'trip_date': '2025-03-02'
        })

        self.assertEqual(response.status_code, 201)
        trip = response.get_json()['trip']
        self.assertEqual(trip['trip_id'], 11)
        self.assertEqual(trip['user_id'], 7)
        self.assertEqual(trip['carbon_impact_kg'], 1.5)
        self.assertEqual(trip['trip_date'], '2025-03-02')
        self.assertIsNone(trip['start_address'])

    def test_create_trip_without_distance_or_addresses(self):
        response = self.client.post('/trips/', headers=self.headers, json={'distance_km': 0, 'mode_id': 4})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {'error': 'no distance or address provided'})

    @patch('models.trip.Trip.create')
    @patch('models.trip.get_carbon_impact', side_effect=NotFound("no CO2 data returned for transport ID: 999"))
    def test_create_trip_unknown_mode(self, mock_impact, mock_create):
        response = self.client.post('/trips/', headers=self.headers, json={'distance_km': 5, 'mode_id': 999})

        self.assertEqual(response.status_code, 404)
        mock_create.assert_not_called()

    @patch('models.trip.Trip.delete')
    @patch('models.trip.Trip.find_for_user', side_effect=NotFound("trip not found"))
    def test_delete_someone_elses_trip(self, mock_find, mock_delete):
        response = self.client.delete('/trips/3', headers=self.headers)

        self.assertEqual(response.status_code, 404)
        mock_delete.assert_not_called()

    @patch('models.trip.Trip.find_by_user', side_effect=lambda user_id: recent_trips())
    def test_impact_graph_day(self, mock_find):
        response = self.client.get('/trips/impactgraphday', headers=self.headers)

        points = response.get_json()['points']
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(points), 366)
        self.assertEqual(points[-1]['y'], 6.0)

    @patch('models.trip.Trip.find_by_user', side_effect=lambda user_id: recent_trips())
    def test_impact_graph_month(self, mock_find):
        response = self.client.get('/trips/impactgraphmonth', headers=self.headers)

        points = response.get_json()['points']
        self.assertEqual(len(points), 13)
        self.assertEqual(points[0], {'x': 0, 'y': 0.0})
        self.assertEqual(points[-1]['y'], 6.0)

    @patch('models.transportation_mode.TransportationMode.find_by_id')
    @patch('models.trip.Trip.find_by_user', side_effect=lambda user_id: recent_trips())
    def test_aggregation(self, mock_find, mock_mode):
        mock_mode.side_effect = lambda mode_id: TransportationMode(mode_id, f"mode {mode_id}")

        response = self.client.get('/trips/aggregation', headers=self.headers)

        by_mode = {entry['mode_id']: entry for entry in response.get_json()['trips']}
        self.assertEqual(by_mode[1]['total_trips'], 2)
        self.assertEqual(by_mode[1]['total_impact'], 5.0)
        self.assertEqual(by_mode[2]['total_distance'], 12.0)

    @patch('models.transportation_mode.TransportationMode.find_by_id', side_effect=NotFound("mode 2 not found"))
    @patch('models.trip.Trip.find_by_user', side_effect=lambda user_id: recent_trips())
    def test_aggregation_with_missing_mode(self, mock_find, mock_mode):
        response = self.client.get('/trips/aggregation', headers=self.headers)

        self.assertEqual(response.status_code, 500)

    @patch('models.trip.Trip.find_by_user', side_effect=lambda user_id: recent_trips())
    def test_total_impact(self, mock_find):
        response = self.client.get('/trips/impact', headers=self.headers)

        self.assertEqual(response.get_json(), {'total_impact': 6.0})

    @patch('models.trip.Trip.find_by_user', side_effect=NotFound("user not found"))
    def test_total_impact_deleted_user(self, mock_find):
        response = self.client.get('/trips/impact', headers=self.headers)

        self.assertEqual(response.status_code, 404)


class TestUpdateRoutes(RouteTestCase):

    def stored_trip(self, user_id):
        return Trip(3, user_id, 4, 10.0, 1.9, date(2025, 1, 5), created_at=datetime(2025, 1, 5, 8, 0))

    @patch('models.user.User.get')
    @patch('models.user.User.update')
    def test_update_me(self, mock_update, mock_get):
        mock_get.return_value = User(7, 'ada@example.org', 'ada-l', 'hash')

        response = self.client.put('/users/me', headers=self.headers, json={
            'email': 'ada@example.org', 'username': 'ada-l'
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['user']['email'], 'ada@example.org')
        mock_update.assert_called_once_with(7, email='ada@example.org', username='ada-l', password=None)

    @patch('models.user.User.update', side_effect=InvalidInput("username already exists"))
    def test_update_me_duplicate_username(self, mock_update):
        response = self.client.put('/users/me', headers=self.headers, json={
            'email': 'ada@example.com', 'username': 'grace'
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {'error': 'username already exists'})

    def test_update_me_requires_json_object(self):
        response = self.client.put('/users/me', headers=self.headers, json=['ada'])
        self.assertEqual(response.status_code, 400)

    @patch('models.trip.Trip.find_by_id')
    def test_get_own_trip(self, mock_find):
        mock_find.return_value = self.stored_trip(7)

        response = self.client.get('/trips/3', headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['trip']['trip_id'], 3)

    @patch('models.trip.Trip.find_by_id')
    def test_get_someone_elses_trip(self, mock_find):
        mock_find.return_value = self.stored_trip(99)

        self.assertEqual(self.client.get('/trips/3', headers=self.headers).status_code, 404)

    @patch('models.trip.Trip.update')
    @patch('models.trip.get_carbon_impact', return_value=0.4)
    @patch('models.trip.Trip.find_by_id')
    def test_replace_own_trip(self, mock_find, mock_impact, mock_update):
        mock_find.return_value = self.stored_trip(7)

        response = self.client.put('/trips/3', headers=self.headers, json={
            'distance_km': 2.5, 'mode_id': 10, 'trip_date': '2025-01-06'
        })

        self.assertEqual(response.status_code, 200)
        trip = response.get_json()['trip']
        self.assertEqual(trip['trip_id'], 3)
        self.assertEqual(trip['mode_id'], 10)
        self.assertEqual(trip['carbon_impact_kg'], 0.4)
        self.assertEqual(trip['created_at'], '2025-01-05T08:00:00')
        mock_update.assert_called_once()

    @patch('models.trip.Trip.update')
    @patch('models.trip.get_carbon_impact')
    @patch('models.trip.Trip.find_by_id')
    def test_replace_someone_elses_trip(self, mock_find, mock_impact, mock_update):
        mock_find.return_value = self.stored_trip(99)

        response = self.client.put('/trips/3', headers=self.headers, json={'distance_km': 2.5, 'mode_id': 10})

        self.assertEqual(response.status_code, 404)
        mock_impact.assert_not_called()
        mock_update.assert_not_called()

    @patch('models.trip.Trip.create')
    @patch('models.trip.get_carbon_impact')
    def test_non_finite_distance_is_rejected(self, mock_impact, mock_create):
        for body in ['{"distance_km": NaN, "mode_id": 4}', '{"distance_km": Infinity, "mode_id": 4}']:
            response = self.client.post('/trips/', headers=self.headers, data=body,
                                        content_type='application/json')

            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.get_json(), {'error': 'invalid distance_km'})
        mock_impact.assert_not_called()
        mock_create.assert_not_called()


class TestTransportationRoutes(RouteTestCase):

    @patch('models.transportation_mode.TransportationMode.find_all', return_value=[])
    def test_no_modes(self, mock_all):
        response = self.client.get('/transportation/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'modes': []})

    @patch('models.transportation_mode.TransportationMode.find_by_id')
    def test_get_mode(self, mock_find):
        mock_find.return_value = TransportationMode(7, 'Bike or walking', 'No emissions')

        response = self.client.get('/transportation/7')

        self.assertEqual(response.get_json()['mode'], {
            'mode_id': 7, 'mode_name': 'Bike or walking', 'description': 'No emissions'
        })

    @patch('models.transportation_mode.TransportationMode.find_by_id', side_effect=NotFound("mode 99 not found"))
    def test_unknown_mode(self, mock_find):
        self.assertEqual(self.client.get('/transportation/99').status_code, 404)


if __name__ == '__main__':
    unittest.main()
