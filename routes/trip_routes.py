from flask import Blueprint, jsonify, g, current_app

from models.trip import Trip
from models.transportation_mode import TransportationMode
from utils.auth import login_required
from utils.request_body import json_body
from utils import trip_aggregation

trip_bp = Blueprint('trip', __name__, url_prefix='/trips')


def _trip_fields():
    data = json_body()
    return {
        'mode_id': data.get('mode_id'),
        'distance_km': data.get('distance_km'),
        'start_address': data.get('start_address'),
        'end_address': data.get('end_address'),
        'trip_date': data.get('trip_date')
    }


@trip_bp.route('/', methods=['GET'])
@login_required
def get_trips():
    trips = Trip.find_by_user(g.user_id)
    return jsonify({'trips': [trip.to_dict() for trip in trips]}), 200


@trip_bp.route('/', methods=['POST'])
@login_required
def create_trip():
    trip = Trip.register(g.user_id, **_trip_fields())
    return jsonify({'message': 'trip registered', 'trip': trip.to_dict()}), 201


@trip_bp.route('/<int:trip_id>', methods=['GET'])
@login_required
def get_trip(trip_id):
    return jsonify({'trip': Trip.find_for_user(trip_id, g.user_id).to_dict()}), 200


@trip_bp.route('/<int:trip_id>', methods=['PUT'])
@login_required
def update_trip(trip_id):
    trip = Trip.replace(trip_id, g.user_id, **_trip_fields())
    return jsonify({'message': 'trip updated', 'trip': trip.to_dict()}), 200


@trip_bp.route('/<int:trip_id>', methods=['DELETE'])
@login_required
def delete_trip(trip_id):
    Trip.find_for_user(trip_id, g.user_id)
    Trip.delete(trip_id)
    current_app.logger.info(f"Deleted trip {trip_id} for user {g.user_id}")
    return jsonify({'message': 'trip deleted'}), 200


# 1 year graph with 1 datapoint per day
@trip_bp.route('/impactgraphday', methods=['GET'])
@login_required
def impact_graph_day():
    trips = Trip.find_by_user(g.user_id)
    return jsonify({'points': trip_aggregation.daily_impact_series(trips)}), 200


# 1 year graph with 1 datapoint per month
@trip_bp.route('/impactgraphmonth', methods=['GET'])
@login_required
def impact_graph_month():
    trips = Trip.find_by_user(g.user_id)
    return jsonify({'points': trip_aggregation.monthly_impact_series(trips)}), 200


@trip_bp.route('/aggregation', methods=['GET'])
@login_required
def trips_aggregation():
    trips = Trip.find_by_user(g.user_id)
    by_mode = trip_aggregation.aggregate_by_mode(trips, TransportationMode.find_by_id)
    return jsonify({'trips': by_mode}), 200


@trip_bp.route('/impact', methods=['GET'])
@login_required
def total_impact():
    trips = Trip.find_by_user(g.user_id)
    return jsonify({'total_impact': trip_aggregation.total_impact(trips)}), 200
