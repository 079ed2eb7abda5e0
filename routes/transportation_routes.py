from flask import Blueprint, jsonify

from models.transportation_mode import TransportationMode

transportation_bp = Blueprint('transportation', __name__, url_prefix='/transportation')


@transportation_bp.route('/', methods=['GET'])
def get_modes():
    modes = TransportationMode.find_all()
    return jsonify({'modes': [mode.to_dict() for mode in modes]}), 200


@transportation_bp.route('/<int:mode_id>', methods=['GET'])
def get_mode(mode_id):
    return jsonify({'mode': TransportationMode.find_by_id(mode_id).to_dict()}), 200
