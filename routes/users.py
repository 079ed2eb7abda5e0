from flask import Blueprint, jsonify, g, current_app

from models.user import User
from utils.auth import login_required, TOKEN_COOKIE
from utils.request_body import json_body

user_bp = Blueprint('user', __name__, url_prefix='/users')


@user_bp.route('/me', methods=['GET'])
@login_required
def get_user():
    return jsonify({'user': User.get(g.user_id).to_dict()}), 200


# --- Update user (email and username replaced, password optional) ---
@user_bp.route('/me', methods=['PUT'])
@login_required
def update_user():
    data = json_body()

    User.update(
        g.user_id,
        email=data.get('email'),
        username=data.get('username'),
        password=data.get('password')
    )
    return jsonify({'message': 'user updated', 'user': User.get(g.user_id).to_dict()}), 200


# --- Delete user ---
@user_bp.route('/me', methods=['DELETE'])
@login_required
def delete_user():
    User.delete(g.user_id)
    current_app.logger.info(f"Deleted user {g.user_id}")

    response = jsonify({'message': 'user deleted'})
    response.delete_cookie(TOKEN_COOKIE)
    return response, 200
