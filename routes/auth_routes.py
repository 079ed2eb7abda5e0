from flask import Blueprint, jsonify, redirect, current_app

import config
from models.user import User
from utils.auth import issue_token, TOKEN_COOKIE
from utils.request_body import json_body

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    data = json_body()
    user_id = User.register(
        email=data.get('email'),
        username=data.get('username'),
        password=data.get('password')
    )
    return jsonify({'message': 'user registered', 'user_id': user_id}), 201


@auth_bp.route('/auth/login', methods=['POST'])
def login():
    data = json_body()
    user_id = User.check_credentials(data.get('email'), data.get('password'))
    current_app.logger.info(f"User {user_id} logged in")
    return jsonify({'token': issue_token(user_id)}), 200


@auth_bp.route('/auth/login/cookie', methods=['POST'])
def login_cookie():
    data = json_body()
    user_id = User.check_credentials(data.get('email'), data.get('password'))
    current_app.logger.info(f"User {user_id} logged in with cookie session")

    response = redirect('/')
    response.set_cookie(
        TOKEN_COOKIE,
        issue_token(user_id),
        max_age=config.JWT_EXPIRATION_HOURS * 3600,
        httponly=True
    )
    return response
