import logging

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import (
    create_access_token,
    decode_token,
    set_access_cookies,
    unset_jwt_cookies,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from payverify.errors import ValidationError
from payverify.services.auth_service import authenticate

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/login', methods=['POST'])
def login():
    """
    Admin login; sets the session cookie
    ---
    tags:
      - Admin
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - username
            - password
          properties:
            username:
              type: string
            password:
              type: string
    responses:
      200:
        description: Login successful, admin_token cookie set (valid 6 hours)
      400:
        description: Missing username or password
      401:
        description: Invalid credentials
    """
    data = request.get_json(silent=True) or request.form
    if not hasattr(data, 'get'):
        raise ValidationError('Username and password required')
    username = authenticate(data.get('username'), data.get('password'))

    access_token = create_access_token(identity=username)
    response = jsonify({'success': True, 'message': 'Login successful', 'user': username})
    max_age = int(current_app.config['JWT_ACCESS_TOKEN_EXPIRES'].total_seconds())
    set_access_cookies(response, access_token, max_age=max_age)
    return response, 200


@admin_bp.route('/logout', methods=['POST'])
def logout():
    """
    Clear the admin session cookie
    ---
    tags:
      - Admin
    responses:
      200:
        description: Cookie cleared
    """
    response = jsonify({'success': True, 'message': 'Logged out successfully'})
    unset_jwt_cookies(response)
    return response, 200


@admin_bp.route('/session', methods=['GET'])
def session():
    """
    Report whether the caller holds a valid admin session
    ---
    tags:
      - Admin
    responses:
      200:
        description: "{loggedIn: bool, user?: string}"
    """
    token = request.cookies.get(current_app.config['JWT_ACCESS_COOKIE_NAME'])
    if not token:
        return jsonify({'loggedIn': False}), 200

    try:
        claims = decode_token(token)
    except (JWTExtendedException, PyJWTError) as e:
        logger.debug("Session cookie rejected: %s", e)
        return jsonify({'loggedIn': False}), 200

    return jsonify({'loggedIn': True, 'user': claims['sub']}), 200
