"""
Payment Verification Service — Flask application
Public submission intake plus the admin verification / check-in API.
"""

import logging
from datetime import datetime, timezone

import click
from dotenv import load_dotenv
from flasgger import Swagger
from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS

from payverify.config import load_config
from payverify.errors import register_error_handlers, register_jwt_handlers
from payverify.extensions import db, jwt
from payverify.models import Submission  # noqa: F401  register model
from payverify.services.auth_service import hash_password
from payverify.services.screenshot_storage import LocalDiskStorage, get_storage, init_storage

logger = logging.getLogger(__name__)


def create_app(config=None):
    load_dotenv()

    app = Flask(__name__)

    # Configuration: environment first, explicit overrides last
    app.config.update(load_config())
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    # Initialize Extensions
    db.init_app(app)
    jwt.init_app(app)
    register_jwt_handlers(jwt)
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)
    init_storage(app)
    register_error_handlers(app)

    swagger_template = {
        "info": {"title": "Payment Verification API", "version": "0.1.0"},
        "securityDefinitions": {
            "Bearer": {"type": "apiKey", "name": "Authorization", "in": "header"}
        },
    }
    Swagger(app, template=swagger_template)

    # Register Blueprints
    from payverify.routes import admin_bp, submissions_bp
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(submissions_bp)

    @app.route('/health')
    def health():
        try:
            db.session.execute(db.text('SELECT 1'))
            return jsonify({
                "service": "payverify",
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }), 200
        except Exception as e:
            logger.error("Health check failed: %s", e)
            return jsonify({"service": "payverify", "status": "unhealthy"}), 503

    # Screenshots kept on local disk are served back from here
    if isinstance(app.extensions["screenshot_storage"], LocalDiskStorage):
        @app.route('/uploads/<path:filename>')
        def uploaded_screenshot(filename):
            return send_from_directory(get_storage().upload_folder, filename)

    register_commands(app)
    return app


def register_commands(app):

    @app.cli.command("init-db")
    def init_db():
        """Create the submissions table."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("hash-password")
    @click.password_option()
    def hash_password_command(password):
        """Print a bcrypt hash to use as ADMIN_PASSWORD."""
        click.echo(hash_password(password))


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=5000)
