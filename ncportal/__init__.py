# ncportal/__init__.py
# -*- coding: utf-8 -*-
"""Main application package setup."""

import os
import logging

import click
from flask import Flask, jsonify, abort, request

# Import configurations and extensions
from .config import config
from .extensions import db, migrate, bcrypt, login_manager, cors, notification_gateway
from .utils.exceptions import ServiceError


def create_app(config_name=None):
    """
    Create and configure an instance of the Flask application using the App Factory pattern.

    Args:
        config_name (str, optional): The name of the configuration to use ('development', 'testing', 'production').
                                     Defaults to FLASK_ENV environment variable or 'default'.

    Returns:
        Flask: The configured Flask application instance.
    """

    # Determine configuration name
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'default')
        if config_name not in config:
            print(f"WARNING: Invalid FLASK_ENV '{config_name}', defaulting to 'development'.")
            config_name = 'development'

    app = Flask(__name__)

    # Load configuration from config object
    try:
        app.config.from_object(config[config_name])
        config[config_name].init_app(app)
        print(f"INFO: App created with configuration: '{config_name}'")
    except KeyError:
        print(f"ERROR: Configuration '{config_name}' not found. Check config.py.")
        raise ValueError(f"Invalid configuration name: {config_name}")

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    login_manager.init_app(app)
    cors.init_app(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)
    notification_gateway.init_app(app)

    # Configure logging level
    log_level_name = (app.config.get('LOG_LEVEL') or ('DEBUG' if app.debug else 'INFO')).upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    app.logger.setLevel(log_level)
    for handler in app.logger.handlers:
        handler.setLevel(log_level)
    app.logger.info(f"Flask logger initialized with level: {log_level_name}")

    # --- Register Blueprints ---
    from .api.routes.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    from .api.routes.agents import agents_bp
    app.register_blueprint(agents_bp, url_prefix='/api/agents')

    from .api.routes.activity_logs import activity_logs_bp
    app.register_blueprint(activity_logs_bp, url_prefix='/api/logs')

    # send-* endpoints live directly under /api
    from .api.routes.notifications import notifications_bp
    app.register_blueprint(notifications_bp, url_prefix='/api')

    # Relay answers on /proxy/sms and /api/proxy-sms
    from .api.routes.proxy import proxy_bp
    app.register_blueprint(proxy_bp)

    # --- Basic Routes & Health Check ---
    @app.route('/health')
    def health_check():
        return {"status": "ok", "message": "Application is running."}, 200

    # --- Configure Flask-Login ---
    @login_manager.unauthorized_handler
    def unauthorized():
        """Handles unauthorized access attempts for @login_required routes."""
        app.logger.debug("Unauthorized access attempt caught by login_manager.")
        abort(401, description="Authentication required to access this resource.")

    # --- Global Error Handlers ---
    # Every error body is JSON with an `error` key (or `errors` for rule lists).

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        # Raised outside a route's own try block (e.g. request schema validation)
        db.session.rollback()
        app.logger.warning(f"Service Error ({error.status_code}) on {request.path}: {error}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(400)
    def bad_request_error(error):
        app.logger.warning(f"Bad Request (400): {error.description}")
        return jsonify(error=error.description or "Bad request."), 400

    @app.errorhandler(401)
    def unauthorized_error(error):
        app.logger.warning(f"Unauthorized (401): {error.description}")
        return jsonify(error=error.description or "Unauthorized."), 401

    @app.errorhandler(404)
    def not_found_error(error):
        app.logger.info(f"Not Found (404): {error.description} (Path: {request.path})")
        return jsonify(error=error.description or "Resource not found."), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        app.logger.info(f"Method Not Allowed (405): {request.method} {request.path}")
        return jsonify(error="Method not allowed."), 405

    @app.errorhandler(500)
    def internal_error(error):
        original_exception = getattr(error, "original_exception", None)
        app.logger.error(f"Internal Server Error (500): {getattr(error, 'description', error)}",
                         exc_info=original_exception)
        try:
            db.session.rollback()
        except Exception as rb_err:
            app.logger.error(f"Error during automatic rollback after 500 error: {rb_err}", exc_info=True)
        # Unhandled exceptions never leak their details to the client
        description = None if original_exception is not None else getattr(error, 'description', None)
        return jsonify(error=description or "Internal server error"), 500

    # --- CLI Commands ---
    @app.cli.command('seed-agents')
    @click.option('--password', envvar='SEED_AGENT_PASSWORD', required=True,
                  help='Password given to the sample agents (or SEED_AGENT_PASSWORD).')
    def seed_agents(password):
        """Insert the sample agents when the agent directory is empty."""
        from .services.agent_service import AgentService
        added = AgentService.seed_defaults(password)
        db.session.commit()
        if added:
            click.echo(f"Added {added} sample agents.")
        else:
            click.echo("Agents already present; nothing seeded.")

    # --- Shell Context Processor ---
    @app.shell_context_processor
    def make_shell_context():
        from .database import models
        return {'db': db, 'models': models, 'gateway': notification_gateway}

    return app
