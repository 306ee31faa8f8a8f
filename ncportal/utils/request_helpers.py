# ncportal/utils/request_helpers.py
# -*- coding: utf-8 -*-
"""Helpers shared by route handlers for reading and validating request input."""

from flask import request, abort, current_app
from flask_login import current_user
from marshmallow import ValidationError as SchemaValidationError

from ncportal.extensions import db
from ncportal.utils.exceptions import ValidationError


def flatten_schema_errors(messages, prefix='') -> list[str]:
    """Turn marshmallow's nested {field: [msg, ...]} into 'field: msg' strings."""
    if isinstance(messages, str):
        return [f"{prefix}: {messages}" if prefix else messages]
    if isinstance(messages, (list, tuple)):
        flat = []
        for item in messages:
            flat.extend(flatten_schema_errors(item, prefix))
        return flat
    flat = []
    for field, nested in messages.items():
        key = f"{prefix}.{field}" if prefix else str(field)
        flat.extend(flatten_schema_errors(nested, key))
    return flat


def load_json(schema, required=True):
    """
    Load the JSON body through `schema`.

    Aborts with 400 when a body is required but absent; schema errors are
    raised as ValidationError carrying every message.
    """
    json_data = request.get_json(silent=True)
    if json_data is None:
        if required:
            abort(400, description="No input data provided.")
        json_data = {}
    if not isinstance(json_data, dict):
        abort(400, description="Invalid request format: Expected a JSON object.")
    return load_data(schema, json_data)


def load_data(schema, data):
    """Load an arbitrary mapping (e.g. request.args) through `schema`."""
    try:
        return schema.load(data)
    except SchemaValidationError as err:
        raise ValidationError(errors=flatten_schema_errors(err.messages))


def session_actor():
    """The logged-in agent or admin, or None for anonymous requests."""
    return current_user if current_user.is_authenticated else None


def commit_or_abort(action):
    """Commit the request transaction, or roll back and abort with 500."""
    try:
        db.session.commit()
    except Exception as commit_err:
        db.session.rollback()
        current_app.logger.exception(f"Database commit error during {action}: {commit_err}")
        abort(500, description=f"Failed to {action}")
