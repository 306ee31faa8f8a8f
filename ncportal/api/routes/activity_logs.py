# -*- coding: utf-8 -*-
"""
Activity Log API Routes: list, export and append.
No update or delete endpoints exist for log entries.
"""
from datetime import datetime, timezone

from flask import Blueprint, jsonify, current_app, abort, request, Response

from ncportal.extensions import db
from ncportal.services.activity_log_service import ActivityLogService
from ncportal.utils.exceptions import ServiceError
from ncportal.utils.request_helpers import load_json, load_data, commit_or_abort, session_actor
from ncportal.api.schemas.activity_log_schemas import (
    ActivityLogSchema, ActivityLogCreateSchema, ActivityLogQuerySchema
)

# Create Blueprint
activity_logs_bp = Blueprint('activity_logs_api', __name__)

# Instantiate schemas
activity_log_schema = ActivityLogSchema()
activity_logs_schema = ActivityLogSchema(many=True)
activity_log_create_schema = ActivityLogCreateSchema()
activity_log_query_schema = ActivityLogQuerySchema()


def _filtered_logs():
    filters = load_data(activity_log_query_schema, request.args.to_dict())
    try:
        return ActivityLogService.list_logs(date=filters['date'], search=filters['search'])
    except Exception as e:
        current_app.logger.exception(f"Unexpected error fetching activity logs: {e}")
        abort(500, description="Failed to fetch logs")


@activity_logs_bp.route('', methods=['GET'])
def list_logs():
    """Activity logs, newest first. Optional ?date=YYYY-MM-DD&search=text."""
    return jsonify(activity_logs_schema.dump(_filtered_logs())), 200


@activity_logs_bp.route('/export', methods=['GET'])
def export_logs():
    """Activity logs as a CSV download (same filters as the list)."""
    csv_text = ActivityLogService.export_csv(_filtered_logs())
    filename = f"activity_logs_{datetime.now(timezone.utc).date().isoformat()}.csv"
    return Response(
        csv_text,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


@activity_logs_bp.route('', methods=['POST'])
def add_log():
    """Append one activity log entry; the server assigns the timestamp."""
    data = load_json(activity_log_create_schema)
    try:
        log_entry = ActivityLogService.append(data, actor=session_actor())
    except ServiceError as e:
        db.session.rollback()
        current_app.logger.warning(f"Add log rejected ({e.status_code}): {e}")
        return jsonify(e.to_dict()), e.status_code

    commit_or_abort("add log")
    return jsonify(activity_log_schema.dump(log_entry)), 201
