# ncportal/services/activity_log_service.py
# -*- coding: utf-8 -*-
"""
Activity Log Service
Append-only audit trail of notification dispatch attempts, plus read-side
filtering and CSV export. Entries are never updated or deleted.
Adds objects to the session but DOES NOT COMMIT.
"""
import csv
import io
from datetime import date as date_type, datetime, time, timedelta, timezone

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from flask import current_app

from ncportal.database.models.activity_log import ActivityLogModel
from ncportal.extensions import db
from ncportal.utils.exceptions import ServiceError, ValidationError

NOT_AVAILABLE = 'N/A'
DEFAULT_AGENT_NAME = 'Admin'
DEFAULT_AGENT_ID = 'ADMIN'

SNAPSHOT_FIELDS = ('customer_id', 'old_phone', 'new_phone', 'otp')
REQUIRED_FIELDS = ('channel', 'message_type', 'status')

CSV_HEADERS = ['Timestamp', 'Agent Name', 'Agent ID', 'Customer ID', 'Old Phone', 'New Phone',
               'OTP', 'Channel', 'Message Type', 'Language', 'Status']


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class ActivityLogService:

    @staticmethod
    def append(entry: dict, actor=None) -> ActivityLogModel:
        """
        Adds one audit entry to the session (DOES NOT COMMIT).

        The timestamp is always stamped here; any caller-supplied value is ignored.
        Attribution comes from `actor` (the logged-in agent or admin) when given,
        otherwise from the entry itself, otherwise the admin sentinel.

        Args:
            entry (dict): snake_case fields as loaded by ActivityLogCreateSchema.
            actor: Object with `id` and `name`, or None.

        Returns:
            ActivityLogModel: The flushed entry.

        Raises:
            ValidationError: If channel, message_type or status is missing.
            ServiceError: If the database rejects the insert.
        """
        missing = [key for key in REQUIRED_FIELDS if not entry.get(key)]
        if missing:
            raise ValidationError(f"Missing required log fields: {', '.join(missing)}")

        if actor is not None:
            agent_name, agent_id = actor.name, actor.id
        else:
            agent_name = entry.get('agent_name') or DEFAULT_AGENT_NAME
            agent_id = entry.get('agent_id') or DEFAULT_AGENT_ID

        snapshot = {key: (entry.get(key) or NOT_AVAILABLE) for key in SNAPSHOT_FIELDS}

        log_entry = ActivityLogModel(
            timestamp=datetime.now(timezone.utc),
            agent_name=agent_name,
            agent_id=agent_id,
            channel=entry['channel'],
            message_type=entry['message_type'],
            language=entry.get('language') or '',
            status=entry['status'],
            **snapshot,
        )
        try:
            db.session.add(log_entry)
            db.session.flush()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Database error appending activity log: {e}", exc_info=True)
            raise ServiceError("Failed to add log")

        current_app.logger.info(
            f"Activity log {log_entry.id} staged: agent={agent_id} channel={log_entry.channel} "
            f"type={log_entry.message_type} status={log_entry.status}"
        )
        return log_entry

    @staticmethod
    def list_logs(date: date_type | None = None, search: str | None = None) -> list[ActivityLogModel]:
        """
        Entries newest first.

        Args:
            date: Only entries stamped on this UTC calendar day.
            search: Case-insensitive substring of agent name, agent ID, customer ID or channel.
        """
        query = db.session.query(ActivityLogModel)

        if date is not None:
            day_start = datetime.combine(date, time.min, tzinfo=timezone.utc)
            query = query.filter(
                ActivityLogModel.timestamp >= day_start,
                ActivityLogModel.timestamp < day_start + timedelta(days=1),
            )

        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                ActivityLogModel.agent_name.ilike(pattern),
                ActivityLogModel.agent_id.ilike(pattern),
                ActivityLogModel.customer_id.ilike(pattern),
                ActivityLogModel.channel.ilike(pattern),
            ))

        return query.order_by(ActivityLogModel.timestamp.desc(), ActivityLogModel.id.desc()).all()

    @staticmethod
    def export_csv(logs) -> str:
        """Render entries as CSV text with a header row."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(CSV_HEADERS)
        for log in logs:
            writer.writerow([
                _as_utc(log.timestamp).isoformat(),
                log.agent_name,
                log.agent_id,
                log.customer_id,
                log.old_phone,
                log.new_phone,
                log.otp,
                log.channel,
                log.message_type,
                log.language,
                log.status,
            ])
        return buffer.getvalue()
