# ncportal/database/models/activity_log.py
# -*- coding: utf-8 -*-
"""Activity Log model: one row per notification dispatch attempt."""

from ncportal.extensions import db


class ActivityLogModel(db.Model):
    """
    Append-only audit record of a dispatch attempt.
    Rows are written once by ActivityLogService and never updated or deleted.
    """
    __tablename__ = 'activity_logs'

    # BigInteger on PostgreSQL; SQLite only autoincrements INTEGER primary keys
    id = db.Column(db.BigInteger().with_variant(db.Integer, 'sqlite'), primary_key=True)

    # Server-assigned at write time
    timestamp = db.Column(db.TIMESTAMP(timezone=True), nullable=False, index=True)

    # --- Attribution (copied from the acting session) ---
    agent_name = db.Column(db.String(100), nullable=False)
    agent_id = db.Column(db.String(20), nullable=False, index=True)  # 'ADMIN' for admin sessions

    # --- Request snapshot ('N/A' when absent) ---
    customer_id = db.Column(db.String(64), nullable=False, default='N/A')
    old_phone = db.Column(db.String(20), nullable=False, default='N/A')
    new_phone = db.Column(db.String(20), nullable=False, default='N/A')
    otp = db.Column(db.String(16), nullable=False, default='N/A')

    # --- Dispatch outcome ---
    channel = db.Column(db.String(10), nullable=False, index=True)  # 'push', 'sms', 'whatsapp'
    message_type = db.Column(db.String(10), nullable=False)  # 'OTP', 'Form'
    language = db.Column(db.String(10), nullable=False, default='')  # 'english', 'hindi', ''
    status = db.Column(db.String(10), nullable=False, index=True)  # 'success', 'failed'

    def __repr__(self):
        return (f"<ActivityLog(id={self.id}, agent='{self.agent_id}', channel='{self.channel}', "
                f"type='{self.message_type}', status='{self.status}')>")
