# -*- coding: utf-8 -*-
"""
Schemas for Activity Log API requests and responses.
"""
from marshmallow import Schema, fields, validate, EXCLUDE

from ncportal.gateway.vendor_specs import CHANNELS, MESSAGE_TYPES, LANGUAGES

LOG_STATUSES = ('success', 'failed')


class ActivityLogSchema(Schema):
    """Output schema for a stored activity log entry."""
    id = fields.Int(dump_only=True)
    timestamp = fields.DateTime(dump_only=True)
    agent_name = fields.Str(data_key="agentName")
    agent_id = fields.Str(data_key="agentId")
    customer_id = fields.Str(data_key="customerId")
    old_phone = fields.Str(data_key="oldPhone")
    new_phone = fields.Str(data_key="newPhone")
    otp = fields.Str()
    channel = fields.Str()
    message_type = fields.Str(data_key="messageType")
    language = fields.Str()
    status = fields.Str()


class ActivityLogCreateSchema(Schema):
    """
    Input schema for POST /api/logs. A client-supplied timestamp is dropped
    (unknown field); the service stamps its own.
    """
    class Meta:
        unknown = EXCLUDE

    agent_name = fields.Str(allow_none=True, load_default=None, data_key="agentName")
    agent_id = fields.Str(allow_none=True, load_default=None, data_key="agentId")
    customer_id = fields.Str(allow_none=True, load_default=None, data_key="customerId")
    old_phone = fields.Str(allow_none=True, load_default=None, data_key="oldPhone")
    new_phone = fields.Str(allow_none=True, load_default=None, data_key="newPhone")
    otp = fields.Str(allow_none=True, load_default=None)
    channel = fields.Str(required=True, validate=validate.OneOf(CHANNELS))
    message_type = fields.Str(required=True, data_key="messageType", validate=validate.OneOf(MESSAGE_TYPES))
    language = fields.Str(load_default='', validate=validate.OneOf(LANGUAGES + ('',)))
    status = fields.Str(required=True, validate=validate.OneOf(LOG_STATUSES))


class ActivityLogQuerySchema(Schema):
    """Query string for GET /api/logs and /api/logs/export."""
    class Meta:
        unknown = EXCLUDE

    date = fields.Date(load_default=None)  # YYYY-MM-DD
    search = fields.Str(load_default=None)
