# -*- coding: utf-8 -*-
"""
Schema for the send-* notification endpoints.
Which fields are required depends on the channel, so presence is checked by
the notification service; this schema only maps camelCase to snake_case.
"""
from marshmallow import Schema, fields, EXCLUDE


class SendNotificationSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    customer_id = fields.Str(allow_none=True, load_default=None, data_key="customerId")
    otp = fields.Str(allow_none=True, load_default=None)
    old_phone = fields.Str(allow_none=True, load_default=None, data_key="oldPhone")
    new_phone = fields.Str(allow_none=True, load_default=None, data_key="newPhone")
    language = fields.Str(allow_none=True, load_default=None)
    # Attribution when no login session is present
    agent_id = fields.Str(allow_none=True, load_default=None, data_key="agentId")
    agent_name = fields.Str(allow_none=True, load_default=None, data_key="agentName")
