# -*- coding: utf-8 -*-
"""
Notification API Routes
One endpoint per (channel, purpose). Every endpoint answers with the
gateway's result envelope `{success, message, ...}`, success or not.
"""
from flask import Blueprint, jsonify, current_app

from ncportal.extensions import db
from ncportal.services.notification_service import NotificationService
from ncportal.utils.request_helpers import load_json, session_actor
from ncportal.api.schemas.notification_schemas import SendNotificationSchema

# Create Blueprint
notifications_bp = Blueprint('notifications_api', __name__)

send_notification_schema = SendNotificationSchema()


def _send(spec_key):
    """Validate, dispatch, record the attempt and answer with the result envelope."""
    data = load_json(send_notification_schema, required=False)

    # ValidationError propagates to the app-level handler (400, nothing sent, nothing logged)
    result, log_entry = NotificationService.send(spec_key, data, actor=session_actor())

    if log_entry is not None:
        try:
            db.session.commit()
        except Exception as commit_err:
            db.session.rollback()
            current_app.logger.exception(f"Could not commit activity log for {spec_key}: {commit_err}")

    return jsonify(result.to_dict()), result.status_code


@notifications_bp.route('/send-push-notification', methods=['POST'])
def send_push_notification():
    """Push OTP via the push vendor. Body: {customerId, otp}."""
    return _send('push-otp')


@notifications_bp.route('/send-sms', methods=['POST'])
def send_sms():
    """SMS OTP. Body: {oldPhone, otp}."""
    return _send('sms-otp')


@notifications_bp.route('/send-whatsapp', methods=['POST'])
def send_whatsapp():
    """WhatsApp OTP. Body: {oldPhone, otp}."""
    return _send('whatsapp-otp')


@notifications_bp.route('/send-whatsapp-form', methods=['POST'])
def send_whatsapp_form():
    """WhatsApp form link. Body: {newPhone, language?}."""
    return _send('whatsapp-form')


@notifications_bp.route('/send-sms-form', methods=['POST'])
def send_sms_form():
    """SMS form link. Body: {newPhone, language?}."""
    return _send('sms-form')
