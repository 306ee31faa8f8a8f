# ncportal/services/notification_service.py
# -*- coding: utf-8 -*-
"""
Notification Service
Validates a send request, dispatches it through the notification gateway and
records exactly one activity log entry per vendor call.
Adds the log entry to the session but DOES NOT COMMIT.
"""
from flask import current_app

from ncportal.extensions import notification_gateway
from ncportal.gateway import DispatchResult, get_vendor_spec
from ncportal.gateway.vendor_specs import MESSAGE_TYPE_FORM, resolve_language
from ncportal.services.activity_log_service import ActivityLogService
from ncportal.utils.exceptions import ServiceError, ValidationError
from ncportal.utils.validators import normalize_phone

# spec key -> (required request fields, message when missing, field holding the phone)
SEND_REQUIREMENTS = {
    'push-otp': (('customer_id', 'otp'), 'Customer ID and OTP are required', None),
    'sms-otp': (('old_phone', 'otp'), 'Phone number and OTP are required', 'old_phone'),
    'whatsapp-otp': (('old_phone', 'otp'), 'Phone number and OTP are required', 'old_phone'),
    'whatsapp-form': (('new_phone',), 'New phone number is required', 'new_phone'),
    'sms-form': (('new_phone',), 'New phone number is required', 'new_phone'),
}


class NotificationService:

    @staticmethod
    def build_params(spec_key: str, data: dict) -> dict:
        """
        Check the request and resolve what the vendor spec needs.
        Runs before any network call; raises ValidationError on bad input.
        """
        required, missing_message, phone_field = SEND_REQUIREMENTS[spec_key]
        if not all(data.get(field) for field in required):
            raise ValidationError(missing_message)

        params = {'customer_id': data.get('customer_id'), 'otp': data.get('otp')}
        if phone_field:
            params['phone'] = normalize_phone(data[phone_field])
        if get_vendor_spec(spec_key).message_type == MESSAGE_TYPE_FORM:
            params['language'] = resolve_language(data.get('language'))
        return params

    @staticmethod
    def send(spec_key: str, data: dict, actor=None):
        """
        Send one notification and stage its audit entry.

        Args:
            spec_key (str): 'push-otp', 'sms-otp', 'whatsapp-otp', 'whatsapp-form' or 'sms-form'.
            data (dict): Loaded request (snake_case), including the audit snapshot fields.
            actor: Logged-in agent/admin used for attribution, or None.

        Returns:
            tuple[DispatchResult, ActivityLogModel | None]: The vendor outcome and the staged
            log entry (None if the entry could not be staged).

        Raises:
            ValidationError: For missing fields, bad phone numbers or unknown languages.
        """
        spec = get_vendor_spec(spec_key)
        params = NotificationService.build_params(spec_key, data)

        result: DispatchResult = notification_gateway.dispatch(spec, params)

        entry = {
            'agent_name': data.get('agent_name'),
            'agent_id': data.get('agent_id'),
            'customer_id': data.get('customer_id'),
            'old_phone': data.get('old_phone'),
            'new_phone': data.get('new_phone'),
            'otp': data.get('otp'),
            'channel': spec.channel,
            'message_type': spec.message_type,
            'language': params.get('language', ''),
            'status': 'success' if result.success else 'failed',
        }
        try:
            log_entry = ActivityLogService.append(entry, actor=actor)
        except ServiceError as e:
            # The vendor call already happened; its outcome is still reported
            current_app.logger.error(f"Could not record activity log for {spec_key}: {e}")
            log_entry = None

        return result, log_entry
