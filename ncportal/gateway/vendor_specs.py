# ncportal/gateway/vendor_specs.py
# -*- coding: utf-8 -*-
"""
Vendor Specs
One entry per (channel, purpose) describing how to build the vendor request
and how to read the vendor's answer. The gateway client runs every entry
through the same call-and-normalize routine.
"""
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from ncportal.utils.exceptions import UpstreamFailure, ValidationError

# --- Channels / message types (stored verbatim in the activity log) ---
CHANNEL_PUSH = 'push'
CHANNEL_SMS = 'sms'
CHANNEL_WHATSAPP = 'whatsapp'
CHANNELS = (CHANNEL_PUSH, CHANNEL_SMS, CHANNEL_WHATSAPP)

MESSAGE_TYPE_OTP = 'OTP'
MESSAGE_TYPE_FORM = 'Form'
MESSAGE_TYPES = (MESSAGE_TYPE_OTP, MESSAGE_TYPE_FORM)

LANGUAGE_ENGLISH = 'english'
LANGUAGE_HINDI = 'hindi'
LANGUAGES = (LANGUAGE_ENGLISH, LANGUAGE_HINDI)

# Query/header names whose values must never reach the logs
SECRET_FIELDS = frozenset({'password', 'X-CleverTap-Passcode'})

# WhatsApp templates are matched by the vendor character for character,
# spelling included.
WHATSAPP_FORM_TEXT = {
    LANGUAGE_ENGLISH: (
        "We have recieved your request to change your registered {brand} Phone Number"
        "\n\nPlease click on the link below to proceed with the process"
    ),
    LANGUAGE_HINDI: (
        "हमें आपका {brand} मोबाइल नंबर बदलने का रिक्वेस्ट मिला है।"
        "\n\nकृपया प्रोसेस शुरू करने के लिए नीचे दिए लिंक पर क्लिक करें।"
    ),
}
SMS_OTP_TEXT = "Your {brand} verification OTP is {otp}"
SMS_FORM_TEXT = (
    "We have received your request to update your {brand} phone number. "
    "Click the link to complete the process: {link}"
)
WHATSAPP_OTP_TEXT = "{otp} is your verification code."
WHATSAPP_OTP_FOOTER = "This code expires in 10 minute."


@dataclass(frozen=True)
class VendorRequest:
    """A fully resolved outbound vendor call."""
    method: str
    url: str
    params: dict | None = None
    headers: dict | None = None
    json: dict | None = None

    def loggable(self) -> dict:
        """Request description with credentials masked."""
        def mask(values):
            if not values:
                return values
            return {k: ('***' if k in SECRET_FIELDS else v) for k, v in values.items()}
        return {'method': self.method, 'url': self.url,
                'params': mask(self.params), 'headers': mask(self.headers), 'json': self.json}


@dataclass(frozen=True)
class VendorSpec:
    key: str
    channel: str
    message_type: str
    noun: str          # e.g. "SMS form message"
    api_label: str     # e.g. "SMS Form API"
    build_request: Callable[[Mapping[str, Any], Mapping[str, Any]], VendorRequest]
    normalize: Callable[[int, Any], str | None]

    @property
    def success_message(self) -> str:
        return f"{self.noun[:1].upper()}{self.noun[1:]} sent successfully"

    @property
    def failure_message(self) -> str:
        return f"Failed to send {self.noun}"

    @property
    def unexpected_message(self) -> str:
        return f"Unexpected response from {self.api_label}"

    @property
    def invalid_message(self) -> str:
        return f"Invalid response from {self.api_label}"


def resolve_language(language) -> str:
    """Default to English; reject anything that is not a known template language."""
    if language in (None, ''):
        return LANGUAGE_ENGLISH
    if language not in LANGUAGES:
        raise ValidationError("Language must be 'english' or 'hindi'")
    return language


# --- Normalizers ---
# Return the vendor message id (or None) on success, raise UpstreamFailure otherwise.

def normalize_push(http_status: int, payload: Any) -> str | None:
    ok_status = 200 <= http_status < 300
    vendor_status = payload.get('status') if isinstance(payload, dict) else None
    if ok_status and vendor_status != 'fail':
        return None
    error = None
    if isinstance(payload, dict):
        error = payload.get('error') or vendor_status
    raise UpstreamFailure(error or 'Unknown error',
                          status_code=http_status if not ok_status else 400,
                          payload=payload)


def normalize_gupshup(http_status: int, payload: Any) -> str | None:
    vendor_response = payload.get('response') if isinstance(payload, dict) else None
    if not isinstance(vendor_response, dict):
        # JSON, but not the envelope this vendor documents
        raise UpstreamFailure('Unexpected response structure', status_code=500,
                              payload=payload, unexpected=True)
    if vendor_response.get('status') == 'success':
        return vendor_response.get('id')
    error = vendor_response.get('details') or vendor_response.get('status') or 'Unknown error'
    raise UpstreamFailure(str(error), status_code=400, payload=payload)


# --- Request builders ---

def build_push_request(params, config) -> VendorRequest:
    return VendorRequest(
        method='POST',
        url=config['PUSH_API_URL'],
        headers={
            'X-CleverTap-Account-Id': config.get('PUSH_ACCOUNT_ID') or '',
            'X-CleverTap-Passcode': config.get('PUSH_PASSCODE') or '',
            'Content-Type': 'application/json',
        },
        json={
            'to': {'identity': [params['customer_id']]},
            'campaign_id': config.get('PUSH_CAMPAIGN_ID'),
            'ExternalTrigger': {'OTP': params['otp']},
        },
    )


def _sms_params(config, phone, text, template_id) -> dict:
    return {
        'userid': config.get('SMS_USER_ID'),
        'password': config.get('SMS_PASSWORD'),
        'send_to': f"91{phone}",
        'msg': text,
        'method': 'SendMessage',
        'format': 'JSON',
        'v': '1.1',
        'auth_scheme': 'Plain',
        'msg_type': 'Text',
        'principalEntityId': config.get('SMS_PRINCIPAL_ENTITY_ID'),
        'dltTemplateId': template_id,
    }


def _whatsapp_params(config, phone, text) -> dict:
    return {
        'userid': config.get('WHATSAPP_USER_ID'),
        'password': config.get('WHATSAPP_PASSWORD'),
        'send_to': phone,
        'v': '1.1',
        'format': 'json',
        'msg_type': 'TEXT',
        'method': 'SENDMESSAGE',
        'msg': text,
        'isTemplate': 'true',
    }


def build_sms_otp_request(params, config) -> VendorRequest:
    text = SMS_OTP_TEXT.format(brand=config['BRAND_NAME'], otp=params['otp'])
    return VendorRequest(
        method='GET',
        url=config['SMS_API_URL'],
        params=_sms_params(config, params['phone'], text, config.get('SMS_OTP_TEMPLATE_ID')),
    )


def build_sms_form_request(params, config) -> VendorRequest:
    link_key = 'FORM_LINK_HI' if params.get('language') == LANGUAGE_HINDI else 'FORM_LINK_EN'
    text = SMS_FORM_TEXT.format(brand=config['BRAND_NAME'], link=config[link_key])
    return VendorRequest(
        method='GET',
        url=config['SMS_API_URL'],
        params=_sms_params(config, params['phone'], text, config.get('SMS_FORM_TEMPLATE_ID')),
    )


def build_whatsapp_otp_request(params, config) -> VendorRequest:
    query = _whatsapp_params(config, params['phone'], WHATSAPP_OTP_TEXT.format(otp=params['otp']))
    query['footer'] = WHATSAPP_OTP_FOOTER
    return VendorRequest(method='GET', url=config['WHATSAPP_API_URL'], params=query)


def build_whatsapp_form_request(params, config) -> VendorRequest:
    language = params.get('language') or LANGUAGE_ENGLISH
    text = WHATSAPP_FORM_TEXT[language].format(brand=config['BRAND_NAME'])
    return VendorRequest(
        method='GET',
        url=config['WHATSAPP_API_URL'],
        params=_whatsapp_params(config, params['phone'], text),
    )


VENDOR_SPECS = {
    spec.key: spec for spec in (
        VendorSpec('push-otp', CHANNEL_PUSH, MESSAGE_TYPE_OTP,
                   'push notification', 'CleverTap API',
                   build_push_request, normalize_push),
        VendorSpec('sms-otp', CHANNEL_SMS, MESSAGE_TYPE_OTP,
                   'SMS', 'SMS API',
                   build_sms_otp_request, normalize_gupshup),
        VendorSpec('whatsapp-otp', CHANNEL_WHATSAPP, MESSAGE_TYPE_OTP,
                   'WhatsApp message', 'WhatsApp API',
                   build_whatsapp_otp_request, normalize_gupshup),
        VendorSpec('whatsapp-form', CHANNEL_WHATSAPP, MESSAGE_TYPE_FORM,
                   'WhatsApp form message', 'WhatsApp Form API',
                   build_whatsapp_form_request, normalize_gupshup),
        VendorSpec('sms-form', CHANNEL_SMS, MESSAGE_TYPE_FORM,
                   'SMS form message', 'SMS Form API',
                   build_sms_form_request, normalize_gupshup),
    )
}


def get_vendor_spec(key: str) -> VendorSpec:
    try:
        return VENDOR_SPECS[key]
    except KeyError:
        raise ValueError(f"Unknown vendor spec '{key}'") from None
