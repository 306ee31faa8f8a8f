# ncportal/gateway/client.py
# -*- coding: utf-8 -*-
"""
Notification Gateway client.

A Flask extension owning the HTTP session used for every outbound vendor call.
`dispatch()` is the single call-and-normalize routine shared by all vendor
specs: one attempt, bounded timeout, and a structured result on every path.
"""
import json
import time
from dataclasses import dataclass
from http.cookiejar import DefaultCookiePolicy
from typing import Any

import requests
from flask import current_app

from ncportal.gateway.vendor_specs import VendorSpec
from ncportal.utils.exceptions import InvalidVendorResponse, UpstreamFailure

EXTENSION_KEY = 'notification_gateway'

# Bodies are read a byte at a time so the deadline is checked as soon as
# anything arrives, however slowly the upstream trickles.
STREAM_CHUNK_SIZE = 1


@dataclass
class DispatchResult:
    """Uniform outcome of a vendor call, whatever the vendor answered."""
    success: bool
    message: str
    data: Any = None
    error: str | None = None
    error_type: str | None = None
    error_code: str | None = None
    http_status: int | None = None
    raw_response: str | None = None
    message_id: str | None = None
    phone_number: str | None = None
    language: str | None = None
    status_code: int = 200  # status the API layer should answer with

    def to_dict(self) -> dict:
        body = {'success': self.success, 'message': self.message}
        if self.data is not None:
            body['data'] = self.data
        if self.error is not None:
            body['error'] = self.error
        if self.phone_number:
            body['phoneNumber'] = self.phone_number
        if self.language:
            body['language'] = self.language
        if self.message_id:
            body['messageId'] = self.message_id
        if self.raw_response is not None:
            body['rawResponse'] = self.raw_response
            body['status'] = self.http_status
        if self.error_code:
            body['errorCode'] = self.error_code
        return body


def parse_vendor_body(raw_text: str, http_status: int) -> Any:
    """Parse a vendor body as JSON, keeping the raw text if it is not JSON."""
    try:
        return json.loads(raw_text)
    except ValueError as e:
        raise InvalidVendorResponse(raw_text, http_status) from e


def read_text_within(response, deadline: float, limit: float) -> str:
    """
    Read a streamed response body, giving up once `deadline` (a time.monotonic()
    value) has passed. The response is always closed.

    Raises:
        requests.Timeout: If the body is not complete by the deadline.
    """
    chunks = []
    try:
        if time.monotonic() > deadline:
            raise requests.Timeout(f"Upstream did not answer within {limit}s")
        for chunk in response.iter_content(chunk_size=STREAM_CHUNK_SIZE):
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise requests.Timeout(f"Upstream did not finish within {limit}s")
    finally:
        response.close()
    return b''.join(chunks).decode(response.encoding or 'utf-8', errors='replace')


class NotificationGateway:
    """
    Holds one `requests.Session` per application.

    The session is created in `init_app` and released by `close`; nothing is
    created lazily on first use. Tests swap in a fake through `use_session`.
    """

    def __init__(self, app=None, session_factory=requests.Session):
        self.session_factory = session_factory
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault('VENDOR_TIMEOUT_SECONDS', 30)
        session = self.session_factory()
        # Shared by every caller: upstream cookies must never be stored and replayed
        session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        app.extensions[EXTENSION_KEY] = session

    def use_session(self, app, session):
        """Replace the application's HTTP session (closing the previous one)."""
        self.close(app)
        app.extensions[EXTENSION_KEY] = session

    def get_session(self, app=None):
        app = app or current_app
        try:
            return app.extensions[EXTENSION_KEY]
        except KeyError:
            raise RuntimeError("NotificationGateway is not initialised for this app (or was closed).") from None

    def close(self, app=None):
        """Release the HTTP session of `app`. Safe to call more than once."""
        app = app or current_app
        session = app.extensions.pop(EXTENSION_KEY, None)
        if session is not None:
            session.close()

    def dispatch(self, spec: VendorSpec, params: dict) -> DispatchResult:
        """
        Build the vendor request for `spec`, make exactly one call and normalize the answer.

        Args:
            spec (VendorSpec): Entry from the vendor spec table.
            params (dict): customer_id / otp / phone / language as the vendor spec needs them.

        Returns:
            DispatchResult: Never raises for vendor or network faults.
        """
        config = current_app.config
        logger = current_app.logger
        vendor_request = spec.build_request(params, config)
        result = DispatchResult(
            success=False,
            message=spec.failure_message,
            phone_number=params.get('phone'),
            language=params.get('language'),
        )

        logger.info(f"Sending {spec.key} via {spec.api_label}: {vendor_request.loggable()}")

        timeout = config['VENDOR_TIMEOUT_SECONDS']
        deadline = time.monotonic() + timeout
        try:
            response = self.get_session().request(
                vendor_request.method,
                vendor_request.url,
                params=vendor_request.params,
                headers=vendor_request.headers,
                json=vendor_request.json,
                timeout=timeout,
                stream=True,
            )
            result.http_status = response.status_code
            raw_text = read_text_within(response, deadline, timeout)
            logger.info(f"{spec.api_label} response status: {response.status_code}")
            logger.debug(f"{spec.api_label} response text: {raw_text}")

            payload = parse_vendor_body(raw_text, response.status_code)
            result.data = payload
            result.message_id = spec.normalize(response.status_code, payload)

        except InvalidVendorResponse as e:
            logger.error(f"Failed to parse {spec.api_label} response as JSON (status {e.http_status}): {e.raw_text!r}")
            result.message = spec.invalid_message
            result.error = str(e)
            result.error_type = 'InvalidVendorResponse'
            result.raw_response = e.raw_text
            result.status_code = 500
            return result

        except UpstreamFailure as e:
            logger.warning(f"{spec.api_label} reported failure for {spec.key}: {e}")
            result.message = spec.unexpected_message if e.unexpected else spec.failure_message
            result.error = str(e)
            result.error_type = 'UnexpectedVendorResponse' if e.unexpected else 'UpstreamFailure'
            result.status_code = e.status_code
            return result

        except requests.RequestException as e:
            logger.error(f"{spec.api_label} call failed for {spec.key}: {e}", exc_info=True)
            result.message = 'Internal server error'
            result.error = str(e)
            result.error_type = 'NetworkError'
            result.error_code = type(e).__name__
            result.status_code = 500
            return result

        logger.info(f"{spec.api_label} success for {spec.key} (message id: {result.message_id})")
        result.success = True
        result.message = spec.success_message
        return result
