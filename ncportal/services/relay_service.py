# ncportal/services/relay_service.py
# -*- coding: utf-8 -*-
"""
Relay Service
Pass-through GET used by the browser to reach the SMS gateway without
cross-origin restrictions. The upstream body is returned verbatim.
"""
import time
from urllib.parse import urlsplit

import requests
from flask import current_app

from ncportal.extensions import notification_gateway
from ncportal.gateway import read_text_within
from ncportal.utils.exceptions import ValidationError


class RelayService:

    @staticmethod
    def relay(target_url) -> dict:
        """
        Fetch `target_url` once and hand back status and raw text.

        Returns:
            dict: {'success': True, 'status', 'data'} on any HTTP answer, or
                  {'success': False, 'error', 'errorCode'} on a network fault.

        Raises:
            ValidationError: If the URL is missing or not http(s).
        """
        if not target_url or not str(target_url).strip():
            raise ValidationError("URL parameter is required")
        target_url = str(target_url).strip()
        if urlsplit(target_url).scheme not in ('http', 'https'):
            raise ValidationError("URL must use http or https")

        config = current_app.config
        logger = current_app.logger
        # Query strings carry vendor credentials; log the endpoint only
        parts = urlsplit(target_url)
        logger.info(f"Proxying request to: {parts.scheme}://{parts.netloc}{parts.path}")

        # The whole call, body included, must finish within the timeout
        timeout = config['RELAY_TIMEOUT_SECONDS']
        deadline = time.monotonic() + timeout
        try:
            response = notification_gateway.get_session().get(
                target_url,
                headers={
                    'Content-Type': 'application/json',
                    'User-Agent': config['RELAY_USER_AGENT'],
                },
                timeout=timeout,
                stream=True,
            )
            data = read_text_within(response, deadline, timeout)
        except requests.RequestException as e:
            logger.error(f"Proxy error: {e}", exc_info=True)
            return {'success': False, 'error': str(e), 'errorCode': type(e).__name__}

        logger.info(f"Proxy response status: {response.status_code}")
        return {'success': True, 'status': response.status_code, 'data': data}
