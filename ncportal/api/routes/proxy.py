# -*- coding: utf-8 -*-
"""
Proxy Relay Route
GET /proxy/sms?url=<encoded> forwards the URL and returns the raw answer.
"""
from flask import Blueprint, jsonify, request

from ncportal.services.relay_service import RelayService
from ncportal.utils.exceptions import ValidationError

proxy_bp = Blueprint('proxy_api', __name__)


@proxy_bp.route('/proxy/sms', methods=['GET'])
@proxy_bp.route('/api/proxy-sms', methods=['GET'])
def proxy_sms():
    """Relay a GET to the given URL; never raises past this handler."""
    try:
        result = RelayService.relay(request.args.get('url'))
    except ValidationError as e:
        return jsonify({"success": False, "error": str(e)}), 400

    status_code = 200 if result['success'] else 500
    return jsonify(result), status_code
