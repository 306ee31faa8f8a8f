# -*- coding: utf-8 -*-
"""
Gateway Package Initialization.

Exposes the vendor call client and the vendor spec table,
e.g., `from ncportal.gateway import NotificationGateway, get_vendor_spec`.
"""

from .client import NotificationGateway, DispatchResult, parse_vendor_body, read_text_within
from .vendor_specs import VendorSpec, VendorRequest, VENDOR_SPECS, get_vendor_spec

__all__ = [
    'NotificationGateway',
    'DispatchResult',
    'parse_vendor_body',
    'read_text_within',
    'VendorSpec',
    'VendorRequest',
    'VENDOR_SPECS',
    'get_vendor_spec',
]
