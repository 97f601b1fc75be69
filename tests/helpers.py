"""
Mock HTTP responses shared by the provider and store tests.
"""
import json
from unittest.mock import Mock

import httpx


def make_response(payload=None, content=None):
    """Mock httpx response carrying ``payload`` encoded as JSON."""
    response = Mock()
    if content is None:
        content = json.dumps(payload).encode() if payload is not None else b""
    response.content = content
    response.raise_for_status = Mock()
    return response


def make_status_error(status_code, text="error"):
    error_response = Mock()
    error_response.status_code = status_code
    error_response.text = text
    return httpx.HTTPStatusError("HTTP error", request=Mock(), response=error_response)
