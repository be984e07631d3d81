"""
Response format selection.

The set of representations is closed: structured data, or a redirect after a
plain form post. Nothing here can emit executable script. A script response
that embeds private data can be pulled into any page with a <script src>
tag; the browser attaches the session cookie and runs the code in the
attacker's page, where stubbed functions receive the data as arguments.
"""
import enum

from flask import jsonify, redirect
from werkzeug.exceptions import NotAcceptable

PROGRAMMATIC_HEADER = "X-Requested-With"
PROGRAMMATIC_VALUE = "XMLHttpRequest"

SCRIPT_SUFFIXES = frozenset({"js", "script", "jsonp"})


class ResponseFormat(enum.Enum):
    DATA = "data"
    REDIRECT = "redirect"


def is_programmatic(request) -> bool:
    # Cross-origin markup (script, img, form) cannot set this header.
    return request.headers.get(PROGRAMMATIC_HEADER, "") == PROGRAMMATIC_VALUE


def choose_read_format(suffix=None) -> ResponseFormat:
    """Reads always render data. Accept headers are not consulted."""
    if suffix is not None and suffix.lower() in SCRIPT_SUFFIXES:
        raise NotAcceptable(f"'{suffix}' responses are not served.")
    return ResponseFormat.DATA


def choose_write_format(request) -> ResponseFormat:
    if is_programmatic(request):
        return ResponseFormat.DATA
    return ResponseFormat.REDIRECT


def render(fmt: ResponseFormat, payload=None, status=200, location=None):
    if fmt is ResponseFormat.REDIRECT:
        return redirect(location, code=303)
    response = jsonify(payload)
    response.status_code = status
    return response
