import pytest
from flask import request
from werkzeug.exceptions import NotAcceptable

from negotiation import ResponseFormat, choose_read_format, choose_write_format, render


def test_there_is_no_script_representation():
    assert {fmt.name for fmt in ResponseFormat} == {"DATA", "REDIRECT"}


@pytest.mark.parametrize("suffix", [None, "data", "json", "xml", "html", ""])
def test_reads_default_to_data(suffix):
    assert choose_read_format(suffix) is ResponseFormat.DATA


@pytest.mark.parametrize("suffix", ["js", "JS", "script", "jsonp"])
def test_script_suffixes_are_refused(suffix):
    with pytest.raises(NotAcceptable):
        choose_read_format(suffix)


def test_write_format_follows_requested_with_only(app):
    with app.test_request_context("/notes", method="POST", headers={"X-Requested-With": "XMLHttpRequest"}):
        assert choose_write_format(request) is ResponseFormat.DATA

    with app.test_request_context(
        "/notes.js", method="POST", headers={"Accept": "text/javascript, application/json"}
    ):
        assert choose_write_format(request) is ResponseFormat.REDIRECT


def test_render(app):
    with app.test_request_context("/"):
        data = render(ResponseFormat.DATA, {"notes": []}, status=201)
        moved = render(ResponseFormat.REDIRECT, {"ignored": True}, location="/notes")

    assert data.status_code == 201
    assert data.mimetype == "application/json"
    assert moved.status_code == 303
    assert moved.headers["Location"].endswith("/notes")
