import logging
import os
from functools import wraps

from flask import Flask, g, redirect, request, url_for
from werkzeug.exceptions import HTTPException

import identities
import notes
import sessions
from database import DB_PATH, get_connection
from errors import ForgeryTokenInvalid, Unauthenticated, ValidationError
from negotiation import ResponseFormat, choose_read_format, choose_write_format, render

app = Flask(__name__)
app.config["DATABASE"] = DB_PATH
app.config["SESSION_COOKIE"] = "notes_session"
app.config["SESSION_COOKIE_SECURE"] = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"

FORGERY_HEADER = "X-CSRF-Token"
FORGERY_FIELD = "authenticity_token"


def session_token():
    return request.cookies.get(app.config["SESSION_COOKIE"])


def current_user():
    return sessions.resolve(g.db, session_token())


def login_required(func):
    """Resolve the session cookie and hand the user to ``func`` as its first argument.

    Only the cookie is looked at: origin, method and headers play no part in
    who the caller is.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            raise Unauthenticated()
        return func(user, *args, **kwargs)

    return wrapper


@app.before_request
def attach_db():
    g.db = get_connection(app.config["DATABASE"])


@app.teardown_request
def close_db(_):
    db = getattr(g, "db", None)
    if db is not None:
        db.close()


@app.after_request
def forbid_sniffing(response):
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


@app.errorhandler(Unauthenticated)
def forbidden(exc):
    return "Forbidden", 403, {"Content-Type": "text/plain; charset=utf-8"}


@app.errorhandler(HTTPException)
def http_error(exc):
    if exc.code is None or exc.code < 400:
        return exc
    if exc.code >= 500:
        app.logger.error("%s %s failed: %s", request.method, request.path, exc.description)
    return render(ResponseFormat.DATA, {"error": exc.description}, status=exc.code)


def submitted_forgery_token():
    token = request.headers.get(FORGERY_HEADER)
    if token:
        return token
    if request.is_json:
        data = request.get_json(silent=True)
        if isinstance(data, dict):
            return data.get(FORGERY_FIELD)
        return None
    return request.form.get(FORGERY_FIELD)


def note_params():
    if request.is_json:
        data = request.get_json(silent=True)
        note = data.get("note") if isinstance(data, dict) else None
        if not isinstance(note, dict):
            raise ValidationError()
        return note.get("title"), note.get("body")
    return request.form.get("note[title]"), request.form.get("note[body]")


@app.route("/login/<username>")
def login(username):
    user = identities.find(g.db, username)
    if user is None:
        user = identities.create(g.db, username)

    token = sessions.create(g.db, user["id"])
    response = redirect(url_for("list_notes"))
    response.set_cookie(
        app.config["SESSION_COOKIE"],
        token,
        httponly=True,
        samesite="Lax",
        secure=app.config["SESSION_COOKIE_SECURE"],
    )
    app.logger.info("User %s logged in", user["id"])
    return response


@app.route("/session")
@login_required
def show_session(user):
    return render(
        choose_read_format(),
        {
            "username": user["username"],
            "csrf_token": sessions.forgery_token(g.db, session_token()),
        },
    )


@app.route("/notes", methods=["GET"])
@app.route("/notes.<suffix>", methods=["GET"])
@login_required
def list_notes(user, suffix=None):
    fmt = choose_read_format(suffix)
    return render(fmt, {"notes": notes.list_for(g.db, user["id"])})


@app.route("/notes", methods=["POST"])
@login_required
def create_note(user):
    if not sessions.verify_forgery_token(g.db, session_token(), submitted_forgery_token()):
        app.logger.warning("Rejected note creation for user %s: bad authenticity token", user["id"])
        raise ForgeryTokenInvalid()

    title, body = note_params()
    note = notes.create(g.db, user["id"], title, body)
    return render(
        choose_write_format(request),
        {"note": note},
        status=201,
        location=url_for("list_notes"),
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, host="127.0.0.1", port=5000)
