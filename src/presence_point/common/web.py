from __future__ import annotations

from functools import wraps
from uuid import uuid4

from flask import flash, jsonify, redirect, session, url_for


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "teacher_id" not in session:
            flash("Logga in för att fortsätta", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def api_login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "teacher_id" not in session:
            return jsonify({"success": False, "message": "Inte inloggad"}), 401
        return view(*args, **kwargs)

    return wrapper


def scan_key() -> str:
    """Identifier of this browser session's card tokenizer."""
    key = session.get("scan_key")
    if not key:
        key = uuid4().hex
        session["scan_key"] = key
    return key
