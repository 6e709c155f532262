from flask import current_app, render_template, request, redirect, url_for, flash, session
from flask_login import login_user, logout_user
from sms_portal.utils.queries import create_user, find_user_by_email, normalize_email
from sms_portal.utils.results import Conflict
from .loaders import load_user  # noqa: F401
from . import auth_bp


INVALID_CREDENTIALS = "Invalid credentials"


def _signup_error(message):
    return render_template("auth/signup.html", error=message), 400


def _signin_error(message):
    return render_template("auth/signin.html", error=message), 400


@auth_bp.route("/signup", methods=["GET", "POST"])
def signup():

    if request.method == "POST":

        name = request.form.get("name", "").strip()
        email = normalize_email(request.form.get("email"))
        password = request.form.get("password", "")
        confirm_password = request.form.get("confirm_password", "")

        if not all([name, email, password, confirm_password]):
            return _signup_error("All fields are required")

        if password != confirm_password:
            return _signup_error("Passwords do not match")

        result = create_user(email, password)

        if isinstance(result, Conflict):
            return _signup_error("Email already registered")

        current_app.logger.info("Registered user %s", email)
        flash("Account created. Please sign in.", "success")
        return redirect(url_for("auth.signin"), code=303)

    return render_template("auth/signup.html", error=None)


@auth_bp.route("/signin", methods=["GET", "POST"])
def signin():

    if request.method == "POST":

        email = normalize_email(request.form.get("email"))
        password = request.form.get("password", "")

        if not email or not password:
            return _signin_error("Email and password required")

        user = find_user_by_email(email)

        # Same answer for unknown email and wrong password
        if not user or not user.check_password(password):
            current_app.logger.warning("Failed sign-in for %s", email)
            return _signin_error(INVALID_CREDENTIALS)

        # A token issued before sign-in must not carry the signed-in user
        current_app.session_interface.regenerate(session)
        session.clear()
        login_user(user)
        session["user_id"] = user.id
        session["user_email"] = user.email

        current_app.logger.info("User %s signed in", user.email)
        return redirect(url_for("main.dashboard"), code=303)

    return render_template("auth/signin.html", error=None)


@auth_bp.route("/signout", methods=["POST"])
def signout():
    logout_user()
    session.clear()
    return redirect(url_for("auth.signin"), code=303)
