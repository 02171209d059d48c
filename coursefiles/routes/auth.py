from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_user, logout_user, login_required, current_user
from ..models import User

bp = Blueprint("auth", __name__)

@bp.get("/")
def home():
    if current_user.is_authenticated:
        return f"Signed in as {current_user.name}"
    return redirect(url_for("auth.login"))

@bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        user_id = (request.form.get("user_id") or "").strip()
        pin = (request.form.get("pin") or "").strip()

        user = User.query.filter_by(id=user_id).first()
        if not user:
            flash("Access denied: ID not found.", "error")
            return render_template("login.html"), 401

        if not user.check_pin(pin):
            flash("Wrong PIN.", "error")
            return render_template("login.html"), 401

        login_user(user)
        return redirect(url_for("auth.home"))

    return render_template("login.html")

@bp.get("/logout")
@login_required
def logout():
    logout_user()
    return redirect(url_for("auth.login"))
