from flask import Blueprint

marks_bp = Blueprint("marks", __name__, url_prefix="/marks")
