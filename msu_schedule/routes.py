# msu_schedule/routes.py

from flask import Blueprint

bp = Blueprint('main', __name__)


@bp.route('/health')
def health():
    return "OK", 200
