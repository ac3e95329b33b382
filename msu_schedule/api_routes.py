# msu_schedule/api_routes.py

import logging
from flask import Blueprint, abort, current_app, jsonify

from .services.core import cache_manager


bp = Blueprint('api', __name__, url_prefix='/api')
log = logging.getLogger(__name__)


def _load():
    data = cache_manager.load_snapshot(current_app.config.get('SNAPSHOT_FILE'))
    if data.get("error"):
        abort(503, description=data["error"])
    return data


@bp.route('/status')
def get_status():
    """Время последнего успешного обновления и размер снимка."""
    data = _load()
    return jsonify({
        "last_global_update": data.get("last_global_update"),
        "academic_week": data.get("academic_week"),
        "next_week": data.get("next_week", False),
        "groups": len(data.get("schedules", {})),
        "teachers": len(data.get("teachers", {})),
    })


@bp.route('/schedules')
def get_schedules():
    return jsonify(_load().get("schedules", {}))


@bp.route('/schedules/<group_id>')
def get_schedule(group_id):
    log.info(f"API request for group schedule: '{group_id}'")
    schedule = _load().get("schedules", {}).get(group_id)
    if schedule is None:
        abort(404)
    return jsonify(schedule)


@bp.route('/free_rooms')
def get_free_rooms():
    return jsonify(_load().get("free_rooms", {}))


@bp.route('/teachers')
def get_teachers():
    """Список имен преподавателей, для которых есть расписание."""
    return jsonify(sorted(_load().get("teachers", {}).keys()))


@bp.route('/teachers/<name>')
def get_teacher(name):
    log.info(f"API request for teacher schedule: '{name}'")
    schedule = _load().get("teachers", {}).get(name)
    if schedule is None:
        abort(404)
    return jsonify(schedule)
