# monster_siege/routes.py
from flask import Blueprint, abort, jsonify

from . import state
from .content.balance import DEFAULTS
from .engine.snapshot import slot_to_dict, state_to_dict

siege_bp = Blueprint("siege", __name__)


@siege_bp.route("/siege/<session_id>/state")
def siege_state(session_id):
    controller = state.get_session(session_id)
    if controller is None:
        abort(404)
    return jsonify(state_to_dict(controller.published(), log_tail=DEFAULTS["log_tail"]))


@siege_bp.route("/siege/<session_id>/preview")
def siege_preview(session_id):
    controller = state.get_session(session_id)
    if controller is None:
        abort(404)
    return jsonify({"battlefield": [slot_to_dict(slot) for slot in controller.preview_resolution()]})
