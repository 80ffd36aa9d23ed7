# monster_siege/sockets.py
import logging
import threading
import time

from flask import request
from flask_socketio import emit, join_room, leave_room

from . import state
from .content.balance import DEFAULTS
from .engine.events import EVENTS
from .engine.models import AttackAction, CardType, ElementType
from .engine.skills import SKILLS
from .engine.snapshot import slot_to_dict, state_to_dict
from .engine.spawner import make_monster

logger = logging.getLogger(__name__)


def snapshot_for(controller):
    """UI-friendly snapshot of the last stable state."""
    return state_to_dict(controller.published(), log_tail=DEFAULTS["log_tail"])


def catalog():
    return {
        "events": [
            {"name": event.name, "effects": [effect.description for effect in event.effects]}
            for event in EVENTS
        ],
        "skills": [
            {"id": skill.id, "name": skill.name, "description": skill.description, "trigger": skill.trigger.value}
            for skill in SKILLS.values()
        ],
        "cards": [card.value for card in CardType],
        "elements": [element.value for element in ElementType],
    }


def monster_from_payload(payload):
    card = payload.get("spell_card") or None
    return make_monster(
        name=str(payload["name"]),
        element=ElementType(payload.get("type", ElementType.NONE.value)),
        max_hp=int(payload["max_hp"]),
        gold=int(payload.get("gold", 0) or 0),
        mana_stone=int(payload.get("mana_stone", 0) or 0),
        spell_card=CardType(card) if card else None,
        skills=[skill_id for skill_id in payload.get("skills", []) or [] if skill_id in SKILLS],
    )


def action_from_payload(controller, payload):
    player_id = int(payload["player_id"])
    player = next((p for p in controller.state().players if p.id == player_id), None)
    if player is None:
        raise ValueError(f"unknown player {player_id}")
    element = payload.get("element") or None
    return AttackAction(
        player=player,
        battlefield_id=str(payload.get("battlefield_id", "")),
        card_type=CardType(payload.get("card_type", CardType.WAND.value)),
        element=ElementType(element) if element else None,
    )


def broadcast_loop(socketio, interval):
    while True:
        socketio.sleep(interval)
        for session_id, controller in list(state.siege_sessions.items()):
            try:
                socketio.emit(
                    "siege_state",
                    {"timestamp": int(time.time() * 1000), "payload": snapshot_for(controller)},
                    to=session_id,
                )
            except Exception:
                logger.exception("Broadcast failed for session %s", session_id)


def register_siege_socket_handlers(socketio, broadcast_interval=None):
    interval = DEFAULTS["broadcast_interval"] if broadcast_interval is None else broadcast_interval

    # one loop per SocketIO instance
    broadcast = {"started": False}
    broadcast_lock = threading.Lock()

    def start_broadcast():
        if not interval or interval <= 0:
            return
        with broadcast_lock:
            if broadcast["started"]:
                return
            broadcast["started"] = True
        socketio.start_background_task(broadcast_loop, socketio, interval)

    def current():
        controller = state.get_session_by_sid(request.sid)
        if not controller:
            emit("siege_system", "No siege session. Create one first.")
        return controller

    def publish(controller, ok, message):
        emit("siege_system", message)
        if ok:
            socketio.emit("siege_snapshot", snapshot_for(controller), to=controller.session.session_id)

    @socketio.on("siege_create")
    def siege_create(payload=None):
        sid = request.sid
        if state.get_session_by_sid(sid):
            emit("siege_system", "Already running a siege session.")
            return
        payload = payload if isinstance(payload, dict) else {}
        seed = payload.get("seed")
        if seed is None:
            seed = int(time.time() * 1000) & 0xFFFFFFFF
        controller = state.create_session(sid, int(seed))
        session_id = controller.session.session_id
        join_room(session_id)
        emit("siege_created", {"session_id": session_id, **catalog()})
        emit("siege_snapshot", snapshot_for(controller))
        start_broadcast()

    @socketio.on("siege_watch")
    def siege_watch(payload):
        session_id = payload.get("session_id") if isinstance(payload, dict) else str(payload)
        controller = state.get_session(session_id)
        if not controller:
            emit("siege_system", f"Unknown siege session '{session_id}'.")
            return
        join_room(session_id)
        emit("siege_snapshot", snapshot_for(controller))

    @socketio.on("siege_roster")
    def siege_roster(payload):
        controller = current()
        if not controller:
            return
        try:
            count = int(payload.get("count") if isinstance(payload, dict) else payload)
        except (TypeError, ValueError):
            emit("siege_system", "Player count must be a number.")
            return
        publish(controller, *controller.generate_roster(count))

    @socketio.on("siege_advance")
    def siege_advance(payload=None):
        controller = current()
        if not controller:
            return
        publish(controller, *controller.advance_phase())

    @socketio.on("siege_action")
    def siege_action(payload):
        controller = current()
        if not controller:
            return
        if not isinstance(payload, dict):
            emit("siege_system", "Malformed attack action.")
            return
        try:
            action = action_from_payload(controller, payload)
        except (KeyError, TypeError, ValueError) as exc:
            emit("siege_system", f"Malformed attack action: {exc}")
            return
        publish(controller, *controller.submit_attack_action(action))

    @socketio.on("siege_cancel")
    def siege_cancel(payload=None):
        controller = current()
        if not controller:
            return
        publish(controller, *controller.cancel_last_attack_action())

    @socketio.on("siege_force_event")
    def siege_force_event(payload=None):
        controller = current()
        if not controller:
            return
        payload = payload if isinstance(payload, dict) else {}
        publish(controller, *controller.set_forced_event(payload.get("event_name"), payload.get("effect_description")))

    @socketio.on("siege_enqueue")
    def siege_enqueue(payload):
        controller = current()
        if not controller:
            return
        try:
            monster = monster_from_payload(payload if isinstance(payload, dict) else {})
        except (KeyError, TypeError, ValueError) as exc:
            emit("siege_system", f"Malformed monster: {exc}")
            return
        if isinstance(payload, dict) and payload.get("forced"):
            publish(controller, *controller.force_next_monster(monster))
        else:
            publish(controller, *controller.enqueue_monster(monster))

    @socketio.on("siege_enqueue_random")
    def siege_enqueue_random(payload=None):
        controller = current()
        if not controller:
            return
        publish(controller, *controller.enqueue_random_monster())

    @socketio.on("siege_update_player")
    def siege_update_player(payload):
        controller = current()
        if not controller:
            return
        if not isinstance(payload, dict) or "player_id" not in payload:
            emit("siege_system", "Malformed player update.")
            return
        try:
            result = controller.update_player(
                int(payload["player_id"]),
                name=payload.get("name"),
                gold=payload.get("gold"),
                mana_stone=payload.get("mana_stone"),
                attack=payload.get("attack"),
                spell_cards=payload.get("spell_cards"),
            )
        except (TypeError, ValueError) as exc:
            emit("siege_system", f"Malformed player update: {exc}")
            return
        publish(controller, *result)

    @socketio.on("siege_preview")
    def siege_preview(payload=None):
        controller = current()
        if not controller:
            return
        emit("siege_preview", {"battlefield": [slot_to_dict(slot) for slot in controller.preview_resolution()]})

    @socketio.on("disconnect")
    def siege_disconnect(*args):
        sid = request.sid
        controller = state.get_session_by_sid(sid)
        if not controller:
            return
        session_id = controller.session.session_id
        leave_room(session_id, sid=sid)
        state.drop_sid(sid)
        if not state.owner_sids(session_id):
            socketio.emit("siege_system", "Game master disconnected. Siege ended.", to=session_id)
            state.cleanup_session(session_id)
