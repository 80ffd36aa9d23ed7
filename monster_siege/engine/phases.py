# monster_siege/engine/phases.py
from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from ..content.balance import DEFAULTS
from .events import trigger_event
from .models import EventFlags, GameEvent, GameSession, Phase, SkillTrigger
from .resolver import CommitSink, battle_of, refill_slots, resolve
from .skills import trigger_all

logger = logging.getLogger(__name__)

NEXT_PHASE = {
    Phase.SETUP: Phase.EVENT,
    Phase.EVENT: Phase.PREP,
    Phase.PREP: Phase.ACTION,
    Phase.ACTION: Phase.RESOLUTION,
    Phase.RESOLUTION: Phase.EVENT,
}


def ready_to_resolve(session: GameSession) -> bool:
    return len(session.actions) == len(session.players)


def monsters_present(session: GameSession) -> bool:
    return bool(session.queue) or any(slot.monster is not None for slot in session.battlefield)


def can_advance(session: GameSession) -> Tuple[bool, str]:
    if session.phase == Phase.SETUP:
        if len(session.players) < DEFAULTS["min_players"]:
            return False, f"need at least {DEFAULTS['min_players']} players to start"
        if not monsters_present(session):
            return False, "enqueue at least one monster to start"
    if session.phase == Phase.ACTION and not ready_to_resolve(session):
        return False, f"{len(session.actions)}/{len(session.players)} players have acted"
    return True, ""


def clear_flags(session: GameSession) -> None:
    session.flags = EventFlags()


def rotate_players(session: GameSession) -> None:
    if session.players:
        session.players.append(session.players.pop(0))


def settle_battlefield(session: GameSession) -> int:
    """Standing refill rule: empty slots take the front of the queue."""
    return refill_slots(battle_of(session), CommitSink(session))


def enter_event(session: GameSession, events: Optional[Sequence[GameEvent]] = None) -> None:
    session.phase = Phase.EVENT
    trigger_all(battle_of(session), SkillTrigger.ON_TURN_START, CommitSink(session))
    trigger_event(session, events)
    settle_battlefield(session)


def end_turn(session: GameSession, events: Optional[Sequence[GameEvent]] = None) -> None:
    clear_flags(session)
    trigger_all(battle_of(session), SkillTrigger.ON_TURN_END, CommitSink(session))
    session.turn += 1
    rotate_players(session)
    enter_event(session, events)


def advance_phase(session: GameSession, events: Optional[Sequence[GameEvent]] = None) -> Tuple[bool, str]:
    """
    Move the session one step around setup -> event -> prep -> action -> resolution -> event.
    Returns (ok, reason); a refused step leaves the session untouched.
    """
    ok, reason = can_advance(session)
    if not ok:
        logger.info("Session %s cannot leave %s: %s", session.session_id, session.phase.value, reason)
        return False, reason

    current = session.phase
    if current == Phase.SETUP:
        settle_battlefield(session)
        enter_event(session, events)
    elif current == Phase.ACTION:
        resolve(session)
        clear_flags(session)
        session.phase = Phase.RESOLUTION
        settle_battlefield(session)
    elif current == Phase.RESOLUTION:
        end_turn(session, events)
    else:
        session.phase = NEXT_PHASE[current]
    return True, f"turn {session.turn}: {session.phase.value} phase"
