# monster_siege/engine/events.py
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from ..content.events import CALM_EVENT, EVENT_DEFS
from .dice import rng_for, roulette
from .models import EventEffect, ForcedEvent, GameEvent, GameSession

logger = logging.getLogger(__name__)


def build_event(data: Dict[str, Any]) -> GameEvent:
    effects = tuple(
        EventEffect(description=entry["description"], apply=entry["apply"], weight=entry.get("weight"))
        for entry in data.get("effects", [])
    )
    return GameEvent(name=data["name"], effects=effects, weight=data.get("weight"))


EVENTS: List[GameEvent] = [build_event(data) for data in EVENT_DEFS]


def find_event(name: str, table: Sequence[GameEvent] = EVENTS) -> Optional[GameEvent]:
    for event in table:
        if event.name == name:
            return event
    return None


def calm_event(table: Sequence[GameEvent] = EVENTS) -> GameEvent:
    event = find_event(CALM_EVENT, table)
    if event is None:
        raise ValueError(f"event table has no '{CALM_EVENT}' event")
    return event


def set_forced_event(session: GameSession, event_name: Optional[str] = None, effect_description: Optional[str] = None) -> None:
    """One-shot override for the next event draw; empty values mean random."""
    if not event_name and not effect_description:
        session.forced_event = None
        return
    session.forced_event = ForcedEvent(event_name=event_name or None, effect_description=effect_description or None)


def _pick_effect(event: GameEvent, forced_description: Optional[str], r: random.Random) -> EventEffect:
    if forced_description:
        for effect in event.effects:
            if effect.description == forced_description:
                return effect
        logger.info("Forced effect %r not in event %r, drawing at random", forced_description, event.name)
    return roulette(event.effects, r)


def trigger_event(
    session: GameSession,
    table: Optional[Sequence[GameEvent]] = None,
    r: Optional[random.Random] = None,
) -> Optional[GameEvent]:
    """
    Pick this turn's event and one of its effects, apply it, and store the
    event rewritten to hold only that effect.
    Returns None (and applies nothing) for an unknown forced event.
    """
    table = EVENTS if table is None else table
    r = r or rng_for(session.seed, session.turn, "event")

    forced = session.forced_event or ForcedEvent()
    session.forced_event = None    # consumed whatever happens next

    if session.turn == 1:
        selected = calm_event(table)
    elif forced.event_name:
        selected = find_event(forced.event_name, table)
        if selected is None:
            logger.error("Unknown forced event %r in session %s", forced.event_name, session.session_id)
            session.add_supervisor_log(f"Unknown forced event '{forced.event_name}', no event applied.")
            return None
    else:
        selected = roulette(table, r)
    if selected is None:
        return None

    effect = _pick_effect(selected, forced.effect_description, r)
    session.add_client_log(effect.description)
    effect.apply(session)
    resolved = replace(selected, effects=(effect,))
    session.event = resolved
    session.add_supervisor_log(f"Event: {resolved.name}.")
    return resolved
