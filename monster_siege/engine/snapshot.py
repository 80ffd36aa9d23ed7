# monster_siege/engine/snapshot.py
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from .models import BattlefieldSlot, GameEvent, GameLog, GameSession, Monster, Phase, Player


@dataclass(frozen=True)
class GameState:
    """Read-only view of a session at a stable point. Shares nothing mutable with it."""
    turn: int
    phase: Phase
    players: Tuple[Player, ...]
    battlefield: Tuple[BattlefieldSlot, ...]
    queue: Tuple[Monster, ...]
    event: Optional[GameEvent]
    log: Tuple[GameLog, ...]


def build_state(session: GameSession) -> GameState:
    return GameState(
        turn=session.turn,
        phase=session.phase,
        players=tuple(copy.deepcopy(session.players)),
        battlefield=tuple(copy.deepcopy(session.battlefield)),
        queue=tuple(copy.deepcopy(session.queue)),
        event=session.event,
        log=tuple(session.log),
    )


def player_to_dict(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "attack": {element.value: value for element, value in player.attack.items()},
        "loot": {
            "gold": player.loot.gold,
            "manaStone": player.loot.mana_stone,
            "spellCards": {card.value: count for card, count in player.loot.spell_cards.items()},
        },
    }


def monster_to_dict(monster: Optional[Monster]) -> Optional[Dict[str, Any]]:
    if monster is None:
        return None
    card = monster.loot.spell_card
    return {
        "name": monster.name,
        "type": monster.type.value,
        "maxHP": monster.max_hp,
        "HP": monster.hp,
        "loot": {
            "gold": monster.loot.gold,
            "manaStone": monster.loot.mana_stone,
            "spellCard": card.value if card else None,
        },
        "skills": list(monster.skills),
    }


def slot_to_dict(slot: BattlefieldSlot) -> Dict[str, Any]:
    return {
        "id": slot.id,
        "monster": monster_to_dict(slot.monster),
        "poisonedBy": list(slot.poisoned_by) or None,
        "lastIcedBy": slot.last_iced_by,
    }


def event_to_dict(event: Optional[GameEvent]) -> Optional[Dict[str, Any]]:
    if event is None:
        return None
    return {
        "name": event.name,
        "weight": event.weight,
        "effects": [{"description": effect.description, "weight": effect.weight} for effect in event.effects],
    }


def logs_to_list(entries: Iterable[GameLog]):
    return [{"round": entry.round, "phase": entry.phase.value, "message": entry.message} for entry in entries]


def state_to_dict(state: GameState, log_tail: Optional[int] = None) -> Dict[str, Any]:
    """JSON-ready rendering for the panel and remote viewers."""
    log = state.log[-log_tail:] if log_tail else state.log
    return {
        "turn": state.turn,
        "phase": state.phase.value,
        "players": [player_to_dict(player) for player in state.players],
        "battlefield": [slot_to_dict(slot) for slot in state.battlefield],
        "queue": [monster_to_dict(monster) for monster in state.queue],
        "event": event_to_dict(state.event),
        "log": logs_to_list(log),
        "log_length": len(state.log),
    }
