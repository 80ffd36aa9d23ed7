# monster_siege/engine/effects.py
from __future__ import annotations

from typing import Iterable, Optional

from .models import BattlefieldSlot, CardType

FREEZE_PASS = "pass"
FREEZE_RELEASED = "released"
FREEZE_BLOCKED = "blocked"


def is_poisoned(slot: BattlefieldSlot) -> bool:
    return bool(slot.poisoned_by)


def is_frozen(slot: BattlefieldSlot) -> bool:
    return slot.last_iced_by is not None


def add_poisoner(slot: BattlefieldSlot, player_id: int) -> bool:
    """Add a contributor to the slot's poison stack. Returns False if already present."""
    if player_id in slot.poisoned_by:
        return False
    slot.poisoned_by.append(player_id)
    return True


def charged_poisoner(slot: BattlefieldSlot, roster_ids: Iterable[int]) -> Optional[int]:
    """The poisoner owed this tick: first contributor still on the roster.

    Frozen or empty slots do not tick.
    """
    if slot.monster is None or not is_poisoned(slot) or is_frozen(slot):
        return None
    present = set(roster_ids)
    for player_id in slot.poisoned_by:
        if player_id in present:
            return player_id
    return None


def freeze(slot: BattlefieldSlot, player_id: int) -> None:
    slot.last_iced_by = player_id


def freeze_gate(slot: BattlefieldSlot, player_id: int, card: CardType) -> str:
    """Check the slot's freeze lock for an incoming action.

    The locker's own next action lifts the lock and proceeds. Anyone else is
    blocked unless they throw a bomb.
    """
    if slot.last_iced_by is None:
        return FREEZE_PASS
    if slot.last_iced_by == player_id:
        slot.last_iced_by = None
        return FREEZE_RELEASED
    if card == CardType.BOMB:
        return FREEZE_PASS
    return FREEZE_BLOCKED


def clear_status(slot: BattlefieldSlot) -> None:
    """Drop poison and freeze; called whenever the slot's monster changes."""
    slot.poisoned_by = []
    slot.last_iced_by = None
