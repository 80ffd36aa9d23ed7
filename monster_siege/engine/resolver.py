# monster_siege/engine/resolver.py
from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from ..content.balance import DEFAULTS
from .effects import (
    FREEZE_BLOCKED,
    FREEZE_RELEASED,
    add_poisoner,
    charged_poisoner,
    clear_status,
    freeze,
    freeze_gate,
)
from .loot import CARD_LABELS, credit, describe, reward_for, spend_card
from .models import (
    AttackAction,
    BattlefieldSlot,
    CardType,
    GameSession,
    SkillTrigger,
)
from .rules import wand_damage
from .skills import Battle, trigger_skill

logger = logging.getLogger(__name__)


class ResolutionSink:
    """Where a resolution pass sends its log lines."""

    def client(self, message: str) -> None:
        raise NotImplementedError

    def supervisor(self, message: str) -> None:
        raise NotImplementedError


class CommitSink(ResolutionSink):
    def __init__(self, session: GameSession):
        self.session = session

    def client(self, message: str) -> None:
        self.session.add_client_log(message)
        logger.debug("[%s] %s", self.session.session_id, message)

    def supervisor(self, message: str) -> None:
        self.session.add_supervisor_log(message)
        logger.debug("[%s] %s", self.session.session_id, message)


class PreviewSink(ResolutionSink):
    """Keeps lines to itself; nothing reaches the session."""

    def __init__(self):
        self.lines: List[str] = []

    def client(self, message: str) -> None:
        self.lines.append(message)

    def supervisor(self, message: str) -> None:
        self.lines.append(message)


def battle_of(session: GameSession) -> Battle:
    # shares the session's lists: mutations land on the session
    return Battle(
        players=session.players,
        slots=session.battlefield,
        queue=session.queue,
        flags=session.flags,
    )


def private_battle(session: GameSession) -> Battle:
    return copy.deepcopy(battle_of(session))


def place_next(battle: Battle, slot: BattlefieldSlot, sink: ResolutionSink) -> None:
    """Move the front of the queue into the slot (or leave it empty) with fresh status."""
    slot.monster = battle.queue.pop(0) if battle.queue else None
    clear_status(slot)
    if slot.monster is not None:
        sink.supervisor(f"[{slot.id}] {slot.monster.name} enters the battlefield.")
        trigger_skill(battle, slot, SkillTrigger.ON_APPEAR, sink)


def refill_slots(battle: Battle, sink: ResolutionSink) -> int:
    filled = 0
    for slot in battle.slots:
        if slot.monster is None and battle.queue:
            place_next(battle, slot, sink)
            filled += 1
    return filled


def _hit(battle: Battle, slot: BattlefieldSlot, amount: int, sink: ResolutionSink, message: str) -> None:
    slot.monster = replace(slot.monster, hp=slot.monster.hp - amount)
    sink.supervisor(message)
    trigger_skill(battle, slot, SkillTrigger.ON_HIT, sink)


def _settle(battle: Battle, slot: BattlefieldSlot, killer_index: int, sink: ResolutionSink) -> bool:
    """Credit the killer and refill the slot if its monster is dead."""
    monster = slot.monster
    if monster is None or monster.hp > 0:
        return False
    reward = reward_for(monster, battle.flags.double_gold)
    killer = credit(battle.players[killer_index], reward)
    battle.players[killer_index] = killer
    sink.client(f"[{slot.id}] {killer.name} slew {monster.name}, {describe(reward)}.")
    place_next(battle, slot, sink)
    return True


def _spend(battle: Battle, player_index: int, card: CardType, sink: ResolutionSink) -> None:
    player = spend_card(battle.players[player_index], card)
    battle.players[player_index] = player
    left = player.loot.spell_cards.get(card, 0)
    if left < 0:
        sink.supervisor(f"{player.name} is now at {left} {CARD_LABELS[card]} cards.")


def tick_poison(battle: Battle, sink: ResolutionSink) -> None:
    """One poison tick per poisoned slot, charged to its first present poisoner."""
    roster = [player.id for player in battle.players]
    for slot in battle.slots:
        poisoner_id = charged_poisoner(slot, roster)
        if poisoner_id is None:
            continue
        poisoner_index = battle.player_index(poisoner_id)
        poisoner = battle.players[poisoner_index]
        damage = DEFAULTS["poison_damage"]
        slot.monster = replace(slot.monster, hp=slot.monster.hp - damage)
        sink.supervisor(f"[{slot.id}] {poisoner.name}'s poison deals {damage} damage to {slot.monster.name}.")
        if not _settle(battle, slot, poisoner_index, sink):
            trigger_skill(battle, slot, SkillTrigger.ON_HIT, sink)


def _stale(battle: Battle, action: AttackAction) -> Optional[str]:
    slot = battle.slot(action.battlefield_id)
    if slot is None:
        return f"unknown battlefield {action.battlefield_id}"
    if battle.player_index(action.player.id) is None:
        return f"player {action.player.id} is no longer in the game"
    if slot.monster is None:
        return f"battlefield {slot.id} is empty"
    if action.card_type == CardType.WAND and action.element is None:
        return "wand attack without an element"
    return None


def resolve_action(battle: Battle, action: AttackAction, sink: ResolutionSink) -> None:
    tick_poison(battle, sink)

    reason = _stale(battle, action)
    if reason:
        sink.supervisor(f"Skipped {action.player.name}'s {CARD_LABELS[action.card_type]}: {reason}.")
        return

    slot = battle.slot(action.battlefield_id)
    player_index = battle.player_index(action.player.id)
    player = battle.players[player_index]
    flags = battle.flags

    gate = freeze_gate(slot, player.id, action.card_type)
    if gate == FREEZE_RELEASED:
        sink.supervisor(f"[{slot.id}] {player.name}'s freeze is released.")
    elif gate == FREEZE_BLOCKED:
        locker_index = battle.player_index(slot.last_iced_by)
        locker = battle.players[locker_index].name if locker_index is not None else f"player {slot.last_iced_by}"
        sink.supervisor(f"[{slot.id}] {player.name}'s attack is nullified by {locker}'s freeze.")
        return

    card = action.card_type
    if card == CardType.WAND:
        element = action.element
        if element == flags.disabled_element:
            sink.supervisor(f"[{slot.id}] {player.name}'s {element.value} attack is disabled by the event, no effect.")
            return
        target = slot.monster
        damage = wand_damage(player.attack.get(element, 0), element, target.type, flags.all_attacks_neutral)
        _hit(battle, slot, damage, sink, f"[{slot.id}] {player.name} uses Wand ({element.value}) on {target.name} for {damage} damage.")
        _settle(battle, slot, player_index, sink)

    elif card == CardType.ICE:
        damage = DEFAULTS["ice_damage"]
        freeze(slot, player.id)
        _spend(battle, player_index, card, sink)
        target_name = slot.monster.name
        _hit(battle, slot, damage, sink, f"[{slot.id}] {player.name} casts Ice Spell on {target_name} for {damage} damage.")
        _settle(battle, slot, player_index, sink)

    elif card == CardType.BOMB:
        damage = DEFAULTS["bomb_damage"]
        _spend(battle, player_index, card, sink)
        sink.supervisor(f"[ALL] {player.name} throws a Bomb Spell.")
        for each in battle.slots:
            if each.monster is None:
                continue
            target_name = each.monster.name
            _hit(battle, each, damage, sink, f"[{each.id}] {player.name} deals {damage} damage to {target_name}.")
            _settle(battle, each, player_index, sink)

    elif card == CardType.POISON:
        _spend(battle, player_index, card, sink)
        add_poisoner(slot, player.id)
        sink.supervisor(f"[{slot.id}] {player.name} poisons {slot.monster.name}.")


def run_actions(battle: Battle, actions: Sequence[AttackAction], sink: ResolutionSink) -> Battle:
    for action in actions:
        resolve_action(battle, action, sink)
    return battle


def resolve(session: GameSession) -> None:
    """
    Commit the session's pending attack actions.
    Mutates players/battlefield/queue in place, writes both logs and clears the action list.
    """
    run_actions(battle_of(session), list(session.actions), CommitSink(session))
    session.actions.clear()


def preview(session: GameSession) -> Tuple[BattlefieldSlot, ...]:
    """Forecast the battlefield after the pending actions, without touching the session."""
    battle = private_battle(session)
    run_actions(battle, copy.deepcopy(session.actions), PreviewSink())
    return tuple(battle.slots)
