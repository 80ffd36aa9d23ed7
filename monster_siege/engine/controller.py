# monster_siege/engine/controller.py
from __future__ import annotations

import copy
import functools
import logging
import threading
from dataclasses import replace
from typing import Dict, Optional, Sequence, Tuple

from ..content.balance import DEFAULTS
from . import phases, spawner
from .events import EVENTS, calm_event, set_forced_event
from .loot import CARD_LABELS
from .models import (
    AttackAction,
    BattlefieldSlot,
    CardType,
    ElementType,
    GameEvent,
    GameLog,
    GameSession,
    Monster,
    Phase,
    Player,
    PlayerLoot,
    PLAYER_ELEMENTS,
    SLOT_IDS,
    SPELL_CARDS,
    empty_attack,
    empty_cards,
)
from .resolver import preview
from .snapshot import GameState, build_state

logger = logging.getLogger(__name__)

Result = Tuple[bool, str]


def _command(method):
    """Run one external trigger to completion under the session lock, then publish."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            result = method(self, *args, **kwargs)
            self._published = build_state(self.session)
            if not result[0]:
                logger.info("%s rejected in session %s: %s", method.__name__, self.session.session_id, result[1])
            return result
    return wrapper


def new_player(player_id: int) -> Player:
    cards = empty_cards()
    cards[CardType.WAND] = DEFAULTS["start_wands"]
    return Player(
        id=player_id,
        name=f"Team {player_id}",
        attack=empty_attack(),
        loot=PlayerLoot(gold=DEFAULTS["start_gold"], mana_stone=DEFAULTS["start_mana_stone"], spell_cards=cards),
    )


class SiegeController:
    """Owns one GameSession and serializes every command against it."""

    def __init__(self, session_id: str, seed: int = 0, events: Optional[Sequence[GameEvent]] = None):
        self.events = list(EVENTS if events is None else events)
        self.session = GameSession(session_id=session_id, seed=seed)
        self.session.event = calm_event(self.events)
        self._lock = threading.RLock()
        self._published = build_state(self.session)

    # queries

    def state(self) -> GameState:
        with self._lock:
            return build_state(self.session)

    def published(self) -> GameState:
        """Last snapshot taken at a stable point; safe to read from any thread."""
        return self._published

    def supervisor_log(self) -> Tuple[GameLog, ...]:
        with self._lock:
            return tuple(self.session.supervisor_log)

    def pending_actions(self) -> Tuple[AttackAction, ...]:
        with self._lock:
            return tuple(copy.deepcopy(self.session.actions))

    def preview_resolution(self) -> Tuple[BattlefieldSlot, ...]:
        with self._lock:
            return preview(self.session)

    # commands

    @_command
    def generate_roster(self, count: int) -> Result:
        if self.session.phase != Phase.SETUP:
            return False, "the roster can only be generated before the game starts"
        if count < 1:
            return False, "need at least one player"
        self.session.players[:] = [new_player(player_id) for player_id in range(1, count + 1)]
        self.session.add_supervisor_log(f"Generated {count} players.")
        return True, f"{count} players ready"

    @_command
    def advance_phase(self) -> Result:
        return phases.advance_phase(self.session, self.events)

    @_command
    def submit_attack_action(self, action: AttackAction) -> Result:
        session = self.session
        if session.phase != Phase.ACTION:
            return False, "attacks can only be submitted in the action phase"
        if len(session.actions) >= len(session.players):
            return False, "every player has already acted"
        player = session.find_player(action.player.id)
        if player is None:
            return False, f"unknown player {action.player.id}"
        if any(queued.player.id == player.id for queued in session.actions):
            return False, f"{player.name} has already acted this turn"
        if action.battlefield_id not in SLOT_IDS:
            return False, f"unknown battlefield {action.battlefield_id}"
        try:
            card = CardType(action.card_type)
            element = ElementType(action.element) if action.element is not None else None
        except ValueError as exc:
            return False, str(exc)
        if card == CardType.WAND:
            if element not in PLAYER_ELEMENTS:
                return False, "a wand attack needs fire, water or wood"
        else:
            element = None
        if card in SPELL_CARDS and DEFAULTS["enforce_card_counts"] and player.loot.spell_cards.get(card, 0) <= 0:
            return False, f"{player.name} has no {CARD_LABELS[card]} cards"

        queued = AttackAction(
            player=copy.deepcopy(player),
            battlefield_id=action.battlefield_id,
            card_type=card,
            element=element,
        )
        session.actions.append(queued)
        return True, f"{player.name}: {CARD_LABELS[card]} on {action.battlefield_id}"

    @_command
    def cancel_last_attack_action(self) -> Result:
        if not self.session.actions:
            return False, "no attack action to cancel"
        removed = self.session.actions.pop()
        return True, f"cancelled {removed.player.name}'s action"

    @_command
    def set_forced_event(self, event_name: Optional[str] = None, effect_description: Optional[str] = None) -> Result:
        # unknown names are accepted here and reported when the event fires
        set_forced_event(self.session, event_name, effect_description)
        if self.session.forced_event is None:
            return True, "next event: random"
        return True, f"next event: {event_name or 'random'}"

    @_command
    def enqueue_monster(self, monster: Monster) -> Result:
        spawner.enqueue(self.session, copy.deepcopy(monster))
        phases.settle_battlefield(self.session)
        return True, f"{monster.name} joins the queue"

    @_command
    def enqueue_random_monster(self) -> Result:
        monster = spawner.enqueue_random(self.session)
        phases.settle_battlefield(self.session)
        return True, f"{monster.name} joins the queue"

    @_command
    def force_next_monster(self, monster: Monster) -> Result:
        self.session.forced_monsters.append(copy.deepcopy(monster))
        return True, f"{monster.name} will be the next random spawn"

    @_command
    def update_player(
        self,
        player_id: int,
        name: Optional[str] = None,
        gold: Optional[int] = None,
        mana_stone: Optional[int] = None,
        attack: Optional[Dict[ElementType, int]] = None,
        spell_cards: Optional[Dict[CardType, int]] = None,
    ) -> Result:
        """GM edit of a player's sheet; omitted fields keep their value."""
        players = self.session.players
        index = next((i for i, player in enumerate(players) if player.id == player_id), None)
        if index is None:
            return False, f"unknown player {player_id}"
        player = players[index]
        loot = player.loot
        cards = dict(loot.spell_cards)
        new_attack = dict(player.attack)
        try:
            for card, count in (spell_cards or {}).items():
                cards[CardType(card)] = int(count)
            for element, value in (attack or {}).items():
                element = ElementType(element)
                if element not in PLAYER_ELEMENTS:
                    return False, "players only attack with fire, water or wood"
                new_attack[element] = int(value)
            new_gold = loot.gold if gold is None else int(gold)
            new_mana = loot.mana_stone if mana_stone is None else int(mana_stone)
        except (TypeError, ValueError) as exc:
            return False, str(exc)
        players[index] = replace(
            player,
            name=player.name if name is None else name,
            attack=new_attack,
            loot=replace(
                loot,
                gold=new_gold,
                mana_stone=new_mana,
                spell_cards=cards,
            ),
        )
        return True, f"updated {players[index].name}"
