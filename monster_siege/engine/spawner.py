# monster_siege/engine/spawner.py
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from ..content.balance import SPAWN
from ..content.monsters import DROP_CARDS, ELEMENT_POOL, GOBLIN_RAID, LEVEL_TIERS, MONSTER_NAMES, TOP_TIER
from .dice import chance, choice, rand_int, rng_for
from .models import CardType, ElementType, GameSession, Monster, MonsterLoot, Player, PLAYER_ELEMENTS

logger = logging.getLogger(__name__)


def make_monster(
    name: str,
    element: ElementType,
    max_hp: int,
    gold: int = 0,
    mana_stone: int = 0,
    spell_card: Optional[CardType] = None,
    skills: Sequence[str] = (),
) -> Monster:
    """Build a fresh, full-health monster (custom-monster path)."""
    if max_hp < 1:
        raise ValueError("max_hp must be at least 1")
    return Monster(
        name=name,
        type=element,
        max_hp=max_hp,
        hp=max_hp,
        loot=MonsterLoot(gold=gold, mana_stone=mana_stone, spell_card=spell_card),
        skills=tuple(skills),
    )


def goblin_raid() -> List[Monster]:
    return [make_monster(g["name"], g["type"], g["hp"], gold=g["gold"]) for g in GOBLIN_RAID]


def level_pool(monster_count: int) -> List[int]:
    for bound, pool in LEVEL_TIERS:
        if monster_count < bound:
            return pool
    return TOP_TIER


def average_attack(players: Sequence[Player]) -> float:
    # roster-wide attack total spread over the three elements
    if not players:
        return 0.0
    total = sum(player.attack.get(element, 0) for player in players for element in PLAYER_ELEMENTS)
    return total / 3


def average_hp(players: Sequence[Player], monster_count: int, turn: int, level: int) -> float:
    raw = (
        average_attack(players) * SPAWN["hp_attack_factor"]
        + monster_count * SPAWN["hp_count_factor"]
        + turn * SPAWN["hp_turn_factor"]
        + level * SPAWN["hp_level_factor"]
    )
    return raw ** SPAWN["hp_exponent"]


def roll_loot(level: int, r: random.Random) -> MonsterLoot:
    loot = MonsterLoot()
    rolls = 2 if level >= SPAWN["bonus_loot_level"] else 1
    for _ in range(rolls):
        if chance(SPAWN["gold_chance"], r):
            loot.gold += 1
        else:
            loot.mana_stone += 1
    if chance(SPAWN["spell_card_chance"], r):
        loot.spell_card = choice(DROP_CARDS, r)
    return loot


def random_monster(session: GameSession, r: Optional[random.Random] = None) -> Monster:
    r = r or rng_for(session.seed, "spawn", session.monster_count)
    level = choice(level_pool(session.monster_count), r)
    avg = average_hp(session.players, session.monster_count, session.turn, level)
    spread = SPAWN["hp_spread"]
    max_hp = max(1, rand_int(avg - spread, avg + spread, r))
    element = choice(ELEMENT_POOL, r)
    name = choice(MONSTER_NAMES[level][element], r)
    monster = Monster(name=name, type=element, max_hp=max_hp, hp=max_hp, loot=roll_loot(level, r))
    logger.debug("Spawned level %s %s (%s hp, avg %.2f)", level, name, max_hp, avg)
    return monster


def enqueue(session: GameSession, monster: Monster) -> None:
    session.queue.append(monster)
    session.monster_count += 1


def enqueue_random(session: GameSession) -> Monster:
    """GM-forced monsters go first; otherwise roll one."""
    if session.forced_monsters:
        monster = session.forced_monsters.pop(0)
    else:
        monster = random_monster(session)
    enqueue(session, monster)
    return monster
