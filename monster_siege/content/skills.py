# monster_siege/content/skills.py
from dataclasses import replace

from ..engine.models import ElementType
from ..engine.rules import clamp
from .balance import DEFAULTS

ELEMENT_CYCLE = (ElementType.FIRE, ElementType.WATER, ElementType.WOOD)


def _cycle_element(monster, slot, battle, sink):
    if monster.type in ELEMENT_CYCLE:
        next_index = (ELEMENT_CYCLE.index(monster.type) + 1) % len(ELEMENT_CYCLE)
    else:
        next_index = 0
    new_type = ELEMENT_CYCLE[next_index]
    sink.supervisor(f"[{slot.id}] {monster.name}'s Element Cycle triggers, now {new_type.value}.")
    return replace(monster, type=new_type)


def _regenerate(monster, slot, battle, sink):
    healed = clamp(monster.hp + DEFAULTS["regeneration_heal"], monster.hp, monster.max_hp)
    sink.client(f"[{slot.id}] {monster.name}'s Regeneration triggers, HP restored to {healed}.")
    return replace(monster, hp=healed)


SKILL_DEFS = {
    "element_cycle": {
        "name": "Element Cycle",
        "description": "Each hit shifts its element: fire -> water -> wood -> fire.",
        "trigger": "onHit",
        "effect": _cycle_element,
    },
    "regeneration": {
        "name": "Regeneration",
        "description": "Recovers 2 HP at the end of every turn.",
        "trigger": "onTurnEnd",
        "effect": _regenerate,
    },
}
