# monster_siege/engine/skills.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..content.skills import SKILL_DEFS
from .models import BattlefieldSlot, EventFlags, Monster, Player, SkillTrigger

if TYPE_CHECKING:
    from .resolver import ResolutionSink

logger = logging.getLogger(__name__)


@dataclass
class Battle:
    """The parts of a session combat and skills may touch."""
    players: List[Player]
    slots: List[BattlefieldSlot]
    queue: List[Monster]
    flags: EventFlags = field(default_factory=EventFlags)

    def slot(self, slot_id: str) -> Optional[BattlefieldSlot]:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None

    def player_index(self, player_id: int) -> Optional[int]:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return None


# apply(monster, slot, battle, sink) -> replacement monster, or None to keep it
SkillEffect = Callable[[Monster, BattlefieldSlot, Battle, "ResolutionSink"], Optional[Monster]]


@dataclass(frozen=True)
class Skill:
    id: str
    name: str
    description: str
    trigger: SkillTrigger
    apply: SkillEffect


SKILLS: Dict[str, Skill] = {}


def register_skill(skill: Skill) -> Skill:
    SKILLS[skill.id] = skill
    return skill


def skill_for(monster: Monster, trigger: SkillTrigger) -> Optional[Skill]:
    """First of the monster's skills bound to this trigger."""
    for skill_id in monster.skills:
        skill = SKILLS.get(skill_id)
        if skill is None:
            logger.warning("Monster %s references unknown skill %r", monster.name, skill_id)
            continue
        if skill.trigger == trigger:
            return skill
    return None


def trigger_skill(battle: Battle, slot: BattlefieldSlot, trigger: SkillTrigger, sink: "ResolutionSink") -> bool:
    """Fire the slot monster's skill for this trigger point, if it has one.

    The skill works on the monster as it is now; whatever it returns replaces
    the slot's monster, so the pre-effect object is never reused.
    """
    monster = slot.monster
    if monster is None:
        return False
    skill = skill_for(monster, trigger)
    if skill is None:
        return False
    updated = skill.apply(monster, slot, battle, sink)
    if updated is not None and slot.monster is monster:
        slot.monster = updated
    return True


def trigger_all(battle: Battle, trigger: SkillTrigger, sink: "ResolutionSink") -> int:
    fired = 0
    for slot in battle.slots:
        if trigger_skill(battle, slot, trigger, sink):
            fired += 1
    return fired


def _register_builtin_skills() -> None:
    for skill_id, data in SKILL_DEFS.items():
        register_skill(
            Skill(
                id=skill_id,
                name=data["name"],
                description=data["description"],
                trigger=SkillTrigger(data["trigger"]),
                apply=data["effect"],
            )
        )


_register_builtin_skills()
