# monster_siege/engine/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple


class ElementType(str, Enum):
    FIRE = "fire"
    WATER = "water"
    WOOD = "wood"
    NONE = "none"


class CardType(str, Enum):
    WAND = "wand"
    ICE = "ice"
    BOMB = "bomb"
    POISON = "poison"


class Phase(str, Enum):
    SETUP = "setup"
    EVENT = "event"
    PREP = "prep"
    ACTION = "action"
    RESOLUTION = "resolution"


class SkillTrigger(str, Enum):
    ON_APPEAR = "onAppear"
    ON_HIT = "onHit"
    ON_TURN_START = "onTurnStart"
    ON_TURN_END = "onTurnEnd"


PLAYER_ELEMENTS: Tuple[ElementType, ...] = (ElementType.FIRE, ElementType.WATER, ElementType.WOOD)
SPELL_CARDS: Tuple[CardType, ...] = (CardType.ICE, CardType.BOMB, CardType.POISON)
SLOT_IDS: Tuple[str, ...] = ("A", "B", "C")


def empty_attack() -> Dict[ElementType, int]:
    return {element: 0 for element in PLAYER_ELEMENTS}


def empty_cards() -> Dict[CardType, int]:
    return {card: 0 for card in CardType}


@dataclass
class PlayerLoot:
    gold: int = 0
    mana_stone: int = 0
    spell_cards: Dict[CardType, int] = field(default_factory=empty_cards)


@dataclass
class Player:
    id: int
    name: str
    attack: Dict[ElementType, int] = field(default_factory=empty_attack)
    loot: PlayerLoot = field(default_factory=PlayerLoot)


@dataclass
class MonsterLoot:
    gold: int = 0
    mana_stone: int = 0
    spell_card: Optional[CardType] = None   # at most one drop


@dataclass
class Monster:
    name: str
    type: ElementType
    max_hp: int
    hp: int
    loot: MonsterLoot = field(default_factory=MonsterLoot)
    skills: Tuple[str, ...] = ()


@dataclass
class BattlefieldSlot:
    id: str
    monster: Optional[Monster] = None
    poisoned_by: List[int] = field(default_factory=list)   # ordered, no duplicates
    last_iced_by: Optional[int] = None


def empty_battlefield() -> List[BattlefieldSlot]:
    return [BattlefieldSlot(id=slot_id) for slot_id in SLOT_IDS]


@dataclass
class AttackAction:
    player: Player
    battlefield_id: str
    card_type: CardType
    element: Optional[ElementType] = None    # wand only


@dataclass(frozen=True)
class EventEffect:
    description: str
    apply: Callable[["GameSession"], None]
    weight: Optional[float] = None


@dataclass(frozen=True)
class GameEvent:
    name: str
    effects: Tuple[EventEffect, ...]
    weight: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.effects:
            raise ValueError(f"event '{self.name}' needs at least one effect")


@dataclass
class EventFlags:
    double_gold: bool = False
    all_attacks_neutral: bool = False
    disabled_element: Optional[ElementType] = None


@dataclass
class ForcedEvent:
    event_name: Optional[str] = None
    effect_description: Optional[str] = None


@dataclass(frozen=True)
class GameLog:
    round: int
    phase: Phase
    message: str


@dataclass
class GameSession:
    session_id: str
    seed: int = 0                          # for deterministic draws
    turn: int = 1
    phase: Phase = Phase.SETUP
    players: List[Player] = field(default_factory=list)
    battlefield: List[BattlefieldSlot] = field(default_factory=empty_battlefield)
    queue: List[Monster] = field(default_factory=list)
    forced_monsters: List[Monster] = field(default_factory=list)
    monster_count: int = 0                 # monsters ever enqueued
    actions: List[AttackAction] = field(default_factory=list)
    event: Optional[GameEvent] = None
    flags: EventFlags = field(default_factory=EventFlags)
    forced_event: Optional[ForcedEvent] = None
    log: List[GameLog] = field(default_factory=list)
    supervisor_log: List[GameLog] = field(default_factory=list)

    def add_client_log(self, message: str) -> None:
        """Public line; the supervisor log gets a copy."""
        entry = GameLog(round=self.turn, phase=self.phase, message=message)
        self.log.append(entry)
        self.supervisor_log.append(entry)

    def add_supervisor_log(self, message: str) -> None:
        self.supervisor_log.append(GameLog(round=self.turn, phase=self.phase, message=message))

    def find_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None
