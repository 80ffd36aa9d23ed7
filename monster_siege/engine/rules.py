# monster_siege/engine/rules.py
from typing import Dict, Optional

from .models import ElementType

# fire > wood > water > fire
_BEATS: Dict[ElementType, Optional[ElementType]] = {
    ElementType.FIRE: ElementType.WOOD,
    ElementType.WOOD: ElementType.WATER,
    ElementType.WATER: ElementType.FIRE,
    ElementType.NONE: None,
}

_WEAK_TO: Dict[ElementType, Optional[ElementType]] = {
    ElementType.FIRE: ElementType.WATER,
    ElementType.WATER: ElementType.WOOD,
    ElementType.WOOD: ElementType.FIRE,
    ElementType.NONE: None,
}


def clamp(x: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, x))


def beats(element: ElementType) -> Optional[ElementType]:
    """The element this one deals double damage to (None for no element)."""
    return _BEATS[element]


def weak_to(element: ElementType) -> Optional[ElementType]:
    """The element this one deals no damage to (None for no element)."""
    return _WEAK_TO[element]


def element_multiplier(attack: ElementType, target: ElementType) -> int:
    if target == ElementType.NONE:
        return 1
    if beats(attack) == target:
        return 2
    if weak_to(attack) == target:
        return 0
    return 1


def wand_damage(base: int, attack: ElementType, target: ElementType, neutral: bool = False) -> int:
    if neutral:
        return base
    return base * element_multiplier(attack, target)
