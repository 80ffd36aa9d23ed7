# monster_siege/engine/dice.py
import math
import random
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")


def rng_for(seed: int, *keys) -> random.Random:
    # deterministic per session seed + draw keys (turn, purpose, counter...)
    salt = ":".join(str(key) for key in keys)
    return random.Random(f"{seed}:{salt}")


def weight_of(entry) -> float:
    weight = getattr(entry, "weight", None)
    return 1.0 if weight is None else float(weight)


def roulette(entries: Sequence[T], r: random.Random, weight: Callable[[T], float] = weight_of) -> Optional[T]:
    """Cumulative-weight draw: subtract weights in order until the remainder is <= 0."""
    if not entries:
        return None
    total = sum(weight(entry) for entry in entries)
    remainder = r.random() * total
    for entry in entries:
        remainder -= weight(entry)
        if remainder <= 0:
            return entry
    # float drift on the last subtraction
    return entries[-1]


def rand_int(lo: float, hi: float, r: random.Random) -> int:
    return r.randint(math.floor(lo), math.ceil(hi))


def chance(probability: float, r: random.Random) -> bool:
    return r.random() < probability


def choice(options: Sequence[T], r: random.Random) -> T:
    return options[r.randrange(len(options))]
