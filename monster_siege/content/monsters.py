# monster_siege/content/monsters.py
from ..engine.models import CardType, ElementType

MONSTER_NAMES = {
    1: {
        ElementType.FIRE: ["Fire Slime", "Fire Sprite", "Fire Hilichurl"],
        ElementType.WATER: ["Water Slime", "Water Sprite", "Ice Hilichurl"],
        ElementType.WOOD: ["Grass Slime", "Grass Sprite"],
        ElementType.NONE: ["Skeleton", "Ghost"],
    },
    2: {
        ElementType.FIRE: ["Blazing Slime", "Volcano Goblin"],
        ElementType.WATER: ["Liquid Slime", "Tundra Goblin"],
        ElementType.WOOD: ["Verdant Slime", "Forest Goblin"],
        ElementType.NONE: ["Caveman"],
    },
    3: {
        ElementType.FIRE: ["Cappuccino Assassino", "Ballerina Cappuccina"],
        ElementType.WATER: ["Tralalero Tralala", "Trippi Troppi"],
        ElementType.WOOD: ["BrrBrr Patapim", "Lirili Larila"],
        ElementType.NONE: ["TungTung Sahur", "Bombardiro Crocodilo"],
    },
    4: {
        ElementType.FIRE: ["Fire Giant", "Ember Drake"],
        ElementType.WATER: ["Frost Giant", "Tide Drake"],
        ElementType.WOOD: ["Forest Giant", "Lizard Warrior"],
        ElementType.NONE: ["Shadow Giant", "Sinox"],
    },
    5: {
        ElementType.FIRE: ["Three-Headed Dragon"],
        ElementType.WATER: ["Three-Headed Dragon"],
        ElementType.WOOD: ["Three-Headed Dragon"],
        ElementType.NONE: ["Shadow Dragon"],
    },
}

# (monsters enqueued so far below this bound, weighted level pool)
LEVEL_TIERS = [
    (3, [1]),
    (6, [1, 1, 1, 2, 2]),
    (9, [1, 2, 2, 2, 2]),
    (12, [2, 2, 2, 3, 3]),
    (15, [2, 3, 3, 3, 3]),
]
TOP_TIER = [3]

ELEMENT_POOL = [
    ElementType.FIRE, ElementType.FIRE,
    ElementType.WATER, ElementType.WATER,
    ElementType.WOOD, ElementType.WOOD,
    ElementType.NONE,
]

DROP_CARDS = [CardType.ICE, CardType.BOMB, CardType.POISON]

GOBLIN_RAID = [
    {"name": "Scorching Goblin", "type": ElementType.FIRE, "hp": 5, "gold": 2},
    {"name": "Chilling Goblin", "type": ElementType.WATER, "hp": 5, "gold": 2},
    {"name": "Wild Goblin", "type": ElementType.WOOD, "hp": 5, "gold": 2},
]
