# monster_siege/content/events.py
from ..engine.loot import LootReward, credit
from ..engine.models import ElementType
from ..engine.spawner import goblin_raid

CALM_EVENT = "Calm"


def _nothing(session):
    pass


def _spirit_blessing(session):
    session.players[:] = [credit(player, LootReward(mana_stone=1)) for player in session.players]


def _all_neutral(session):
    session.flags.all_attacks_neutral = True


def _disable(element):
    def apply(session):
        session.flags.disabled_element = element
    return apply


def _goblin_raid(session):
    # goblins cut in line ahead of everything already queued
    session.queue[:0] = goblin_raid()


def _gold_rush(session):
    session.flags.double_gold = True


EVENT_DEFS = [
    {
        "name": CALM_EVENT,
        "weight": 5,
        "effects": [
            {"description": "A calm turn, nothing happens.", "apply": _nothing},
        ],
    },
    {
        "name": "Travelling Merchant",
        "weight": 1,
        "effects": [
            {"description": "A travelling merchant appears; players may spend gold on spell cards.", "apply": _nothing},
        ],
    },
    {
        "name": "Spirit's Blessing",
        "weight": 1,
        "effects": [
            {"description": "A spirit descends; every player gains 1 mana stone.", "apply": _spirit_blessing},
        ],
    },
    {
        "name": "Elemental Chaos",
        "weight": 3,
        "effects": [
            {"description": "Elemental chaos: all attacks count as no element.", "weight": 1, "apply": _all_neutral},
            {"description": "Elemental chaos: fire attacks have no effect.", "weight": 1, "apply": _disable(ElementType.FIRE)},
            {"description": "Elemental chaos: water attacks have no effect.", "weight": 1, "apply": _disable(ElementType.WATER)},
            {"description": "Elemental chaos: wood attacks have no effect.", "weight": 1, "apply": _disable(ElementType.WOOD)},
        ],
    },
    {
        "name": "Goblin Raid",
        "weight": 1,
        "effects": [
            {"description": "Three goblins rush the front of the line: 5 HP each, 2 gold per kill.", "apply": _goblin_raid},
        ],
    },
    {
        "name": "Gold Rush",
        "weight": 1,
        "effects": [
            {"description": "Kills this turn pay double gold.", "apply": _gold_rush},
        ],
    },
]
