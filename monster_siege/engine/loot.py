# monster_siege/engine/loot.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .models import CardType, Monster, Player

CARD_LABELS = {
    CardType.WAND: "Wand",
    CardType.ICE: "Ice Spell",
    CardType.BOMB: "Bomb Spell",
    CardType.POISON: "Poison Spell",
}


@dataclass(frozen=True)
class LootReward:
    gold: int = 0
    mana_stone: int = 0
    spell_card: Optional[CardType] = None


def reward_for(monster: Monster, double_gold: bool = False) -> LootReward:
    gold = monster.loot.gold * 2 if double_gold else monster.loot.gold
    return LootReward(gold=gold, mana_stone=monster.loot.mana_stone, spell_card=monster.loot.spell_card)


def credit(player: Player, reward: LootReward) -> Player:
    """Return a new Player holding the reward; the old one is left untouched."""
    cards = dict(player.loot.spell_cards)
    if reward.spell_card is not None:
        cards[reward.spell_card] = cards.get(reward.spell_card, 0) + 1
    loot = replace(
        player.loot,
        gold=player.loot.gold + reward.gold,
        mana_stone=player.loot.mana_stone + reward.mana_stone,
        spell_cards=cards,
    )
    return replace(player, loot=loot)


def spend_card(player: Player, card: CardType) -> Player:
    # wand is infinite-use; counts are not floored at zero
    if card == CardType.WAND:
        return player
    cards = dict(player.loot.spell_cards)
    cards[card] = cards.get(card, 0) - 1
    return replace(player, loot=replace(player.loot, spell_cards=cards))


def describe(reward: LootReward) -> str:
    parts = []
    if reward.gold:
        parts.append(f"{reward.gold} gold")
    if reward.mana_stone:
        parts.append(f"{reward.mana_stone} mana stone")
    if reward.spell_card is not None:
        parts.append(f"1 {CARD_LABELS[reward.spell_card]} card")
    if not parts:
        return "no loot"
    return "gains " + ", ".join(parts)
