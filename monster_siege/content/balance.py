# monster_siege/content/balance.py
DEFAULTS = {
    "min_players": 2,
    "start_gold": 0,
    "start_mana_stone": 3,
    "start_wands": 1,
    "ice_damage": 2,
    "bomb_damage": 2,
    "poison_damage": 1,
    "regeneration_heal": 2,
    "enforce_card_counts": False,   # reject casts at 0 cards instead of going negative
    "broadcast_interval": 1.0,      # seconds between siege_state pushes
    "log_tail": 30,
}

SPAWN = {
    "hp_attack_factor": 1.5,
    "hp_count_factor": 0.8,
    "hp_turn_factor": 0.5,
    "hp_level_factor": 3,
    "hp_exponent": 0.8,
    "hp_spread": 2,
    "bonus_loot_level": 2,
    "spell_card_chance": 0.4,
    "gold_chance": 0.5,
}
