# monster_siege/content/__init__.py
