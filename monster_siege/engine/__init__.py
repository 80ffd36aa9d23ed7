# monster_siege/engine/__init__.py
