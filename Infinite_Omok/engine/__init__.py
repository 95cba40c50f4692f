"""Rule engine: win/draw detection, move validation, game state types, errors."""
