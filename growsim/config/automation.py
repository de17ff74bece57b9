"""Employee automation configuration constants."""

SKILL_SCALE = 0.1  # skill = (efficiency - 1) x scale
AUTO_FERTILIZE_PHASES = (2, 4)
AUTO_REPLANT_SOIL = "light-mix"
