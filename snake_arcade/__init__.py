"""
Snake Arcade Package
====================

This package contains the snake game engine and its configuration:

- Grid movement and collision rules
- Food placement and type distribution
- Timed power-up effects (speed boost, double score)
- Scoring and the persisted high score
- Tick scheduling at a speed that follows the active effects

All tunable parameters are in game_config.yaml.
"""
