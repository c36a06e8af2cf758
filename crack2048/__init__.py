"""
Crack 2048
==========

Tile-merging puzzle engine: an N x N grid of power-of-two tiles moved and
merged under four directional commands, with level progression and score
accumulation.

- crack2048.core: the grid mutation engine and its Gymnasium wrapper
- crack2048.evaluation: seeded evaluation harness for agents

All tunable parameters are in game_config.yaml.
"""
