"""
Gravity Worm
============

A one-button cave flyer. Hold the action button to climb, release to fall,
and keep the worm inside the scrolling cave while collecting prizes.

- worm_core: simulation, renderers and the Gymnasium wrapper
- evaluation: agent scoring over a fixed seed bank

All tunable parameters are in game_config.yaml.
"""
