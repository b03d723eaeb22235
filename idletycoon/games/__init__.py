"""Bundled game catalogs. Each module exposes ``define_game()``."""
