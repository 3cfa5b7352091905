"""Bundled JSON caisson templates."""
