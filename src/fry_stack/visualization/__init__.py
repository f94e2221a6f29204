"""Pygame front end: renderer, audio feedback and the keyboard host loop."""
