"""Fry Stack: a falling-block puzzle where fries fill rows and food items clear in threes."""

__version__ = "0.1.0"
