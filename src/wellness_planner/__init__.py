"""Wellness Planner - wellness areas, goals and reflections tracking API."""

__version__ = "1.0.0"
