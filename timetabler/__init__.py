"""Greedy school timetable generator."""

__version__ = "0.1.0"
