"""Upcoming Go meetup events feed generator."""
