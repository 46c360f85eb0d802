"""Bulletin-board posts."""
