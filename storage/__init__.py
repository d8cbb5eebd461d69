"""Flat file persistence."""
