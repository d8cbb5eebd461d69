"""Typer application."""
