"""Slash commands and button handlers for farm sessions."""
