"""Configuration, themes, chat model, read markers, key events and commands for a terminal chat client."""

__version__ = "0.1.0"