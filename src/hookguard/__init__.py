"""hookguard: run repository checks bound to git lifecycle events."""

__version__ = "0.1.0"
