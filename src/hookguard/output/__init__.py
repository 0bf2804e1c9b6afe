"""Output: Rich console printer for run and hook results."""

from .printer import Printer

__all__ = ["Printer"]
