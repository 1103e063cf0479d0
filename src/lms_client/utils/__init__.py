"""Utility helpers for companion executables."""

from .binary import UtilBinary

__all__ = ["UtilBinary"]
