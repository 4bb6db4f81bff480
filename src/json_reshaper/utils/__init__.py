"""Utility functions for the JSON Reshaper."""

from .validation import ValidationUtils

__all__ = ["ValidationUtils"]
