"""Guru: approval-prognosis scoring engine."""

from guru.consts import VERSION

__version__ = VERSION
