"""Preset scenario files."""

from pathlib import Path

DIR = Path(__file__).parent
