"""Supplementary tooling for inspecting planned routes."""

from .stopover_map import build_stopover_map

__all__ = ["build_stopover_map"]
