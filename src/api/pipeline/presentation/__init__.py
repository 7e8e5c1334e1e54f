"""Pipeline presentation layer: board, moves, stage order and live events."""

from __future__ import annotations

from pipeline.presentation.routes import router

__all__ = ["router"]
