"""Client-side helpers for consuming the live graph push channel."""

from __future__ import annotations

from .live_view import HighlightTracker, LiveGraphView, ViewPhase, run_highlight_ticker

__all__ = ["HighlightTracker", "LiveGraphView", "ViewPhase", "run_highlight_ticker"]
