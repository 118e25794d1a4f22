"""
Live graph view state for push-channel clients.

Keeps the latest nodes and edges received over /ws, a cached position per
node, and short-lived highlights for newly arrived transactions. Rendering
is left to the caller; this module only decides where nodes sit and what is
highlighted.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Optional, Tuple, Union

import networkx as nx

from ..api.models.graph import (
    EnrichedTransaction,
    GraphEdge,
    GraphNode,
    GraphPayload,
    Transaction,
)
from ..utils.constants import (
    FULL_LAYOUT_ITERATIONS,
    GRAPH_UPDATE_EVENT,
    HIGHLIGHT_DURATION_SECONDS,
    HIGHLIGHT_TICK_SECONDS,
    INCREMENTAL_LAYOUT_ITERATIONS,
    INITIAL_DATA_EVENT,
)

logger = logging.getLogger(__name__)

Position = Tuple[float, float]


class ViewPhase(str, Enum):
    EMPTY = "empty"
    LAID_OUT = "laid_out"
    UPDATING = "updating"


class HighlightTracker:
    """
    Timestamp-based highlight decay.

    A key stays highlighted for `duration` seconds after it was last marked.
    Nothing is stored per frame; `tick()` only prunes expired entries so the
    renderer can poll it at a fixed cadence.
    """

    def __init__(
        self,
        duration: float = HIGHLIGHT_DURATION_SECONDS,
        now: Callable[[], float] = time.monotonic,
    ):
        self.duration = duration
        self.now = now
        self._marked: Dict[Hashable, float] = {}

    def mark(self, key: Hashable) -> None:
        self._marked[key] = self.now()

    def is_active(self, key: Hashable) -> bool:
        marked_at = self._marked.get(key)
        return marked_at is not None and self.now() - marked_at < self.duration

    def active(self) -> set:
        now = self.now()
        return {k for k, t in self._marked.items() if now - t < self.duration}

    def tick(self) -> bool:
        """Drop expired highlights. Returns True if anything expired."""
        now = self.now()
        expired = [k for k, t in self._marked.items() if now - t >= self.duration]
        for key in expired:
            del self._marked[key]
        return bool(expired)

    def clear(self) -> None:
        self._marked.clear()


def row_key(transaction: Transaction) -> Tuple[str, str, float, str]:
    return (transaction.from_, transaction.to, transaction.amount, transaction.timestamp)


class LiveGraphView:
    """
    Client-side view of the transaction graph.

    Phases go EMPTY -> LAID_OUT on the first payload, then through UPDATING
    back to LAID_OUT on every later one. Known nodes never move once placed;
    only nodes that were not in the cache are laid out, against the fixed
    positions of the rest.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        highlights: Optional[HighlightTracker] = None,
    ):
        self.seed = seed
        self.phase = ViewPhase.EMPTY
        self.nodes: list[GraphNode] = []
        self.edges: list[GraphEdge] = []
        self.positions: Dict[str, Position] = {}
        self.last_transaction: Optional[EnrichedTransaction] = None
        self.edge_highlights = highlights or HighlightTracker()
        self.row_highlights = HighlightTracker(
            self.edge_highlights.duration, self.edge_highlights.now
        )
        self.layout_runs = 0

    def apply_message(self, message: Union[str, bytes, Dict[str, Any]]) -> None:
        """
        Apply one push-channel message.

        Accepts the raw JSON text or the decoded envelope
        `{"type": ..., "data": {...}}`. Unknown event types are ignored.
        """
        if isinstance(message, (str, bytes)):
            message = json.loads(message)

        event = message.get("type")
        if event not in (INITIAL_DATA_EVENT, GRAPH_UPDATE_EVENT):
            logger.debug(f"Ignoring push event {event!r}")
            return

        self.apply_payload(GraphPayload.model_validate(message.get("data") or {}))

    def apply_payload(self, payload: GraphPayload) -> None:
        """Replace nodes and edges wholesale and update the layout."""
        self.nodes = list(payload.nodes)
        self.edges = list(payload.edges)

        if self.phase is ViewPhase.EMPTY:
            self._full_layout()
        else:
            self.phase = ViewPhase.UPDATING
            self._incremental_layout()
        self.phase = ViewPhase.LAID_OUT

        if payload.newTransaction is not None:
            self.last_transaction = payload.newTransaction
            self.edge_highlights.mark(self._edge_key(payload.newTransaction))
            self.row_highlights.mark(row_key(payload.newTransaction))

    def _edge_key(self, transaction: EnrichedTransaction) -> Tuple[str, str]:
        # Edges are keyed by business id; from/to carry names.
        if transaction.fromId and transaction.toId:
            return (transaction.fromId, transaction.toId)

        ids_by_label = {node.label: node.id for node in self.nodes if node.label}
        return (
            ids_by_label.get(transaction.from_, transaction.from_),
            ids_by_label.get(transaction.to, transaction.to),
        )

    def _build_graph(self) -> nx.Graph:
        graph = nx.Graph()
        graph.add_nodes_from(node.id for node in self.nodes)
        for edge in self.edges:
            if edge.source in graph and edge.target in graph:
                graph.add_edge(edge.source, edge.target, weight=edge.transactionCount)
        return graph

    def _full_layout(self) -> None:
        graph = self._build_graph()
        layout = nx.spring_layout(graph, iterations=FULL_LAYOUT_ITERATIONS, seed=self.seed)
        self.positions = {node: (float(x), float(y)) for node, (x, y) in layout.items()}
        self.layout_runs += 1

    def _incremental_layout(self) -> None:
        current = {node.id for node in self.nodes}
        # Nodes that disappeared from the payload lose their cached position.
        self.positions = {n: p for n, p in self.positions.items() if n in current}

        new_nodes = current - self.positions.keys()
        if not new_nodes:
            return

        graph = self._build_graph()
        fixed = list(self.positions)
        layout = nx.spring_layout(
            graph,
            pos=dict(self.positions) or None,
            fixed=fixed or None,
            iterations=INCREMENTAL_LAYOUT_ITERATIONS,
            seed=self.seed,
        )
        for node in new_nodes:
            x, y = layout[node]
            self.positions[node] = (float(x), float(y))
        self.layout_runs += 1

    def tick(self) -> bool:
        """Age out highlights. Returns True if a re-render is needed."""
        edges_expired = self.edge_highlights.tick()
        rows_expired = self.row_highlights.tick()
        return edges_expired or rows_expired

    def is_edge_highlighted(self, source: str, target: str) -> bool:
        return self.edge_highlights.is_active((source, target))

    def is_row_highlighted(self, transaction: Transaction) -> bool:
        return self.row_highlights.is_active(row_key(transaction))

    def close(self) -> None:
        """Tear down: clear highlights so no timer touches stale state."""
        self.edge_highlights.clear()
        self.row_highlights.clear()


async def run_highlight_ticker(
    view: LiveGraphView,
    on_expire: Callable[[], Any],
    stop: asyncio.Event,
    interval: float = HIGHLIGHT_TICK_SECONDS,
) -> None:
    """Poll highlight decay at a fixed cadence until `stop` is set."""
    while not stop.is_set():
        if view.tick():
            on_expire()
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass
