"""Tests for the live client's incremental layout and highlight decay."""

import asyncio
import json

import pytest

from txnet.client import HighlightTracker, LiveGraphView, ViewPhase, run_highlight_ticker


class FakeClock:
    def __init__(self):
        self.value = 0.0

    def __call__(self):
        return self.value


def _message(event, nodes, edges=(), new_transaction=None):
    data = {
        "nodes": [{"id": n, "label": n.upper(), "industry": "X"} for n in nodes],
        "edges": [
            {"id": i, "source": s, "target": t, "transactionCount": 1, "transactionAmount": 1.0}
            for i, (s, t) in enumerate(edges, start=1)
        ],
    }
    if new_transaction:
        data["newTransaction"] = new_transaction
    return {"type": event, "data": data}


def test_first_payload_runs_full_layout():
    view = LiveGraphView(seed=1)
    assert view.phase is ViewPhase.EMPTY

    view.apply_message(_message("initialData", ["a", "b", "c"], [("a", "b")]))

    assert view.phase is ViewPhase.LAID_OUT
    assert set(view.positions) == {"a", "b", "c"}
    assert view.layout_runs == 1


def test_edge_only_update_skips_layout():
    view = LiveGraphView(seed=1)
    view.apply_message(_message("initialData", ["a", "b"]))
    before = dict(view.positions)

    view.apply_message(_message("graphUpdate", ["a", "b"], [("a", "b")]))

    assert view.layout_runs == 1
    assert view.positions == before
    assert len(view.edges) == 1


def test_new_nodes_laid_out_around_fixed_ones():
    view = LiveGraphView(seed=1)
    view.apply_message(_message("initialData", ["a", "b"], [("a", "b")]))
    before = dict(view.positions)

    view.apply_message(_message("graphUpdate", ["a", "b", "c"], [("a", "b"), ("b", "c")]))

    assert view.layout_runs == 2
    assert view.positions["a"] == pytest.approx(before["a"])
    assert view.positions["b"] == pytest.approx(before["b"])
    assert "c" in view.positions


def test_payloads_replace_state_wholesale():
    view = LiveGraphView(seed=1)
    message = _message("initialData", ["a", "b"], [("a", "b")])

    view.apply_message(json.dumps(message))
    view.apply_message(json.dumps(message))

    assert [n.id for n in view.nodes] == ["a", "b"]
    assert len(view.edges) == 1


def test_unknown_events_ignored():
    view = LiveGraphView()
    view.apply_message({"type": "somethingElse", "data": {}})
    assert view.phase is ViewPhase.EMPTY


def test_highlight_decays_after_window():
    clock = FakeClock()
    view = LiveGraphView(seed=1, highlights=HighlightTracker(now=clock))
    transaction = {"from": "A", "to": "B", "amount": 5, "timestamp": "1"}

    view.apply_message(_message("graphUpdate", ["a", "b"], [("a", "b")], transaction))

    assert view.is_edge_highlighted("a", "b")
    assert view.is_row_highlighted(view.last_transaction)

    clock.value = 2.9
    assert view.tick() is False
    assert view.is_edge_highlighted("a", "b")

    clock.value = 3.0
    assert view.tick() is True
    assert not view.is_edge_highlighted("a", "b")
    assert not view.is_row_highlighted(view.last_transaction)


def test_remark_extends_highlight():
    clock = FakeClock()
    tracker = HighlightTracker(now=clock)
    tracker.mark("k")
    clock.value = 2.0
    tracker.mark("k")
    clock.value = 4.0

    assert tracker.active() == {"k"}


def test_close_clears_highlights():
    view = LiveGraphView(seed=1)
    view.apply_message(
        _message("graphUpdate", ["a", "b"], [("a", "b")], {"from": "A", "to": "B", "amount": 1, "timestamp": "1"})
    )

    view.close()

    assert not view.is_edge_highlighted("a", "b")


@pytest.mark.asyncio
async def test_ticker_reports_expiry_and_stops():
    clock = FakeClock()
    view = LiveGraphView(seed=1, highlights=HighlightTracker(now=clock))
    view.apply_message(
        _message("graphUpdate", ["a", "b"], [], {"from": "A", "to": "B", "amount": 1, "timestamp": "1"})
    )
    stop = asyncio.Event()
    expired = []

    def on_expire():
        expired.append(True)
        stop.set()

    clock.value = 10.0
    await asyncio.wait_for(run_highlight_ticker(view, on_expire, stop, interval=0.01), timeout=1)

    assert expired == [True]


def test_highlight_uses_ids_when_names_repeat():
    view = LiveGraphView(seed=1)
    message = {
        "type": "graphUpdate",
        "data": {
            "nodes": [
                {"id": "x1", "label": "Acme"},
                {"id": "x2", "label": "Acme"},
                {"id": "y", "label": "Beta"},
            ],
            "edges": [
                {"id": 1, "source": "x1", "target": "y", "transactionCount": 1, "transactionAmount": 5.0}
            ],
            "newTransaction": {
                "from": "Acme",
                "to": "Beta",
                "fromId": "x1",
                "toId": "y",
                "amount": 5,
                "timestamp": "1",
            },
        },
    }

    view.apply_message(message)

    assert view.is_edge_highlighted("x1", "y")
    assert not view.is_edge_highlighted("x2", "y")
