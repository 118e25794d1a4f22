"""Push channel tests: initial data on connect and updates on new transactions."""

from txnet.client import LiveGraphView, ViewPhase


def test_initial_data_on_connect(api_client):
    with api_client.websocket_connect("/ws") as websocket:
        message = websocket.receive_json()

    assert message["type"] == "initialData"
    assert len(message["data"]["nodes"]) == 12
    assert message["data"]["edges"] == []


def test_transaction_pushes_graph_update(api_client):
    """Seed A and B, post A->B, and observe the push on a connected client."""
    a = api_client.post("/api/businesses", json={"name": "A", "industry": "Retail"}).json()["data"]
    b = api_client.post("/api/businesses", json={"name": "B", "industry": "Energy"}).json()["data"]

    with api_client.websocket_connect("/ws") as websocket:
        websocket.receive_json()

        response = api_client.post(
            "/api/transactions",
            json={
                "from": a["business_id"],
                "to": b["business_id"],
                "amount": 500,
                "timestamp": "2024-06-01T12:00:00Z",
            },
        )
        update = websocket.receive_json()

    assert response.status_code == 200
    filtered = api_client.get(
        "/api/transactions/filter", params={"from": a["business_id"]}
    ).json()["data"]
    assert len(filtered) == 1
    assert filtered[0]["to"] == b["business_id"]
    assert filtered[0]["amount"] == 500

    assert update["type"] == "graphUpdate"
    assert update["data"]["newTransaction"]["from"] == "A"
    assert update["data"]["newTransaction"]["to"] == "B"
    assert update["data"]["newTransaction"]["fromId"] == a["business_id"]
    assert update["data"]["newTransaction"]["toId"] == b["business_id"]
    assert update["data"]["newTransaction"]["amount"] == 500
    assert update["data"]["edges"][0]["source"] == a["business_id"]


def test_update_is_sent_to_every_client(api_client, app_state):
    a, b = [
        item["business_id"] for item in api_client.get("/api/businesses").json()["data"][:2]
    ]

    with api_client.websocket_connect("/ws") as first, api_client.websocket_connect("/ws") as second:
        first.receive_json()
        second.receive_json()

        api_client.post("/api/transactions", json={"from": a, "to": b, "amount": 1, "timestamp": "1"})

        assert first.receive_json()["type"] == "graphUpdate"
        assert second.receive_json()["type"] == "graphUpdate"


def test_live_view_follows_push_channel(api_client):
    a, b = [
        item["business_id"] for item in api_client.get("/api/businesses").json()["data"][:2]
    ]
    view = LiveGraphView(seed=7)

    with api_client.websocket_connect("/ws") as websocket:
        view.apply_message(websocket.receive_text())
        positions = dict(view.positions)

        api_client.post("/api/transactions", json={"from": a, "to": b, "amount": 9, "timestamp": "1"})
        view.apply_message(websocket.receive_text())

    assert view.phase is ViewPhase.LAID_OUT
    assert view.positions == positions
    assert view.is_edge_highlighted(a, b)
    view.close()
