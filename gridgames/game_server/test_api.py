"""Tests for the grid games server API."""

import pytest
from fastapi.testclient import TestClient

from gridgames.game_server.main import app
from gridgames.game_server.store import session_store

# Test client with API key
API_KEY = "dev-api-key-changeme"
HEADERS = {"X-API-Key": API_KEY}


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_store():
    """Clear session store before each test."""
    session_store.clear()
    yield


def click(client, custom_id, player_id):
    return client.post(
        "/api/interaction",
        json={"custom_id": custom_id, "player_id": player_id},
        headers=HEADERS,
    )


def start_tictactoe(client, size=3):
    response = client.post("/api/tictactoe", json={"player_id": "alice", "size": size}, headers=HEADERS)
    session_id = response.json()["session_id"]
    click(client, f"tictactoe-{session_id}-join", "bob")
    return session_id


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_start_minesweeper(client):
    """Test starting a minesweeper game."""
    response = client.post("/api/minesweeper", json={"player_id": "alice", "mines": 4}, headers=HEADERS)
    assert response.status_code == 201
    data = response.json()
    assert data["outcome"] == "started"
    assert data["kind"] == "minesweeper"
    assert len(data["components"]) == 5
    assert all(not cell["disabled"] for row in data["components"] for cell in row)
    assert data["session_id"] in session_store.list_sessions()


def test_start_minesweeper_default_mines(client):
    response = client.post("/api/minesweeper", json={"player_id": "alice"}, headers=HEADERS)
    assert response.status_code == 201
    assert "3 mines" in response.json()["content"]


@pytest.mark.parametrize("mines", [0, 24])
def test_start_minesweeper_mines_out_of_range(client, mines):
    response = client.post("/api/minesweeper", json={"player_id": "alice", "mines": mines}, headers=HEADERS)
    assert response.status_code == 422


@pytest.mark.parametrize("size", [1, 6])
def test_start_tictactoe_size_out_of_range(client, size):
    response = client.post("/api/tictactoe", json={"player_id": "alice", "size": size}, headers=HEADERS)
    assert response.status_code == 422


def test_start_game_no_auth(client):
    """Test starting a game without API key."""
    response = client.post("/api/tictactoe", json={"player_id": "alice"})
    assert response.status_code == 422  # Missing header


def test_start_game_invalid_auth(client):
    """Test starting a game with invalid API key."""
    response = client.post("/api/tictactoe", json={"player_id": "alice"}, headers={"X-API-Key": "wrong-key"})
    assert response.status_code == 401
    assert "GRIDGAMES_API_KEY" in response.json()["detail"]


def test_tictactoe_full_game(client):
    """Test a tic-tac-toe game from join to win."""
    response = client.post("/api/tictactoe", json={"player_id": "alice", "size": 3}, headers=HEADERS)
    assert response.status_code == 201
    session_id = response.json()["session_id"]

    response = click(client, f"tictactoe-{session_id}-join", "bob")
    assert response.status_code == 200
    data = response.json()
    assert data["outcome"] == "updated"
    assert len(data["components"]) == 3

    for index, player in [(0, "alice"), (4, "bob"), (1, "alice"), (5, "bob")]:
        response = click(client, f"tictactoe-{session_id}-{index}", player)
        assert response.json()["outcome"] == "updated"

    response = click(client, f"tictactoe-{session_id}-2", "alice")
    data = response.json()
    assert data["outcome"] == "finished"
    assert data["content"].startswith("alice won")
    assert [cell["style"] for cell in data["components"][0]] == ["success"] * 3
    assert all(cell["disabled"] for row in data["components"] for cell in row)
    assert session_id not in session_store.list_sessions()


def test_not_your_turn(client):
    session_id = start_tictactoe(client)
    response = click(client, f"tictactoe-{session_id}-0", "bob")
    assert response.status_code == 200
    data = response.json()
    assert data["outcome"] == "rejected"
    assert data["ephemeral"] is True


def test_second_join(client):
    session_id = start_tictactoe(client)
    response = click(client, f"tictactoe-{session_id}-join", "carol")
    data = response.json()
    assert data["outcome"] == "rejected"
    assert session_store.get(session_id).game.player2 == "bob"


def test_expired_session(client):
    """Test clicking a cell of a game that no longer exists."""
    response = click(client, "minesweeper-0123456789abcdef-3", "alice")
    assert response.status_code == 200
    data = response.json()
    assert data["outcome"] == "expired"
    assert data["components"] == []


def test_malformed_component_id(client):
    response = click(client, "blackjack-hit", "alice")
    assert response.status_code == 400
    assert "Malformed" in response.json()["detail"]


def test_non_ascii_digit_cell(client):
    session_id = start_tictactoe(client)
    response = click(client, f"tictactoe-{session_id}-²", "alice")
    assert response.status_code == 400
    assert session_store.get(session_id).game.board == [None] * 9


def test_out_of_range_cell(client):
    session_id = start_tictactoe(client)
    response = click(client, f"tictactoe-{session_id}-42", "alice")
    assert response.status_code == 400


def test_list_and_delete_sessions(client):
    response = client.post("/api/minesweeper", json={"player_id": "alice"}, headers=HEADERS)
    session_id = response.json()["session_id"]

    response = client.get("/api/admin/sessions", headers=HEADERS)
    assert response.status_code == 200
    [summary] = response.json()
    assert summary["session_id"] == session_id
    assert summary["kind"] == "minesweeper"
    assert summary["status"] == "not_started"
    assert summary["created_at"] is not None

    response = client.delete(f"/api/admin/session/{session_id}", headers=HEADERS)
    assert response.status_code == 204
    response = client.delete(f"/api/admin/session/{session_id}", headers=HEADERS)
    assert response.status_code == 404
