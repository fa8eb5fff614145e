"""
Testing API via TestClient
- The client fixture puts a game with the known solution "USCLE" on app.state,
  backed by the SQLite test DB.
"""

def type_word(client, word):
    response = None
    for letter in word:
        response = client.post("/game/letter", json={"letter": letter})
        assert response.status_code == 200
    return response

def test_fresh_game_state(client):
    response = client.get("/game")
    assert response.status_code == 200
    body = response.json()
    assert body["current_guess"] == ""
    assert body["committed_guesses"] == []
    assert body["result"] == "unfinished"
    assert body["guesses_left"] == 6
    assert body["input_locked"] is False
    assert body["solution"] is None

def test_letter_validation(client):
    assert client.post("/game/letter", json={"letter": "AB"}).status_code == 422
    assert client.post("/game/letter", json={"letter": "?"}).status_code == 422

    response = client.post("/game/letter", json={"letter": "u"})
    assert response.status_code == 200
    assert response.json()["current_guess"] == "U"

def test_too_short_then_speed_then_win(client):
    """
    Flow:
    1) Enter with 3 letters -> "too_short", nothing committed.
    2) Finish SPEED -> scored row, still unfinished.
    3) USCLE -> "win" and solution revealed.
    """
    type_word(client, "SPE")
    response = client.post("/game/enter")
    body = response.json()
    assert body["notifications"] == ["too_short"]
    assert body["committed_guesses"] == []
    assert body["current_guess"] == "SPE"

    type_word(client, "ED")
    body = client.post("/game/enter").json()
    assert body["notifications"] == []
    assert body["current_guess"] == ""
    assert [cell["color"] for cell in body["committed_guesses"][0]] == [
        "exists", "no_match", "exists", "no_match", "no_match",
    ]

    type_word(client, "USCLE")
    body = client.post("/game/enter").json()
    assert body["notifications"] == ["win"]
    assert body["result"] == "win"
    assert body["solution"] == "USCLE"

def test_invalid_guess_notification(client):
    type_word(client, "XXXXX")
    body = client.post("/game/enter").json()
    assert body["notifications"] == ["invalid_guess"]
    assert body["committed_guesses"] == []

def test_six_misses_lose_and_seventh_enter_is_noop(client):
    for _ in range(6):
        type_word(client, "ABDFG")
        body = client.post("/game/enter").json()

    assert body["result"] == "loss"
    assert body["notifications"] == ["loss"]
    assert body["guesses_left"] == 0

    body = client.post("/game/enter").json()
    assert body["notifications"] == []
    assert len(body["committed_guesses"]) == 6

def test_key_events(client):
    for key in "uscle":
        client.post("/game/key", json={"key": key})
    client.post("/game/key", json={"key": "Backspace"})
    client.post("/game/key", json={"key": "e", "repeat": True})
    body = client.post("/game/key", json={"key": "e"}).json()
    assert body["current_guess"] == "USCLE"

    body = client.post("/game/key", json={"key": "Enter"}).json()
    assert body["result"] == "win"
    assert body["notifications"] == ["win"]

def test_lock_blocks_input_until_released(client):
    body = client.post("/game/lock", json={"locked": True}).json()
    assert body["input_locked"] is True

    body = type_word(client, "A").json()
    assert body["current_guess"] == ""

    client.post("/game/lock", json={"locked": False})
    body = type_word(client, "A").json()
    assert body["current_guess"] == "A"

def test_history_is_saved_and_reset_clears_it(client, history):
    type_word(client, "SPEED")
    client.post("/game/enter")
    assert len(history.load()) == 1

    body = client.post("/game/reset").json()
    assert body["committed_guesses"] == []
    assert body["result"] == "unfinished"
    assert history.load() == []

    # the fresh game is the one served afterwards
    assert client.get("/game").json()["committed_guesses"] == []
