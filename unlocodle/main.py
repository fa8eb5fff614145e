'''
UNLOCODLE API

Endpoints:
GET  /game          -> read board state
POST /game/letter   -> type one letter
POST /game/delete   -> delete the last letter
POST /game/enter    -> submit the current guess
POST /game/key      -> raw key event (physical keyboard)
POST /game/lock     -> hold/release input while the reveal animation plays

Extras:
POST /game/reset    -> forget the saved history and start over

Every response lists the notifications ("too_short", "invalid_guess", "win", "loss")
raised while handling it, so the front-end can show the right toast.
'''

import logging
import os
from typing import Callable, List

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware

from .db import SessionLocal
from .repository import DBHistoryStore
from .bootstrap_db import create_all    # dev-only: create tables
from .keys import dispatch_key
from .store import GameController
from .types import TOTAL_GUESSES

from .schemas import (
    GameStateOut,
    KeyRequest,
    LetterRequest,
    LockRequest,
    ScoredLetterOut,
)

APP_ENV = os.getenv("APP_ENV", "local")
SOLUTION = os.getenv("UNLOCODLE_SOLUTION", "USCLE").upper()
TOTAL = int(os.getenv("UNLOCODLE_TOTAL_GUESSES", str(TOTAL_GUESSES)))
GAME_KEY = os.getenv("UNLOCODLE_GAME_KEY", "default")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="UNLOCODLE API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# --- Dev convenience: auto-create tables locally ---
if APP_ENV == "local":
    @app.on_event("startup")
    def _dev_create_tables():
        create_all()

def build_controller() -> GameController:
    history = DBHistoryStore(SessionLocal, key=GAME_KEY)
    return GameController(SOLUTION, history, total_guesses=TOTAL)

# The game lives on app.state; built on first use so tests can swap it first
def get_controller(request: Request) -> GameController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        logger.info("Loading game %r", GAME_KEY)
        controller = build_controller()
        request.app.state.controller = controller
    return controller

def _to_state(controller: GameController, notifications: List[str]) -> GameStateOut:
    result = controller.result
    return GameStateOut(
        current_guess=controller.current_guess,
        committed_guesses=[
            [ScoredLetterOut(value=cell.value, color=cell.color) for cell in row]
            for row in controller.committed_guesses
        ],
        result=result,
        guesses_left=controller.guesses_left,
        input_locked=controller.input_locked,
        notifications=notifications,
        # Keep UI behavior: when the game ends, include the solution in the response
        solution=controller.session.solution if result != "unfinished" else None,
    )

def _run(controller: GameController, action: Callable[[], None]) -> GameStateOut:
    """Run one command and report only the notifications it raised."""
    notifications = controller.collect(action)
    return _to_state(controller, notifications)

# ---------------- Routes ----------------

@app.get("/game", response_model=GameStateOut, summary="Get current board state")
def get_game(controller: GameController = Depends(get_controller)) -> GameStateOut:
    return _to_state(controller, [])

@app.post("/game/letter", response_model=GameStateOut, summary="Type one letter")
def input_letter(
    payload: LetterRequest,
    controller: GameController = Depends(get_controller),
) -> GameStateOut:
    return _run(controller, lambda: controller.input_letter(payload.letter))

@app.post("/game/delete", response_model=GameStateOut, summary="Delete the last letter")
def delete_letter(controller: GameController = Depends(get_controller)) -> GameStateOut:
    return _run(controller, controller.delete_letter)

@app.post("/game/enter", response_model=GameStateOut, summary="Submit the current guess")
def enter_guess(controller: GameController = Depends(get_controller)) -> GameStateOut:
    return _run(controller, controller.enter_guess)

@app.post("/game/key", response_model=GameStateOut, summary="Handle a raw key event")
def press_key(
    payload: KeyRequest,
    controller: GameController = Depends(get_controller),
) -> GameStateOut:
    return _run(
        controller,
        lambda: dispatch_key(
            controller,
            payload.key,
            repeat=payload.repeat,
            meta_key=payload.meta_key,
            ctrl_key=payload.ctrl_key,
        ),
    )

@app.post("/game/lock", response_model=GameStateOut, summary="Hold or release the input lock")
def set_lock(
    payload: LockRequest,
    controller: GameController = Depends(get_controller),
) -> GameStateOut:
    if payload.locked:
        controller.lock_input()
    else:
        controller.unlock_input()
    return _to_state(controller, [])

@app.post("/game/reset", response_model=GameStateOut, summary="Clear saved history and start over")
def reset_game(controller: GameController = Depends(get_controller)) -> GameStateOut:
    controller.restart()
    return _to_state(controller, [])
