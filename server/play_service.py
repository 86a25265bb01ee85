"""REST service to play Crazy Eights against the computer."""

from __future__ import annotations

import uuid
from dataclasses import asdict
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from bots.baseline_eights_last import EightsLastBot
from eights.config import GameConfig, configure_logging
from eights.service import GameService, GameView


class StartRequest(BaseModel):
    seed: Optional[int] = None
    opponent_delay: float = Field(1.0, ge=0)


class PlayRequest(BaseModel):
    card_id: str


class SuitRequest(BaseModel):
    suit: str


sessions: Dict[str, GameService] = {}


app = FastAPI(title="Crazy Eights Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def serialize_view(view: GameView) -> Dict[str, object]:
    payload = asdict(view)
    return {
        "status": payload["status"],
        "turn": payload["turn"],
        "activeSuit": payload["active_suit"],
        "pendingSuitSelection": payload["pending_suit_selection"],
        "hand": payload["hand"],
        "legalCards": payload["legal_cards"],
        "topDiscard": payload["top_discard"],
        "drawPileSize": payload["draw_pile_size"],
        "discardPileSize": payload["discard_pile_size"],
        "opponentCardCount": payload["opponent_card_count"],
        "winner": payload["winner"],
        "message": payload["message"],
        "rejected": payload["rejected"],
        "generation": payload["generation"],
    }


def ensure_session(session_id: str) -> GameService:
    service = sessions.get(session_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return service


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    config = GameConfig(seed=request.seed, opponent_delay=request.opponent_delay)
    service = GameService.from_config(config, strategy=EightsLastBot())
    session_id = uuid.uuid4().hex
    sessions[session_id] = service
    return {
        "session_id": session_id,
        "state": serialize_view(service.start_game()),
    }


@app.get("/session/{session_id}")
def get_state(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_view(service.get_view())}


@app.post("/session/{session_id}/play")
def play_card(session_id: str, request: PlayRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_view(service.play_card(request.card_id))}


@app.post("/session/{session_id}/suit")
def select_suit(session_id: str, request: SuitRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    try:
        view = service.select_suit(request.suit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"state": serialize_view(view)}


@app.post("/session/{session_id}/cancel-suit")
def cancel_suit(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_view(service.cancel_suit_selection())}


@app.post("/session/{session_id}/draw")
def draw_card(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_view(service.draw_card())}


@app.post("/session/{session_id}/restart")
def restart(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_view(service.start_game())}


@app.delete("/session/{session_id}")
def close_session(session_id: str) -> Dict[str, object]:
    service = sessions.pop(session_id, None)
    if service is None:
        raise HTTPException(status_code=404, detail="Session not found")
    service.close()
    return {"closed": session_id}


def main() -> None:
    import uvicorn

    configure_logging(GameConfig().log_level)
    uvicorn.run(app, host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
