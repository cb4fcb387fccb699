"""Game phases of a round-based match."""

from __future__ import annotations

from enum import IntEnum


class GamePhase(IntEnum):
    """A phase of the match, as networked by the game rules."""

    INIT = 0
    PREGAME = 1
    START_GAME_PHASE = 2
    TEAM_SIDE_SWITCH = 3
    GAME_HALF_ENDED = 4
    GAME_ENDED = 5
    STALE_MATE = 6
    GAME_OVER = 7

    def __str__(self) -> str:
        return _PHASE_NAMES[self]


_PHASE_NAMES = {
    GamePhase.INIT: "Init",
    GamePhase.PREGAME: "Pregame",
    GamePhase.START_GAME_PHASE: "Start game phase",
    GamePhase.TEAM_SIDE_SWITCH: "Team side switch",
    GamePhase.GAME_HALF_ENDED: "Game half ended",
    GamePhase.GAME_ENDED: "Game ended",
    GamePhase.STALE_MATE: "StaleMate",
    GamePhase.GAME_OVER: "GameOver",
}