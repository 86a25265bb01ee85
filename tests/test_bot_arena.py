from random import Random

from bots.baseline_eights_last import EightsLastBot
from bots.bot_arena import play_game, run_match
from bots.random_bot import RandomBot
from eights.cards import Card, Rank, Suit
from eights.rules import Intent
from eights.state import GameState, GameStatus, Side, conservation_errors


def test_run_match_executes():
    results = run_match(EightsLastBot(), RandomBot(seed=1), n_games=3, seed=7)
    assert len(results["wins"]) == 2
    assert sum(results["wins"]) + results["unfinished"] == 3
    assert len(results["history"]) == 3


def test_play_game_ends_with_cards_conserved():
    state = play_game(EightsLastBot(), EightsLastBot(), rng=Random(5))
    assert conservation_errors(state) == []
    if state.status is GameStatus.PLAYING:
        assert state.player_hand and state.opponent_hand
    else:
        assert not state.player_hand or not state.opponent_hand


def test_run_match_is_reproducible():
    first = run_match(EightsLastBot(), EightsLastBot(), n_games=2, seed=3)
    second = run_match(EightsLastBot(), EightsLastBot(), n_games=2, seed=3)
    assert first == second


def last_eight_state() -> GameState:
    return GameState(
        draw_pile=(Card(Rank.TWO, Suit.HEARTS),),
        discard_pile=(Card(Rank.FOUR, Suit.HEARTS),),
        player_hand=(Card(Rank.KING, Suit.CLUBS),),
        opponent_hand=(Card(Rank.EIGHT, Suit.SPADES),),
        turn=Side.OPPONENT,
        active_suit=Suit.HEARTS,
        status=GameStatus.PLAYING,
    )


class AlwaysNameSuitBot(EightsLastBot):
    """Names a suit after every 8, even one that ends the game."""

    def intents_for(self, state, side):
        return [
            Intent.play("8S", side),
            Intent.select_suit(Suit.CLUBS, side),
        ]


def test_play_game_ends_on_last_card_eight():
    state = play_game(EightsLastBot(), EightsLastBot(), rng=Random(1), state=last_eight_state())
    assert state.status is GameStatus.LOST
    assert state.opponent_hand == ()


def test_play_game_ignores_intents_after_game_ends():
    state = play_game(EightsLastBot(), AlwaysNameSuitBot(), rng=Random(1), state=last_eight_state())
    assert state.status is GameStatus.LOST
    assert state.active_suit is Suit.SPADES
