import pytest

from bots.base import BotMove
from bots.baseline_eights_last import EightsLastBot, best_suit, eights_last_move
from bots.random_bot import RandomBot
from eights.cards import Card, Rank, Suit
from eights.rules import IntentType, is_valid_move
from eights.state import GameState, GameStatus, Side


def test_only_eight_playable_picks_most_held_suit():
    hand = [
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.THREE, Suit.CLUBS),
        Card(Rank.FIVE, Suit.CLUBS),
        Card(Rank.NINE, Suit.DIAMONDS),
    ]
    move = eights_last_move(hand, Card(Rank.FOUR, Suit.SPADES), Suit.SPADES)
    assert move.card == Card(Rank.EIGHT, Suit.HEARTS)
    assert move.suit is Suit.CLUBS


def test_first_legal_non_eight_in_hand_order_wins():
    hand = [
        Card(Rank.EIGHT, Suit.SPADES),
        Card(Rank.TWO, Suit.CLUBS),
        Card(Rank.KING, Suit.HEARTS),
        Card(Rank.FOUR, Suit.HEARTS),
    ]
    move = eights_last_move(hand, Card(Rank.FOUR, Suit.SPADES), Suit.HEARTS)
    assert move.card == Card(Rank.KING, Suit.HEARTS)
    assert move.suit is None


def test_no_legal_move_draws():
    hand = [Card(Rank.TWO, Suit.CLUBS), Card(Rank.KING, Suit.DIAMONDS)]
    move = eights_last_move(hand, Card(Rank.FOUR, Suit.SPADES), Suit.SPADES)
    assert move.is_draw


def test_best_suit_ties_and_empty_hand():
    assert best_suit([]) is Suit.HEARTS
    tied = [Card(Rank.TWO, Suit.SPADES), Card(Rank.THREE, Suit.DIAMONDS)]
    assert best_suit(tied) is Suit.DIAMONDS


def test_policy_is_deterministic():
    hand = [Card(Rank.EIGHT, Suit.CLUBS), Card(Rank.SIX, Suit.SPADES)]
    top = Card(Rank.TWO, Suit.HEARTS)
    assert eights_last_move(hand, top, Suit.HEARTS) == eights_last_move(hand, top, Suit.HEARTS)


def test_eight_move_expands_to_play_then_select():
    intents = BotMove(card=Card(Rank.EIGHT, Suit.HEARTS), suit=Suit.CLUBS).intents(Side.OPPONENT)
    assert [intent.kind for intent in intents] == [IntentType.PLAY_CARD, IntentType.SELECT_SUIT]
    assert intents[1].suit is Suit.CLUBS
    with pytest.raises(ValueError):
        BotMove(card=Card(Rank.EIGHT, Suit.HEARTS)).intents(Side.OPPONENT)


def test_intents_for_only_on_own_turn():
    state = GameState(
        draw_pile=(),
        discard_pile=(Card(Rank.FOUR, Suit.SPADES),),
        player_hand=(Card(Rank.TWO, Suit.HEARTS),),
        opponent_hand=(Card(Rank.SIX, Suit.SPADES),),
        turn=Side.PLAYER,
        active_suit=Suit.SPADES,
        status=GameStatus.PLAYING,
    )
    bot = EightsLastBot()
    assert bot.intents_for(state, Side.OPPONENT) == []
    intents = bot.intents_for(state, Side.PLAYER)
    assert [intent.kind for intent in intents] == [IntentType.DRAW_CARD]


def test_random_bot_only_plays_legal_cards():
    bot = RandomBot(seed=3)
    hand = [Card(Rank.EIGHT, Suit.CLUBS), Card(Rank.SIX, Suit.SPADES), Card(Rank.TWO, Suit.HEARTS)]
    top = Card(Rank.TWO, Suit.DIAMONDS)
    for _ in range(20):
        move = bot.choose_move(hand, top, Suit.DIAMONDS)
        assert move.card is not None
        assert is_valid_move(move.card, top, Suit.DIAMONDS)
        if move.card.is_eight:
            assert move.suit is not None


def test_last_card_eight_skips_suit_selection():
    state = GameState(
        draw_pile=(),
        discard_pile=(Card(Rank.FOUR, Suit.HEARTS),),
        player_hand=(Card(Rank.TWO, Suit.CLUBS),),
        opponent_hand=(Card(Rank.EIGHT, Suit.SPADES),),
        turn=Side.OPPONENT,
        active_suit=Suit.HEARTS,
        status=GameStatus.PLAYING,
    )
    intents = EightsLastBot().intents_for(state, Side.OPPONENT)
    assert [intent.kind for intent in intents] == [IntentType.PLAY_CARD]
    assert intents[0].card_id == "8S"


def test_bot_move_names_suit_only_when_game_continues():
    move = BotMove(card=Card(Rank.EIGHT, Suit.HEARTS), suit=Suit.CLUBS)
    assert [i.kind for i in move.intents(Side.OPPONENT)] == [IntentType.PLAY_CARD, IntentType.SELECT_SUIT]
    assert [i.kind for i in move.intents(Side.OPPONENT, last_card=True)] == [IntentType.PLAY_CARD]
