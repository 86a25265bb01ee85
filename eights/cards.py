"""Card-related data structures and helpers for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping


class Suit(Enum):
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value


# Rank order from lowest to highest.
RANK_ORDER: list[Rank] = list(Rank)

# Ordinals used for comparisons: numeric ranks literal, face cards 11-13, ace 14.
RANK_ORDINAL: dict[Rank, int] = {rank: index + 2 for index, rank in enumerate(RANK_ORDER)}

# Tie-break order when the computer picks a suit after an 8.
SUIT_PRECEDENCE: list[Suit] = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

SUIT_LETTERS: dict[Suit, str] = {suit: suit.name[0] for suit in Suit}


@dataclass(frozen=True)
class Card:
    """Immutable playing card with a stable identity such as ``"QH"``."""

    rank: Rank
    suit: Suit

    @property
    def id(self) -> str:
        return f"{self.rank.value}{SUIT_LETTERS[self.suit]}"

    @property
    def ordinal(self) -> int:
        return RANK_ORDINAL[self.rank]

    @property
    def is_eight(self) -> bool:
        return self.rank is Rank.EIGHT

    def __str__(self) -> str:
        return f"{self.rank.value}{SUIT_SYMBOLS[self.suit]}"


def parse_suit(value: str) -> Suit:
    """Return the suit named by ``value`` (case-insensitive name or letter)."""
    normalized = value.strip().upper()
    for suit in Suit:
        if normalized in (suit.name, SUIT_LETTERS[suit]):
            return suit
    raise ValueError(f"Unknown suit: {value!r}")


def parse_card(card_id: str) -> Card:
    """Return the card for an identity string such as ``"10S"``."""
    normalized = card_id.strip().upper()
    if len(normalized) < 2:
        raise ValueError(f"Invalid card id: {card_id!r}")
    rank_text, suit_text = normalized[:-1], normalized[-1]
    try:
        rank = Rank(rank_text)
    except ValueError as exc:
        raise ValueError(f"Invalid card id: {card_id!r}") from exc
    return Card(rank, parse_suit(suit_text))


def count_suits(cards: Iterable[Card]) -> dict[Suit, int]:
    counts = {suit: 0 for suit in SUIT_PRECEDENCE}
    for card in cards:
        counts[card.suit] += 1
    return counts


def serialize_card(card: Card) -> dict[str, object]:
    return {
        "id": card.id,
        "rank": card.rank.value,
        "suit": str(card.suit),
        "ordinal": card.ordinal,
    }


def deserialize_card(payload: Mapping[str, str]) -> Card:
    if "id" in payload:
        return parse_card(payload["id"])
    return Card(Rank(payload["rank"].upper()), parse_suit(payload["suit"]))


def card_label(card: Card) -> str:
    names = {
        Rank.JACK: "Jack",
        Rank.QUEEN: "Queen",
        Rank.KING: "King",
        Rank.ACE: "Ace",
    }
    rank_name = names.get(card.rank, card.rank.value)
    return f"{rank_name} of {card.suit.name.title()}"
