"""
Game state definition

Mutable aggregate of all game resources. Only the move executor writes
deck, market, hands, token banks and the discard pile; everything else
reads them.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING
from enum import Enum
import random
import copy

from .cards import Card, GoodType, CAMEL, build_deck, count_goods
from .config import GameConfig

if TYPE_CHECKING:
    from .executor import MoveOutcome


NUM_PLAYERS = 2


class BonusTier(Enum):
    """Bonus token tiers by number of cards sold in one move"""
    THREE = "three"
    FOUR = "four"
    FIVE = "five"

    @staticmethod
    def for_sale_size(num_cards: int) -> Optional['BonusTier']:
        """
        Bonus tier earned by a sale

        Args:
            num_cards: cards sold in a single move

        Returns:
            THREE for 3, FOUR for 4, FIVE for 5 or more, otherwise None
        """
        if num_cards == 3:
            return BonusTier.THREE
        if num_cards == 4:
            return BonusTier.FOUR
        if num_cards >= 5:
            return BonusTier.FIVE
        return None


@dataclass
class Deck:
    """Draw pile. The top card is the last element."""
    cards: List[Card] = field(default_factory=list)

    def draw(self) -> Optional[Card]:
        """Draw the top card, None when the deck is empty"""
        if not self.cards:
            return None
        return self.cards.pop()

    def draw_many(self, n: int) -> List[Card]:
        drawn = []
        for _ in range(n):
            card = self.draw()
            if card is None:
                break
            drawn.append(card)
        return drawn

    def __len__(self) -> int:
        return len(self.cards)


@dataclass
class Market:
    """
    Fixed row of face-up cards

    Slots are refilled in place; a slot is None only after the deck ran
    out during a refill.
    """
    slots: List[Optional[Card]] = field(default_factory=list)

    def card_at(self, slot: int) -> Optional[Card]:
        if not 0 <= slot < len(self.slots):
            raise ValueError(f"Market slot {slot} out of range")
        return self.slots[slot]

    def take(self, slot: int) -> Card:
        """Remove and return the card in a slot, leaving it empty"""
        card = self.card_at(slot)
        if card is None:
            raise ValueError(f"Market slot {slot} is empty")
        self.slots[slot] = None
        return card

    def put(self, slot: int, card: Card) -> None:
        if self.card_at(slot) is not None:
            raise ValueError(f"Market slot {slot} is occupied")
        self.slots[slot] = card

    def refill(self, slot: int, deck: Deck) -> bool:
        """
        Refill an empty slot from the deck

        Returns:
            False if the deck was empty (slot stays empty)
        """
        card = deck.draw()
        if card is None:
            return False
        self.put(slot, card)
        return True

    def camel_slots(self) -> List[int]:
        return [i for i, c in enumerate(self.slots) if c is not None and c.is_camel]

    def goods(self) -> List[Tuple[int, GoodType]]:
        """(slot, good) for every good in the market, in slot order"""
        return [(i, c.good_type) for i, c in enumerate(self.slots) if c is not None and c.is_good]

    @property
    def num_camels(self) -> int:
        return len(self.camel_slots())

    @property
    def is_full(self) -> bool:
        return all(c is not None for c in self.slots)

    def __len__(self) -> int:
        return sum(1 for c in self.slots if c is not None)


@dataclass
class Hand:
    """
    Player hand

    Attributes:
        goods: goods cards (order only matters for index-based selection)
        camels: camel count (camels are fungible)
    """
    goods: List[GoodType] = field(default_factory=list)
    camels: int = 0

    @classmethod
    def from_cards(cls, cards: List[Card]) -> 'Hand':
        """Partition dealt cards into goods and a camel count"""
        goods = [c.good_type for c in cards if c.is_good]
        camels = sum(1 for c in cards if c.is_camel)
        return cls(goods=goods, camels=camels)

    @property
    def num_goods(self) -> int:
        return len(self.goods)

    def goods_counts(self) -> Dict[GoodType, int]:
        return count_goods(self.goods)


@dataclass
class TokenBank:
    """
    Token stacks per good type plus bonus stacks per tier

    The top of each stack is the last element. Used both for the shared
    supply and for a player's holdings.
    """
    goods: Dict[GoodType, List[int]] = field(
        default_factory=lambda: {g: [] for g in GoodType}
    )
    bonus: Dict[BonusTier, List[int]] = field(
        default_factory=lambda: {t: [] for t in BonusTier}
    )

    @classmethod
    def create(cls, config: GameConfig, rng: random.Random) -> 'TokenBank':
        """
        Create the game supply

        Goods stacks keep their configured ascending order so the highest
        value is popped first; bonus stacks are shuffled.
        """
        goods = {g: list(config.goods_tokens.get(g.value, [])) for g in GoodType}
        bonus = {}
        for tier in BonusTier:
            values = list(config.bonus_tokens.get(tier.value, []))
            rng.shuffle(values)
            bonus[tier] = values
        return cls(goods=goods, bonus=bonus)

    @classmethod
    def empty(cls) -> 'TokenBank':
        return cls()

    def pop_goods(self, good: GoodType) -> Optional[int]:
        """Pop the top goods token, None once the stack is exhausted"""
        stack = self.goods[good]
        return stack.pop() if stack else None

    def pop_bonus(self, tier: BonusTier) -> Optional[int]:
        stack = self.bonus[tier]
        return stack.pop() if stack else None

    def num_exhausted_goods(self) -> int:
        return sum(1 for stack in self.goods.values() if not stack)

    def total(self) -> int:
        """Sum of all token values"""
        return (
            sum(sum(stack) for stack in self.goods.values())
            + sum(sum(stack) for stack in self.bonus.values())
        )


@dataclass
class PlayerState:
    """Per-player hand and token holdings"""
    name: str
    hand: Hand = field(default_factory=Hand)
    tokens: TokenBank = field(default_factory=TokenBank.empty)

    def score(self) -> int:
        return self.tokens.total()


@dataclass
class DiscardPile:
    """Append-only pile of sold goods"""
    cards: List[Card] = field(default_factory=list)

    def push(self, card: Card) -> None:
        self.cards.append(card)

    def top(self) -> Optional[Card]:
        return self.cards[-1] if self.cards else None

    def __len__(self) -> int:
        return len(self.cards)


@dataclass
class GameState:
    """
    Game state aggregate

    Attributes:
        config: game configuration
        deck: draw pile
        market: market row
        players: both players (index 0 and 1)
        tokens: shared token supply
        discard: discard pile
        active_player: index of the player making the current move
        is_game_over: terminal flag
        seed: seed used to shuffle deck and bonus tokens
        move_log: executed move outcomes
    """
    config: GameConfig
    deck: Deck
    market: Market
    players: List[PlayerState]
    tokens: TokenBank
    discard: DiscardPile = field(default_factory=DiscardPile)
    active_player: int = 0
    is_game_over: bool = False
    seed: Optional[int] = None
    move_log: List['MoveOutcome'] = field(default_factory=list)

    @classmethod
    def initial(
        cls,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        names: Tuple[str, str] = ("Player 1", "Player 2"),
    ) -> 'GameState':
        """
        Create the initial game state

        Args:
            config: game configuration
            seed: random seed
            names: player names

        Returns:
            new game with a full market and dealt hands
        """
        if len(names) != NUM_PLAYERS:
            raise ValueError(f"Jaipur needs {NUM_PLAYERS} players, got {len(names)}")

        config = config or GameConfig()
        rng = random.Random(seed)

        cards = build_deck(config.deck_composition)

        # Camels reserved for the market before shuffling
        for _ in range(config.initial_market_camels):
            cards.remove(CAMEL)
        rng.shuffle(cards)
        deck = Deck(cards)

        slots: List[Optional[Card]] = [CAMEL] * config.initial_market_camels
        slots.extend(deck.draw_many(config.market_size - config.initial_market_camels))
        market = Market(slots)

        players = []
        for name in names:
            dealt = deck.draw_many(config.starting_hand_size)
            players.append(PlayerState(name=name, hand=Hand.from_cards(dealt)))

        return cls(
            config=config,
            deck=deck,
            market=market,
            players=players,
            tokens=TokenBank.create(config, rng),
            seed=seed,
        )

    @property
    def active(self) -> PlayerState:
        return self.players[self.active_player]

    @property
    def opponent(self) -> PlayerState:
        return self.players[(self.active_player + 1) % NUM_PLAYERS]

    @property
    def active_hand(self) -> Hand:
        return self.active.hand

    @property
    def opponent_hand(self) -> Hand:
        return self.opponent.hand

    def pass_turn(self) -> None:
        """Hand control to the other player"""
        self.active_player = (self.active_player + 1) % NUM_PLAYERS

    def scores(self) -> Tuple[int, ...]:
        """Token totals per player"""
        return tuple(p.score() for p in self.players)

    def copy(self) -> 'GameState':
        """Deep copy, for evaluation that must not touch the live state"""
        return copy.deepcopy(self)
