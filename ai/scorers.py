"""
Utility scorers

One scorer per move type. Each computes a desirability score in [0, 1]
and caches the concrete selection the executor would act on. Scorers only
read the state.
"""
from dataclasses import dataclass
from typing import List, Optional
import logging

import numpy as np

from core.actions import CardRef, MoveType, Selection
from core.cards import GoodType, count_goods
from core.state import GameState, Hand, Market

from .config import AIConfig

logger = logging.getLogger(__name__)

HIGH_VALUE_MULTIPLIER = 1.5
SELL_WEIGHT_PER_CARD = 0.2


@dataclass
class ScoredMove:
    """
    A scored candidate move

    Attributes:
        move_type: move this score is for
        score: desirability in [0, 1]
        selection: cards to select, None when the move is inapplicable
    """
    move_type: MoveType
    score: float
    selection: Optional[Selection] = None

    @property
    def is_applicable(self) -> bool:
        return self.selection is not None


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return float(np.clip(value, low, high))


def _goods_count_score(count: int) -> float:
    """Score for ending up with `count` goods of one type"""
    return clamp(((count + 1) * 2) / 10)


def score_take_single_good(
    market: Market,
    hand: Hand,
    opponent_hand: Optional[Hand] = None,
    hand_limit: int = 7,
) -> ScoredMove:
    """
    Score taking one good from the market

    The market good maximising ((count + 1) * 2) / 10 is kept, where count is
    how many of that good the hand would hold after taking it; high value
    goods are weighted by 1.5.
    """
    if hand.num_goods >= hand_limit:
        return ScoredMove(MoveType.TAKE_SINGLE_GOOD, 0.0)

    hand_counts = hand.goods_counts()
    best_slot = None
    best_score = -1.0

    for slot, good in market.goods():
        count = hand_counts.get(good, 0) + 1
        score = _goods_count_score(count)
        if good.is_high_value:
            score = clamp(score * HIGH_VALUE_MULTIPLIER)
        if score > best_score:
            best_score = score
            best_slot = slot

    if best_slot is None:
        return ScoredMove(MoveType.TAKE_SINGLE_GOOD, 0.0)

    return ScoredMove(
        MoveType.TAKE_SINGLE_GOOD,
        best_score,
        Selection([CardRef.market(best_slot)]),
    )


def score_sell_goods(
    market: Market,
    hand: Hand,
    opponent_hand: Optional[Hand] = None,
    hand_limit: int = 7,
) -> ScoredMove:
    """
    Score selling the largest group of same-type goods

    High value goods held fewer than twice cannot be sold and are ignored.
    Ties go to high value goods, then to GoodType order.
    """
    counts = hand.goods_counts()
    eligible = [
        g for g in GoodType
        if g in counts and not (g.is_high_value and counts[g] < 2)
    ]
    if not eligible:
        return ScoredMove(MoveType.SELL_GOODS, 0.0)

    good = max(eligible, key=lambda g: (counts[g], g.is_high_value))
    score = counts[good] * SELL_WEIGHT_PER_CARD
    if good.is_high_value:
        score *= HIGH_VALUE_MULTIPLIER

    selection = Selection(
        CardRef.hand_good(i) for i, g in enumerate(hand.goods) if g == good
    )
    return ScoredMove(MoveType.SELL_GOODS, clamp(score), selection)


def camels_score(num_camels_in_market: int, num_goods_in_hand: int, num_goods_in_opponent_hand: int) -> float:
    """
    (c^2 - 2 * (0.5 * g)^2 + o) * 0.8 / 32, clamped

    A market full of camels against an empty hand and a full opposing hand
    (25 - 0 + 7 = 32) maps to 0.8, the score of selling four goods.
    """
    weighted_camels = num_camels_in_market ** 2
    weighted_goods = 2.0 * (0.5 * num_goods_in_hand) ** 2
    raw = (weighted_camels - weighted_goods + num_goods_in_opponent_hand) * 0.8 / 32.0
    return clamp(raw)


def score_take_all_camels(
    market: Market,
    hand: Hand,
    opponent_hand: Optional[Hand] = None,
    hand_limit: int = 7,
) -> ScoredMove:
    """Score taking every camel in the market"""
    camel_slots = market.camel_slots()
    if not camel_slots:
        return ScoredMove(MoveType.TAKE_ALL_CAMELS, 0.0)

    opponent_goods = opponent_hand.num_goods if opponent_hand is not None else 0
    score = camels_score(len(camel_slots), hand.num_goods, opponent_goods)
    logger.debug(
        f"camels score: market camels {len(camel_slots)}, hand goods {hand.num_goods}, "
        f"opponent goods {opponent_goods} -> {score:.3f}"
    )
    return ScoredMove(
        MoveType.TAKE_ALL_CAMELS,
        score,
        Selection(CardRef.market(slot) for slot in camel_slots),
    )


def score_exchange_goods(
    market: Market,
    hand: Hand,
    opponent_hand: Optional[Hand] = None,
    hand_limit: int = 7,
) -> ScoredMove:
    """
    Score exchanging hand cards for market goods

    Trade material is camels (capped so the hand stays within the limit)
    followed by hand goods held once and absent from the market. Market
    goods are paired in descending order of the count the hand would reach
    by taking every unit of that type.
    """
    market_goods = market.goods()
    if not market_goods:
        return ScoredMove(MoveType.EXCHANGE_FOR_GOODS_FROM_MARKET, 0.0)

    hand_counts = hand.goods_counts()
    market_counts = count_goods(g for _, g in market_goods)

    # Hand count per type if every market unit of it were taken
    projected = {g: n + hand_counts.get(g, 0) for g, n in market_counts.items()}

    num_camels_permitted = max(0, min(hand_limit - hand.num_goods, hand.camels))
    single_goods = [
        CardRef.hand_good(i)
        for i, g in enumerate(hand.goods)
        if hand_counts[g] == 1 and g not in market_counts
    ]
    material = [CardRef.hand_camel(i) for i in range(num_camels_permitted)] + single_goods

    ordered_market = sorted(market_goods, key=lambda x: projected[x[1]], reverse=True)
    pairs = list(zip(material, ordered_market))

    if len(pairs) < 2:
        return ScoredMove(MoveType.EXCHANGE_FOR_GOODS_FROM_MARKET, 0.0)

    highest_count = max(projected[g] for _, (_, g) in pairs)
    score = _goods_count_score(highest_count)

    selection = Selection()
    for hand_ref, (slot, _) in pairs:
        selection.add(hand_ref)
        selection.add(CardRef.market(slot))

    return ScoredMove(MoveType.EXCHANGE_FOR_GOODS_FROM_MARKET, score, selection)


SCORERS = {
    MoveType.TAKE_SINGLE_GOOD: score_take_single_good,
    MoveType.TAKE_ALL_CAMELS: score_take_all_camels,
    MoveType.EXCHANGE_FOR_GOODS_FROM_MARKET: score_exchange_goods,
    MoveType.SELL_GOODS: score_sell_goods,
}

# Moves whose score is drawn at random in "random" scoring mode
RANDOM_SCORED_MOVES = (MoveType.TAKE_SINGLE_GOOD, MoveType.TAKE_ALL_CAMELS)


def score_all(
    state: GameState,
    config: Optional[AIConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[ScoredMove]:
    """
    Score every move type for the active player

    Scorers run in MoveType declaration order, which pickers rely on for
    tie-breaking.

    Args:
        state: game state (not modified)
        config: AI configuration
        rng: generator for random scoring mode, required when
            config.scoring is "random"

    Returns:
        one ScoredMove per MoveType

    Raises:
        ValueError: random scoring without a generator
    """
    config = config or AIConfig()
    hand_limit = state.config.hand_limit
    results = []

    for move_type in MoveType:
        scored = SCORERS[move_type](
            state.market, state.active_hand, state.opponent_hand, hand_limit
        )
        if (
            config.scoring == "random"
            and move_type in RANDOM_SCORED_MOVES
            and scored.is_applicable
        ):
            if rng is None:
                raise ValueError("Random scoring needs a generator shared across turns")
            scored.score = float(rng.random())
        results.append(scored)

    logger.debug(
        "scores: " + ", ".join(f"{s.move_type.name}={s.score:.3f}" for s in results)
    )
    return results
