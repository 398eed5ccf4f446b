"""Move executor tests"""
import random

import pytest

from core.actions import CardRef, MoveType, MoveValidity, Selection, TurnPhase
from core.cards import CAMEL, Card, GoodType
from core.config import GameConfig
from core.executor import MoveExecutor
from core.rules import RuleEngine
from core.state import BonusTier, Deck, GameState, Hand, Market, PlayerState, TokenBank

D, G, S = GoodType.DIAMOND, GoodType.GOLD, GoodType.SILVER
C, P, L = GoodType.CLOTH, GoodType.SPICE, GoodType.LEATHER


def make_state(market, goods=(), camels=0, deck=None) -> GameState:
    config = GameConfig()
    slots = [CAMEL if m == "camel" else (None if m is None else Card.of(m)) for m in market]
    deck_cards = [Card.of(L)] * 10 if deck is None else list(deck)
    return GameState(
        config=config,
        deck=Deck(deck_cards),
        market=Market(slots),
        players=[
            PlayerState("A", Hand(list(goods), camels)),
            PlayerState("B", Hand()),
        ],
        tokens=TokenBank.create(config, random.Random(0)),
    )


def play(state, refs, phase=TurnPhase.TAKE):
    """Validate then execute, as the environment does"""
    selection = Selection(refs)
    validity = RuleEngine.validate(selection, phase, state)
    assert validity.is_valid
    return MoveExecutor.execute(state, selection, validity)


def total_cards(state: GameState) -> int:
    in_hands = sum(p.hand.num_goods + p.hand.camels for p in state.players)
    return len(state.deck) + len(state.market) + in_hands + len(state.discard)


class TestTakeSingleGood:
    """Take single good execution"""

    def test_moves_good_and_refills(self):
        state = make_state([D, "camel", "camel", "camel", L], goods=[C], deck=[Card.of(S), Card.of(G)])

        outcome = play(state, [CardRef.market(0)])

        assert outcome.move_type == MoveType.TAKE_SINGLE_GOOD
        assert state.active_hand.goods == [C, D]
        assert state.market.card_at(0) == Card.of(G)
        assert len(state.deck) == 1
        assert outcome.cards_taken == [Card.of(D)]
        assert not state.is_game_over

    def test_empty_deck_ends_game(self):
        state = make_state([D, "camel", "camel", "camel", L], deck=[])

        outcome = play(state, [CardRef.market(0)])

        assert state.active_hand.goods == [D]
        assert state.market.card_at(0) is None
        assert state.is_game_over
        assert outcome.is_game_over


class TestTakeAllCamels:
    """Take all camels execution"""

    def test_takes_every_camel(self):
        deck = [Card.of(S), Card.of(G), Card.of(C)]
        state = make_state([D, "camel", "camel", "camel", L], camels=1, deck=deck)

        outcome = play(state, [CardRef.market(1), CardRef.market(2), CardRef.market(3)])

        assert state.active_hand.camels == 4
        assert state.market.slots == [Card.of(D), Card.of(C), Card.of(G), Card.of(S), Card.of(L)]
        assert len(state.deck) == 0
        assert outcome.cards_taken == [CAMEL] * 3
        # Deck emptied by the last draw, not by a failed refill
        assert not state.is_game_over

    def test_deck_runs_out(self):
        state = make_state([D, "camel", "camel", "camel", L], deck=[Card.of(G)])

        play(state, [CardRef.market(1), CardRef.market(2), CardRef.market(3)])

        assert state.active_hand.camels == 3
        assert state.market.slots == [Card.of(D), Card.of(G), None, None, Card.of(L)]
        assert state.is_game_over


class TestExchange:
    """Exchange execution"""

    def test_goods_and_camels(self):
        state = make_state([D, G, L, "camel", "camel"], goods=[C, S], camels=1)
        deck_size = len(state.deck)

        outcome = play(state, [
            CardRef.market(0), CardRef.market(1), CardRef.hand_good(0), CardRef.hand_camel(0),
        ])

        # Hand good swapped in place, camel replaced by a good at the end
        assert state.active_hand.goods == [D, S, G]
        assert state.active_hand.camels == 0
        assert state.market.slots == [Card.of(C), CAMEL, Card.of(L), CAMEL, CAMEL]
        assert len(state.deck) == deck_size
        assert sorted(map(str, outcome.cards_taken)) == ["diamond", "gold"]
        assert sorted(map(str, outcome.cards_given)) == ["camel", "cloth"]

    def test_camels_only(self):
        state = make_state([D, G, L, "camel", "camel"], goods=[C], camels=2)

        play(state, [CardRef.market(2), CardRef.market(0), CardRef.hand_camel(0), CardRef.hand_camel(1)])

        assert state.active_hand.goods == [C, L, D]
        assert state.active_hand.camels == 0
        assert state.market.slots == [CAMEL, Card.of(G), CAMEL, CAMEL, CAMEL]

    def test_card_count_unchanged(self):
        state = make_state([D, G, L, "camel", "camel"], goods=[C, S], camels=1)
        before = total_cards(state)
        play(state, [CardRef.market(0), CardRef.market(1), CardRef.hand_good(0), CardRef.hand_good(1)])
        assert total_cards(state) == before


class TestSell:
    """Sell execution"""

    def test_five_leather(self):
        state = make_state(["camel"] * 5, goods=[L, C, L, L, L, L])

        refs = [CardRef.hand_good(i) for i in (0, 2, 3, 4, 5)]
        outcome = play(state, refs, TurnPhase.SELL)

        assert state.active_hand.goods == [C]
        assert len(state.discard) == 5
        assert sorted(v for _, v in outcome.tokens_won) == [1, 1, 2, 3, 4]
        assert state.tokens.goods[L] == [1, 1, 1, 1]
        tier, bonus = outcome.bonus_won
        assert tier == BonusTier.FIVE
        assert bonus in (8, 9, 10)
        assert state.active.score() == 11 + bonus
        assert len(state.tokens.bonus[BonusTier.FIVE]) == 4

    def test_two_goods_no_bonus(self):
        state = make_state(["camel"] * 5, goods=[D, D])

        outcome = play(state, [CardRef.hand_good(0), CardRef.hand_good(1)], TurnPhase.SELL)

        assert outcome.tokens_won == [(D, 7), (D, 7)]
        assert outcome.bonus_won is None
        assert state.active.score() == 14

    def test_exhausted_stack_grants_nothing(self):
        state = make_state(["camel"] * 5, goods=[C, C, C])
        state.tokens.goods[C] = [5]
        state.tokens.bonus[BonusTier.THREE] = []

        outcome = play(state, [CardRef.hand_good(i) for i in range(3)], TurnPhase.SELL)

        assert outcome.tokens_won == [(C, 5)]
        assert outcome.bonus_won is None
        assert state.active_hand.goods == []

    def test_third_exhausted_stack_ends_game(self):
        state = make_state(["camel"] * 5, goods=[P])
        state.tokens.goods[D] = []
        state.tokens.goods[G] = []
        state.tokens.goods[P] = [1]

        outcome = play(state, [CardRef.hand_good(0)], TurnPhase.SELL)

        assert state.is_game_over
        assert outcome.is_game_over

    def test_two_exhausted_stacks_continue(self):
        state = make_state(["camel"] * 5, goods=[P])
        state.tokens.goods[D] = []
        state.tokens.goods[G] = []

        play(state, [CardRef.hand_good(0)], TurnPhase.SELL)

        assert not state.is_game_over


class TestExecute:
    """MoveExecutor.execute contract"""

    def test_invalid_raises(self):
        state = make_state([D, "camel", "camel", "camel", L])
        with pytest.raises(ValueError):
            MoveExecutor.execute(state, Selection([CardRef.market(0)]), MoveValidity.INVALID)

    def test_game_over_raises(self):
        state = make_state([D, "camel", "camel", "camel", L])
        state.is_game_over = True
        validity = MoveValidity.valid(MoveType.TAKE_SINGLE_GOOD)
        with pytest.raises(ValueError):
            MoveExecutor.execute(state, Selection([CardRef.market(0)]), validity)

    def test_mismatched_selection_raises(self):
        state = make_state([D, "camel", "camel", "camel", L])
        validity = MoveValidity.valid(MoveType.TAKE_SINGLE_GOOD)
        with pytest.raises(ValueError):
            MoveExecutor.execute(state, Selection([CardRef.market(1)]), validity)

    def test_move_log(self):
        state = make_state([D, "camel", "camel", "camel", L])
        outcome = play(state, [CardRef.market(0)])
        assert state.move_log == [outcome]
        assert outcome.player == 0

    def test_does_not_pass_turn(self):
        state = make_state([D, "camel", "camel", "camel", L])
        play(state, [CardRef.market(0)])
        assert state.active_player == 0

    def test_card_conservation_from_initial_state(self):
        state = GameState.initial(seed=3)
        camel_slots = state.market.camel_slots()
        play(state, [CardRef.market(s) for s in camel_slots])
        assert total_cards(state) == 55
