"""Agent tests"""
import random

import pytest

from ai.agents import (
    Agent,
    Decision,
    DecisionStatus,
    RandomAgent,
    UtilityAgent,
    create_agent,
)
from ai.config import AIConfig
from ai.scorers import ScoredMove
from core.actions import CardRef, MoveType, MoveValidity, Selection, TurnPhase
from core.cards import CAMEL, Card, GoodType
from core.config import GameConfig
from core.state import Deck, GameState, Hand, Market, PlayerState, TokenBank
from env.jaipur_env import JaipurEnv

D, G, S = GoodType.DIAMOND, GoodType.GOLD, GoodType.SILVER
C, P, L = GoodType.CLOTH, GoodType.SPICE, GoodType.LEATHER


def make_state(market, goods=(), camels=0, opp_goods=()) -> GameState:
    config = GameConfig()
    slots = [CAMEL if m == "camel" else (None if m is None else Card.of(m)) for m in market]
    return GameState(
        config=config,
        deck=Deck([Card.of(L)] * 10),
        market=Market(slots),
        players=[
            PlayerState("A", Hand(list(goods), camels)),
            PlayerState("B", Hand(list(opp_goods))),
        ],
        tokens=TokenBank.create(config, random.Random(0)),
    )


class TestUtilityAgent:
    """UtilityAgent tests"""

    def test_chooses_highest(self):
        state = make_state([L, C, "camel", "camel", "camel"], goods=[L, L])
        decision = UtilityAgent().act(state)

        assert decision.status == DecisionStatus.CHOSEN
        assert decision.move_type == MoveType.TAKE_SINGLE_GOOD
        assert len(decision.candidates) == 4

    def test_prefers_large_sale(self):
        state = make_state([C, P, "camel", "camel", "camel"], goods=[L, L, L, L, L])
        decision = UtilityAgent().act(state)
        assert decision.move_type == MoveType.SELL_GOODS

    def test_no_move_chosen(self):
        state = make_state([L, C, "camel", "camel", "camel"], goods=[L, L])
        agent = UtilityAgent(picker=lambda candidates: None)
        decision = agent.act(state)

        assert decision.status == DecisionStatus.NO_MOVE_CHOSEN
        assert not decision.is_chosen
        assert decision.move is None

    def test_below_threshold(self):
        state = make_state([L, C, "camel", "camel", "camel"], goods=[L, L])
        decision = UtilityAgent(AIConfig(threshold=1.0)).act(state)
        assert decision.status == DecisionStatus.NO_MOVE_CHOSEN

    def test_no_candidates(self):
        state = make_state([None] * 5)
        decision = UtilityAgent().act(state)
        assert decision.status == DecisionStatus.NO_CANDIDATES

    def test_does_not_mutate_state(self):
        state = GameState.initial(seed=11)
        before = state.copy()
        UtilityAgent(AIConfig(picker="weighted", seed=0)).act(state)
        assert state.market.slots == before.market.slots
        assert state.active_hand == before.active_hand


class TestRandomAgent:
    """RandomAgent tests"""

    def test_only_applicable_moves(self):
        # No camels in market, nothing to sell or exchange
        state = make_state([D, G, S, C, L])
        agent = RandomAgent(seed=0)
        for _ in range(10):
            assert agent.act(state).move_type == MoveType.TAKE_SINGLE_GOOD

    def test_no_candidates(self):
        state = make_state([None] * 5)
        assert RandomAgent(seed=0).act(state).status == DecisionStatus.NO_CANDIDATES

    def test_reset_replays(self):
        state = GameState.initial(seed=2)
        agent = RandomAgent(seed=4)
        first = [agent.act(state).move_type for _ in range(5)]
        agent.reset()
        assert [agent.act(state).move_type for _ in range(5)] == first


class TestTakeTurn:
    """Agent.take_turn tests"""

    def test_plays_through_env(self):
        env = JaipurEnv()
        env.reset(state=make_state([L, C, "camel", "camel", "camel"], goods=[L, L]))

        event = UtilityAgent().take_turn(env)

        assert event.move_type == MoveType.TAKE_SINGLE_GOOD
        assert event.player == 0
        assert env.state.players[0].hand.goods == [L, L, L]
        assert env.active_player == 1
        assert len(env.selection) == 0

    def test_no_move_leaves_state(self):
        env = JaipurEnv()
        env.reset(state=make_state([L, C, "camel", "camel", "camel"], goods=[L, L]))

        event = UtilityAgent(picker=lambda candidates: None).take_turn(env)

        assert event is None
        assert env.active_player == 0
        assert env.state.players[0].hand.goods == [L, L]

    def test_rejected_selection_leaves_env_clean(self):
        class CamelAsGoodAgent(Agent):
            def act(self, state):
                move = ScoredMove(
                    MoveType.TAKE_SINGLE_GOOD, 1.0, Selection([CardRef.market(2)])
                )
                return Decision(DecisionStatus.CHOSEN, move=move)

        env = JaipurEnv()
        env.reset(state=make_state([L, C, "camel", "camel", "camel"], goods=[L, L]))

        with pytest.raises(RuntimeError):
            CamelAsGoodAgent("bad").take_turn(env)

        assert len(env.selection) == 0
        assert env.phase == TurnPhase.NONE
        assert env.validity == MoveValidity.INVALID
        assert env.active_player == 0
        assert env.state.move_log == []


class TestCreateAgent:
    """create_agent tests"""

    def test_kinds(self):
        assert isinstance(create_agent("utility"), UtilityAgent)
        assert create_agent("utility").config.picker == "highest"
        assert create_agent("weighted").config.picker == "weighted"
        assert isinstance(create_agent("random"), RandomAgent)

    def test_name(self):
        assert create_agent("random").name == "random"
        assert create_agent("utility", name="Bot").name == "Bot"

    def test_keeps_config(self):
        agent = create_agent("weighted", AIConfig(seed=9, scoring="random"))
        assert agent.config.seed == 9
        assert agent.config.scoring == "random"

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_agent("minimax")
