#!/usr/bin/env python3
"""
Watch two agents play Jaipur

Usage:
    python scripts/play.py                                 # utility vs utility
    python scripts/play.py --player2 random --games 10
    python scripts/play.py --player1 weighted --seed 42 --verbose
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List

# Add the project root to the path
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from ai import AGENT_KINDS, AIConfig, Agent, create_agent
from env import JaipurEnv, TurnConfirmed

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Jaipur AI vs AI")

    parser.add_argument("--games", type=int, default=1, help="Number of games")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the first game")
    parser.add_argument(
        "--player1",
        type=str,
        default="utility",
        choices=AGENT_KINDS,
        help="First player's agent",
    )
    parser.add_argument(
        "--player2",
        type=str,
        default="utility",
        choices=AGENT_KINDS,
        help="Second player's agent",
    )
    parser.add_argument("--threshold", type=float, default=0.1, help="Highest-score picker threshold")
    parser.add_argument(
        "--scoring",
        type=str,
        default="heuristic",
        choices=["heuristic", "random"],
        help="Scoring mode for utility agents",
    )
    parser.add_argument("--max-turns", type=int, default=500, help="Turn cap per game")
    parser.add_argument("--verbose", action="store_true", help="Print the board every turn")

    return parser.parse_args()


def create_agents(args) -> List[Agent]:
    agents = []
    for i, kind in enumerate([args.player1, args.player2]):
        seed = None if args.seed is None else args.seed + i
        config = AIConfig(threshold=args.threshold, scoring=args.scoring, seed=seed)
        agents.append(create_agent(kind, config, name=f"{kind}_{i + 1}"))
    return agents


def play_game(env: JaipurEnv, agents: List[Agent], max_turns: int, verbose: bool) -> int:
    """
    Play one game until it ends or the turn cap is hit

    Returns:
        number of turns played
    """
    for agent in agents:
        agent.reset()

    turns = 0
    while not env.is_game_over and turns < max_turns:
        if verbose:
            print("\n" + env.render())

        agent = agents[env.active_player]
        event = agent.take_turn(env)
        if event is None:
            env.pass_turn()
        elif verbose:
            print(f"{agent.name}: {event.move_type.name} (+{event.outcome.points})")
        turns += 1

    return turns


def main():
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
    )

    env = JaipurEnv(seed=args.seed)
    agents = create_agents(args)
    wins = [0, 0]

    for game_idx in range(args.games):
        seed = None if args.seed is None else args.seed + game_idx
        env.reset(seed)

        turns = play_game(env, agents, args.max_turns, args.verbose)
        scores = env.scores()
        winner = env.get_winner()

        if winner is not None:
            wins[winner] += 1

        if not env.is_game_over:
            result = "turn cap reached"
        elif winner is None:
            result = "tie"
        else:
            result = f"{agents[winner].name} wins"

        print("=" * 60)
        print(f"Game {game_idx + 1}/{args.games}: {result}")
        print(f"Scores: {agents[0].name} {scores[0]} - {agents[1].name} {scores[1]}")
        print(f"Turns: {turns}")

    if args.games > 1:
        print("=" * 60)
        print(f"Wins: {agents[0].name} {wins[0]} - {agents[1].name} {wins[1]}")


if __name__ == "__main__":
    main()
