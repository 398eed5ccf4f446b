"""
Jaipur environment - turn coordinator

Owns the GameState, the current selection and phase. Every selection or
phase change re-runs the rule engine on the settled selection; confirm
executes the move once and hands control to the other player.

API:
- reset(seed) -> GameState
- select / deselect / toggle / set_selection / clear_selection / set_phase
- validity -> MoveValidity
- confirm() -> TurnConfirmed or None
- pass_turn()
"""
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union
import logging

from core.cards import cards_to_str
from core.actions import CardRef, MoveType, MoveValidity, Selection, TurnPhase
from core.config import GameConfig
from core.executor import MoveExecutor, MoveOutcome
from core.rules import RuleEngine
from core.state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionChanged:
    """The selected cards changed"""
    refs: Tuple[CardRef, ...]


@dataclass(frozen=True)
class ValidityChanged:
    """The classification of the current selection changed"""
    validity: MoveValidity


@dataclass(frozen=True)
class TurnConfirmed:
    """A move was executed"""
    move_type: MoveType
    player: int
    outcome: MoveOutcome


Event = Union[SelectionChanged, ValidityChanged, TurnConfirmed]
Listener = Callable[[Event], None]


class JaipurEnv:
    """
    Jaipur turn coordinator

    Human input and agents drive the same operations; the executor is
    only ever reached through confirm().
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        names: Sequence[str] = ("Player 1", "Player 2"),
    ):
        """
        Args:
            config: game configuration
            seed: random seed for deck and bonus shuffles
            names: player names
        """
        self.config = config or GameConfig()
        self._seed = seed
        self._names = tuple(names)

        self._listeners: List[Listener] = []
        self._state: Optional[GameState] = None
        self._selection = Selection()
        self._phase = TurnPhase.NONE
        self._validity = MoveValidity.INVALID

        self.reset(seed)

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    def reset(self, seed: Optional[int] = None, state: Optional[GameState] = None) -> GameState:
        """
        Start a new game

        Args:
            seed: random seed, kept for later resets
            state: resume from this state instead of dealing a new game

        Returns:
            the game state now owned by the environment
        """
        if seed is not None:
            self._seed = seed

        if state is not None:
            self._state = state
        else:
            self._state = GameState.initial(self.config, seed=self._seed, names=self._names)

        had_selection = len(self._selection) > 0
        self._selection = Selection()
        self._phase = TurnPhase.NONE
        if had_selection:
            self._emit(SelectionChanged(self._selection.refs))
        self._revalidate()

        logger.debug(f"New game (seed={self._seed})")
        return self._state

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def active_player(self) -> int:
        return self._state.active_player

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    def scores(self) -> Tuple[int, ...]:
        return self._state.scores()

    def get_winner(self) -> Optional[int]:
        return RuleEngine.get_winner(self._state)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: Event) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Selection and phase
    # ------------------------------------------------------------------

    @property
    def selection(self) -> Selection:
        """Copy of the current selection"""
        return self._selection.copy()

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    @property
    def validity(self) -> MoveValidity:
        return self._validity

    def _check_ref(self, ref: CardRef) -> None:
        # Raises ValueError if the ref does not resolve to a card
        Selection([ref]).partition(self._state.market, self._state.active_hand)

    def select(self, ref: CardRef) -> None:
        self._check_ref(ref)
        if ref in self._selection:
            return
        self._selection.add(ref)
        self._selection_changed()

    def deselect(self, ref: CardRef) -> None:
        if ref not in self._selection:
            return
        self._selection.remove(ref)
        self._selection_changed()

    def toggle(self, ref: CardRef) -> bool:
        """Select or deselect a card. Returns True if it is now selected."""
        if ref not in self._selection:
            self._check_ref(ref)
        selected = self._selection.toggle(ref)
        self._selection_changed()
        return selected

    def set_selection(self, refs: Iterable[CardRef]) -> None:
        """Replace the whole selection in one settled update"""
        selection = Selection(refs)
        selection.partition(self._state.market, self._state.active_hand)
        self._selection = selection
        self._selection_changed()

    def clear_selection(self) -> None:
        if not len(self._selection):
            return
        self._selection.clear()
        self._selection_changed()

    def set_phase(self, phase: TurnPhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        self._revalidate()

    def _selection_changed(self) -> None:
        self._emit(SelectionChanged(self._selection.refs))
        self._revalidate()

    def _revalidate(self) -> None:
        if self._state.is_game_over:
            validity = MoveValidity.INVALID
        else:
            validity = RuleEngine.validate(self._selection, self._phase, self._state)

        if validity != self._validity:
            self._validity = validity
            self._emit(ValidityChanged(validity))

    # ------------------------------------------------------------------
    # Turn
    # ------------------------------------------------------------------

    def confirm(self) -> Optional[TurnConfirmed]:
        """
        Execute the currently valid move

        Returns:
            TurnConfirmed, or None when the selection is Invalid
        """
        if not self._validity.is_valid:
            logger.warning(
                f"Confirm rejected: {self._selection!r} is not a legal move in phase {self._phase.name}"
            )
            return None

        player = self._state.active_player
        outcome = MoveExecutor.execute(self._state, self._selection, self._validity)

        self._selection.clear()
        self._phase = TurnPhase.NONE
        self._emit(SelectionChanged(self._selection.refs))
        self._revalidate()

        event = TurnConfirmed(move_type=outcome.move_type, player=player, outcome=outcome)
        self._emit(event)

        if not self._state.is_game_over:
            self._state.pass_turn()

        return event

    def pass_turn(self) -> None:
        """Hand control to the other player without moving"""
        if self._state.is_game_over:
            raise RuntimeError("Cannot pass the turn, the game is over")

        logger.info(f"{self._state.active.name} passes")
        self._selection.clear()
        self._phase = TurnPhase.NONE
        self._emit(SelectionChanged(self._selection.refs))
        self._state.pass_turn()
        self._revalidate()

    def render(self) -> str:
        """Text view of the board"""
        state = self._state
        lines = [
            f"Market: {cards_to_str(state.market.slots)}",
            f"Deck: {len(state.deck)} cards",
        ]
        for idx, player in enumerate(state.players):
            marker = "*" if idx == state.active_player else " "
            hand = player.hand
            goods = " ".join(g.value for g in hand.goods) or "-"
            lines.append(
                f"{marker} {player.name}: goods [{goods}] camels {hand.camels} score {player.score()}"
            )
        return "\n".join(lines)
