"""
Selection session state.

An explicit state container for the selection workflow (motor -> gearbox
conditions -> candidates -> result). Every change replaces the whole
immutable snapshot; subscribers receive the new snapshot after each
change. The sizing functions never read this state themselves; callers
pass its fields in explicitly.
"""

from typing import Callable, Optional

from pydantic import BaseModel, Field

from gearsel.models.catalog import Motor, Reducer
from gearsel.models.selection import OperatingConditions, SelectionResult

FIRST_STEP = 1
LAST_STEP = 5

Subscriber = Callable[["SessionState"], None]


class SessionState(BaseModel):
    """Snapshot of one user's in-progress selection."""
    current_step: int = Field(default=FIRST_STEP, ge=FIRST_STEP, le=LAST_STEP)
    selected_motor: Optional[Motor] = None
    selected_reducer: Optional[Reducer] = None
    selected_ratio: Optional[float] = None
    selected_type: str = ""
    selected_series: str = ""
    operating_conditions: OperatingConditions = Field(default_factory=OperatingConditions)
    selection_result: Optional[SelectionResult] = None

    model_config = {"frozen": True}


class SelectionSession:
    """
    Owns the state of one selection session.

    Changing an upstream choice clears the choices that depend on it:
    a new motor clears type, series, ratio, reducer and result; a new
    type clears series, ratio and reducer; a new series clears ratio and
    reducer.
    """

    def __init__(self, state: Optional[SessionState] = None):
        self._state = state or SessionState()
        self._subscribers: list[Subscriber] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for state changes.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _replace(self, **changes) -> SessionState:
        self._state = self._state.model_copy(update=changes)
        for callback in list(self._subscribers):
            callback(self._state)
        return self._state

    # Navigation

    def go_to_step(self, step: int) -> SessionState:
        return self._replace(current_step=max(FIRST_STEP, min(LAST_STEP, step)))

    def go_next(self) -> SessionState:
        return self.go_to_step(self._state.current_step + 1)

    def go_prev(self) -> SessionState:
        return self.go_to_step(self._state.current_step - 1)

    # Choices

    def set_motor(self, motor: Optional[Motor]) -> SessionState:
        return self._replace(
            selected_motor=motor,
            selected_type="",
            selected_series="",
            selected_ratio=None,
            selected_reducer=None,
            selection_result=None,
        )

    def set_type(self, reducer_type: str) -> SessionState:
        return self._replace(
            selected_type=reducer_type,
            selected_series="",
            selected_ratio=None,
            selected_reducer=None,
        )

    def set_series(self, series: str) -> SessionState:
        return self._replace(
            selected_series=series,
            selected_ratio=None,
            selected_reducer=None,
        )

    def set_ratio(self, ratio: Optional[float]) -> SessionState:
        return self._replace(selected_ratio=ratio)

    def set_reducer(self, reducer: Optional[Reducer]) -> SessionState:
        return self._replace(selected_reducer=reducer)

    def set_operating_conditions(self, **changes) -> SessionState:
        """Update some operating conditions; the rest keep their values."""
        conditions = OperatingConditions.model_validate(
            {**self._state.operating_conditions.model_dump(), **changes}
        )
        return self._replace(operating_conditions=conditions)

    def set_selection_result(self, result: Optional[SelectionResult]) -> SessionState:
        if result is None:
            return self._replace(selection_result=None)
        return self._replace(
            selection_result=result,
            selected_reducer=result.reducer,
            selected_ratio=result.selected_ratio,
        )

    def reset(self) -> SessionState:
        """Drop every choice and the result, back to step 1."""
        self._state = SessionState()
        for callback in list(self._subscribers):
            callback(self._state)
        return self._state
