"""Order status state machine, defined as data.

The transition table is a mapping of state -> allowed target states loaded at
startup. Deployments pick a built-in table or load their own from JSON, so an
intermediate state such as ``confirmed`` is a configuration change rather
than a code change.

Terminal states are the ones with no outgoing transitions.
"""

import json
from pathlib import Path

from protean.exceptions import ValidationError

STANDARD = "standard"
WITH_CONFIRMATION = "with_confirmation"

_LABELS = {
    "pending": "Pending",
    "confirmed": "Confirmed",
    "accepted": "Accepted",
    "delivered": "Delivered",
    "cancelled": "Cancelled",
}

_BUILTIN_TABLES = {
    STANDARD: {
        "initial": "pending",
        "transitions": {
            "pending": ["accepted", "cancelled"],
            "accepted": ["delivered", "cancelled"],
            "delivered": [],
            "cancelled": [],
        },
    },
    WITH_CONFIRMATION: {
        "initial": "pending",
        "transitions": {
            "pending": ["confirmed", "cancelled"],
            "confirmed": ["accepted", "cancelled"],
            "accepted": ["delivered", "cancelled"],
            "delivered": [],
            "cancelled": [],
        },
    },
}


class LifecycleConfigError(ValueError):
    """The transition table is not usable."""


class OrderLifecycle:
    def __init__(self, transitions, initial, labels=None, timeline=None):
        if not transitions:
            raise LifecycleConfigError("Transition table is empty")

        self._transitions = {state: tuple(targets) for state, targets in transitions.items()}
        for state, targets in self._transitions.items():
            unknown = [target for target in targets if target not in self._transitions]
            if unknown:
                raise LifecycleConfigError(f"State {state!r} targets undefined state(s): {', '.join(unknown)}")
        if initial not in self._transitions:
            raise LifecycleConfigError(f"Initial state {initial!r} is not in the transition table")

        self._initial = initial
        self._labels = {**_LABELS, **(labels or {})}

        if timeline is not None:
            unknown = [state for state in timeline if state not in self._transitions]
            if unknown:
                raise LifecycleConfigError(f"Timeline names undefined state(s): {', '.join(unknown)}")
            self._timeline = tuple(timeline)
        else:
            self._timeline = self._happy_path()

    # -------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------
    @classmethod
    def builtin(cls, name: str = STANDARD) -> "OrderLifecycle":
        try:
            table = _BUILTIN_TABLES[name]
        except KeyError:
            raise LifecycleConfigError(
                f"Unknown order lifecycle {name!r}; choose one of {', '.join(sorted(_BUILTIN_TABLES))}"
            ) from None
        return cls(table["transitions"], table["initial"])

    @classmethod
    def from_mapping(cls, data: dict) -> "OrderLifecycle":
        """Build from ``{"initial": ..., "transitions": {...}, "labels": {...}, "timeline": [...]}``."""
        try:
            transitions = data["transitions"]
        except (KeyError, TypeError):
            raise LifecycleConfigError("Lifecycle definition needs a 'transitions' mapping") from None
        if not isinstance(transitions, dict):
            raise LifecycleConfigError("'transitions' must map each state to a list of target states")
        initial = data.get("initial") or next(iter(transitions), None)
        return cls(transitions, initial, labels=data.get("labels"), timeline=data.get("timeline"))

    @classmethod
    def from_json_file(cls, path) -> "OrderLifecycle":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise LifecycleConfigError(f"Cannot read order lifecycle from {path}: {exc}") from exc
        return cls.from_mapping(data)

    def _happy_path(self) -> tuple:
        # Follow the first listed target of each state until a terminal state.
        path = [self._initial]
        state = self._initial
        while self._transitions[state]:
            state = self._transitions[state][0]
            if state in path:
                break
            path.append(state)
        return tuple(path)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def initial(self) -> str:
        return self._initial

    @property
    def states(self) -> tuple:
        return tuple(self._transitions)

    def knows(self, state) -> bool:
        return state in self._transitions

    def allowed_from(self, state) -> tuple:
        return self._transitions.get(state, ())

    def can_transition(self, current, target) -> bool:
        return target in self.allowed_from(current)

    def is_terminal(self, state) -> bool:
        return self.knows(state) and not self._transitions[state]

    def label(self, state) -> str:
        return self._labels.get(state, str(state).replace("_", " ").title())

    def timeline(self) -> tuple:
        """States shown on the tracking view, in order."""
        return self._timeline

    def assert_can_transition(self, current, target) -> None:
        """Raise ValidationError keyed ``status`` when ``current -> target`` is not allowed."""
        if not self.knows(target):
            raise ValidationError({"status": [f"Unknown status {target!r}"]})
        if not self.can_transition(current, target):
            raise ValidationError({"status": [f"Cannot transition from {current} to {target}"]})

    def as_dict(self) -> dict:
        return {
            "initial": self._initial,
            "transitions": {state: list(targets) for state, targets in self._transitions.items()},
            "timeline": list(self._timeline),
        }
