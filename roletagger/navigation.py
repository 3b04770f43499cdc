"""
Keyboard and pointer navigation over the suggestion list.

The whole tag input is modelled as a pure reducer:

    reduce(state, event) -> Transition(state, effects, handled, outcome)

States are Idle (no suggestions shown) and Browsing (suggestions shown,
active_index meaningful). Effects are the two notifications the host has to
persist: SelectionChanged and RegistryGrew. Nothing in this module performs
I/O or mutates its inputs.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union

from .selection import SelectionState
from .suggest import CreateNew, Existing, Suggestion, suggest
from .tags import clean_tag, find_tag


class Phase(str, Enum):
    IDLE = "idle"
    BROWSING = "browsing"


class Key(str, Enum):
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ENTER = "Enter"
    ESCAPE = "Escape"


# Outcomes reported alongside a transition, used for logging and metrics
SELECTED = "selected"
CREATED = "created"
FOLDED = "folded"
ALREADY_SELECTED = "already_selected"
STALE = "stale"
REMOVED = "removed"
NOT_SELECTED = "not_selected"


# Events

@dataclass(frozen=True)
class InputChanged:
    text: str


@dataclass(frozen=True)
class KeyPressed:
    key: Key


@dataclass(frozen=True)
class SuggestionClicked:
    index: int


@dataclass(frozen=True)
class SuggestionHovered:
    index: int


@dataclass(frozen=True)
class FocusLost:
    pass


@dataclass(frozen=True)
class RemoveTag:
    tag: str


Event = Union[InputChanged, KeyPressed, SuggestionClicked, SuggestionHovered, FocusLost, RemoveTag]


# Effects

@dataclass(frozen=True)
class SelectionChanged:
    selection: Tuple[str, ...]


@dataclass(frozen=True)
class RegistryGrew:
    tag: str


Effect = Union[SelectionChanged, RegistryGrew]


@dataclass(frozen=True)
class TaggerState:
    """Everything the tag input needs to render and react to the next event."""

    registry: Tuple[str, ...] = ()
    selection: SelectionState = field(default_factory=SelectionState)
    input_text: str = ""
    suggestions: Tuple[Suggestion, ...] = ()
    active_index: int = -1

    @property
    def phase(self) -> Phase:
        return Phase.BROWSING if self.suggestions else Phase.IDLE

    @property
    def active_suggestion(self) -> Optional[Suggestion]:
        if 0 <= self.active_index < len(self.suggestions):
            return self.suggestions[self.active_index]
        return None


class Transition(NamedTuple):
    state: TaggerState
    effects: Tuple[Effect, ...] = ()
    handled: bool = False  # host should suppress its default key behaviour
    outcome: Optional[str] = None


def reduce(state: TaggerState, event: Event) -> Transition:
    """Apply one input event to the tagger state."""
    if isinstance(event, InputChanged):
        return Transition(_recompute(state, event.text))
    if isinstance(event, KeyPressed):
        try:
            key = Key(event.key)
        except ValueError:
            return Transition(state)
        return _on_key(state, key)
    if isinstance(event, SuggestionClicked):
        if not 0 <= event.index < len(state.suggestions):
            return Transition(state, outcome=STALE)
        return _commit(state, state.suggestions[event.index])
    if isinstance(event, SuggestionHovered):
        if not 0 <= event.index < len(state.suggestions):
            return Transition(state)
        return Transition(replace(state, active_index=event.index))
    if isinstance(event, FocusLost):
        return Transition(_dismiss(state))
    if isinstance(event, RemoveTag):
        return _remove(state, event.tag)
    raise TypeError(f"Unknown event: {event!r}")


def _recompute(state: TaggerState, text: str) -> TaggerState:
    suggestions = suggest(text, state.selection, state.registry)
    return replace(state, input_text=text, suggestions=suggestions, active_index=-1)


def _dismiss(state: TaggerState) -> TaggerState:
    return replace(state, suggestions=(), active_index=-1)


def _clear(state: TaggerState) -> TaggerState:
    return replace(state, input_text="", suggestions=(), active_index=-1)


def _on_key(state: TaggerState, key: Key) -> Transition:
    n = len(state.suggestions)
    if n > 0:
        if key == Key.ARROW_DOWN:
            return Transition(replace(state, active_index=(state.active_index + 1) % n), handled=True)
        if key == Key.ARROW_UP:
            # From -1 this lands on n - 2, not the last item
            return Transition(replace(state, active_index=(state.active_index - 1 + n) % n), handled=True)
        if key == Key.ESCAPE:
            return Transition(_dismiss(state), handled=True)

    if key != Key.ENTER:
        return Transition(state)

    text = clean_tag(state.input_text)
    if not text:
        return Transition(state)

    highlighted = state.active_suggestion
    if highlighted is not None:
        return _commit(state, highlighted, handled=True)

    # Nothing highlighted: prefer an unselected exact match over creating
    match = find_tag(state.registry, text)
    if match is not None and match not in state.selection:
        return _commit(state, Existing(match), handled=True)
    return _commit(state, CreateNew(text), handled=True)


def _commit(state: TaggerState, suggestion: Suggestion, handled: bool = False) -> Transition:
    cleared = _clear(state)

    if isinstance(suggestion, Existing):
        match = find_tag(state.registry, suggestion.tag)
        if match is None:
            return Transition(cleared, handled=handled, outcome=STALE)
        return _select(cleared, match, handled, SELECTED)

    text = clean_tag(suggestion.text)
    if not text:
        return Transition(cleared, handled=handled, outcome=STALE)

    match = find_tag(state.registry, text)
    if match is not None:
        return _select(cleared, match, handled, FOLDED)

    grown = replace(cleared, registry=state.registry + (text,))
    selected = grown.selection.add(text)
    return Transition(
        replace(grown, selection=selected),
        (RegistryGrew(text), SelectionChanged(selected.tags)),
        handled,
        CREATED,
    )


def _select(state: TaggerState, tag: str, handled: bool, outcome: str) -> Transition:
    if tag in state.selection:
        return Transition(state, handled=handled, outcome=ALREADY_SELECTED)
    selected = state.selection.add(tag)
    return Transition(
        replace(state, selection=selected),
        (SelectionChanged(selected.tags),),
        handled,
        outcome,
    )


def _remove(state: TaggerState, tag: str) -> Transition:
    remaining = state.selection.remove(tag)
    if remaining == state.selection:
        return Transition(state, outcome=NOT_SELECTED)
    return Transition(
        replace(state, selection=remaining),
        (SelectionChanged(remaining.tags),),
        outcome=REMOVED,
    )
