"""
TagController: the tag input as seen by a host UI.

Wires the shared TagRegistry, one entity's SelectionState and the navigation
reducer. The host feeds input events in and receives two notifications back:

    on_selection_changed(tags)   the entity's full, ordered tag list
    on_registry_grew(tag)        a tag newly added to the shared registry

Both are invoked synchronously after the command that caused them. The
controller performs no I/O; persisting is up to the callbacks.
"""

from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Tuple

from .logger import StructuredLogger, get_logger
from .navigation import (
    Event,
    FocusLost,
    InputChanged,
    Key,
    KeyPressed,
    Phase,
    RegistryGrew,
    RemoveTag,
    SelectionChanged,
    SuggestionClicked,
    SuggestionHovered,
    TaggerState,
    Transition,
    reduce,
)
from .registry import TagRegistry
from .selection import SelectionState
from .suggest import Suggestion

SelectionListener = Callable[[List[str]], None]
RegistryListener = Callable[[str], None]


class TagController:
    """Autocomplete multi-select over a shared, growable tag vocabulary."""

    def __init__(
        self,
        registry: TagRegistry,
        selection: Iterable[str] = (),
        on_selection_changed: Optional[SelectionListener] = None,
        on_registry_grew: Optional[RegistryListener] = None,
        entity_id: Optional[str] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            registry: Shared registry; mutated in place when a tag is created
            selection: Tags currently attached to the entity
            on_selection_changed: Called with the new tag list after each selection change
            on_registry_grew: Called with each tag added to the registry
            entity_id: Identifier of the entity, used only in log context
            logger: Logger to use (default: global logger)
        """
        self.registry = registry
        self.entity_id = entity_id
        self.on_selection_changed = on_selection_changed
        self.on_registry_grew = on_registry_grew
        self.log = logger or get_logger()
        self._state = TaggerState(
            registry=registry.snapshot(),
            selection=SelectionState.from_iterable(selection),
        )

    @classmethod
    def from_repository(cls, repository, selection: Iterable[str] = (), **kwargs) -> "TagController":
        """
        Build a controller over a registry loaded from `repository`.

        The repository must provide load() -> list and save(list). Every tag
        the controller creates is saved back in full before
        on_registry_grew (if given) is called.
        """
        registry = TagRegistry(repository.load())
        user_callback = kwargs.pop("on_registry_grew", None)

        def persist(tag: str) -> None:
            repository.save(registry.to_list())
            if user_callback is not None:
                user_callback(tag)

        return cls(registry, selection, on_registry_grew=persist, **kwargs)

    # Read-only views

    @property
    def state(self) -> TaggerState:
        return self._state

    @property
    def selection(self) -> List[str]:
        return self._state.selection.to_list()

    @property
    def suggestions(self) -> Tuple[Suggestion, ...]:
        return self._state.suggestions

    @property
    def active_index(self) -> int:
        return self._state.active_index

    @property
    def input_text(self) -> str:
        return self._state.input_text

    @property
    def phase(self) -> Phase:
        return self._state.phase

    # Commands

    def on_input_changed(self, text: str) -> None:
        self.dispatch(InputChanged(text))

    def on_key(self, key) -> bool:
        """
        Handle a key press.

        Returns:
            True if the host should suppress the key's default behaviour
        """
        try:
            key = Key(key)
        except ValueError:
            return False
        return self.dispatch(KeyPressed(key)).handled

    def on_suggestion_clicked(self, index: int) -> None:
        self.dispatch(SuggestionClicked(index))

    def on_suggestion_hovered(self, index: int) -> None:
        self.dispatch(SuggestionHovered(index))

    def on_remove(self, tag: str) -> None:
        self.dispatch(RemoveTag(tag))

    def on_focus_lost(self) -> None:
        self.dispatch(FocusLost())

    # Non-graphical hosts have no pointer; dismissing is the same event
    dismiss = on_focus_lost

    def dispatch(self, event: Event) -> Transition:
        """Run one event through the reducer and deliver its effects."""
        # The registry is shared; another controller may have grown it
        current = replace(self._state, registry=self.registry.snapshot())
        transition = reduce(current, event)
        self._state = transition.state

        for effect in transition.effects:
            if isinstance(effect, RegistryGrew):
                stored = self.registry.add(effect.tag)
                self.log.info("Role created", tag=stored, entity=self.entity_id)
                if self.on_registry_grew is not None:
                    self.on_registry_grew(stored)
            elif isinstance(effect, SelectionChanged):
                self.log.debug("Selection changed", selection=list(effect.selection), entity=self.entity_id)
                if self.on_selection_changed is not None:
                    self.on_selection_changed(list(effect.selection))

        if transition.outcome is not None:
            self.log.record_outcome(transition.outcome)
            self.log.debug(
                "Tag command",
                event=type(event).__name__,
                outcome=transition.outcome,
                entity=self.entity_id,
            )

        self._state = replace(self._state, registry=self.registry.snapshot())
        return transition
