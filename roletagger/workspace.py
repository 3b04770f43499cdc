"""
Host-side wiring: one shared registry, one TagController per open candidate.
"""

from typing import Dict, List, Optional

from .controller import TagController
from .logger import StructuredLogger, get_logger
from .notes import CandidateNotes, NotesRepository
from .registry import TagRegistry
from .storage import RegistryRepository


class TaggingWorkspace:
    """
    Opens role taggers for candidates and persists what they report.

    The registry is loaded once, when the workspace is created, and shared
    by every controller it opens. Selection changes are written into the
    candidate's notes record; registry growth rewrites the registry key.
    """

    def __init__(
        self,
        store,
        registry_repository: Optional[RegistryRepository] = None,
        notes_repository: Optional[NotesRepository] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.log = logger or get_logger()
        self.registry_repository = registry_repository or RegistryRepository(store, logger=self.log)
        self.notes_repository = notes_repository or NotesRepository(store, logger=self.log)
        self.registry = TagRegistry(self.registry_repository.load())
        self._open: Dict[str, TagController] = {}

    def open(self, candidate_id) -> TagController:
        key = str(candidate_id)
        if key in self._open:
            return self._open[key]

        notes = self.notes_repository.load(key)

        def persist_selection(roles: List[str]) -> None:
            self.notes_repository.save_roles(key, roles)

        def persist_registry(tag: str) -> None:
            self.registry_repository.save(self.registry.to_list())

        controller = TagController(
            self.registry,
            notes.potential_roles,
            on_selection_changed=persist_selection,
            on_registry_grew=persist_registry,
            entity_id=key,
            logger=self.log,
        )
        self._open[key] = controller
        self.log.debug("Opened role tagger", candidate=key, roles=notes.potential_roles)
        return controller

    def close(self, candidate_id) -> None:
        """Discard the candidate's controller. The registry is kept."""
        self._open.pop(str(candidate_id), None)

    def notes(self, candidate_id) -> CandidateNotes:
        return self.notes_repository.load(str(candidate_id))

    def open_candidates(self) -> List[str]:
        return list(self._open.keys())
