"""
Administrative management of the role vocabulary.

Admin-entered roles are upper-cased, unlike roles created from the tag
input, which keep the casing they were typed with.
"""

from typing import List, Optional

from .errors import InvalidTagError
from .logger import StructuredLogger, get_logger
from .registry import TagRegistry
from .storage import RegistryRepository
from .tags import clean_tag, is_valid_tag


class RoleAdmin:
    def __init__(
        self,
        repository: RegistryRepository,
        registry: Optional[TagRegistry] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.repository = repository
        self.registry = registry if registry is not None else TagRegistry(repository.load())
        self.log = logger or get_logger()

    def list_roles(self) -> List[str]:
        return self.registry.to_list()

    def add_role(self, name: str) -> bool:
        """
        Add a role to the registry and persist it.

        Returns:
            True if the registry changed, False if the role already existed

        Raises:
            InvalidTagError: If the name is empty after trimming
        """
        if not is_valid_tag(name):
            raise InvalidTagError(f"Role name must be a non-empty string, got {name!r}")
        role = clean_tag(name).upper()
        if role in self.registry:
            self.log.debug("Role already registered", role=role)
            return False
        self.registry.add(role)
        self.repository.save(self.registry.to_list())
        self.log.info("Role added", role=role)
        return True

    def remove_role(self, name: str) -> bool:
        """Remove a role from the registry. Selections that reference it are left alone."""
        if not self.registry.remove(name):
            return False
        self.repository.save(self.registry.to_list())
        self.log.info("Role removed", role=name)
        return True
