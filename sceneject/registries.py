from typing import Any, Type

from tramp.optionals import Optional

from sceneject.exceptions import DuplicateProviderError

type Instance = Any


class DependencyRegistry:
    """Registries map a type to the single instance that was provided for it. Lookups use exact type equality, a
    registered subclass never satisfies a request for its base class and the reverse.

    Instances come from two places. Provider methods add them with ``register`` during a scan pass, those entries are
    dropped whenever a new pass starts. Bootstrap code adds them with ``register_external``, those entries survive new
    passes. A provider declaring a type that is already registered, externally or by another provider, is an error."""
    def __init__(self):
        self.instances: dict[Type[Instance], Instance] = {}
        self._provided: set[Type[Instance]] = set()
        self._external: set[Type[Instance]] = set()

    def __contains__(self, dependency_type: Type[Instance]) -> bool:
        return dependency_type in self.instances

    def __len__(self) -> int:
        return len(self.instances)

    def register[T: Instance](self, dependency_type: Type[T], instance: T):
        """Stores an instance produced by a provider. Raises DuplicateProviderError if the type is already registered,
        either by another provider during this pass or externally. The existing instance is kept."""
        if dependency_type in self.instances:
            raise DuplicateProviderError(dependency_type)

        self._provided.add(dependency_type)
        self.instances[dependency_type] = instance

    def register_external[T: Instance](self, dependency_type: Type[T], instance: T):
        """Stores an instance without any duplicate checking, the last write for a type wins."""
        self._external.add(dependency_type)
        self._provided.discard(dependency_type)
        self.instances[dependency_type] = instance

    def resolve[T: Instance](self, dependency_type: Type[T]) -> Optional[T]:
        if dependency_type in self.instances:
            return Optional.Some(self.instances[dependency_type])

        return Optional.Nothing()

    def new_generation(self):
        """Drops every provider registered instance so a scan pass can start from scratch."""
        for dependency_type in self._provided:
            del self.instances[dependency_type]

        self._provided.clear()

    def provided_types(self) -> set[Type[Instance]]:
        return set(self._provided)

    def external_types(self) -> set[Type[Instance]]:
        return set(self._external)
