from dataclasses import dataclass
from typing import Iterable

from sceneject.debug import Diagnostics
from sceneject.exceptions import DuplicateProviderError, EmptyProviderResultError
from sceneject.members import MemberInspector
from sceneject.registries import DependencyRegistry


@dataclass(frozen=True)
class Registration:
    dependency_type: type
    provider_name: str
    method_name: str


class ProviderScanner:
    """Finds the providers among a set of components and registers the instances their ``@provide`` methods return.

    Provider methods are called with no arguments in declaration order. A method returning None or declaring a type
    that is already registered aborts the scan, whatever was registered before the failure stays in the registry."""
    def __init__(self, registry: DependencyRegistry, inspector: MemberInspector, diagnostics: Diagnostics):
        self.registry = registry
        self.inspector = inspector
        self.diagnostics = diagnostics

    def providers(self, components: Iterable) -> list:
        return [component for component in components if self.inspector.is_provider(component)]

    def declared_types(self, components: Iterable) -> set[type]:
        """The types the providers would register, found without calling any provider method."""
        return {
            method.dependency_type
            for provider in self.providers(components)
            for method in self.inspector.provider_methods(provider)
        }

    def register_all(self, components: Iterable) -> list[Registration]:
        registrations = []
        for provider in self.providers(components):
            registrations.extend(self.register(provider))

        return registrations

    def register(self, provider) -> list[Registration]:
        registrations = []
        for method in self.inspector.provider_methods(provider):
            instance = self.inspector.invoke(provider, method.name)
            if instance is None:
                error = EmptyProviderResultError(method.dependency_type, method.owner_name, method.name)
                self.diagnostics.error(error, method.owner_name, method.name, method.dependency_type)
                raise error

            try:
                self.registry.register(method.dependency_type, instance)
            except DuplicateProviderError as e:
                error = DuplicateProviderError(method.dependency_type, method.owner_name, method.name)
                self.diagnostics.error(error, method.owner_name, method.name, method.dependency_type)
                raise error from e

            self.diagnostics.registered_dependency(method.dependency_type, method.owner_name, method.name)
            registrations.append(Registration(method.dependency_type, method.owner_name, method.name))

        return registrations
