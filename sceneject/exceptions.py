"""
Errors raised while registering providers and injecting dependencies.

Registration and injection errors are fatal for the pass that raised them, they propagate out of
``Injector.awake`` to whatever activated the scene. Validation and clearing never raise these.
"""
from typing import Sequence


def type_name(dependency_type) -> str:
    return getattr(dependency_type, "__name__", repr(dependency_type))


class InjectionError(Exception):
    """Base class for every configuration error raised during a scan pass."""


class MarkerDeclarationError(InjectionError):
    """Raised when a marked member can't be understood, such as a provider method with no return annotation."""
    def __init__(self, owner_name: str, member_name: str, message: str):
        self.owner_name = owner_name
        self.member_name = member_name
        super().__init__(message)


class RegistrationError(InjectionError):
    """Raised when the provider scan can't populate the registry."""


class DuplicateProviderError(RegistrationError):
    """Raised when a second provider method declares a type that has already been registered."""
    def __init__(self, dependency_type: type, provider_name: str = "unknown", method_name: str = "unknown"):
        self.dependency_type = dependency_type
        self.provider_name = provider_name
        self.method_name = method_name
        super().__init__(
            f"Duplicate provider for type '{type_name(dependency_type)}': provider method '{method_name}' in class "
            f"'{provider_name}' declares a type that is already registered."
        )


class EmptyProviderResultError(RegistrationError):
    """Raised when a provider method returns None."""
    def __init__(self, dependency_type: type, provider_name: str, method_name: str):
        self.dependency_type = dependency_type
        self.provider_name = provider_name
        self.method_name = method_name
        super().__init__(
            f"Provider method '{method_name}' in class '{provider_name}' returned None when providing type "
            f"'{type_name(dependency_type)}'."
        )


class DependencyResolutionError(InjectionError):
    """
    Raised when an injection target requires a type that nothing in the registry provides.

    This is the only error the injection engine raises on its own, everything raised by user code (setters, injected
    methods) bubbles up unchanged.
    """
    def __init__(self, dependency_type: type, member_name: str, owner_name: str, message: str = None):
        self.dependency_type = dependency_type
        self.member_name = member_name
        self.owner_name = owner_name
        if message is None:
            message = (
                f"Cannot resolve dependency {type_name(dependency_type)} for '{member_name}' of class '{owner_name}'"
            )
        super().__init__(message)


class UnresolvableDependencyError(DependencyResolutionError):
    """Raised when a field or property target can't be resolved."""
    def __init__(self, dependency_type: type, member_name: str, owner_name: str, member_kind: str = "field"):
        self.member_kind = member_kind
        super().__init__(
            dependency_type,
            member_name,
            owner_name,
            f"Failed to inject dependency {type_name(dependency_type)} into {member_kind} '{member_name}' of class "
            f"'{owner_name}'.",
        )


class UnresolvableParameterError(DependencyResolutionError):
    """Raised before an injectable method is invoked when any of its parameters can't be resolved. All missing
    parameter types are reported, the method is never called with partial arguments."""
    def __init__(self, missing: Sequence[tuple[str, type]], member_name: str, owner_name: str):
        self.missing = list(missing)
        names = ", ".join(f"{name}: {type_name(dependency_type)}" for name, dependency_type in self.missing)
        super().__init__(
            self.missing[0][1],
            member_name,
            owner_name,
            f"Failed to inject dependencies into method '{member_name}' of class '{owner_name}', no provider for "
            f"parameter(s) {names}.",
        )

    @property
    def missing_types(self) -> list[type]:
        return [dependency_type for _, dependency_type in self.missing]
