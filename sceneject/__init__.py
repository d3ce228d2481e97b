from sceneject.scenes import Component, get_scene, Scene
from sceneject.markers import DependencyProvider, Inject, inject, provide
from sceneject.exceptions import (
    DependencyResolutionError, DuplicateProviderError, EmptyProviderResultError, InjectionError,
    MarkerDeclarationError, RegistrationError, UnresolvableDependencyError, UnresolvableParameterError,
)
from sceneject.registries import DependencyRegistry
from sceneject.injector import Injector
from sceneject.validation import InvalidTarget, ValidationReport

__all__ = [
    "Component", "Scene", "get_scene",
    "DependencyProvider", "Inject", "inject", "provide",
    "Injector", "DependencyRegistry", "ValidationReport", "InvalidTarget",
    "InjectionError", "RegistrationError", "DuplicateProviderError", "EmptyProviderResultError",
    "MarkerDeclarationError", "DependencyResolutionError", "UnresolvableDependencyError", "UnresolvableParameterError",
]
