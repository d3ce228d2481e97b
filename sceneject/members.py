"""
Member inspection for injection targets and provider methods.

The inspector is the only place that looks at annotations and markers. The scanner, injection engine, validator and
clearing all work from the target descriptions it returns and read or write values through it.
"""
import inspect
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, get_type_hints, Iterator

from sceneject.exceptions import MarkerDeclarationError
from sceneject.markers import DependencyProvider, extract_injection_type, is_inject_marked, is_provide_marked


class MemberKind(Enum):
    FIELD = "field"
    METHOD = "method"
    PROPERTY = "property"


@dataclass(frozen=True)
class InjectionTarget:
    """A marked field, method or property. Fields and properties have one required type, methods have one per
    parameter in positional order."""
    kind: MemberKind
    name: str
    owner: type
    dependency_types: tuple[type, ...]
    parameter_names: tuple[str, ...] = ()

    @property
    def dependency_type(self) -> type:
        return self.dependency_types[0]

    @property
    def owner_name(self) -> str:
        return self.owner.__name__


@dataclass(frozen=True)
class ProviderMethod:
    name: str
    owner: type
    dependency_type: type

    @property
    def owner_name(self) -> str:
        return self.owner.__name__


_UNRESOLVED_ANNOTATION_ERRORS = (NameError, AttributeError, SyntaxError, TypeError)


def _class_members(cls: type) -> dict[str, Any]:
    """Maps names to the raw class attributes visible on the type. Base class members come first, overrides keep the
    position of the member they override."""
    members = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue

        members.update(vars(klass))

    return members


def _class_namespace(klass: type) -> dict[str, Any]:
    try:
        return vars(sys.modules[klass.__module__])
    except KeyError:
        return {}


def _raw_annotations(klass: type) -> dict[str, Any]:
    try:
        return inspect.get_annotations(klass)
    except NameError:
        # Deferred annotations that reference undefined names
        import annotationlib
        return annotationlib.get_annotations(klass, format=annotationlib.Format.STRING)


def _field_annotations(cls: type) -> dict[str, Any]:
    """Maps field names to their evaluated annotations, base classes first.

    Annotations are evaluated one at a time so a forward reference that can't be resolved only matters when it
    belongs to an injectable field. Unresolvable annotations that don't mention injection are skipped, the rest raise
    a MarkerDeclarationError."""
    annotations = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue

        module_namespace = _class_namespace(klass)
        for name, annotation in _raw_annotations(klass).items():
            if not isinstance(annotation, str):
                annotations[name] = annotation
                continue

            try:
                annotations[name] = eval(annotation, module_namespace, dict(vars(klass)))
            except _UNRESOLVED_ANNOTATION_ERRORS as e:
                if "inject" in annotation.casefold():
                    raise MarkerDeclarationError(
                        cls.__name__,
                        name,
                        f"Could not resolve the annotation {annotation!r} of injectable field '{name}' in class "
                        f"'{cls.__name__}': {e}",
                    ) from e

                annotations.pop(name, None)

    return annotations


def _function_hints(owner: type, name: str, func) -> dict[str, Any]:
    try:
        return get_type_hints(func, include_extras=True)
    except _UNRESOLVED_ANNOTATION_ERRORS as e:
        raise MarkerDeclarationError(
            owner.__name__, name, f"Could not resolve the annotations of '{name}' in class '{owner.__name__}': {e}"
        ) from e


def _return_type(owner: type, name: str, func) -> type:
    hints = _function_hints(owner, name, func)
    if "return" not in hints or hints["return"] is type(None):
        raise MarkerDeclarationError(
            owner.__name__, name, f"'{name}' of class '{owner.__name__}' must declare a return type annotation."
        )

    actual_type, _ = extract_injection_type(hints["return"])
    return actual_type


class MemberInspector:
    """Enumerates marked members on objects and reads, writes and invokes them."""

    def fields(self, obj) -> list[InjectionTarget]:
        owner = type(obj)
        targets = []
        for name, annotation in _field_annotations(owner).items():
            actual_type, injectable = extract_injection_type(annotation)
            if injectable:
                targets.append(InjectionTarget(MemberKind.FIELD, name, owner, (actual_type,)))

        return targets

    def methods(self, obj) -> list[InjectionTarget]:
        owner = type(obj)
        targets = []
        for name, member in _class_members(owner).items():
            if isinstance(member, property) or not callable(member) or not is_inject_marked(member):
                continue

            targets.append(self._method_target(obj, owner, name, member))

        return targets

    def properties(self, obj) -> list[InjectionTarget]:
        owner = type(obj)
        return [
            InjectionTarget(MemberKind.PROPERTY, name, owner, (_return_type(owner, name, member.fget),))
            for name, member in _class_members(owner).items()
            if isinstance(member, property) and is_inject_marked(member.fget)
        ]

    def targets(self, obj) -> Iterator[InjectionTarget]:
        """Yields every target on the object: fields, then methods, then properties."""
        yield from self.fields(obj)
        yield from self.methods(obj)
        yield from self.properties(obj)

    def has_targets(self, obj) -> bool:
        owner = type(obj)
        try:
            annotations = _field_annotations(owner)
        except MarkerDeclarationError:
            return True

        if any(extract_injection_type(annotation)[1] for annotation in annotations.values()):
            return True

        return any(
            is_inject_marked(member.fget if isinstance(member, property) else member)
            for member in _class_members(owner).values()
        )

    def is_provider(self, obj) -> bool:
        return isinstance(obj, DependencyProvider)

    def provider_methods(self, obj) -> list[ProviderMethod]:
        owner = type(obj)
        methods = []
        for name, member in _class_members(owner).items():
            if isinstance(member, property) or not callable(member) or not is_provide_marked(member):
                continue

            required = [
                parameter.name
                for parameter in inspect.signature(getattr(obj, name)).parameters.values()
                if parameter.default is parameter.empty
                and parameter.kind not in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
            ]
            if required:
                raise MarkerDeclarationError(
                    owner.__name__,
                    name,
                    f"Provider method '{name}' in class '{owner.__name__}' must not require parameters, it requires "
                    f"{', '.join(required)}.",
                )

            methods.append(ProviderMethod(name, owner, _return_type(owner, name, member)))

        return methods

    def get_value(self, obj, target: InjectionTarget) -> Any:
        return getattr(obj, target.name, None)

    def set_value(self, obj, target: InjectionTarget, value: Any):
        setattr(obj, target.name, value)

    def invoke(self, obj, name: str, *args) -> Any:
        return getattr(obj, name)(*args)

    def _method_target(self, obj, owner: type, name: str, method) -> InjectionTarget:
        hints = _function_hints(owner, name, method)
        parameter_names = []
        dependency_types = []
        for parameter in inspect.signature(getattr(obj, name)).parameters.values():
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue

            if parameter.name not in hints:
                raise MarkerDeclarationError(
                    owner.__name__,
                    name,
                    f"Parameter '{parameter.name}' of injectable method '{name}' in class '{owner.__name__}' has no "
                    f"type annotation.",
                )

            actual_type, _ = extract_injection_type(hints[parameter.name])
            parameter_names.append(parameter.name)
            dependency_types.append(actual_type)

        return InjectionTarget(MemberKind.METHOD, name, owner, tuple(dependency_types), tuple(parameter_names))
