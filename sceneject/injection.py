from dataclasses import dataclass, field
from typing import Any, Iterable

from tramp.optionals import Optional

from sceneject.debug import Diagnostics
from sceneject.exceptions import UnresolvableDependencyError, UnresolvableParameterError
from sceneject.members import InjectionTarget, MemberInspector, MemberKind
from sceneject.registries import DependencyRegistry
from sceneject.scanning import Registration


@dataclass(frozen=True)
class TargetRecord:
    instance_id: int
    owner_name: str
    member_name: str
    kind: str


@dataclass
class InjectionReport:
    """What a scan pass did: the instances registered, the targets written or called and the fields that were left
    alone because they already held a value."""
    registrations: list[Registration] = field(default_factory=list)
    injected: list[TargetRecord] = field(default_factory=list)
    skipped: list[TargetRecord] = field(default_factory=list)

    @property
    def registered_types(self) -> list[type]:
        return [registration.dependency_type for registration in self.registrations]


def _record(component, target: InjectionTarget) -> TargetRecord:
    instance_id = getattr(component, "instance_id", id(component))
    return TargetRecord(instance_id, target.owner_name, target.name, target.kind.value)


class InjectionEngine:
    """Resolves the targets on components against a registry and writes the resolved instances.

    Targets on a component are processed fields first, then methods, then properties. Fields that already hold a
    value are skipped with a warning, properties are always overwritten. Methods only run once every parameter has
    been resolved. The first unresolvable target aborts the pass."""
    def __init__(self, registry: DependencyRegistry, inspector: MemberInspector, diagnostics: Diagnostics):
        self.registry = registry
        self.inspector = inspector
        self.diagnostics = diagnostics

    def injectables(self, components: Iterable) -> list:
        """Components with at least one target, each component appears once."""
        seen = set()
        injectables = []
        for component in components:
            if id(component) in seen or not self.inspector.has_targets(component):
                continue

            seen.add(id(component))
            injectables.append(component)

        return injectables

    def inject_all(self, components: Iterable, report: InjectionReport | None = None) -> InjectionReport:
        report = InjectionReport() if report is None else report
        for component in self.injectables(components):
            self.inject(component, report)

        return report

    def inject(self, component, report: InjectionReport | None = None) -> InjectionReport:
        report = InjectionReport() if report is None else report
        for target in self.inspector.targets(component):
            match target.kind:
                case MemberKind.FIELD:
                    self._inject_field(component, target, report)

                case MemberKind.METHOD:
                    self._inject_method(component, target, report)

                case MemberKind.PROPERTY:
                    self._inject_property(component, target, report)

        return report

    def _inject_field(self, component, target: InjectionTarget, report: InjectionReport):
        if self.inspector.get_value(component, target) is not None:
            self.diagnostics.field_already_set(target.owner_name, target.name, target.dependency_type)
            report.skipped.append(_record(component, target))
            return

        value = self._resolve_member(target)
        self.inspector.set_value(component, target, value)
        self._injected(component, target, report, value)

    def _inject_property(self, component, target: InjectionTarget, report: InjectionReport):
        value = self._resolve_member(target)
        self.inspector.set_value(component, target, value)
        self._injected(component, target, report, value)

    def _inject_method(self, component, target: InjectionTarget, report: InjectionReport):
        arguments = []
        missing = []
        for parameter_name, dependency_type in zip(target.parameter_names, target.dependency_types):
            self.diagnostics.resolving_dependency(dependency_type, target.owner_name, target.name)
            match self.registry.resolve(dependency_type):
                case Optional.Some(value):
                    arguments.append(value)

                case Optional.Nothing():
                    missing.append((parameter_name, dependency_type))

        if missing:
            error = UnresolvableParameterError(missing, target.name, target.owner_name)
            self.diagnostics.error(error, target.owner_name, target.name, error.dependency_type)
            raise error

        self.inspector.invoke(component, target.name, *arguments)
        self._injected(component, target, report, tuple(arguments))

    def _resolve_member(self, target: InjectionTarget) -> Any:
        self.diagnostics.resolving_dependency(target.dependency_type, target.owner_name, target.name)
        match self.registry.resolve(target.dependency_type):
            case Optional.Some(value):
                return value

            case _:
                error = UnresolvableDependencyError(
                    target.dependency_type, target.name, target.owner_name, target.kind.value
                )
                self.diagnostics.error(error, target.owner_name, target.name, target.dependency_type)
                raise error

    def _injected(self, component, target: InjectionTarget, report: InjectionReport, value: Any):
        self.diagnostics.injected_member(target.owner_name, target.name, value)
        report.injected.append(_record(component, target))
