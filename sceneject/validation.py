from dataclasses import dataclass, field
from typing import Iterable

from sceneject.debug import Diagnostics
from sceneject.exceptions import MarkerDeclarationError, type_name
from sceneject.members import MemberInspector
from sceneject.registries import DependencyRegistry
from sceneject.scanning import ProviderScanner


@dataclass(frozen=True)
class InvalidTarget:
    owner_name: str
    dependency_name: str
    instance_id: int
    member_name: str = ""


@dataclass
class ValidationReport:
    invalid: list[InvalidTarget] = field(default_factory=list)

    def __bool__(self):
        return self.passed

    @property
    def passed(self) -> bool:
        return not self.invalid

    def lines(self) -> list[str]:
        """The diagnostic lines for the report, a summary followed by one line per invalid target."""
        if self.passed:
            return ["All dependencies are valid."]

        return [f"{len(self.invalid)} dependencies are missing."] + [
            f"{target.owner_name} is missing dependency {target.dependency_name} (instance {target.instance_id})"
            for target in self.invalid
        ]


class Validator:
    """Reports injectable fields that nothing can satisfy without changing anything.

    A field is invalid when no live provider declares its type, the type wasn't registered externally and the field
    doesn't already hold a value. Providers are not called, only their declared return types are read. Methods and
    properties are not validated."""
    def __init__(
        self,
        registry: DependencyRegistry,
        inspector: MemberInspector,
        scanner: ProviderScanner,
        diagnostics: Diagnostics,
    ):
        self.registry = registry
        self.inspector = inspector
        self.scanner = scanner
        self.diagnostics = diagnostics

    def validate(self, components: Iterable) -> ValidationReport:
        components = list(components)
        provided_types = self._provided_types(components)
        report = ValidationReport()
        for component in components:
            try:
                targets = self.inspector.fields(component)
            except MarkerDeclarationError as e:
                self.diagnostics.error(e, e.owner_name, e.member_name)
                continue

            for target in targets:
                if target.dependency_type in provided_types:
                    continue

                if self.inspector.get_value(component, target) is not None:
                    continue

                report.invalid.append(
                    InvalidTarget(
                        target.owner_name,
                        type_name(target.dependency_type),
                        getattr(component, "instance_id", id(component)),
                        target.name,
                    )
                )

        self._log(report)
        return report

    def _provided_types(self, components: list) -> set[type]:
        provided_types = self.registry.external_types()
        for provider in self.scanner.providers(components):
            try:
                provided_types |= self.scanner.declared_types([provider])
            except MarkerDeclarationError as e:
                self.diagnostics.error(e, e.owner_name, e.member_name)

        return provided_types

    def _log(self, report: ValidationReport):
        if report.passed:
            self.diagnostics.validation_passed()
            return

        self.diagnostics.validation_failed(len(report.invalid))
        for target in report.invalid:
            self.diagnostics.invalid_target(
                target.owner_name, target.member_name, target.dependency_name, target.instance_id
            )
