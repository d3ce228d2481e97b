"""
The scene injector component.

Add an ``Injector`` to a scene and activate the scene. The injector wakes before every other component, registers
the instances returned by each provider's ``@provide`` methods and then injects them into every marked field, method
and property on the scene's live components.

Example:
    >>> with Scene() as scene:
    ...     scene.add(Injector(), ServiceProvider(), Player())
    ...     scene.activate()
    ...     assert isinstance(player.audio, AudioService)
"""
from typing import overload, Type

from tramp.optionals import Optional

from sceneject.context_vars import is_debug_enabled
from sceneject.debug import create_diagnostics
from sceneject.exceptions import InjectionError, MarkerDeclarationError
from sceneject.injection import InjectionEngine, InjectionReport
from sceneject.members import MemberInspector
from sceneject.registries import DependencyRegistry, Instance
from sceneject.results import Result, ResultBuilder
from sceneject.scanning import ProviderScanner
from sceneject.scenes import Component, get_scene, Scene
from sceneject.validation import ValidationReport, Validator


class Injector(Component):
    """Registers provided dependencies and injects them into the live components of its scene.

    The injector has an execution order of -1000 so its ``awake`` runs before the other components in the scene. An
    injector that isn't attached to a scene works against the current scene."""
    execution_order = -1000

    def __init__(self, *, name: str | None = None, enabled: bool = True, debug: bool | None = None):
        super().__init__(name=name, enabled=enabled)
        self.diagnostics = create_diagnostics(is_debug_enabled() if debug is None else debug)
        self.inspector = MemberInspector()
        self.registry = DependencyRegistry()
        self.scanner = ProviderScanner(self.registry, self.inspector, self.diagnostics)
        self.engine = InjectionEngine(self.registry, self.inspector, self.diagnostics)
        self.validator = Validator(self.registry, self.inspector, self.scanner, self.diagnostics)

    @property
    def target_scene(self) -> Scene:
        return get_scene(self.scene)

    def awake(self):
        self.inject_scene()

    def inject_scene(self) -> InjectionReport:
        """Runs a full pass over the live components: every provider is registered before anything is injected.
        Registration and injection errors propagate, leaving the pass partially applied."""
        components = self.target_scene.live_components()
        self.registry.new_generation()
        report = InjectionReport(registrations=self.scanner.register_all(components))
        self.engine.inject_all(components, report)
        self.diagnostics.pass_completed(len(report.registrations), len(report.injected), len(report.skipped))
        return report

    def try_inject_scene(self) -> Result[InjectionReport]:
        """Runs a full pass and returns Success with the pass report or Failure with the registration or injection
        error. Errors that aren't injection errors still propagate."""
        with ResultBuilder[InjectionReport](InjectionError) as (builder, set_result):
            set_result(self.inject_scene())

        return builder.result

    @overload
    def register(self, instance: Instance):
        ...

    @overload
    def register[T: Instance](self, for_dependency: Type[T], instance: T):
        ...

    def register(self, *args):
        """Registers an instance directly, bypassing provider scanning and the duplicate check. Useful for seeding
        configuration before the scene activates. The instance is stored under its own type unless a type is given.
        """
        match args:
            case [instance]:
                self.registry.register_external(type(instance), instance)

            case [type() as for_dependency, instance]:
                self.registry.register_external(for_dependency, instance)

            case _:
                raise ValueError(f"Unexpected arguments to register: {args}")

    def resolve[T: Instance](self, dependency_type: Type[T]) -> Optional[T]:
        return self.registry.resolve(dependency_type)

    def validate_dependencies(self) -> ValidationReport:
        """Reports every injectable field on the live components that no provider can satisfy. Nothing is written and
        the registry isn't touched, so this is safe to call at any time."""
        return self.validator.validate(self.target_scene.live_components())

    def clear_dependencies(self) -> int:
        """Sets every injectable field on the live components to None. Methods and properties are left alone. Returns
        the number of fields cleared. Components whose injectable fields can't be resolved are logged and skipped."""
        cleared = 0
        for component in self.target_scene.live_components():
            try:
                targets = self.inspector.fields(component)
            except MarkerDeclarationError as e:
                self.diagnostics.error(e, e.owner_name, e.member_name)
                continue

            for target in targets:
                self.inspector.set_value(component, target, None)
                cleared += 1

        self.diagnostics.dependencies_cleared(cleared)
        return cleared

