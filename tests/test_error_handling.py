"""
Tests for registration and injection errors.

Covers:
- Provider methods returning None
- Duplicate providers
- Unresolvable fields, properties and method parameters
- Partially applied passes
"""
import pytest

from sceneject import (
    Component, DependencyProvider, DependencyResolutionError, DuplicateProviderError, EmptyProviderResultError,
    Inject, inject, InjectionError, Injector, MarkerDeclarationError, provide, RegistrationError, Scene,
    UnresolvableDependencyError, UnresolvableParameterError,
)


class Alpha:
    pass


class Beta:
    pass


class EmptyProvider(Component, DependencyProvider):
    @provide
    def provide_alpha(self) -> Alpha:
        return None


class BetaProvider(Component, DependencyProvider):
    @provide
    def provide_beta(self) -> Beta:
        return Beta()


class TestErrorHierarchy:
    def test_registration_errors(self):
        assert issubclass(DuplicateProviderError, RegistrationError)
        assert issubclass(EmptyProviderResultError, RegistrationError)
        assert issubclass(RegistrationError, InjectionError)
        assert issubclass(MarkerDeclarationError, InjectionError)

    def test_resolution_errors(self):
        assert issubclass(UnresolvableDependencyError, DependencyResolutionError)
        assert issubclass(UnresolvableParameterError, DependencyResolutionError)
        assert issubclass(DependencyResolutionError, InjectionError)


class TestProviderErrors:
    def test_empty_provider_result(self, log_lines):
        scene = Scene()
        scene.add(Injector(), EmptyProvider())
        with pytest.raises(EmptyProviderResultError) as exc_info:
            scene.activate()

        error = exc_info.value
        assert error.dependency_type is Alpha
        assert error.method_name == "provide_alpha"
        assert error.provider_name == "EmptyProvider"
        assert str(error) == (
            "Provider method 'provide_alpha' in class 'EmptyProvider' returned None when providing type 'Alpha'."
        )
        assert ("ERROR", str(error)) in log_lines()

    def test_registration_stops_at_the_first_error(self):
        scene = Scene()
        injector = scene.add(Injector())
        scene.add(BetaProvider(), BetaProvider(), EmptyProvider())
        with pytest.raises(DuplicateProviderError):
            injector.inject_scene()

        scene = Scene()
        injector = scene.add(Injector())
        scene.add(BetaProvider(), EmptyProvider())
        with pytest.raises(EmptyProviderResultError):
            injector.inject_scene()

        assert injector.registry.provided_types() == {Beta}

    def test_duplicate_provider_message(self):
        scene = Scene()
        scene.add(Injector(), BetaProvider(), BetaProvider())
        with pytest.raises(DuplicateProviderError) as exc_info:
            scene.activate()

        assert "'Beta'" in str(exc_info.value)
        assert "provide_beta" in str(exc_info.value)

    def test_provider_errors_stop_injection(self):
        class Consumer(Component):
            beta: Inject[Beta]

        consumer = Consumer()
        scene = Scene()
        scene.add(Injector(), BetaProvider(), EmptyProvider(), consumer)
        with pytest.raises(EmptyProviderResultError):
            scene.activate()

        assert getattr(consumer, "beta", None) is None

    def test_provider_exceptions_propagate_unchanged(self):
        class Exploding(Component, DependencyProvider):
            @provide
            def provide_beta(self) -> Beta:
                raise LookupError("missing asset")

        scene = Scene()
        scene.add(Injector(), Exploding())
        with pytest.raises(LookupError, match="missing asset"):
            scene.activate()


class TestInjectionErrors:
    def test_field_error_message(self):
        class Consumer(Component):
            alpha: Inject[Alpha]

        scene = Scene()
        scene.add(Injector(), Consumer())
        with pytest.raises(UnresolvableDependencyError) as exc_info:
            scene.activate()

        assert str(exc_info.value) == "Failed to inject dependency Alpha into field 'alpha' of class 'Consumer'."

    def test_method_error_message(self):
        class Consumer(Component):
            @inject
            def construct(self, alpha: Alpha, beta: Beta):
                pass

        scene = Scene()
        scene.add(Injector(), BetaProvider(), Consumer())
        with pytest.raises(UnresolvableParameterError) as exc_info:
            scene.activate()

        assert str(exc_info.value) == (
            "Failed to inject dependencies into method 'construct' of class 'Consumer', no provider for "
            "parameter(s) alpha: Alpha."
        )
        assert exc_info.value.dependency_type is Alpha

    def test_error_aborts_remaining_components(self):
        class Broken(Component):
            alpha: Inject[Alpha]

        class Later(Component):
            beta: Inject[Beta]

        broken = Broken()
        later = Later()
        assert broken.instance_id < later.instance_id
        scene = Scene()
        scene.add(Injector(), BetaProvider(), broken, later)
        with pytest.raises(UnresolvableDependencyError):
            scene.activate()

        assert getattr(later, "beta", None) is None

    def test_setter_errors_propagate_unchanged(self):
        class Consumer(Component):
            @property
            @inject
            def beta(self) -> Beta:
                return None

            @beta.setter
            def beta(self, value):
                raise ValueError("read only")

        scene = Scene()
        scene.add(Injector(), BetaProvider(), Consumer())
        with pytest.raises(ValueError, match="read only"):
            scene.activate()
