from typing import Annotated

import pytest

from sceneject import Component, DependencyProvider, Inject, inject, MarkerDeclarationError, provide
from sceneject.markers import extract_injection_type, INJECT_MARKER
from sceneject.members import MemberInspector, MemberKind


class Audio:
    pass


class Input:
    pass


class Camera:
    pass


class Base(Component):
    audio: Inject[Audio]


class Player(Base):
    input: Annotated[Input, INJECT_MARKER]
    speed: float = 2.0

    def __init__(self):
        super().__init__()
        self._camera = None
        self.setup_calls = []

    @inject
    def set_up(self, audio: Audio, camera: Inject[Camera]):
        self.setup_calls.append((audio, camera))

    def jump(self):
        pass

    @property
    @inject
    def camera(self) -> Camera:
        return self._camera

    @camera.setter
    def camera(self, value):
        self._camera = value


class Plain(Component):
    speed: float = 1.0

    @property
    def label(self) -> str:
        return "plain"


class Provider(Component, DependencyProvider):
    @provide
    def provide_audio(self) -> Audio:
        return Audio()

    @provide
    def provide_input(self, sensitivity: float = 1.0) -> Input:
        return Input()

    def helper(self) -> Camera:
        return Camera()


def test_extract_injection_type():
    assert extract_injection_type(Inject[Audio]) == (Audio, True)
    assert extract_injection_type(Annotated[Audio, INJECT_MARKER]) == (Audio, True)
    assert extract_injection_type(Annotated[Audio, "other"]) == (Annotated[Audio, "other"], False)
    assert extract_injection_type(Audio) == (Audio, False)


def test_fields_include_inherited_annotations():
    targets = MemberInspector().fields(Player())
    assert [(target.name, target.dependency_type) for target in targets] == [("audio", Audio), ("input", Input)]
    assert all(target.kind is MemberKind.FIELD for target in targets)
    assert targets[0].owner_name == "Player"


def test_methods_report_parameter_types_in_order():
    [target] = MemberInspector().methods(Player())
    assert target.name == "set_up"
    assert target.parameter_names == ("audio", "camera")
    assert target.dependency_types == (Audio, Camera)


def test_properties_use_getter_return_type():
    [target] = MemberInspector().properties(Player())
    assert target.name == "camera"
    assert target.dependency_type is Camera


def test_inject_above_property():
    class Holder(Component):
        def __init__(self):
            super().__init__()
            self._audio = None

        @inject
        @property
        def audio(self) -> Audio:
            return self._audio

        @audio.setter
        def audio(self, value):
            self._audio = value

    [target] = MemberInspector().properties(Holder())
    assert target.dependency_type is Audio


def test_inject_rejects_non_callables():
    with pytest.raises(TypeError):
        inject(42)


def test_targets_are_ordered_by_kind():
    kinds = [target.kind for target in MemberInspector().targets(Player())]
    assert kinds == [MemberKind.FIELD, MemberKind.FIELD, MemberKind.METHOD, MemberKind.PROPERTY]


def test_has_targets():
    inspector = MemberInspector()
    assert inspector.has_targets(Player())
    assert not inspector.has_targets(Plain())
    assert not inspector.has_targets(Provider())


def test_provider_methods():
    inspector = MemberInspector()
    provider = Provider()
    assert inspector.is_provider(provider)
    assert not inspector.is_provider(Player())
    methods = inspector.provider_methods(provider)
    assert [(method.name, method.dependency_type) for method in methods] == [
        ("provide_audio", Audio),
        ("provide_input", Input),
    ]


def test_provider_method_requires_return_annotation():
    class Broken(Component, DependencyProvider):
        @provide
        def provide_audio(self):
            return Audio()

    with pytest.raises(MarkerDeclarationError) as exc_info:
        MemberInspector().provider_methods(Broken())

    assert exc_info.value.member_name == "provide_audio"
    assert exc_info.value.owner_name == "Broken"


def test_provider_method_must_not_require_parameters():
    class Broken(Component, DependencyProvider):
        @provide
        def provide_audio(self, volume: float) -> Audio:
            return Audio()

    with pytest.raises(MarkerDeclarationError) as exc_info:
        MemberInspector().provider_methods(Broken())

    assert "volume" in str(exc_info.value)


def test_injectable_method_parameters_need_annotations():
    class Broken(Component):
        @inject
        def set_up(self, audio):
            pass

    with pytest.raises(MarkerDeclarationError):
        MemberInspector().methods(Broken())


def test_get_set_and_invoke():
    inspector = MemberInspector()
    player = Player()
    [audio_target, _] = inspector.fields(player)
    assert inspector.get_value(player, audio_target) is None

    audio = Audio()
    inspector.set_value(player, audio_target, audio)
    assert player.audio is audio
    assert inspector.get_value(player, audio_target) is audio

    camera = Camera()
    inspector.invoke(player, "set_up", audio, camera)
    assert player.setup_calls == [(audio, camera)]


def test_string_annotations_are_evaluated_per_field():
    class Deferred(Component):
        audio: "Inject[Audio]"
        renderer: "NotImportedRenderer"
        speed: "float" = 1.0

    inspector = MemberInspector()
    [target] = inspector.fields(Deferred())
    assert (target.name, target.dependency_type) == ("audio", Audio)
    assert inspector.has_targets(Deferred())


def test_unresolvable_plain_annotations_are_skipped():
    class Deferred(Component):
        renderer: "NotImportedRenderer"

    inspector = MemberInspector()
    assert inspector.fields(Deferred()) == []
    assert not inspector.has_targets(Deferred())


def test_unresolvable_injectable_annotations_raise():
    class Deferred(Component):
        renderer: "Inject[NotImportedRenderer]"

    inspector = MemberInspector()
    assert inspector.has_targets(Deferred())
    with pytest.raises(MarkerDeclarationError) as exc_info:
        inspector.fields(Deferred())

    assert exc_info.value.member_name == "renderer"
    assert "NotImportedRenderer" in str(exc_info.value)


def test_unresolvable_provider_return_type_raises():
    class Broken(Component, DependencyProvider):
        @provide
        def provide_renderer(self) -> "NotImportedRenderer":
            return object()

    with pytest.raises(MarkerDeclarationError) as exc_info:
        MemberInspector().provider_methods(Broken())

    assert exc_info.value.member_name == "provide_renderer"
