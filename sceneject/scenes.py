"""
A minimal component model for hosting the injector.

Scenes own components and drive their ``awake`` lifecycle. The injector only depends on ``Scene.live_components``,
so any host that can list its live components in a stable order can stand in for these classes.

Example:
    >>> with Scene() as scene:
    ...     scene.add(Injector(), ServiceProvider(), Player())
    ...     scene.activate()
"""
import itertools
from typing import overload

from sceneject.context_vars import GlobalContextMixin, global_scene, get_global_scene

_instance_ids = itertools.count(1)


class Component:
    """Base class for units of behaviour that live in a scene. Components are live while they are enabled and
    attached to a scene. Lower ``execution_order`` values wake first."""
    execution_order = 0

    def __init__(self, *, name: str | None = None, enabled: bool = True):
        self.instance_id = next(_instance_ids)
        self.name = name or type(self).__name__
        self.enabled = enabled
        self.scene = None

    def awake(self):
        """Called once each time the owning scene is activated."""

    def __repr__(self):
        return f"<{type(self).__name__} {self.name!r} #{self.instance_id}>"


class Scene(GlobalContextMixin, var=global_scene):
    """Holds the components that make up a scene. Scenes can be used as context managers to make them the current
    scene returned by ``get_scene``."""
    def __init__(self, name: str = "Scene"):
        super().__init__()
        self.name = name
        self._components: dict[int, Component] = {}

    def __contains__(self, component: Component) -> bool:
        return self._components.get(component.instance_id) is component

    def __len__(self) -> int:
        return len(self._components)

    def add[C: Component](self, *components: C) -> C:
        """Attaches components to the scene. Attaching a component twice has no effect. Returns the last component
        added so single additions can be chained."""
        for component in components:
            if not isinstance(component, Component):
                raise TypeError(f"Scenes can only hold components, got {component!r}")

            if component.scene is not None and component.scene is not self:
                component.scene.remove(component)

            component.scene = self
            self._components[component.instance_id] = component

        return components[-1] if components else None

    def remove(self, component: Component):
        if self._components.pop(component.instance_id, None) is not None:
            component.scene = None

    def components(self) -> list[Component]:
        return sorted(self._components.values(), key=lambda component: component.instance_id)

    def live_components(self) -> list[Component]:
        """Enabled components in the order they were created."""
        return [component for component in self.components() if component.enabled]

    def activate(self):
        """Wakes every live component once, ordered by execution order and then creation order. An exception raised
        by a component stops activation and propagates to the caller."""
        for component in sorted(
            self.live_components(), key=lambda component: (component.execution_order, component.instance_id)
        ):
            component.awake()

    def __repr__(self):
        return f"<Scene {self.name!r} components={len(self)}>"


@overload
def get_scene(scene: Scene | None) -> Scene:
    ...


@overload
def get_scene() -> Scene:
    ...


def get_scene(*args) -> Scene:
    """Returns a scene. If a scene is passed, it is returned. If no scene is passed or None is passed, the current
    scene is returned. This creates a new global scene if it is needed and doesn't already exist."""
    match args:
        case [Scene() as scene]:
            return scene

        case [None] | []:
            return get_global_scene()

        case _:
            raise ValueError(f"Unexpected arguments to get_scene: {args}")
