"""
Markers that tag members as injection targets or dependency sources.

Example:
    Declaring a provider and a consumer:

    >>> from sceneject import Component, DependencyProvider, Inject, inject, provide
    >>>
    >>> class ServiceProvider(Component, DependencyProvider):
    ...     @provide
    ...     def provide_audio(self) -> AudioService:
    ...         return AudioService()
    >>>
    >>> class Player(Component):
    ...     audio: Inject[AudioService]
    ...
    ...     @inject
    ...     def set_up(self, audio: AudioService, inventory: Inventory):
    ...         ...
"""
from typing import Annotated, Any, Callable, get_args, get_origin

INJECT_MARKER = "__sceneject_inject__"
PROVIDE_MARKER = "__sceneject_provide__"

# Field marker, used as a class level annotation: ``service: Inject[Service]``
type Inject[T] = Annotated[T, INJECT_MARKER]


class DependencyProvider:
    """Marker base class. Components that subclass it are scanned for ``@provide`` methods."""
    __slots__ = ()


def inject[F: Callable[..., Any] | property](target: F) -> F:
    """
    Marks a method or property as an injection target.

    Methods have each of their annotated parameters resolved and are called once with the resolved instances.
    Properties are assigned through their setter, the required type is the getter's return annotation. The decorator
    can go above or below ``@property``.
    """
    match target:
        case property(fget=getter) if getter is not None:
            setattr(getter, INJECT_MARKER, True)

        case _ if callable(target):
            setattr(target, INJECT_MARKER, True)

        case _:
            raise TypeError(f"@inject can only mark methods and properties, got {target!r}")

    return target


def provide[F: Callable[..., Any]](method: F) -> F:
    """Marks a method on a DependencyProvider as a factory. It is called with no arguments and the instance it returns
    is registered under its return annotation."""
    if not callable(method):
        raise TypeError(f"@provide can only mark methods, got {method!r}")

    setattr(method, PROVIDE_MARKER, True)
    return method


def is_inject_marked(obj) -> bool:
    return getattr(obj, INJECT_MARKER, False) is True


def is_provide_marked(obj) -> bool:
    return getattr(obj, PROVIDE_MARKER, False) is True


def extract_injection_type(annotation) -> tuple[Any, bool]:
    """
    Extract the required type from a field annotation.

    Returns:
        Tuple of (actual_type, is_injectable). Non-injectable annotations are returned unchanged.
    """
    if get_origin(annotation) is Inject:
        return get_args(annotation)[0], True

    if get_origin(annotation) is Annotated:
        actual_type, *metadata = get_args(annotation)
        if INJECT_MARKER in metadata:
            return actual_type, True

    return annotation, False
