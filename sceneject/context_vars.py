import os
from contextvars import ContextVar

import sceneject.scenes as s

global_scene: "ContextVar[s.Scene]" = ContextVar("global_scene")


class GlobalContextDisabledError(Exception):
    """Raised when the global context is disabled by the SCENEJECT_ENABLE_GLOBAL_CONTEXT environment variable."""


yes_no_mapping = {
    "yes": True,
    "no": False,
    "true": True,
    "false": False,
    "1": True,
    "0": False,
    "y": True,
    "n": False,
}


def _env_flag(name: str, default: bool) -> bool:
    var = os.getenv(name)
    if var is None:
        return default

    return yes_no_mapping.get(var.casefold(), default)


def is_global_context_enabled() -> bool:
    """Returns True if the global context is enabled, False otherwise."""
    return _env_flag("SCENEJECT_ENABLE_GLOBAL_CONTEXT", True)


def is_debug_enabled() -> bool:
    """Returns True when the SCENEJECT_DEBUG environment variable turns on resolution traces."""
    return _env_flag("SCENEJECT_DEBUG", False)


def get_global_scene() -> "s.Scene":
    """Gets the current scene. If no scene exists, creates a new one. Raises GlobalContextDisabledError if the
    SCENEJECT_ENABLE_GLOBAL_CONTEXT environment variable is set to False."""
    if not is_global_context_enabled():
        raise GlobalContextDisabledError("Global context is disabled. You must provide a scene to use.")

    try:
        scene = global_scene.get()
    except LookupError:
        global_scene.set(
            scene := s.Scene()
        )

    return scene


class GlobalContextMixin:
    """This mixin allows instances to be loaded into a predefined contextvar using a context manager."""
    def __init_subclass__(cls, *, var: ContextVar, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._context_var = var

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._reset_tokens = []

    def __enter__(self):
        self._reset_tokens.append(self._context_var.set(self))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._context_var.reset(self._reset_tokens.pop())
