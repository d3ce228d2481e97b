"""
Diagnostics for the scene injector.

Every event the injector reports goes through one of the named methods here so the wording and severity of each
diagnostic lives in a single place. Records are written with loguru and carry structured ``extra`` fields
(``component``, ``member``, ``dependency``) so sinks can filter on them.
"""
from loguru import logger

from sceneject.exceptions import type_name


class Diagnostics:
    """
    Centralized logging for scan passes, validation and clearing.

    Debug traces are only emitted when debugging is enabled, everything else is always logged.
    """

    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self.logger = logger.bind(component=None, member=None, dependency=None)

    def _bind(self, component=None, member=None, dependency=None):
        return self.logger.bind(
            component=component,
            member=member,
            dependency=type_name(dependency) if dependency is not None else None,
        )

    def registered_dependency(self, dependency_type: type, provider_name: str, method_name: str):
        if self.enabled:
            self._bind(provider_name, method_name, dependency_type).debug(
                f"Registered {type_name(dependency_type)} from {provider_name}.{method_name}"
            )

    def resolving_dependency(self, dependency_type: type, owner_name: str, member_name: str):
        if self.enabled:
            self._bind(owner_name, member_name, dependency_type).debug(
                f"Resolving {type_name(dependency_type)} for {owner_name}.{member_name}"
            )

    def injected_member(self, owner_name: str, member_name: str, value):
        if self.enabled:
            self._bind(owner_name, member_name).debug(f"Injected {owner_name}.{member_name} = {value!r}")

    def field_already_set(self, owner_name: str, member_name: str, dependency_type: type):
        """Field injection never overwrites, this records the skip."""
        self._bind(owner_name, member_name, dependency_type).warning(
            f"Field '{member_name}' of class '{owner_name}' is already set."
        )

    def error(self, error: Exception, owner_name: str = None, member_name: str = None, dependency_type=None):
        """Log a registration, declaration or injection error."""
        self._bind(owner_name, member_name, dependency_type).error(str(error))

    def pass_completed(self, registered: int, injected: int, skipped: int):
        self.logger.info(
            f"Injection pass completed: {registered} dependencies registered, {injected} targets injected, "
            f"{skipped} fields already set"
        )

    def validation_passed(self):
        self.logger.info("All dependencies are valid.")

    def validation_failed(self, count: int):
        self.logger.error(f"{count} dependencies are missing.")

    def invalid_target(self, owner_name: str, member_name: str, dependency_name: str, instance_id: int):
        self._bind(owner_name, member_name).bind(dependency=dependency_name).error(
            f"{owner_name} is missing dependency {dependency_name} (instance {instance_id})"
        )

    def dependencies_cleared(self, count: int):
        self.logger.info(f"Cleared {count} injectable fields.")


def create_diagnostics(enabled: bool) -> Diagnostics:
    """Create a new diagnostics logger with specified state."""
    return Diagnostics(enabled)
