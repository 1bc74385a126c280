"""Name -> backend factory registry.

The registry has a two-phase lifecycle: all `register` calls happen during
single-threaded start-up, after which it is only read. `seal()` makes that
explicit; lookups never mutate state and are safe from any number of threads.
"""

from collections.abc import Callable

from thermoflow.core import QMProgram
from thermoflow.exceptions import ConfigurationError, UnsupportedProgramError
from thermoflow.programs.gaussian import GaussianProgram
from thermoflow.programs.orca import OrcaProgram
from thermoflow.utils import logger

ProgramFactory = Callable[[], QMProgram]


def _normalize(name: str) -> str:
    return name.strip().lower()


class ProgramRegistry:
    """Maps case-insensitive program names to zero-argument backend factories."""

    def __init__(self) -> None:
        self._factories: dict[str, ProgramFactory] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """End the registration phase. Later `register` calls raise ConfigurationError."""
        self._sealed = True
        logger.debug(f"Program registry sealed with: {sorted(self._factories)}")

    def register(self, name: str, factory: ProgramFactory) -> None:
        """
        Registers `factory` under `name`. Re-registering a name replaces the previous factory.

        Raises:
            ConfigurationError: If the registry has been sealed.
        """
        if self._sealed:
            raise ConfigurationError(f"Cannot register '{name}': the program registry is sealed.")
        key = _normalize(name)
        if key in self._factories:
            logger.info(f"Overriding registered program '{key}'")
        self._factories[key] = factory

    def create(self, name: str) -> QMProgram:
        """
        Builds the backend registered under `name` (case-insensitive).

        Raises:
            UnsupportedProgramError: If nothing is registered under `name`.
        """
        try:
            factory = self._factories[_normalize(name)]
        except KeyError:
            raise UnsupportedProgramError(name) from None
        return factory()

    def is_supported(self, name: str) -> bool:
        return _normalize(name) in self._factories

    def list_supported(self) -> set[str]:
        return set(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_supported(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(programs={sorted(self._factories)}, sealed={self._sealed})"


def register_programs(registry: ProgramRegistry) -> None:
    """Adds the built-in backends to `registry`."""
    registry.register("gaussian", GaussianProgram)
    registry.register("orca", OrcaProgram)


# Process-wide registry, populated once on import
default_registry = ProgramRegistry()
register_programs(default_registry)


def register_program(name: str, factory: ProgramFactory) -> None:
    default_registry.register(name, factory)


def create_program(name: str) -> QMProgram:
    return default_registry.create(name)


def is_program_supported(name: str) -> bool:
    return default_registry.is_supported(name)


def list_supported_programs() -> set[str]:
    return default_registry.list_supported()
