"""Fluent pipelines of systems over one entity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from wavelet_ecs.core.system import System
    from wavelet_ecs.core.world import World

T = TypeVar("T", bound=BaseModel)


class Pipe:
    """Chains systems with `.to()` or `|` and runs them with `.out()`.

    Example:
        >>> pyr = world.pipe(entity).to(WaveletTransform("haar", levels=2)).out(WaveletPyr)
    """

    def __init__(self, world: "World", entity: int) -> None:
        self.world: Any = world
        self.entities = [entity]
        self.systems: list[Any] = []

    def to(self, system: "System") -> "Pipe":
        self.systems.append(system)
        return self

    def __or__(self, system: "System") -> "Pipe":
        return self.to(system)

    def out(self, component_type: type[T]) -> T:
        """Execute pipeline and return the entity's component of the given type.

        Raises:
            RuntimeError: If any system cannot run (missing dependencies)
            KeyError: If the entity lacks the requested component afterwards
        """
        self.execute()
        return self.world.get_component(self.entities[0], component_type)  # type: ignore[no-any-return]

    def execute(self) -> None:
        """Run all systems in order with dependency checking.

        Raises:
            RuntimeError: If no entity has the components a system requires
        """
        for system in self.systems:
            runnable = [eid for eid in self.entities if system.can_run(self.world, eid)]
            if not runnable:
                required = [ct.__name__ for ct in system.required_components()]
                raise RuntimeError(
                    f"System {type(system).__name__} cannot run: "
                    f"entities missing required components {required}. "
                    f"Available entities: {self.entities}"
                )
            system.run(self.world, runnable)
