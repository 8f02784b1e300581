"""System base class for ECS transformations.

Systems are the logic layer. They read the components they require from each
entity and attach the components they produce. A system runs either in the
'forward' (decomposition) or 'inverse' (reconstruction) direction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal

from wavelet_ecs.core.world import World


class System(ABC):
    """Base class for all ECS systems.

    Attributes:
        mode: Transformation direction ('forward' or 'inverse')
    """

    def __init__(self, mode: Literal["forward", "inverse"] = "forward") -> None:
        if mode not in ("forward", "inverse"):
            raise ValueError(f"mode must be 'forward' or 'inverse', got {mode!r}")
        self.mode = mode

    @abstractmethod
    def required_components(self) -> list[type]:
        """Component types an entity needs before run() can process it."""

    @abstractmethod
    def produced_components(self) -> list[type]:
        """Component types run() attaches to each processed entity."""

    @abstractmethod
    def run(self, world: World, eids: list[int]) -> None:
        """Execute system on given entities."""

    def can_run(self, world: World, eid: int) -> bool:
        """Check if entity has all required components."""
        return all(world.has_component(eid, ct) for ct in self.required_components())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(mode={self.mode})"
