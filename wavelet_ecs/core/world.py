"""World: Entity-Component-System registry for image transforms.

The World owns one Arena and tracks which components each entity carries.
Systems read components from entities and attach the components they produce.

Example:
    >>> world = World()
    >>> eid = world.spawn_image(np.zeros((64, 64), dtype=np.float32))
    >>> pyr = world.pipe(eid).to(WaveletTransform("haar", levels=3)).out(WaveletPyr)
    >>> world.clear()  # Reset for the next batch
"""

from __future__ import annotations

from typing import Any, TypeVar

import numpy as np
from pydantic import BaseModel

from wavelet_ecs.core.arena import Arena, GrayImage

Component = BaseModel

T = TypeVar("T", bound=Component)


class World:
    """Central ECS registry managing entities, components, and memory.

    Attributes:
        arena: Memory arena every image of this world is allocated from
        metadata: Per-entity metadata dict
    """

    def __init__(self, arena_bytes: int = 64 << 20):
        """Create World with specified arena size.

        Args:
            arena_bytes: Arena size in bytes (default 64 MB)
        """
        self.arena = Arena(size_bytes=arena_bytes)
        self._next_eid = 0
        self._components: dict[type[Component], dict[int, Component]] = {}
        self.metadata: dict[int, dict[str, Any]] = {}

    def new_entity(self) -> int:
        """Create a new entity and return its ID."""
        eid = self._next_eid
        self._next_eid += 1
        self.metadata[eid] = {}
        return eid

    def alloc_image(
        self, width: int, height: int, dtype: np.dtype[Any] | type | str = np.float32
    ) -> GrayImage:
        """Allocate a zero-filled image in the world's arena."""
        return self.arena.alloc_image(width, height, dtype)

    def spawn_image(self, img: np.ndarray) -> int:
        """Copy a single band image into the arena and attach it as Gray.

        Args:
            img: (H, W) array with dtype uint8 or float32

        Returns:
            Entity ID with a Gray component attached

        Raises:
            ValueError: If the array is not 2D or has another dtype
        """
        from wavelet_ecs.components.image import Gray

        if img.ndim != 2:
            raise ValueError(f"Expected image with shape (H, W), got {img.shape}")
        if img.dtype not in (np.uint8, np.float32):
            raise ValueError(f"Expected dtype uint8 or float32, got {img.dtype}")

        eid = self.new_entity()
        pix = self.alloc_image(img.shape[1], img.shape[0], img.dtype)
        pix.data[...] = img
        self.add_component(eid, Gray(pix=pix))

        self.metadata[eid]["image_shape"] = img.shape
        self.metadata[eid]["image_dtype"] = str(img.dtype)
        return eid

    def clear(self) -> None:
        """Reset the arena and drop all entities.

        Every GrayImage handed out before clear() becomes stale.
        """
        self.arena.reset()
        self._next_eid = 0
        self._components.clear()
        self.metadata.clear()

    def add_component(self, eid: int, component: Component) -> None:
        """Attach a component to an entity, replacing one of the same type.

        Raises:
            ValueError: If entity does not exist
        """
        if eid not in self.metadata:
            raise ValueError(f"Entity {eid} does not exist")
        self._components.setdefault(type(component), {})[eid] = component

    def get_component(self, eid: int, comp_type: type[T]) -> T:
        """Retrieve a component from an entity.

        Raises:
            KeyError: If entity does not have the component
        """
        store = self._components.get(comp_type, {})
        if eid not in store:
            raise KeyError(f"Entity {eid} does not have component {comp_type.__name__}")
        return store[eid]  # type: ignore[return-value]

    def has_component(self, eid: int, comp_type: type[Component]) -> bool:
        return eid in self._components.get(comp_type, {})

    def remove_component(self, eid: int, comp_type: type[Component]) -> None:
        """Detach a component from an entity.

        Raises:
            KeyError: If entity does not have the component
        """
        if not self.has_component(eid, comp_type):
            raise KeyError(f"Entity {eid} does not have component {comp_type.__name__}")
        del self._components[comp_type][eid]

    def query(self, *comp_types: type[Component]) -> list[int]:
        """Entities that carry ALL of the given component types, sorted by ID.

        With no types every entity is returned.
        """
        if not comp_types:
            return list(self.metadata.keys())

        result_set = set(self._components.get(comp_types[0], {}).keys())
        for comp_type in comp_types[1:]:
            result_set &= set(self._components.get(comp_type, {}).keys())
        return sorted(result_set)

    def destroy_entity(self, eid: int) -> None:
        """Remove entity and all its components.

        Arena memory is only reclaimed by clear().
        """
        if eid not in self.metadata:
            raise ValueError(f"Entity {eid} does not exist")
        for comp_store in self._components.values():
            comp_store.pop(eid, None)
        del self.metadata[eid]

    def pipe(self, entity: int) -> Any:
        """Start a fluent pipeline for the given entity.

        Example:
            >>> recon = (
            ...     world.pipe(entity)
            ...     .to(WaveletTransform("daub4", levels=2))
            ...     .to(WaveletTransform("daub4", levels=2, mode="inverse"))
            ...     .out(ReconGray)
            ... )
        """
        from wavelet_ecs.core.pipeline import Pipe

        return Pipe(world=self, entity=entity)

    def __repr__(self) -> str:
        return (
            f"World(entities={len(self.metadata)}, "
            f"component_types={len(self._components)}, arena={self.arena})"
        )
