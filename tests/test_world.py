"""Tests for World and entity management."""

import numpy as np
import pytest

from wavelet_ecs.components.image import Component, Gray
from wavelet_ecs.core.world import World


# Mock component for testing
class MockComponent(Component):
    """Mock component for testing."""

    value: int


class TestWorld:
    """Tests for World ECS manager."""

    def test_creation(self) -> None:
        """Test World creation."""
        world = World(arena_bytes=1024)
        assert world.arena.size == 1024
        assert len(world.metadata) == 0

    def test_new_entity(self) -> None:
        """Test entity creation."""
        world = World()
        eid1 = world.new_entity()
        eid2 = world.new_entity()

        assert eid1 == 0
        assert eid2 == 1
        assert eid1 in world.metadata
        assert eid2 in world.metadata

    def test_add_and_get_component(self) -> None:
        """Test attaching and retrieving a component."""
        world = World()
        eid = world.new_entity()

        world.add_component(eid, MockComponent(value=42))

        assert world.has_component(eid, MockComponent)
        assert world.get_component(eid, MockComponent).value == 42

    def test_add_component_replaces_same_type(self) -> None:
        world = World()
        eid = world.new_entity()
        world.add_component(eid, MockComponent(value=1))
        world.add_component(eid, MockComponent(value=2))
        assert world.get_component(eid, MockComponent).value == 2

    def test_add_component_nonexistent_entity(self) -> None:
        """Test adding component to non-existent entity raises error."""
        world = World()

        with pytest.raises(ValueError, match="Entity .* does not exist"):
            world.add_component(999, MockComponent(value=42))

    def test_get_component_not_present(self) -> None:
        """Test retrieving non-existent component raises KeyError."""
        world = World()
        eid = world.new_entity()

        with pytest.raises(KeyError, match="does not have component"):
            world.get_component(eid, MockComponent)

    def test_remove_component(self) -> None:
        """Test removing component from entity."""
        world = World()
        eid = world.new_entity()

        world.add_component(eid, MockComponent(value=42))
        world.remove_component(eid, MockComponent)
        assert not world.has_component(eid, MockComponent)

        with pytest.raises(KeyError, match="does not have component"):
            world.remove_component(eid, MockComponent)

    def test_query(self) -> None:
        """Test query returns entities carrying all requested types."""
        world = World()

        class OtherComponent(Component):
            name: str

        eid1 = world.new_entity()
        eid2 = world.new_entity()
        eid3 = world.new_entity()

        world.add_component(eid1, MockComponent(value=1))
        world.add_component(eid1, OtherComponent(name="one"))
        world.add_component(eid2, MockComponent(value=2))
        world.add_component(eid3, OtherComponent(name="three"))

        assert world.query() == [eid1, eid2, eid3]
        assert world.query(MockComponent) == [eid1, eid2]
        assert world.query(MockComponent, OtherComponent) == [eid1]

    def test_destroy_entity(self) -> None:
        """Test destroying entity removes it and all its components."""
        world = World()
        eid = world.new_entity()
        world.add_component(eid, MockComponent(value=42))

        world.destroy_entity(eid)

        assert eid not in world.metadata
        assert not world.has_component(eid, MockComponent)

        with pytest.raises(ValueError, match="Entity .* does not exist"):
            world.destroy_entity(eid)

    def test_alloc_image(self) -> None:
        world = World(arena_bytes=4096)
        img = world.alloc_image(8, 4, np.int16)
        assert img.arena is world.arena
        assert img.shape == (4, 8)
        assert img.dtype == np.int16

    def test_spawn_image(self) -> None:
        """Test spawning a grayscale image into the world."""
        world = World()

        img = np.random.randint(0, 256, (32, 48), dtype=np.uint8)
        eid = world.spawn_image(img)

        gray = world.get_component(eid, Gray)
        np.testing.assert_array_equal(world.arena.view(gray.pix), img)
        assert gray.pix.width == 48
        assert world.metadata[eid]["image_shape"] == (32, 48)
        assert world.metadata[eid]["image_dtype"] == "uint8"

    def test_spawn_image_invalid_shape(self) -> None:
        world = World()
        with pytest.raises(ValueError, match="Expected image with shape"):
            world.spawn_image(np.zeros((16, 16, 3), dtype=np.uint8))

    def test_spawn_image_invalid_dtype(self) -> None:
        world = World()
        with pytest.raises(ValueError, match="Expected dtype"):
            world.spawn_image(np.zeros((16, 16), dtype=np.int32))

    def test_clear(self) -> None:
        """Test clearing world resets state and invalidates images."""
        world = World()
        eid = world.spawn_image(np.zeros((16, 16), dtype=np.float32))
        old = world.get_component(eid, Gray).pix
        generation = world.arena.generation

        world.clear()

        assert world.arena.offset == 0
        assert world.arena.generation == generation + 1
        assert len(world.metadata) == 0
        assert world.query(Gray) == []
        with pytest.raises(ValueError, match="Stale GrayImage"):
            world.arena.view(old)

        assert world.new_entity() == 0

    def test_repr(self) -> None:
        """Test World repr."""
        world = World()
        eid = world.new_entity()
        world.new_entity()
        world.add_component(eid, MockComponent(value=1))

        repr_str = repr(world)
        assert "entities=2" in repr_str
        assert "component_types=1" in repr_str
