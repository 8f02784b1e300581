"""Wavelet decomposition system.

Runs the multi level transform of ``wavelet_ecs.wavelet.ops`` on the images
of a World. The engine uses its input image as workspace; by default the
system hands it a copy so the entity's source component is left untouched.

Forward mode: Gray → WaveletPyr
Inverse mode: WaveletPyr → ReconGray
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from wavelet_ecs.components.image import Gray, ReconGray
from wavelet_ecs.components.wavelet import WaveletPyr
from wavelet_ecs.config import load_config
from wavelet_ecs.core.system import System
from wavelet_ecs.core.world import World
from wavelet_ecs.wavelet import ops, util
from wavelet_ecs.wavelet.description import WaveletDescription
from wavelet_ecs.wavelet.families import get_description


class WaveletTransform(System):
    """Multi level 2D wavelet transform of Gray images.

    Attributes:
        description: Wavelet family used in both directions
        levels: Number of decomposition levels
        preserve_input: Copy the source before transforming, since the
            engine overwrites its input
    """

    def __init__(
        self,
        description: WaveletDescription | str = "haar",
        levels: int = 1,
        mode: Literal["forward", "inverse"] = "forward",
        preserve_input: bool = True,
        config_path: str | None = None,
    ):
        """Initialize wavelet system.

        Args:
            description: WaveletDescription or a family name for get_description()
            levels: Number of decomposition levels (1-10)
            mode: 'forward' for decomposition, 'inverse' for reconstruction
            preserve_input: Leave the source component's pixels unchanged
            config_path: Path to wavelet_ecs.toml (auto-detected if None)
        """
        super().__init__(mode=mode)
        if not 1 <= levels <= 10:
            raise ValueError(f"levels must be in [1, 10], got {levels}")
        if isinstance(description, str):
            description = get_description(description)
        if description.is_integer:
            raise ValueError(
                f"WaveletTransform needs a floating point wavelet, got '{description.name}'"
            )
        self.description = description
        self.levels = levels
        self.preserve_input = preserve_input
        self.config = load_config(config_path)

    def required_components(self) -> list[type]:
        if self.mode == "forward":
            return [Gray]
        return [WaveletPyr]

    def produced_components(self) -> list[type]:
        if self.mode == "forward":
            return [WaveletPyr]
        return [ReconGray]

    def run(self, world: World, eids: list[int]) -> None:
        if self.mode == "forward":
            self._run_forward(world, eids)
        else:
            self._run_inverse(world, eids)

    def _run_forward(self, world: World, eids: list[int]) -> None:
        """Forward decomposition: Gray → WaveletPyr."""
        for eid in eids:
            pix = world.get_component(eid, Gray).pix

            if pix.dtype != np.float32 or self.preserve_input:
                source = world.alloc_image(pix.width, pix.height, np.float32)
                source.data[...] = pix.data
            else:
                source = pix

            width, height = util.transform_dimension(pix.width, pix.height)
            coef = world.alloc_image(width, height, np.float32)
            storage = world.alloc_image(width, height, np.float32)
            ops.transform_n(
                self.description, source, coef, storage, self.levels, config=self.config
            )

            world.add_component(
                eid,
                WaveletPyr(
                    coef=coef,
                    levels=self.levels,
                    family=self.description.name,
                    original_width=pix.width,
                    original_height=pix.height,
                ),
            )

    def _run_inverse(self, world: World, eids: list[int]) -> None:
        """Inverse reconstruction: WaveletPyr → ReconGray."""
        for eid in eids:
            pyr = world.get_component(eid, WaveletPyr)
            if pyr.levels != self.levels:
                raise ValueError(
                    f"Entity {eid} holds a {pyr.levels} level pyramid, "
                    f"system expects {self.levels}"
                )
            if pyr.family != self.description.name:
                raise ValueError(
                    f"Entity {eid} was transformed with '{pyr.family}', "
                    f"system uses '{self.description.name}'"
                )

            if self.preserve_input:
                source = world.alloc_image(pyr.coef.width, pyr.coef.height, np.float32)
                source.set_to(pyr.coef)
            else:
                source = pyr.coef

            recon = world.alloc_image(pyr.original_width, pyr.original_height, np.float32)
            storage = world.alloc_image(source.width, source.height, np.float32)
            ops.inverse_n(
                self.description, source, recon, storage, self.levels, config=self.config
            )
            world.add_component(eid, ReconGray(pix=recon))
