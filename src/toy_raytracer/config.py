"""Render configuration shared by the command line and the render driver.

Nothing here touches Taichi, so this module can be imported before
``ti.init``.
"""

from dataclasses import dataclass
from enum import Enum

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_SCENE = "weekend"
DEFAULT_IMAGE_WIDTH = 1200
DEFAULT_ASPECT_RATIO = 1.5
DEFAULT_NUM_THREADS = 0
DEFAULT_SAMPLES_PER_PIXEL = 500
DEFAULT_MAX_DEPTH = 50
DEFAULT_OUTPUT = "output.png"
DEFAULT_ROWS_PER_BATCH = 16

# Render buffers are preallocated at this size to avoid kernel recompilation
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048


class SceneName(str, Enum):
    """Names of the built-in scenes."""

    WEEKEND = "weekend"
    DIFFUSE_SPHERES = "diffuse-spheres"
    SHINY_METAL = "shiny-metal"
    FUZZY_METAL = "fuzzy-metal"
    HOLLOW_GLASS_SPHERES = "hollow-glass-spheres"

    @classmethod
    def parse(cls, name: "str | SceneName") -> "SceneName":
        """Look up a scene by name, ignoring case.

        Raises:
            ValueError: If no scene has that name.
        """
        if isinstance(name, SceneName):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown scene '{name}'. Available scenes: {choices}") from None


def image_height_for(width: int, aspect_ratio: float) -> int:
    """Image height for a width and aspect ratio, truncated toward zero."""
    return int(width / aspect_ratio)


@dataclass
class RenderSettings:
    """Parameters of a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Camera rays traced per pixel.
        max_depth: Bounce budget per path.
        seed: Seed for all random streams of the render.
        rows_per_batch: Rows rendered per kernel launch; progress is
            reported after each batch.
    """

    width: int
    height: int
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    max_depth: int = DEFAULT_MAX_DEPTH
    seed: int = 0
    rows_per_batch: int = DEFAULT_ROWS_PER_BATCH

    def __post_init__(self) -> None:
        # Pixel coordinates are divided by (width - 1) and (height - 1)
        if self.width < 2 or self.height < 2:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) must be at least 2x2"
            )
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be >= 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.rows_per_batch < 1:
            raise ValueError(f"rows_per_batch must be >= 1, got {self.rows_per_batch}")
