"""Row-parallel render driver.

The render kernel's outermost loop runs over image rows, so Taichi spreads
rows across CPU threads. Each row seeds its own random stream from the render
seed and the row index; the image is therefore identical for a given seed no
matter how many threads render it or in what order rows finish.

For every pixel (x, y), with y = 0 the top row, each sample traces the camera
ray through
    u = (x + r1) / (width - 1),  v = 1 - (y + r2) / (height - 1)
where r1, r2 are uniform in [0, 1). The samples are averaged, gamma corrected
with a square root and clamped to [0, 1]. Quantisation to bytes happens in
toy_raytracer.output.export.

The Renderer launches the kernel for a batch of rows at a time and reports
progress between batches.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from toy_raytracer.config import RenderSettings
    >>> from toy_raytracer.core.render import Renderer
    >>> from toy_raytracer.scene.presets import create_scene
    >>>
    >>> preset = create_scene("shiny-metal", aspect_ratio=1.5)
    >>> renderer = Renderer(RenderSettings(width=300, height=200, samples_per_pixel=10))
    >>> pixels = renderer.render(preset.camera, preset.scene, preset.integrator)
"""

from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from toy_raytracer.camera import Camera
from toy_raytracer.camera.rays import get_ray, setup_camera
from toy_raytracer.config import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH, RenderSettings
from toy_raytracer.core.integrator import Integrator, trace_ray
from toy_raytracer.core.rng import normalize_seed, random_f32, seed_stream
from toy_raytracer.output.export import image_to_uint8
from toy_raytracer.scene.manager import Scene

# Type alias for 3D vectors
vec3 = tm.vec3

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Gamma corrected colors, indexed [row, column] with row 0 at the top
_pixels = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Rows completed by the current render, updated atomically by worker threads
_rows_done = ti.field(dtype=ti.i32, shape=())


@ti.kernel
def _render_rows(
    row_start: ti.i32,
    row_end: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    max_depth: ti.i32,
    seed: ti.u32,
    integrator: ti.i32,
):
    """Render rows [row_start, row_end) into the pixel buffer.

    Only the outermost loop (rows) is parallel; pixels within a row share the
    row's random stream and are rendered in order.
    """
    for y in range(row_start, row_end):
        rng = seed_stream(seed, y)
        for x in range(width):
            color = vec3(0.0, 0.0, 0.0)
            for _ in range(samples):
                jitter_u, rng = random_f32(rng)
                jitter_v, rng = random_f32(rng)
                u = (ti.cast(x, ti.f32) + jitter_u) / ti.cast(width - 1, ti.f32)
                v = 1.0 - (ti.cast(y, ti.f32) + jitter_v) / ti.cast(height - 1, ti.f32)

                ray, rng = get_ray(u, v, rng)
                sample, rng = trace_ray(ray, max_depth, integrator, rng)
                color += sample

            averaged = color / ti.cast(samples, ti.f32)
            _pixels[y, x] = tm.clamp(ti.sqrt(averaged), 0.0, 1.0)

        ti.atomic_add(_rows_done[None], 1)


class Renderer:
    """Renders scenes into an RGB pixel buffer.

    The renderer owns the settings of a render; the image itself lives in
    preallocated Taichi fields shared by all Renderer instances.

    Attributes:
        settings: Image size, sample count, bounce budget and seed.
    """

    def __init__(self, settings: RenderSettings) -> None:
        self.settings = settings
        self._rendered = False

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    @property
    def rows_done(self) -> int:
        """Rows completed by the most recent render."""
        return int(_rows_done[None])

    def _prepare(self, camera: Camera, scene: Scene) -> None:
        scene.upload()
        setup_camera(camera)
        _rows_done[None] = 0
        self._rendered = False

    def render_progressive(
        self,
        camera: Camera,
        scene: Scene,
        integrator: Integrator = Integrator.SCATTER,
    ) -> Generator[tuple[int, int], None, None]:
        """Render the image, yielding progress after each batch of rows.

        Args:
            camera: The camera to render from.
            scene: The scene to render. Uploaded before the first batch.
            integrator: The radiance integrator to use.

        Yields:
            Tuple of (rows_done, total_rows).
        """
        self._prepare(camera, scene)
        settings = self.settings
        seed = normalize_seed(settings.seed)

        for row_start in range(0, settings.height, settings.rows_per_batch):
            row_end = min(row_start + settings.rows_per_batch, settings.height)
            _render_rows(
                row_start,
                row_end,
                settings.width,
                settings.height,
                settings.samples_per_pixel,
                settings.max_depth,
                seed,
                int(integrator),
            )
            yield (self.rows_done, settings.height)

        self._rendered = True

    def render(
        self,
        camera: Camera,
        scene: Scene,
        integrator: Integrator = Integrator.SCATTER,
        callback: ProgressCallback | None = None,
    ) -> bytes:
        """Render the image and return its pixels.

        Args:
            camera: The camera to render from.
            scene: The scene to render.
            integrator: The radiance integrator to use.
            callback: Optional callback called after each batch of rows.
                Receives (rows_done, total_rows).

        Returns:
            Row-major RGB bytes, top row first, width * height * 3 long.

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> pixels = renderer.render(camera, scene, callback=progress)
        """
        for done, total in self.render_progressive(camera, scene, integrator):
            if callback is not None:
                callback(done, total)
        return self.get_pixel_bytes()

    def _check_rendered(self) -> None:
        if not self._rendered:
            raise RuntimeError("No completed render. Call render() first.")

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the rendered, gamma corrected image.

        Returns:
            NumPy array of shape (height, width, 3), values in [0, 1], row 0
            at the top.

        Raises:
            RuntimeError: If no render has completed.
        """
        self._check_rendered()
        image = _pixels.to_numpy()[: self.height, : self.width, :]
        return image.astype(np.float32)

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the rendered image quantised to 8 bits per channel."""
        return image_to_uint8(self.get_image_numpy())

    def get_pixel_bytes(self) -> bytes:
        """Get the rendered image as row-major RGB bytes."""
        return self.get_image_uint8().tobytes()

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples_per_pixel={self.settings.samples_per_pixel}, "
            f"max_depth={self.settings.max_depth})"
        )
