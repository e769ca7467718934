"""Parallel per-pixel renderer.

This module distributes the path tracer over a ``concurrent.futures`` worker
pool with one task per pixel:

- Every task averages ``samples`` independent path estimates for its pixel,
  clamps the result to [0, 1] and returns ``(row, col, color)``.
- The orchestrating thread collects completions in whatever order they
  arrive and writes each into the pixel buffer at its own coordinates.
- At most ``workers * TASKS_PER_WORKER`` tasks are in flight; each
  completion lets the next pixel in.
- The image is complete after exactly ``width * height`` completions.

Scene and camera frame are immutable. Thread workers share them by reference;
process workers receive a pickled copy with each task. Only the orchestrator
touches the pixel buffer.

A task that raises aborts the render with :class:`RenderError`, chained to
the worker's exception. Whatever ends the render early, queued tasks are
cancelled before the exception propagates.

Random numbers come from a generator built inside each task. With a seed the
generator is derived from ``(seed, row, col)``, so seeded renders are
pixel-identical whatever the worker count or completion order.

Example:
    >>> from pathtracer.core.scheduler import ParallelRenderer
    >>> from pathtracer.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> renderer = ParallelRenderer(scene, camera, 64, 48, samples=16, seed=7)
    >>> image = renderer.render()
    >>> renderer.save_ppm("image.ppm")
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Iterator
from concurrent.futures import (
    FIRST_COMPLETED,
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    wait,
)
from dataclasses import dataclass
from itertools import islice

import numpy as np
import numpy.typing as npt

from pathtracer.camera.pinhole import (
    DEFAULT_FOCAL_DISTANCE,
    Camera,
    CameraFrame,
    get_camera_info,
    get_ray,
    setup_camera,
)
from pathtracer.core.integrator import MAX_DEPTH, estimate_pixel
from pathtracer.core.ray import clamp
from pathtracer.scene.intersection import Scene

logger = logging.getLogger(__name__)

# Callback receives (completed_pixels, total_pixels)
ProgressCallback = Callable[[int, int], None]

PixelResult = tuple[int, int, tuple[float, float, float]]

EXECUTOR_KINDS = ("process", "thread")

# Pixels in flight per worker; the rest are submitted as results come back
TASKS_PER_WORKER = 64


class RenderError(RuntimeError):
    """Raised when a pixel task fails and the render is abandoned."""


@dataclass(frozen=True)
class PixelTask:
    """Everything a worker needs to render one pixel.

    Attributes:
        row: Pixel row.
        col: Pixel column.
        height: Image height in pixels.
        width: Image width in pixels.
        samples: Number of path samples to average.
        seed: Base seed, or None for fresh entropy.
        frame: Camera frame shared by the whole render.
        scene: Scene shared by the whole render.
        max_depth: Depth after which hits stop scattering.
    """

    row: int
    col: int
    height: int
    width: int
    samples: int
    seed: int | None
    frame: CameraFrame
    scene: Scene
    max_depth: int = MAX_DEPTH


def pixel_rng(seed: int | None, row: int, col: int) -> np.random.Generator:
    """Build the random generator for one pixel task.

    Args:
        seed: Base seed of the render, or None.
        row: Pixel row.
        col: Pixel column.

    Returns:
        A generator seeded from (seed, row, col), or from OS entropy when
        ``seed`` is None.
    """
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng([seed, row, col])


def render_pixel(task: PixelTask) -> PixelResult:
    """Render a single pixel.

    Runs in a worker. The primary ray is the same for every sample, so it is
    generated once.

    Args:
        task: The pixel to render and the shared render state.

    Returns:
        Tuple of (row, col, (r, g, b)) with each channel clamped to [0, 1].
    """
    rng = pixel_rng(task.seed, task.row, task.col)
    ray = get_ray(task.frame, task.row, task.col, task.height, task.width)
    color = estimate_pixel(ray, task.scene, rng, task.samples, task.max_depth)
    return task.row, task.col, (clamp(color.x), clamp(color.y), clamp(color.z))


def default_worker_count() -> int:
    """Number of workers matching the available hardware parallelism."""
    return os.cpu_count() or 1


class ParallelRenderer:
    """Render a scene with one pool task per pixel.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Path samples per pixel.
        workers: Size of the worker pool.
        seed: Base seed, or None for a non-reproducible render.
        executor: "process" or "thread".
    """

    def __init__(
        self,
        scene: Scene,
        camera: Camera,
        width: int,
        height: int,
        samples: int,
        *,
        workers: int | None = None,
        seed: int | None = None,
        executor: str = "process",
        focal_distance: float = DEFAULT_FOCAL_DISTANCE,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: Scene to render. Must not change while rendering.
            camera: Camera to render from.
            width: Image width in pixels.
            height: Image height in pixels.
            samples: Path samples per pixel.
            workers: Pool size. Defaults to the number of CPUs.
            seed: Base seed for reproducible output.
            executor: "process" for a process pool, "thread" for a thread pool.
            focal_distance: Distance from the eye to the screen.
            max_depth: Depth after which hits stop scattering.

        Raises:
            ValueError: If a size or count is not positive, or the executor
                kind is unknown.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if samples <= 0:
            raise ValueError(f"Sample count must be positive, got {samples}")
        if seed is not None and seed < 0:
            raise ValueError(f"Seed must be non-negative, got {seed}")
        if workers is not None and workers <= 0:
            raise ValueError(f"Worker count must be positive, got {workers}")
        if executor not in EXECUTOR_KINDS:
            raise ValueError(
                f"Unknown executor kind {executor!r}, expected one of {EXECUTOR_KINDS}"
            )

        self._scene = scene
        self._camera = camera
        self._width = width
        self._height = height
        self._samples = samples
        self._workers = workers or default_worker_count()
        self._seed = seed
        self._executor = executor
        self._focal_distance = focal_distance
        self._max_depth = max_depth
        self._image: npt.NDArray[np.float64] | None = None

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def samples(self) -> int:
        """Get the number of samples per pixel."""
        return self._samples

    @property
    def workers(self) -> int:
        """Get the pool size."""
        return self._workers

    @property
    def seed(self) -> int | None:
        """Get the base seed."""
        return self._seed

    @property
    def executor(self) -> str:
        """Get the executor kind."""
        return self._executor

    @property
    def is_complete(self) -> bool:
        """Whether a render has finished and its image is available."""
        return self._image is not None

    def _make_executor(self) -> Executor:
        if self._executor == "thread":
            return ThreadPoolExecutor(max_workers=self._workers)
        return ProcessPoolExecutor(max_workers=self._workers)

    def frame(self) -> CameraFrame:
        """Compute the camera frame shared by every pixel of a render."""
        return setup_camera(self._camera, self._focal_distance)

    def tasks(self, frame: CameraFrame | None = None) -> Iterator[PixelTask]:
        """Yield one task per pixel in row-major order."""
        if frame is None:
            frame = self.frame()
        for row in range(self._height):
            for col in range(self._width):
                yield PixelTask(
                    row=row,
                    col=col,
                    height=self._height,
                    width=self._width,
                    samples=self._samples,
                    seed=self._seed,
                    frame=frame,
                    scene=self._scene,
                    max_depth=self._max_depth,
                )

    def render(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.float64]:
        """Render every pixel and return the completed buffer.

        Args:
            callback: Optional function called after each completed pixel
                with (completed_pixels, total_pixels).

        Returns:
            Pixel buffer of shape (height, width, 3) with values in [0, 1].

        Raises:
            RenderError: If any pixel task raises. Exceptions raised by
                ``callback`` propagate unchanged.
        """
        total = self._width * self._height
        buffer = np.zeros((self._height, self._width, 3), dtype=np.float64)

        logger.info(
            "Rendering %dx%d at %d spp on %d %s workers (seed=%s)",
            self._width,
            self._height,
            self._samples,
            self._workers,
            self._executor,
            self._seed,
        )
        frame = self.frame()
        logger.debug("Camera frame: %s", get_camera_info(frame))
        start_time = time.perf_counter()

        received = 0
        tasks = self.tasks(frame)
        window = self._workers * TASKS_PER_WORKER
        executor = self._make_executor()
        try:
            pending: set[Future[PixelResult]] = {
                executor.submit(render_pixel, task) for task in islice(tasks, window)
            }
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    try:
                        row, col, color = future.result()
                    except Exception as exc:
                        logger.error(
                            "Pixel task failed, abandoning %d unfinished pixels", total - received
                        )
                        raise RenderError(
                            f"Pixel task failed after {received}/{total} pixels"
                        ) from exc

                    buffer[row, col] = color
                    received += 1
                    if callback is not None:
                        callback(received, total)

                for task in islice(tasks, len(done)):
                    pending.add(executor.submit(render_pixel, task))
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        if received != total:
            raise RenderError(f"Expected {total} pixel results, received {received}")

        elapsed = time.perf_counter() - start_time
        logger.info("Rendered %d pixels in %.2fs", total, elapsed)

        self._image = buffer
        return buffer

    def get_image_numpy(self) -> npt.NDArray[np.float64]:
        """Get the last rendered image.

        Returns:
            Pixel buffer of shape (height, width, 3).

        Raises:
            RuntimeError: If render() has not completed yet.
        """
        if self._image is None:
            raise RuntimeError("No image rendered yet. Call render() first.")
        return self._image

    def save_ppm(self, filepath: str) -> bool:
        """Write the last rendered image as an ASCII P3 file.

        Returns:
            True if the file was written, False if writing failed.
        """
        from pathtracer.preview.export import save_ppm

        return save_ppm(self.get_image_numpy(), filepath)

    def save_png(self, filepath: str) -> bool:
        """Write the last rendered image as a PNG file.

        Returns:
            True if the file was written, False if writing failed.
        """
        from pathtracer.preview.export import save_png

        return save_png(self.get_image_numpy(), filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ParallelRenderer(width={self.width}, height={self.height}, "
            f"samples={self.samples}, workers={self.workers}, executor={self.executor!r})"
        )
