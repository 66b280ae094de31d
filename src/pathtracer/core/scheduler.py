"""Bounded-concurrency pixel scheduler.

The RenderScheduler walks every pixel coordinate in raster order and hands
each one to a fixed-size thread pool as an independent task. A task seeds
its own random stream, estimates the pixel color with the integrator and
writes exactly one ColorBuffer cell, so workers share nothing mutable
except that buffer, whose cells they never share.

Concurrency is bounded twice over: the pool has ``settings.concurrency``
workers, and dispatch takes one permit from a semaphore of the same size
before submitting a task. The permit is returned when the task ends,
whatever the outcome. While waiting for a permit, dispatch polls the
cancellation flag.

Failure model:
    - A failing task records a PixelTaskError, logs it and sets the
      cancellation flag. Nothing is retried.
    - Once the flag is set no further pixels are dispatched. Tasks already
      running are allowed to finish.
    - run() then raises RenderCancelledError. A render that returns normally
      has written every pixel.

Example:
    >>> buffer = ColorBuffer(settings.width, settings.height)
    >>> scheduler = RenderScheduler(camera, world, buffer, settings)
    >>> scheduler.run()
    >>> scheduler.processed == settings.pixel_count
    True
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor, wait
from enum import Enum
from typing import TYPE_CHECKING

from pathtracer.core.color_buffer import ColorBuffer
from pathtracer.core.errors import PixelTaskError, RenderCancelledError
from pathtracer.core.integrator import sample_pixel
from pathtracer.core.settings import RenderSettings
from pathtracer.scene.intersection import ShapeCollection

if TYPE_CHECKING:
    from pathtracer.camera.camera import Camera

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (pixels_processed, total_pixels)
ProgressCallback = Callable[[int, int], None]

# Seconds between cancellation checks while waiting for a permit
PERMIT_POLL_INTERVAL = 0.05

Pixel = tuple[int, int]


class TaskState(Enum):
    """Lifecycle of a pixel task."""

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class RenderScheduler:
    """Drives per-pixel sampling across a bounded worker pool.

    Attributes:
        camera: Camera generating primary rays.
        world: Shapes to render; read-only during the render.
        color_buffer: Target buffer, sized like the settings.
        settings: Render parameters.
    """

    def __init__(
        self,
        camera: Camera,
        world: ShapeCollection,
        color_buffer: ColorBuffer,
        settings: RenderSettings,
        progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Prepare a render.

        Args:
            camera: Camera generating primary rays.
            world: Shapes to render.
            color_buffer: Buffer receiving one color per pixel.
            settings: Render parameters.
            progress: Optional callback receiving (processed, total) every
                ``settings.report_every`` pixels and once at the end.
            cancel_event: Optional externally owned cancellation flag. Setting
                it stops dispatch exactly like an internal task failure.

        Raises:
            ValueError: If the buffer size differs from the settings.
        """
        if (color_buffer.width, color_buffer.height) != (settings.width, settings.height):
            raise ValueError(
                f"Buffer size ({color_buffer.width}x{color_buffer.height}) does not match "
                f"render settings ({settings.width}x{settings.height})"
            )

        self.camera = camera
        self.world = world
        self.color_buffer = color_buffer
        self.settings = settings
        self._progress = progress

        self._cancel = cancel_event if cancel_event is not None else threading.Event()
        self._permits = threading.BoundedSemaphore(settings.concurrency)
        self._lock = threading.Lock()
        self._live: dict[Future[None], Pixel] = {}
        self._states: dict[Pixel, TaskState] = {}
        self._failures: list[PixelTaskError] = []
        self._processed = 0
        self._started = False

    # -------------------------------------------------------------------------
    # State inspection
    # -------------------------------------------------------------------------

    @property
    def processed(self) -> int:
        """Number of pixels written so far."""
        with self._lock:
            return self._processed

    @property
    def cancelled(self) -> bool:
        """True once cancellation has been requested or triggered."""
        return self._cancel.is_set()

    @property
    def failures(self) -> list[PixelTaskError]:
        """Pixel task failures observed so far."""
        with self._lock:
            return list(self._failures)

    @property
    def task_states(self) -> dict[Pixel, TaskState]:
        """Snapshot of the state of every dispatched pixel task."""
        with self._lock:
            return dict(self._states)

    @property
    def live_tasks(self) -> int:
        """Number of dispatched tasks that have not finished yet."""
        with self._lock:
            return len(self._live)

    def cancel(self) -> None:
        """Request cancellation. No new pixels are dispatched afterwards."""
        if not self._cancel.is_set():
            logger.warning("Render cancellation requested")
        self._cancel.set()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def run(self) -> None:
        """Render every pixel into the color buffer.

        Blocks until all dispatched tasks have finished.

        Raises:
            RenderCancelledError: If any pixel task failed or cancellation was
                requested before every pixel was processed. The first task
                failure, if any, is chained as the cause.
            RuntimeError: If the scheduler has already been run.
        """
        if self._started:
            raise RuntimeError("RenderScheduler.run() can only be called once")
        self._started = True

        total = self.settings.pixel_count
        logger.info(
            f"Rendering {self.settings.width}x{self.settings.height} at "
            f"{self.settings.samples_per_pixel} spp, depth {self.settings.max_depth}, "
            f"{self.settings.concurrency} workers"
        )
        start = time.perf_counter()

        with ThreadPoolExecutor(
            max_workers=self.settings.concurrency, thread_name_prefix="pixel"
        ) as executor:
            try:
                for pixel in self._enumerate_pixels():
                    if not self._acquire_permit():
                        logger.warning(
                            f"Dispatch stopped at pixel {pixel}: render cancelled"
                        )
                        break
                    self._dispatch(executor, pixel)
            finally:
                self._wait_for_all()

        elapsed = time.perf_counter() - start
        failures = self.failures
        processed = self.processed

        if failures or processed != total:
            reason = (
                f"{len(failures)} pixel task failure(s)" if failures else "cancellation request"
            )
            error = RenderCancelledError(
                f"Render cancelled after {reason}; {processed} of {total} pixels processed",
                failures,
            )
            if failures:
                raise error from failures[0]
            raise error

        logger.info(f"Render finished: {total} pixels in {elapsed:.2f}s")

    def _enumerate_pixels(self) -> Iterator[Pixel]:
        """Yield coordinates row by row, starting at the bottom row (v = 0)."""
        for y in range(self.settings.height):
            for x in range(self.settings.width):
                yield x, y

    def _acquire_permit(self) -> bool:
        """Wait for a concurrency permit.

        Returns:
            True with a permit held, or False (no permit held) once
            cancellation is signalled.
        """
        while not self._cancel.is_set():
            if self._permits.acquire(timeout=PERMIT_POLL_INTERVAL):
                if self._cancel.is_set():
                    self._permits.release()
                    return False
                return True
        return False

    def _dispatch(self, executor: ThreadPoolExecutor, pixel: Pixel) -> None:
        with self._lock:
            self._states[pixel] = TaskState.QUEUED
        try:
            future = executor.submit(self._process_pixel, *pixel)
        except BaseException:
            self._permits.release()
            raise
        with self._lock:
            self._live[future] = pixel
        future.add_done_callback(self._forget)

    def _forget(self, future: Future[None]) -> None:
        with self._lock:
            self._live.pop(future, None)

    def _wait_for_all(self) -> None:
        with self._lock:
            pending = list(self._live)
        wait(pending)

    def _set_state(self, pixel: Pixel, state: TaskState) -> None:
        with self._lock:
            self._states[pixel] = state

    def _process_pixel(self, x: int, y: int) -> None:
        """Worker body: shade one pixel and store it.

        Failures are recorded and turned into cancellation; the permit is
        released on every exit path.
        """
        pixel = (x, y)
        self._set_state(pixel, TaskState.RUNNING)
        try:
            color = sample_pixel(x, y, self.camera, self.world, self.settings)
            self.color_buffer.write(x, y, color)
            self._report_progress()
        except Exception as exc:
            error = PixelTaskError(x, y, f"{type(exc).__name__}: {exc}")
            error.__cause__ = exc
            with self._lock:
                self._states[pixel] = TaskState.FAILED
                self._failures.append(error)
            self._cancel.set()
            logger.exception(f"Pixel task ({x}, {y}) failed; cancelling render")
        else:
            self._set_state(pixel, TaskState.COMPLETED)
        finally:
            self._permits.release()

    def _report_progress(self) -> None:
        with self._lock:
            self._processed += 1
            processed = self._processed

        total = self.settings.pixel_count
        if processed % self.settings.report_every != 0 and processed != total:
            return

        logger.info(
            f"Processed scanlines: {processed // self.settings.width} of "
            f"{self.settings.height} ({processed}/{total} pixels)"
        )
        if self._progress is not None:
            self._progress(processed, total)

    def __repr__(self) -> str:
        return (
            f"RenderScheduler({self.settings.width}x{self.settings.height}, "
            f"processed={self.processed}, cancelled={self.cancelled})"
        )


def render(
    camera: Camera,
    world: ShapeCollection,
    settings: RenderSettings,
    progress: ProgressCallback | None = None,
    cancel_event: threading.Event | None = None,
) -> ColorBuffer:
    """Render a scene into a new ColorBuffer.

    Args:
        camera: Camera generating primary rays.
        world: Shapes to render.
        settings: Render parameters.
        progress: Optional (processed, total) callback.
        cancel_event: Optional externally owned cancellation flag.

    Returns:
        The filled ColorBuffer.

    Raises:
        RenderCancelledError: If the render did not complete.
    """
    buffer = ColorBuffer(settings.width, settings.height)
    RenderScheduler(camera, world, buffer, settings, progress, cancel_event).run()
    return buffer
