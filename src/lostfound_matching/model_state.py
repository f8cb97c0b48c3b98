"""Lazily built, process-wide VectorSpaceModel with single-flight initialization."""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import Callable, Iterable, Sequence

from lostfound_matching.models import VectorSpaceModel
from lostfound_matching.telemetry import configure_logging, log_event, log_warning
from lostfound_matching.vectorizer import fit


class ModelState(str, Enum):
    UNBUILT = "unbuilt"
    BUILDING = "building"
    READY = "ready"
    FAILED = "failed"


class VectorSpaceModelState:
    """Holds the shared model and its build state.

    The first ``ensure`` call reads the corpus and fits the model while holding
    the lock; concurrent callers wait on the same lock and observe the outcome.
    A failed build is not retried implicitly: only ``rebuild`` moves the state
    out of FAILED.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = ModelState.UNBUILT
        self._model: VectorSpaceModel | None = None
        self._failure: str | None = None
        self._logger = configure_logging()

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def failure(self) -> str | None:
        return self._failure

    def snapshot(self) -> VectorSpaceModel | None:
        """Return the built model, or None when unbuilt or failed."""
        return self._model if self._state is ModelState.READY else None

    def ensure(self, loader: Callable[[], Iterable[str]]) -> VectorSpaceModel | None:
        if self._state in (ModelState.READY, ModelState.FAILED):
            return self.snapshot()
        with self._lock:
            if self._state is ModelState.UNBUILT:
                self._build(loader)
            return self.snapshot()

    def rebuild(self, documents: Sequence[str]) -> VectorSpaceModel | None:
        with self._lock:
            self._build(lambda: documents, event="model_rebuild")
            return self.snapshot()

    def reset(self) -> None:
        with self._lock:
            self._state = ModelState.UNBUILT
            self._model = None
            self._failure = None

    def _build(
        self, loader: Callable[[], Iterable[str]], *, event: str = "model_build"
    ) -> None:
        # Caller holds self._lock.
        start = time.perf_counter()
        self._state = ModelState.BUILDING
        try:
            documents = list(loader())
            model = fit(documents)
        except Exception as exc:
            self._fail(f"model build failed: {exc}", event=event)
            return
        if not model.is_usable:
            self._fail(
                f"corpus of {len(documents)} documents produced no terms", event=event
            )
            return
        self._model = model
        self._failure = None
        self._state = ModelState.READY
        log_event(
            self._logger,
            event,
            state=self._state.value,
            document_count=model.document_count,
            vocabulary_size=model.vocabulary_size,
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )

    def _fail(self, reason: str, *, event: str) -> None:
        self._model = None
        self._failure = reason
        self._state = ModelState.FAILED
        log_warning(
            self._logger,
            f"{event}_failed",
            state=self._state.value,
            reason=reason,
        )
