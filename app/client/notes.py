import logging
import threading
from typing import Any, Callable

from app.client.errors import CRMClientError

logger = logging.getLogger(__name__)


class NotesAutosave:
    """
    Debounced background save of a free-text notes field.

    Every edit restarts a fixed delay timer; only when typing pauses for the
    whole delay is the latest full draft saved, once. Edits that bring the
    draft back to the server value cancel the pending save. There is no
    conflict detection: a save overwrites whatever the server holds.
    """

    def __init__(
        self,
        save: Callable[[str], Any],
        server_value: str | None = None,
        delay: float = 0.5,
        on_error: Callable[[Exception], None] | None = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self._save = save
        self.delay = delay
        self.on_error = on_error
        self._timer_factory = timer_factory
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._lock = threading.Lock()
        self.server_value = server_value or ""
        self.draft = self.server_value

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def edit(self, text: str) -> None:
        with self._lock:
            self.draft = text
            self._cancel()
            if text == self.server_value:
                return
            self._timer = self._timer_factory(self.delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    def server_updated(self, value: str | None) -> None:
        """Record a refetched server value; a matching draft needs no save"""
        with self._lock:
            self.server_value = value or ""
            if self.draft == self.server_value:
                self._cancel()

    def flush(self) -> None:
        """Save a pending draft now instead of waiting for the timer"""
        with self._lock:
            if self._timer is None:
                return
            generation = self._generation
        self._fire(generation)

    def close(self) -> None:
        """Drop any pending save, e.g. when the notes view goes away"""
        with self._lock:
            self._cancel()

    def _cancel(self) -> None:
        # A cancelled timer that already started running sees a newer generation and does nothing
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._cancel()
            text = self.draft

        try:
            self._save(text)
        except CRMClientError as e:
            logger.warning(f"Notes autosave failed: {e}")
            if self.on_error:
                self.on_error(e)
            return
        except Exception as e:
            # Runs on the timer thread, where an uncaught exception would vanish
            logger.exception("Unexpected error during notes autosave")
            if self.on_error:
                self.on_error(e)
            return

        with self._lock:
            self.server_value = text
        logger.debug(f"Autosaved notes ({len(text)} chars)")
