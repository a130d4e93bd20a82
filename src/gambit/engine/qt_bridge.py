"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.errors import NoLegalMovesError, SearchAborted
from gambit.engine._default import engine_for_config
from gambit.engine.config import EngineConfig
from gambit.engine.search import IEngine, MoveRequest

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Every outcome is reported with the request id it answers, so a host can
    drop results for requests it no longer cares about.
    """

    move_ready = pyqtSignal(object, object)
    search_aborted = pyqtSignal(object)
    search_no_move = pyqtSignal(object)
    search_error = pyqtSignal(object, str)

    __slots__ = ("_cancel_event", "_config", "_engine")

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._config = config
        # Fixed engine; when unset one is picked per request from its config.
        self._engine = engine
        self._cancel_event = threading.Event()

    @pyqtSlot(object)
    def request_move(self, request_obj: object) -> None:
        """Choose a move for *request_obj* and emit the outcome."""
        if not isinstance(request_obj, MoveRequest):
            _LOGGER.warning("Engine worker received %r instead of a MoveRequest", request_obj)
            self.search_error.emit(None, "Engine received invalid request")
            return

        request = request_obj
        config = self._config or request.config
        engine = self._engine or engine_for_config(config)

        self._cancel_event.clear()
        try:
            response = engine.choose_move(
                MoveRequest(request.position, request.color, config, request.request_id),
                is_cancelled=self._cancel_event.is_set,
            )
        except SearchAborted:
            self.search_aborted.emit(request.request_id)
            return
        except NoLegalMovesError:
            self.search_no_move.emit(request.request_id)
            return
        except Exception as exc:
            _LOGGER.warning("Engine search failed for request %s", request.request_id, exc_info=True)
            self.search_error.emit(request.request_id, str(exc))
            return

        self.move_ready.emit(request.request_id, response)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(object)
    def set_config(self, config: EngineConfig | None) -> None:
        """Override the configuration of later requests (``None`` restores theirs)."""
        self._config = config
