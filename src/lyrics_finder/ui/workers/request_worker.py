# ui/workers/request_worker.py
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QThread, Signal, Slot

logger = logging.getLogger(__name__)


class RequestWorker(QThread):
    """Runs one blocking LRCLIB call off the GUI thread."""
    succeeded = Signal(object)   # task result
    failed = Signal(object)      # exception

    def __init__(self, task, on_done, on_failed, parent=None):
        super().__init__(parent)
        self.task = task
        self.on_done = on_done
        self.on_failed = on_failed

    def run(self):
        try:
            result = self.task()
        except Exception as e:
            self.failed.emit(e)
            return
        self.succeeded.emit(result)


class QtTaskRunner(QObject):
    """
    Task runner for SearchController that executes each task on a
    RequestWorker and calls back on the GUI thread.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._workers: set[RequestWorker] = set()

    def __call__(self, task, on_done, on_failed):
        worker = RequestWorker(task, on_done, on_failed, parent=self)
        worker.succeeded.connect(self._on_succeeded)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(self._on_finished)
        self._workers.add(worker)
        worker.start()

    @Slot(object)
    def _on_succeeded(self, result):
        worker = self.sender()
        worker.on_done(result)

    @Slot(object)
    def _on_failed(self, error):
        worker = self.sender()
        logger.debug("Request failed: %r", error)
        worker.on_failed(error)

    @Slot()
    def _on_finished(self):
        worker = self.sender()
        self._workers.discard(worker)
        worker.deleteLater()

    def pending(self) -> int:
        return sum(1 for worker in self._workers if worker.isRunning())

    def wait_all(self):
        """Blocks until every in-flight request has returned (call before quitting)."""
        for worker in list(self._workers):
            if worker.isRunning():
                logger.info("Waiting for an in-flight request to finish")
            worker.wait()
