import logging
import queue
import threading

from utils import OboeteError

logger = logging.getLogger(__name__)


class TaskRunner:
    """Runs one-shot background tasks and hands their results back as messages.

    ``perform`` starts the task on a daemon thread. The UI thread collects
    the resulting messages with ``drain`` and feeds them to the update loop.
    """

    def __init__(self):
        self._results = queue.Queue()

    def perform(self, task, on_done, on_error=None):
        thread = threading.Thread(target=self._run, args=(task, on_done, on_error), daemon=True)
        thread.start()
        return thread

    def _run(self, task, on_done, on_error):
        message = None
        try:
            message = on_done(task())
        except OboeteError as e:
            logger.warning(f"Background task failed: {e}")
            if on_error is not None:
                message = on_error(e)
        except Exception:
            logger.exception("Unexpected error in background task")
        if message is not None:
            self._results.put(message)

    def drain(self):
        """Return every message delivered since the last call."""
        messages = []
        while True:
            try:
                messages.append(self._results.get_nowait())
            except queue.Empty:
                return messages
