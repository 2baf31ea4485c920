import logging
import threading

import pyttsx3

import config

logger = logging.getLogger(__name__)


class Speaker:
    """Reads flashcard text aloud without blocking the UI loop."""

    def __init__(self, rate=None):
        self.rate = rate if rate is not None else config.SPEECH_RATE
        self.active_engine = None
        self.speaking_thread = None

    def speak(self, text):
        """Speak ``text`` on a worker thread, interrupting any running speech."""
        if not text or not text.strip():
            return
        self.stop()

        def _worker():
            engine = None
            try:
                # One engine per utterance
                engine = pyttsx3.init()
                engine.setProperty('rate', self.rate)
                self.active_engine = engine
                engine.say(text)
                engine.runAndWait()
            except Exception:
                logger.exception("Text to speech failed")
            finally:
                # A newer utterance may already own active_engine
                if self.active_engine is engine:
                    self.active_engine = None

        self.speaking_thread = threading.Thread(target=_worker, daemon=True)
        self.speaking_thread.start()

    def stop(self):
        """Stop any ongoing speech immediately."""
        engine = self.active_engine
        if engine is not None:
            try:
                engine.stop()
            except Exception:
                logger.exception("Could not stop text to speech")
            finally:
                self.active_engine = None
        if self.speaking_thread and self.speaking_thread.is_alive():
            self.speaking_thread.join(timeout=1.0)
        self.speaking_thread = None
