"""Cancellable streaming channel

Wraps a streaming generation call as a lazy, forward-only iterator with a
thread-safe cooperative cancel().
"""

import logging
import threading
from enum import Enum
from typing import Callable, Iterable, Iterator

from flocore.errors import GenerationFailure

logger = logging.getLogger(__name__)


class StreamState(Enum):
    PENDING = "pending"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class StreamingChannel:
    """Lazy text-chunk stream with cancellation

    The factory is called on first iteration. After cancel() no further chunk
    is pulled from the transport or handed to the consumer; chunks already
    delivered stay delivered and remain available through `text`.

    Usage:
        channel = supervisor.stream_conversation(prompt, history, profile)
        for chunk in channel:
            render(chunk)
    """

    def __init__(self, factory: Callable[[], Iterable[str]], name: str = "Conversation"):
        """
        Args:
            factory: returns the transport's chunk iterator
            name: label used in GenerationFailure and logs
        """
        self._factory = factory
        self.name = name
        self.state = StreamState.PENDING
        self.error: GenerationFailure | None = None
        self._chunks: list[str] = []
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._stream = None

    @property
    def chunks(self) -> list[str]:
        return list(self._chunks)

    @property
    def text(self) -> str:
        """Concatenation of the chunks delivered so far"""
        return "".join(self._chunks)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop the stream; safe to call from any thread, any number of times

        A pending stream never starts. A running one is marked cancelled at
        once and its transport iterator is closed.
        """
        self._cancelled.set()
        with self._lock:
            if self.state in (StreamState.PENDING, StreamState.STREAMING):
                self.state = StreamState.CANCELLED
            stream = self._stream
        if stream is not None:
            self._close(stream)
        logger.info(f"[{self.name}] Stream cancelled")

    def _close(self, stream) -> None:
        close = getattr(stream, "close", None)
        if close is None:
            return
        try:
            close()
        except ValueError:
            # Transport is mid-pull in the consumer's thread; _run closes it afterwards
            logger.debug(f"[{self.name}] Transport busy, close deferred to the consumer")

    def _finish(self, state: StreamState) -> None:
        with self._lock:
            if self.state == StreamState.STREAMING:
                self.state = state

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            if self.state == StreamState.CANCELLED:
                return iter(())
            if self.state != StreamState.PENDING:
                raise RuntimeError("StreamingChannel can only be iterated once")
            self.state = StreamState.STREAMING
        return self._run()

    def _run(self) -> Iterator[str]:
        stream = None
        try:
            stream = iter(self._factory())
            with self._lock:
                self._stream = stream
            for chunk in stream:
                if self._cancelled.is_set():
                    break
                if not chunk:
                    continue
                self._chunks.append(chunk)
                yield chunk
                if self._cancelled.is_set():
                    break
        except GeneratorExit:
            # Consumer stopped iterating
            self._finish(StreamState.CANCELLED)
            raise
        except Exception as e:
            self._finish(StreamState.FAILED)
            logger.error(f"[{self.name}] Stream failed after {len(self._chunks)} chunks: {e}")
            if isinstance(e, GenerationFailure):
                self.error = e
                raise
            self.error = GenerationFailure(self.name, reason=str(e))
            raise self.error from e
        finally:
            if stream is not None:
                self._close(stream)

        if self._cancelled.is_set():
            self._finish(StreamState.CANCELLED)
            return

        if not self._chunks:
            self._finish(StreamState.FAILED)
            logger.error(f"[{self.name}] Stream completed without text")
            self.error = GenerationFailure(self.name, reason="empty response")
            raise self.error

        self._finish(StreamState.COMPLETED)
        logger.debug(f"[{self.name}] Stream completed ({len(self._chunks)} chunks)")

    def collect(self) -> str:
        """Consume the whole stream and return its text"""
        for _ in self:
            pass
        return self.text
