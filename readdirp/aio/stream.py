"""Consumer-facing traversal stream.

ReaddirpStream wraps one TraversalEngine and offers four ways to consume it,
all built on the engine's single pull primitive:

    stream.on('data', handler)...; await stream.run()   # push / notify
    await stream.read(100)                               # explicit pull
    entries = await stream                               # awaitable collection
    async for entry in stream: ...                       # lazy sequence

A stream is consumed once. Starting a second consumption raises
StreamConsumedError.
"""

import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

from .._common.config import ReaddirpOptions
from .._common.errors import InvalidArgumentError, StreamConsumedError
from .core.engine import TraversalEngine
from .core.entry import Entry
from .error_policies import ErrorPolicy

logger = logging.getLogger(__name__)

EVENTS = ('data', 'warn', 'error', 'end')


class ReaddirpStream:
    """Notification stream, awaitable and async iterator over one traversal.

    Events:
        data: one call per emitted Entry
        warn: one call per recovered filesystem error
        error: the fatal error, at most once, never followed by ``end``
        end: graceful completion, exactly once
    """

    def __init__(
        self,
        root: str,
        options: Optional[ReaddirpOptions] = None,
        error_policy: Optional[ErrorPolicy] = None
    ):
        """Initialize stream.

        Args:
            root: Directory to walk
            options: Traversal configuration (defaults if None)
            error_policy: Optional explicit error policy
        """
        self._engine = TraversalEngine(
            root,
            options,
            on_warning=self._emit_warning,
            error_policy=error_policy,
        )
        self.options = self._engine.options
        self._handlers: Dict[str, List[Callable[..., Any]]] = {event: [] for event in EVENTS}
        self._claimed_by: Optional[str] = None
        self._cancelled = False
        self._halted = False
        self._ended = False
        self._errored = False

    @property
    def root(self) -> str:
        """Absolute path of the traversal root."""
        return self._engine.root

    @property
    def error_policy(self) -> ErrorPolicy:
        return self._engine.error_policy

    @property
    def destroyed(self) -> bool:
        return self._engine.destroyed

    @property
    def ended(self) -> bool:
        return self._ended

    def on(self, event: str, handler: Callable[..., Any]) -> 'ReaddirpStream':
        """Attach a handler for an event.

        Args:
            event: One of 'data', 'warn', 'error', 'end'
            handler: Called with the Entry ('data'), the exception ('warn',
                     'error') or no argument ('end')

        Returns:
            The stream itself, for chaining
        """
        if event not in self._handlers:
            raise InvalidArgumentError(f"Unknown event {event!r}. Use one of {', '.join(EVENTS)}")
        self._handlers[event].append(handler)
        return self

    def destroy(self, error: Optional[BaseException] = None) -> None:
        """Cancel the traversal.

        Without an error the stream stops quietly: no further events, and the
        active consumer returns what it has. With an error the consumer fails
        with it as if the traversal had hit it.
        """
        self._halted = True
        self._engine.destroy(error)
        self._cancelled = self._engine.error is None

    async def read(self, batch_size: Optional[int] = None) -> List[Entry]:
        """Pull the next batch of entries.

        Only 'warn' events fire in this mode; the caller sees entries, the
        end (an empty list) and errors directly.

        Args:
            batch_size: Maximum entries to return (defaults to high_water_mark)

        Returns:
            Up to ``batch_size`` entries, or an empty list at the end

        Raises:
            InvalidArgumentError: If ``batch_size`` is not a positive integer
        """
        if self._claimed_by not in (None, 'read'):
            raise StreamConsumedError(f"Stream is already being consumed by {self._claimed_by}()")
        if batch_size is None:
            batch_size = self.options.high_water_mark
        elif isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
            raise InvalidArgumentError(f"batch_size must be a positive integer, got {batch_size!r}")
        self._claimed_by = 'read'
        return await self._engine.request_next(batch_size)

    async def run(self) -> None:
        """Drive the traversal, dispatching every event to its handlers.

        Raises:
            Exception: The fatal error, if no 'error' handler is attached
        """
        self._claim('run')
        try:
            async for batch in self._pump():
                for entry in batch:
                    if self._halted:
                        break
                    self._emit('data', entry)
        except Exception as err:
            # Only the traversal's own fatal error is absorbed by 'error' handlers
            if err is not self._engine.error or not self._handlers['error']:
                raise

    async def collect(self) -> List[Entry]:
        """Run the traversal to completion and return every entry.

        'data' handlers still see each entry.

        Returns:
            All entries in emission order (those gathered so far if the
            stream is destroyed without an error)
        """
        self._claim('collect')
        entries: List[Entry] = []
        async for batch in self._pump():
            for entry in batch:
                if self._halted:
                    break
                self._emit('data', entry)
                entries.append(entry)
        return entries

    def __await__(self):
        return self.collect().__await__()

    def __aiter__(self) -> AsyncIterator[Entry]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Entry]:
        self._claim('iteration')
        async for batch in self._pump():
            for entry in batch:
                if self._halted:
                    break
                yield entry

    async def _pump(self) -> AsyncIterator[List[Entry]]:
        """Pull batches from the engine until it finishes, fails or is destroyed."""
        batch_size = self.options.high_water_mark
        while True:
            try:
                batch = await self._engine.request_next(batch_size)
            except Exception as err:
                self._errored = True
                self._emit('error', err)
                raise
            if batch:
                yield batch
            if self._cancelled:
                return
            if self._engine.error is not None:
                # The next request raises it
                continue
            if self._engine.finished:
                if not self._ended:
                    self._ended = True
                    self._emit('end')
                return
            if not batch:
                return

    def _claim(self, mode: str) -> None:
        if self._claimed_by is not None:
            raise StreamConsumedError(f"Stream is already being consumed by {self._claimed_by}()")
        logger.debug("Consuming %s with %s()", self.root, mode)
        self._claimed_by = mode

    def _emit_warning(self, error: BaseException) -> None:
        if self._ended or self._errored:
            return
        self._emit('warn', error)

    def _emit(self, event: str, *args: Any) -> None:
        for handler in list(self._handlers[event]):
            handler(*args)

    def __repr__(self) -> str:
        return f"ReaddirpStream({self.root!r}, type={self.options.type.value!r})"
