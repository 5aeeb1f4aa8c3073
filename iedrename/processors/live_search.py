"""Debounced filtering of a rename session's IED list."""

from collections.abc import Callable

from iedrename.debounce import DEFAULT_DEBOUNCE_SECONDS, Debouncer
from iedrename.processors.validation import ListValidationEngine
from iedrename.search import MATCH_ALL, SearchQuery, compile_query


class LiveSearch:
    """Applies search input to a rename session as the operator types.

    Input passed to `update` is debounced; once input stops the latest text is
    compiled and the visible identities are reported to `on_results`.
    Visibility is independent of validity.
    """

    def __init__(
        self,
        engine: ListValidationEngine,
        on_results: Callable[[list[str]], None] | None = None,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        """Initialize the live search.

        Args:
            engine: Engine holding the session to filter.
            on_results: Called with the visible identities, in display order, after each applied search.
            delay: Quiescence window in seconds.
        """
        self.engine = engine
        self.on_results = on_results
        self.query: SearchQuery = MATCH_ALL
        self.visible_identities: list[str] = []
        self._debouncer = Debouncer(self.apply, delay=delay)

    def update(self, raw: str) -> None:
        """Schedule `raw` to be applied once input settles."""
        self._debouncer(raw)

    def apply(self, raw: str) -> list[str]:
        """Compile `raw` and compute visible identities immediately.

        Holds the engine lock, so a debounced apply never interleaves with an edit.
        """
        query = compile_query(raw)
        with self.engine.lock:
            visible = [view.identity for view in self.engine.views(query) if view.visible]
            self.query = query
            self.visible_identities = visible

        if self.on_results is not None:
            self.on_results(self.visible_identities)

        return self.visible_identities

    def clear(self) -> list[str]:
        """Drop any pending search and show every IED."""
        self._debouncer.cancel()
        return self.apply("")

    def flush(self) -> None:
        self._debouncer.flush()

    def cancel(self) -> None:
        self._debouncer.cancel()
