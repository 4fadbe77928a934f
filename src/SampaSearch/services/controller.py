"""Search session controller.

Owns query, page and loading state, keeps at most one stream session open,
reconciles provisional (exact) and terminal (complete) batches and pushes the
resulting display state to a `Presenter`.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum

from SampaSearch.core.errors import QueryValidationError, SearchError, TransportError
from SampaSearch.core.highlight import Highlighter
from SampaSearch.core.models import AppliedFilters, PageRequest, ResultBatch
from SampaSearch.core.query import require_query
from SampaSearch.renderers.base import Presenter
from SampaSearch.renderers.mapper import map_items_to_views
from SampaSearch.renderers.view_models import ResultView
from SampaSearch.services.filters import FilterExclusionStore
from SampaSearch.services.stream import StreamSession, StreamTransport
from SampaSearch.utils.log import log

DEFAULT_FALLBACK_PAGE_SIZE = 10

MSG_LOADING = "Buscando..."
MSG_LOADING_SEMANTIC = "Buscando resultados semânticos..."
MSG_NO_RESULTS = "Nenhum resultado encontrado para sua busca."
MSG_NO_MORE_RESULTS = "Não há mais resultados disponíveis."


class SessionPhase(str, Enum):
    IDLE = "idle"
    AWAITING_CONFIG = "awaiting_config"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class DeferredSearch:
    """A search issued before the backend page size was known."""

    query: str
    page_index: int
    is_new_request: bool


@dataclass(slots=True)
class SessionState:
    """Mutable session state, changed only through controller methods."""

    current_query: str | None = None
    current_page_index: int = 0
    has_more_results: bool = False
    is_loading: bool = False
    active_stream: StreamSession | None = None
    pending_request: DeferredSearch | None = None
    rendered_result_count: int = 0
    phase: SessionPhase = SessionPhase.IDLE


@dataclass(frozen=True, slots=True)
class _ActiveRequest:
    session: StreamSession
    query: str
    is_new_request: bool
    previous_page_index: int
    previous_has_more: bool
    base_count: int


class SearchSessionController:
    """State machine driving one interactive search session.

    All methods must be called from a single thread; stream callbacks reach
    the controller through `StreamSession`, and each one is checked against
    the active session token before it may touch state.
    """

    def __init__(
        self,
        transport: StreamTransport,
        presenter: Presenter,
        *,
        highlighter: Highlighter | None = None,
        exclusions: FilterExclusionStore | None = None,
        fallback_page_size: int = DEFAULT_FALLBACK_PAGE_SIZE,
    ) -> None:
        if fallback_page_size <= 0:
            raise ValueError("fallback_page_size must be positive")
        self.transport = transport
        self.presenter = presenter
        self.highlighter = highlighter or Highlighter()
        self.exclusions = exclusions or FilterExclusionStore()
        self.fallback_page_size = fallback_page_size
        self.state = SessionState()

        self._config_loaded = False
        self._remote_page_size: int | None = None
        self._applied_filters: AppliedFilters | None = None
        self._views: list[ResultView] = []
        self._active: _ActiveRequest | None = None
        self._tokens = itertools.count(1)

    # ------------------------------------------------------------------
    # Read-only views of the session
    # ------------------------------------------------------------------

    @property
    def config_loaded(self) -> bool:
        return self._config_loaded

    @property
    def page_size(self) -> int:
        return self._remote_page_size or self.fallback_page_size

    @property
    def load_more_enabled(self) -> bool:
        return self.state.has_more_results and not self.state.is_loading

    @property
    def visible_filters(self) -> dict[str, list[str]]:
        return self.exclusions.filter_visible(self._applied_filters)

    # ------------------------------------------------------------------
    # Events from the outside world
    # ------------------------------------------------------------------

    def on_config_loaded(self, page_size: int | None) -> None:
        """Record the backend configuration and run the deferred search.

        Args:
            page_size: ``defaultPageSize`` from the backend, or None when the
                configuration could not be loaded.
        """
        if self._config_loaded:
            log.debug("Ignoring repeated config delivery: page_size=%s", page_size)
            return
        self._config_loaded = True
        self._remote_page_size = page_size if page_size and page_size > 0 else None
        if self._remote_page_size is None:
            log.warning("No page size from backend, using fallback %d", self.fallback_page_size)
        else:
            log.info("Backend page size: %d", self._remote_page_size)

        pending, self.state.pending_request = self.state.pending_request, None
        if self.state.phase is SessionPhase.AWAITING_CONFIG:
            self.state.phase = SessionPhase.IDLE
        if pending is not None:
            log.debug("Running deferred search: q=%r page=%d", pending.query, pending.page_index)
            self.execute_search(pending.query, pending.page_index, pending.is_new_request)

    def submit_manual_query(self, text: str | None) -> bool:
        """Start a new top-level query typed by the user.

        Resets paging and excluded filters. Blank input is ignored.

        Returns:
            True if a search was started or deferred.
        """
        try:
            query = require_query(text)
        except QueryValidationError:
            log.debug("Empty query ignored")
            return False

        log.info("New query: %r", query)
        self.state.current_query = query
        self.state.current_page_index = 0
        self.state.has_more_results = False
        self.exclusions.reset_all()
        self._applied_filters = None
        self.execute_search(query, 0, True)
        return True

    def load_next_page(self) -> bool:
        """Request the next page when more results exist and nothing is loading.

        Returns:
            True if a request was issued.
        """
        if not self.load_more_enabled or self.state.current_query is None:
            return False
        self.state.current_page_index += 1
        log.debug("Loading page %d", self.state.current_page_index)
        self.execute_search(self.state.current_query, self.state.current_page_index, False)
        return True

    def on_visibility_trigger(self) -> bool:
        """Handle the end of the result list becoming visible."""
        return self.load_next_page()

    def remove_filter_value(self, category: str, value: str) -> dict[str, list[str]]:
        """Exclude a filter chip and refresh the current query from page 0.

        Excluded filters are kept, unlike a manual query.

        Returns:
            Filters still visible after the exclusion.
        """
        self.exclusions.exclude(category, value)
        visible = self.visible_filters
        self.presenter.render_filters(visible)
        if self.state.current_query is None:
            return visible

        self.state.current_page_index = 0
        self.state.has_more_results = False
        self.execute_search(self.state.current_query, 0, True)
        return visible

    def cancel_active_search(self) -> None:
        """Cancel the in-flight stream, if any. Not an error."""
        active = self._active
        if active is None:
            return
        log.info("Search canceled: q=%r page=%d", active.query, active.session.request.page_index)
        self._drop_active()
        if not active.is_new_request:
            self._rollback_page(active)
        self.state.is_loading = False
        self.state.phase = SessionPhase.LOADED if self._views else SessionPhase.IDLE
        self.presenter.show_loading(False)
        self.presenter.show_load_more(self.load_more_enabled)

    # ------------------------------------------------------------------
    # Core pipeline
    # ------------------------------------------------------------------

    def execute_search(self, query: str, page_index: int, is_new_request: bool) -> None:
        """Run one (query, page) request through a fresh stream session.

        Before configuration arrives the request is parked as the single
        pending request, replacing any earlier one.
        """
        if not self._config_loaded:
            if self.state.pending_request is not None:
                log.debug("Replacing deferred search q=%r", self.state.pending_request.query)
            self.state.pending_request = DeferredSearch(query, page_index, is_new_request)
            self.state.phase = SessionPhase.AWAITING_CONFIG
            log.info("Search deferred until backend config is loaded")
            return

        self._drop_active()
        previous_page_index = 0 if is_new_request else page_index - 1
        previous_has_more = self.state.has_more_results

        request = PageRequest(
            query=query,
            page_index=page_index,
            page_size=self.page_size,
            excluded_filters=self.exclusions.snapshot(),
        )

        if is_new_request:
            self._views = []
            self.state.rendered_result_count = 0
            self.state.has_more_results = False
            self.presenter.render_results((), first_new=0)
            self.presenter.show_end_of_results(False)
        self.presenter.show_error(None)
        self.presenter.show_loading(True, MSG_LOADING)
        self.presenter.show_load_more(False)
        self.state.is_loading = True
        self.state.phase = SessionPhase.LOADING

        token = next(self._tokens)
        session = StreamSession(
            self.transport,
            request,
            token=token,
            on_batch=self._handle_batch,
            on_failure=self._handle_failure,
        )
        self._active = _ActiveRequest(
            session=session,
            query=query,
            is_new_request=is_new_request,
            previous_page_index=previous_page_index,
            previous_has_more=previous_has_more,
            base_count=len(self._views),
        )
        self.state.active_stream = session
        log.info("Searching: q=%r page=%d size=%d", query, page_index, request.page_size)
        try:
            session.open()
        except Exception as error:  # noqa: BLE001 - transport failures must not escape
            session.handle_transport_error(error if isinstance(error, SearchError) else TransportError(str(error)))

    # ------------------------------------------------------------------
    # Stream callbacks
    # ------------------------------------------------------------------

    def _is_current(self, token: int) -> bool:
        active = self._active
        if active is None or active.session.token != token:
            log.debug("Suppressed callback from stale session s%d", token)
            return False
        return True

    def _handle_batch(self, token: int, batch: ResultBatch) -> None:
        if not self._is_current(token):
            return
        active = self._active
        assert active is not None

        if active.is_new_request and batch.applied_filters is not None:
            self._applied_filters = batch.applied_filters
            self.presenter.render_filters(self.visible_filters)

        # A later batch of the same request supersedes the provisional one.
        highlight = self.highlighter.for_batch(batch.highlight_terms, active.query)
        del self._views[active.base_count:]
        self._views.extend(map_items_to_views(batch.items, highlight, start=active.base_count))
        self.state.rendered_result_count = len(self._views)
        self.state.has_more_results = batch.has_more
        self.presenter.render_results(tuple(self._views), first_new=active.base_count)

        if not batch.is_terminal:
            self.presenter.show_loading(True, MSG_LOADING_SEMANTIC)
            return

        self._active = None
        self.state.active_stream = None
        self.state.is_loading = False
        self.state.phase = SessionPhase.LOADED
        self.presenter.show_loading(False)
        if not batch.items:
            self._report_empty_page(active)
        has_rendered = self.state.rendered_result_count > 0
        self.presenter.show_load_more(self.load_more_enabled)
        self.presenter.show_end_of_results(not self.state.has_more_results and has_rendered)
        log.info(
            "Search complete: q=%r page=%d rendered=%d has_more=%s",
            active.query,
            active.session.request.page_index,
            self.state.rendered_result_count,
            self.state.has_more_results,
        )

    def _handle_failure(self, token: int, error: SearchError) -> None:
        if not self._is_current(token):
            return
        active = self._active
        assert active is not None

        log.warning("Search failed: q=%r error=%s", active.query, error)
        self._active = None
        self.state.active_stream = None
        if not active.is_new_request:
            self._rollback_page(active)
        self.state.is_loading = False
        self.state.phase = SessionPhase.ERRORED
        self.presenter.show_loading(False)
        self.presenter.show_error(error.user_message)
        self.presenter.show_load_more(self.load_more_enabled)

    def _report_empty_page(self, active: _ActiveRequest) -> None:
        if active.is_new_request:
            if not self.visible_filters:
                self.presenter.show_error(MSG_NO_RESULTS)
        elif self.state.rendered_result_count == 0:
            self.presenter.show_error(MSG_NO_MORE_RESULTS)

    def _rollback_page(self, active: _ActiveRequest) -> None:
        """Undo an unfinished page so that retrying it starts from a clean slate."""
        self.state.current_page_index = active.previous_page_index
        self.state.has_more_results = active.previous_has_more
        if len(self._views) > active.base_count:
            log.debug(
                "Discarding %d provisional row(s) of page %d",
                len(self._views) - active.base_count,
                active.session.request.page_index,
            )
            del self._views[active.base_count:]
            self.state.rendered_result_count = len(self._views)
            self.presenter.render_results(tuple(self._views), first_new=len(self._views))

    def _drop_active(self) -> None:
        active, self._active = self._active, None
        self.state.active_stream = None
        if active is not None:
            active.session.cancel()

