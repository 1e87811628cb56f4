from __future__ import annotations

import itertools
import logging
import threading

from asa_web.domain.errors import AnalysisError
from asa_web.domain.models import AnalysisResult
from asa_web.domain.state import (
    ActiveTab,
    Event,
    Failed,
    PageState,
    Reset,
    Submitted,
    Succeeded,
    TabSelected,
    transition,
)

log = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class AnalysisSession:
    """
    Owns the single PageState cell.
    Every write goes through transition(); completions carry the token issued by begin()
    and are dropped when a newer submission exists.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self._page = PageState()

    def snapshot(self) -> PageState:
        with self._lock:
            return self._page

    def _apply(self, event: Event) -> PageState:
        with self._lock:
            self._page = transition(self._page, event)
            return self._page

    def begin(self, url: str) -> int:
        with self._lock:
            token = next(self._tokens)
            self._page = transition(self._page, Submitted(token=token, url=url))
        log.info("Analysis #%d started url=%s", token, url)
        return token

    def complete(self, token: int, result: AnalysisResult) -> bool:
        with self._lock:
            before = self._page
            self._page = transition(before, Succeeded(token=token, result=result))
            accepted = self._page is not before
        if not accepted:
            log.info("Analysis #%d finished after a newer submission; result discarded", token)
        return accepted

    def fail(self, token: int, message: str) -> bool:
        with self._lock:
            before = self._page
            self._page = transition(before, Failed(token=token, message=message))
            accepted = self._page is not before
        if not accepted:
            log.info("Analysis #%d failed after a newer submission; error discarded", token)
        return accepted

    def select_tab(self, tab: ActiveTab) -> PageState:
        return self._apply(TabSelected(tab=tab))

    def reset(self) -> PageState:
        return self._apply(Reset())

    def run(self, url: str, client) -> PageState:
        """begin -> client.analyze -> complete/fail. Returns the page as it stands afterwards."""
        token = self.begin(url)
        try:
            result = client.analyze(url)
        except AnalysisError as e:
            log.warning("Analysis #%d failed (%s): %s", token, type(e).__name__, e)
            self.fail(token, e.user_message)
        except Exception:
            log.exception("Analysis #%d failed unexpectedly", token)
            self.fail(token, UNEXPECTED_ERROR_MESSAGE)
        else:
            self.complete(token, result)
        return self.snapshot()
