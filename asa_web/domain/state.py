from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from asa_web.domain.models import AnalysisResult


class ActiveTab(str, Enum):
    LIKED = "liked"
    DISLIKED = "disliked"
    REVIEWS = "reviews"
    RULES = "rules"
    BLUEPRINT = "blueprint"

    @classmethod
    def default(cls) -> "ActiveTab":
        return cls.LIKED

    @classmethod
    def parse(cls, raw: str | None) -> "ActiveTab":
        raw = (raw or "").strip().lower()
        for tab in cls:
            if tab.value == raw:
                return tab
        return cls.default()


@dataclass(frozen=True)
class AnalysisState:
    """
    is_loading=True implies error and result are both None.
    At rest at most one of error/result is set.
    """
    is_loading: bool = False
    error: Optional[str] = None
    result: Optional[AnalysisResult] = None

    @classmethod
    def idle(cls) -> "AnalysisState":
        return cls()

    @classmethod
    def loading(cls) -> "AnalysisState":
        return cls(is_loading=True)

    @classmethod
    def ready(cls, result: AnalysisResult) -> "AnalysisState":
        return cls(result=result)

    @classmethod
    def failed(cls, message: str) -> "AnalysisState":
        return cls(error=message)

    @property
    def phase(self) -> str:
        if self.is_loading:
            return "loading"
        if self.result is not None:
            return "ready"
        if self.error is not None:
            return "failed"
        return "idle"


@dataclass(frozen=True)
class PageState:
    analysis: AnalysisState = AnalysisState()
    active_tab: ActiveTab = ActiveTab.LIKED
    request_token: int = 0
    url: str = ""


# -----------------------------
# Events
# -----------------------------
@dataclass(frozen=True)
class Submitted:
    token: int
    url: str


@dataclass(frozen=True)
class Succeeded:
    token: int
    result: AnalysisResult


@dataclass(frozen=True)
class Failed:
    token: int
    message: str


@dataclass(frozen=True)
class TabSelected:
    tab: ActiveTab


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[Submitted, Succeeded, Failed, TabSelected, Reset]


def is_current(page: PageState, token: int) -> bool:
    return page.analysis.is_loading and token == page.request_token


def transition(page: PageState, event: Event) -> PageState:
    """Single transition function for the page. Unknown or stale events leave the page unchanged."""
    if isinstance(event, Submitted):
        return replace(page, analysis=AnalysisState.loading(), request_token=event.token, url=event.url)

    if isinstance(event, Succeeded):
        if not is_current(page, event.token):
            return page
        return replace(page, analysis=AnalysisState.ready(event.result), active_tab=ActiveTab.default())

    if isinstance(event, Failed):
        if not is_current(page, event.token):
            return page
        return replace(page, analysis=AnalysisState.failed(event.message))

    if isinstance(event, TabSelected):
        return replace(page, active_tab=event.tab)

    if isinstance(event, Reset):
        # token kept so in-flight completions stay stale
        return PageState(request_token=page.request_token)

    return page
