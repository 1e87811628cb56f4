from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from asa_web.domain.models import AnalysisResult, Feature, Review
from asa_web.domain.state import ActiveTab
from asa_web.web.markdown_view import Block, render_markdown

RATING_UNITS = 5
ANONYMOUS_AUTHOR = "Anonymous"

TAB_LABELS = {
    ActiveTab.LIKED: "Top Liked",
    ActiveTab.DISLIKED: "Most Disliked",
    ActiveTab.REVIEWS: "Source Reviews",
    ActiveTab.RULES: "PRD Rules",
    ActiveTab.BLUEPRINT: "Blueprint (PRD)",
}


@dataclass(frozen=True)
class TabLink:
    key: str
    label: str
    active: bool


@dataclass(frozen=True)
class FeatureCard:
    title: str
    description: str


@dataclass(frozen=True)
class FeatureListView:
    sentiment: str              # "liked" | "disliked"
    cards: Tuple[FeatureCard, ...]
    empty_message: str = "No features found for this category."

    @property
    def is_empty(self) -> bool:
        return not self.cards


@dataclass(frozen=True)
class ReviewCard:
    author: str
    filled: int
    unfilled: int
    title: Optional[str]
    content: str


@dataclass(frozen=True)
class ReviewListView:
    cards: Tuple[ReviewCard, ...]
    empty_message: str = "No specific reviews extracted from analysis."

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def heading(self) -> str:
        return f"Evidence: {len(self.cards)} Key Reviews Analyzed"


@dataclass(frozen=True)
class MarkdownDocumentView:
    doc: str                    # "rules" | "blueprint"
    title: str
    copy_label: str
    source: str
    blocks: Tuple[Block, ...]


def build_tabs(active_tab: ActiveTab) -> List[TabLink]:
    return [TabLink(key=tab.value, label=TAB_LABELS[tab], active=tab is active_tab) for tab in ActiveTab]


def feature_list_view(features: Iterable[Feature], sentiment: str) -> FeatureListView:
    return FeatureListView(
        sentiment=sentiment,
        cards=tuple(FeatureCard(title=f.title, description=f.description) for f in features),
    )


def filled_units(rating: int) -> int:
    return min(max(rating, 0), RATING_UNITS)


def review_list_view(reviews: Iterable[Review]) -> ReviewListView:
    cards = []
    for r in reviews or ():
        filled = filled_units(r.rating)
        cards.append(
            ReviewCard(
                author=(r.author or "").strip() or ANONYMOUS_AUTHOR,
                filled=filled,
                unfilled=RATING_UNITS - filled,
                title=r.title or None,
                content=r.content,
            )
        )
    return ReviewListView(cards=tuple(cards))


def markdown_document_view(doc: str, markdown: str, title: str, copy_label: str) -> MarkdownDocumentView:
    return MarkdownDocumentView(
        doc=doc,
        title=title,
        copy_label=copy_label,
        source=markdown,
        blocks=tuple(render_markdown(markdown)),
    )


def rules_view(result: AnalysisResult) -> MarkdownDocumentView:
    return markdown_document_view("rules", result.prd_rules_markdown, "PRD Methodology & Rules", "Copy Rules")


def blueprint_view(result: AnalysisResult) -> MarkdownDocumentView:
    return markdown_document_view("blueprint", result.competitor_prd_markdown, "Competitor Blueprint (PRD)", "Copy PRD")


DOCUMENT_VIEWS = {
    "rules": rules_view,
    "blueprint": blueprint_view,
}


def tab_view(result: AnalysisResult, tab: ActiveTab):
    """Exactly one facet of the result per tab. No data is fetched."""
    if tab is ActiveTab.LIKED:
        return feature_list_view(result.liked_features, "liked")
    if tab is ActiveTab.DISLIKED:
        return feature_list_view(result.disliked_features, "disliked")
    if tab is ActiveTab.REVIEWS:
        return review_list_view(result.reviews)
    if tab is ActiveTab.RULES:
        return rules_view(result)
    return blueprint_view(result)
