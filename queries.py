"""
Filtering, search and sorting for the content lists.

Everything here is a pure function over a list of records: nothing is stored
and the input list is never reordered in place. Filters intersect; sorting
happens last.

Public views only show published / enabled records. Admin views show
everything.
"""

from typing import Iterable, List, Literal, Sequence

ALL = "All"

SortKey = Literal["latest", "oldest", "az", "featured"]
SORT_OPTIONS = {
    "latest": "Latest First",
    "oldest": "Oldest First",
    "az": "A-Z",
    "featured": "Featured First",
}

TYPE_FILTERS = {
    "Photography": "photo",
    "Videography": "video",
}


def search(items: Iterable, query: str, fields: Sequence[str] = ("title",)) -> list:
    """Case-insensitive substring match against any of ``fields``."""
    items = list(items)
    if not query:
        return items
    needle = query.lower()
    return [it for it in items if any(needle in getattr(it, f, "").lower() for f in fields)]


def filter_category(items: Iterable, category: str = ALL) -> list:
    """Membership test on multi-valued ``category`` lists."""
    if category == ALL:
        return list(items)
    return [it for it in items if category in it.category]


def filter_single_category(items: Iterable, category: str = ALL) -> list:
    if category == ALL:
        return list(items)
    return [it for it in items if it.category == category]


def filter_type(items: Iterable, type_filter: str = ALL) -> list:
    """Portfolio type filter: All / Photography / Videography."""
    if type_filter == ALL:
        return list(items)
    kind = TYPE_FILTERS.get(type_filter, type_filter)
    return [it for it in items if it.type == kind]


def published(items: Iterable) -> list:
    return [it for it in items if it.status == "published"]


def enabled(items: Iterable) -> list:
    return [it for it in items if it.enabled]


def sort_items(items: Iterable, sort: str = "latest") -> list:
    items = list(items)
    if sort == "oldest":
        return sorted(items, key=lambda it: it.created_at)
    if sort == "az":
        return sorted(items, key=lambda it: it.title.casefold())
    if sort == "featured":
        return sorted(items, key=lambda it: not it.featured)
    return sorted(items, key=lambda it: it.created_at, reverse=True)


def by_order(items: Iterable) -> list:
    return sorted(items, key=lambda it: it.order)


# Portfolio

def portfolio_view(
    items: Iterable,
    *,
    type_filter: str = ALL,
    category: str = ALL,
    query: str = "",
    sort: str = "latest",
    public: bool = True,
) -> list:
    if public:
        items = published(items)
    items = filter_type(items, type_filter)
    items = filter_category(items, category)
    items = search(items, query)
    return sort_items(items, sort)


def public_portfolio(items: Iterable, **filters) -> list:
    return portfolio_view(items, public=True, **filters)


def admin_portfolio(items: Iterable, **filters) -> list:
    return portfolio_view(items, public=False, **filters)


# YouTube gallery

def youtube_view(items: Iterable, *, category: str = ALL, query: str = "", public: bool = True) -> list:
    if public:
        items = enabled(items)
    items = filter_single_category(items, category)
    items = search(items, query)
    return by_order(items)


# Reviews

REVIEW_SEARCH_FIELDS = ("client_name", "review_text")


def review_view(items: Iterable, *, query: str = "", public: bool = True) -> list:
    if public:
        items = published(items)
    return by_order(search(items, query, REVIEW_SEARCH_FIELDS))


# Statistics and services

def statistic_view(items: Iterable, *, public: bool = True) -> list:
    if public:
        items = enabled(items)
    return by_order(items)


def service_view(items: Iterable, *, public: bool = True) -> list:
    if public:
        items = enabled(items)
    return by_order(items)


def dashboard_summary(state) -> dict:
    """Headline counts for the admin dashboard."""
    reviews: List = state.reviews
    ratings = [r.rating for r in reviews]
    return {
        "statistics": len(state.statistics),
        "photos": len(filter_type(state.portfolio, "Photography")),
        "videos": len(filter_type(state.portfolio, "Videography")),
        "youtube_videos": len(state.youtube_videos),
        "reviews": len(reviews),
        "average_rating": round(sum(ratings) / len(ratings), 1) if ratings else 0,
        "five_star_reviews": ratings.count(5),
    }
