"""Collection organizer.

Buckets collection summaries into taxonomy categories.
"""

from collections.abc import Iterable

from infinito_catalog.catalog.models import (
    CategoryBucket,
    CollectionSummary,
    OrganizedCategories,
)
from infinito_catalog.catalog.taxonomy import (
    CATEGORIES,
    UNCATEGORIZED_EMOJI,
    UNCATEGORIZED_KEY,
    UNCATEGORIZED_NAME,
    Category,
)


def _by_product_count(collections: list[CollectionSummary]) -> list[CollectionSummary]:
    # sorted() is stable: equal counts keep input order
    return sorted(collections, key=lambda c: c.product_count, reverse=True)


def organize(
    summaries: Iterable[CollectionSummary],
    categories: tuple[Category, ...] = CATEGORIES,
) -> OrganizedCategories:
    """Organize collections by category.

    Each summary lands in exactly one bucket. A handle declared in more
    than one category belongs to the first one in declaration order.
    Summaries not declared anywhere go to the uncategorized bucket, which
    is always last. Empty buckets are dropped.

    Args:
        summaries: Collection summaries to organize.
        categories: Category table (defaults to the built-in taxonomy).

    Returns:
        Mapping of category key to bucket, in declaration order.
    """
    summaries = list(summaries)
    by_handle: dict[str, list[CollectionSummary]] = {}
    for summary in summaries:
        by_handle.setdefault(summary.handle, []).append(summary)

    result: OrganizedCategories = {}
    used: set[str] = set()

    for category in categories:
        members: list[CollectionSummary] = []
        for handle in category.collection_handles:
            if handle in used or handle not in by_handle:
                continue
            members.extend(by_handle[handle])
            used.add(handle)

        if members:
            result[category.key] = CategoryBucket(
                display_name=category.display_name,
                emoji=category.emoji,
                collections=_by_product_count(members),
            )

    leftovers = [s for s in summaries if s.handle not in used]
    if leftovers:
        result[UNCATEGORIZED_KEY] = CategoryBucket(
            display_name=UNCATEGORIZED_NAME,
            emoji=UNCATEGORIZED_EMOJI,
            collections=_by_product_count(leftovers),
        )

    return result
