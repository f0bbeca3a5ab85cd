"""Related-content selector: sibling posts from a post's primary category."""

from __future__ import annotations

from src.common.logging import setup_logging
from src.common.models import Post, sort_by_recency
from src.content_store.sources import ContentSource

logger = setup_logging(module_name="publication.related")

DEFAULT_RELATED_LIMIT = 3


class RelatedContentSelector:
    """Selects up to `limit` published posts sharing the primary category.

    With a TieredContentSource, an empty or failing primary store is
    answered from the fallback pool. Whatever the source returns, the
    source post is never included and the cap is never exceeded.

    Usage:
        selector = RelatedContentSelector(source)
        related = selector.select(post)
    """

    def __init__(self, source: ContentSource, limit: int = DEFAULT_RELATED_LIMIT):
        self.source = source
        self.limit = max(limit, 0)

    def select(self, post: Post) -> list[Post]:
        """Related posts, newest first.

        Args:
            post: The published post being rendered.

        Returns:
            At most `limit` posts; empty when the post has no category.
        """
        category = post.primary_category
        if category is None or self.limit == 0:
            return []

        candidates = self.source.list_posts_by_category(
            category.id,
            exclude_post_id=post.id,
            limit=self.limit,
        )
        related = [
            c for c in candidates
            if c.id != post.id and c.slug != post.slug and c.published
        ]
        related = sort_by_recency(related)[: self.limit]
        logger.debug(
            "Selected %d related posts for %s (category %s)",
            len(related),
            post.slug,
            category.slug,
        )
        return related
