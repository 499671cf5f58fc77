from __future__ import annotations

from collections.abc import Sequence

from amelie.content import RenderedDocument, extract_document
from amelie.logging import get_logger
from amelie.repositories import ContentRepository
from amelie.utils import gather_ordered


def select_post_ids(
    post_ids: Sequence[str],
    max_count: int | None = None,
    search: str | None = None,
) -> list[str]:
    """Order identifiers newest first, filter by substring, then cap the count.

    ``search`` is a plain substring test, so "2016/1" also matches
    "2016/10" and "2016/11".
    """

    ordered = sorted(post_ids, reverse=True)
    if search:
        ordered = [post_id for post_id in ordered if search in post_id]
    if max_count is not None and max_count > 0:
        ordered = ordered[:max_count]
    return ordered


class BlogrollAssembler:
    """マニフェストから投稿を選び、描画済みビューモデルの一覧を組み立てる。"""

    def __init__(self, repository: ContentRepository, *, verbose: bool = False) -> None:
        self._repository = repository
        self._logger = get_logger("amelie.blogroll", verbose)

    async def assemble(
        self, max_count: int | None = None, search: str | None = None
    ) -> list[RenderedDocument]:
        post_ids = await self._repository.list_manifest()
        selected = select_post_ids(post_ids, max_count=max_count, search=search)
        self._logger.debug(
            "Blogroll selected %s of %s post(s) (max=%s, search=%r)",
            len(selected),
            len(post_ids),
            max_count,
            search,
        )
        return await self.render_posts(selected)

    async def render_posts(self, post_ids: Sequence[str]) -> list[RenderedDocument]:
        """Load and extract every post; the first failure aborts the batch."""

        return await gather_ordered(self.render_post(post_id) for post_id in post_ids)

    async def render_post(self, post_id: str) -> RenderedDocument:
        raw = await self._repository.load_post(post_id)
        return extract_document(raw).with_identifier(post_id)
