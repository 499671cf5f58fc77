"""pipelines"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import uvicorn

from amelie import config
from amelie.content import parse_document
from amelie.errors import AmelieError
from amelie.logging import get_logger
from amelie.repositories import ContentRepository
from amelie.services import SiteConfig, SiteConfigCache
from amelie.web import create_app


def _merge_config(cli_options: Mapping[str, Any] | None) -> dict[str, Any]:
    return config.get_config(cli_options or {})


def run_serve(cli_options: Mapping[str, Any] | None = None) -> int:
    """
    Serve command
    """

    settings = _merge_config(cli_options)
    verbose = bool(settings.get("verbose_logging", False))
    logger = get_logger("amelie.serve", verbose)

    repository = ContentRepository.from_settings(settings)
    root = repository.config.root_dir
    if not root.is_dir():
        raise AmelieError(
            f"Content directory not found: {root}",
            hint="Pass --content-root or export AMELIE_CONTENT_ROOT.",
        )

    app = create_app(settings, repository=repository)
    host = str(settings.get("host") or "127.0.0.1")
    port = config.get_int_setting(settings, "port")
    logger.info("Serving %s on http://%s:%s", root, host, port)
    uvicorn.run(app, host=host, port=port, log_level="debug" if verbose else "info")
    return 0


async def _check_content(
    repository: ContentRepository, logger: logging.Logger, settings: Mapping[str, Any]
) -> int:
    problems = 0

    site_config = SiteConfigCache(
        repository, defaults=SiteConfig.from_settings(settings)
    )
    if not await site_config.refresh():
        problems += 1

    try:
        post_ids = await repository.list_manifest()
    except AmelieError as exc:
        logger.error("%s", exc)
        return problems + 1

    for post_id in sorted(post_ids, reverse=True):
        try:
            raw = await repository.load_post(post_id)
        except AmelieError as exc:
            logger.error("%s", exc)
            problems += 1
            continue
        result = parse_document(raw)
        if not result.ok:
            logger.error("%s: %s", post_id, result.detail)
            problems += 1
            continue
        logger.debug("OK %s (%s)", post_id, result.document.title)

    logger.info("Checked %s post(s); %s problem(s) found.", len(post_ids), problems)
    return problems


def run_check(cli_options: Mapping[str, Any] | None = None) -> int:
    """Check command: validate config files, the manifest and every post."""

    settings = _merge_config(cli_options)
    logger = get_logger("amelie.check", bool(settings.get("verbose_logging", False)))
    repository = ContentRepository.from_settings(settings)
    problems = asyncio.run(_check_content(repository, logger, settings))
    return 1 if problems else 0
