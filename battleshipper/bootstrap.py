"""Service wiring."""

from __future__ import annotations

import logging
import random

from battleshipper.infra.config import Settings, load_default_env_files
from battleshipper.infra.logging import setup_logging
from battleshipper.services.match import MatchService
from battleshipper.store.repository import InMemoryGameRepository

logger = logging.getLogger(__name__)


def bootstrap(settings: Settings | None = None) -> MatchService:
    """Load configuration, set up logging and return a ready match service."""
    env_keys: list[str] = []
    if settings is None:
        env_keys = load_default_env_files(override_existing=False)
        settings = Settings.from_env()
    setup_logging(settings)
    rng = random.Random(settings.seed) if settings.seed is not None else None
    repository = InMemoryGameRepository(rng=rng)
    repository.init()
    logger.info(
        "service_ready log_level=%s log_format=%s seeded=%s env_file_keys=%d",
        settings.log_level,
        settings.log_format,
        settings.seed is not None,
        len(env_keys),
    )
    return MatchService(repository)
