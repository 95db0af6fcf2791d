"""Derivation and upload of the client config document.

Clients read a single fixed-identity document to decide whether to
re-download every lesson or only the new ones.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from config.settings import get_settings
from core.document_store import DocumentStore
from core.exceptions import ConfigError
from utils.run_count_store import RunCountStore

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off", ""}


@dataclass
class ConfigDocument:
    """Sync configuration read by clients.

    Attributes:
        download_all: Force clients to re-download all lessons.
        total_lesson_count: Number of lessons currently uploaded.
        new_lesson_ids: Lesson ids added since the previous config.
    """

    download_all: bool
    total_lesson_count: int
    new_lesson_ids: list[int] = field(default_factory=list)

    def to_document(self) -> dict:
        """Serialize to the remote document shape."""
        return {
            "downloadAll": self.download_all,
            "totalLessonCount": self.total_lesson_count,
            "newLessonIds": list(self.new_lesson_ids),
        }


def parse_bool(raw: Union[str, bool, None]) -> bool:
    """Parse a CLI boolean value such as "true" or "0".

    Raises:
        ConfigError: If the value is not a recognised boolean.
    """
    if raw is None:
        return False
    if isinstance(raw, bool):
        return raw
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(f"Expected a boolean (true/false), got {raw!r}")


def parse_lesson_count(raw: Union[str, int]) -> int:
    """Parse a non-negative lesson count.

    Raises:
        ConfigError: If the value is not a non-negative integer.
    """
    try:
        count = int(str(raw).strip())
    except ValueError:
        raise ConfigError(f"Invalid lesson count: {raw!r}") from None
    if count < 0:
        raise ConfigError(f"Lesson count must be non-negative, got {count}")
    return count


def parse_lesson_ids(raw: str) -> list[int]:
    """Parse comma-separated lesson ids.

    Args:
        raw: Value such as "1,2,3". Blank input means no new lessons.

    Returns:
        Lesson ids in input order.

    Raises:
        ConfigError: If any token is not an integer.
    """
    if not raw or not raw.strip():
        return []

    ids = []
    for token in raw.split(","):
        try:
            ids.append(int(token.strip()))
        except ValueError:
            raise ConfigError(f"Invalid lesson id {token.strip()!r} in {raw!r}") from None
    return ids


def build_config(
    download_all: bool,
    total_lesson_count: Optional[int],
    new_lesson_ids: list[int],
    run_counts: Optional[RunCountStore] = None,
) -> ConfigDocument:
    """Build the config document, filling the count from the last upload.

    Args:
        download_all: Force clients to re-download all lessons.
        total_lesson_count: Explicit count, or None to use the stored count.
        new_lesson_ids: Newly added lesson ids.
        run_counts: Store holding the last uploaded lesson count.

    Returns:
        ConfigDocument ready to write.

    Raises:
        ConfigError: If no count is given and none was ever recorded.
    """
    if total_lesson_count is None:
        run_counts = run_counts or RunCountStore(get_settings().app_name)
        total_lesson_count = run_counts.read_count()
        if total_lesson_count is None:
            raise ConfigError(
                "No uploaded lesson count recorded. Run uploadLessons or pass --totalLessonCount."
            )
        logger.info(f"Using last uploaded lesson count: {total_lesson_count}")

    return ConfigDocument(
        download_all=download_all,
        total_lesson_count=total_lesson_count,
        new_lesson_ids=new_lesson_ids,
    )


def write_config(store: DocumentStore, config: ConfigDocument) -> None:
    """Upsert the config document under its fixed identity.

    Args:
        store: Target document store.
        config: Config to write.
    """
    settings = get_settings()
    store.set_document(
        settings.configs_collection,
        settings.config_document_id,
        config.to_document(),
    )
    logger.debug(f"Wrote config document {settings.config_document_id}: {config.to_document()}")


def read_config(store: DocumentStore) -> Optional[dict]:
    """Get the config document currently in the store.

    Args:
        store: Source document store.

    Returns:
        The stored config document, or None if none was written yet.
    """
    settings = get_settings()
    return store.get_document(settings.configs_collection, settings.config_document_id)
