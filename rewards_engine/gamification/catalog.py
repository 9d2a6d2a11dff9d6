"""
Reward and Challenge Catalogs

Both catalogs are JSON data files validated with pydantic when the engine
starts. Any problem (missing file, bad JSON, unknown activity or criteria
type, duplicate ids) raises CatalogError so that startup aborts instead of
failing later while processing activities.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from rewards_engine import config
from rewards_engine.exceptions import CatalogError
from rewards_engine.models.challenge import Challenge
from rewards_engine.models.reward import RewardDefinition

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=BaseModel)


def _read_json(path: Path) -> list:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(
            f"Catalog file not found: {path}", catalog_path=str(path), cause=e
        )
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(
            f"Catalog file could not be read: {path}", catalog_path=str(path), cause=e
        )

    if not isinstance(data, list):
        raise CatalogError(
            f"Catalog must be a JSON list of entries, got {type(data).__name__}",
            catalog_path=str(path),
        )
    return data


def _validate_entries(
    entries: list,
    model: type,
    source: str
) -> List[EntryT]:
    try:
        validated = TypeAdapter(List[model]).validate_python(entries)
    except ValidationError as e:
        raise CatalogError(
            f"Malformed {model.__name__} entry in catalog: {e.errors()[0]['msg']}",
            catalog_path=source,
            cause=e,
        )

    seen = set()
    for entry in validated:
        if entry.id in seen:
            raise CatalogError(
                f"Duplicate id '{entry.id}' in catalog",
                catalog_path=source,
                entry_id=entry.id,
            )
        seen.add(entry.id)

    return validated


def load_reward_catalog(
    source: Optional[Union[Path, str, Sequence[dict]]] = None
) -> List[RewardDefinition]:
    """
    Load and validate the reward catalog

    Args:
        source: Path to a JSON file, or already-parsed entries.
            Defaults to REWARDS_CATALOG_PATH.

    Returns:
        Reward definitions in catalog order

    Raises:
        CatalogError: If the catalog is missing or malformed
    """
    if source is None:
        source = config.REWARDS_CATALOG_PATH

    if isinstance(source, (str, Path)):
        path = Path(source)
        rewards = _validate_entries(_read_json(path), RewardDefinition, str(path))
    else:
        rewards = _validate_entries(list(source), RewardDefinition, "<inline>")

    logger.info(f"Loaded {len(rewards)} reward definitions")
    return rewards


def load_challenge_catalog(
    source: Optional[Union[Path, str, Sequence[dict]]] = None
) -> List[Challenge]:
    """
    Load and validate the challenge catalog

    Args:
        source: Path to a JSON file, or already-parsed entries.
            Defaults to CHALLENGES_CATALOG_PATH.

    Returns:
        Challenge definitions in catalog order

    Raises:
        CatalogError: If the catalog is missing or malformed
    """
    if source is None:
        source = config.CHALLENGES_CATALOG_PATH

    if isinstance(source, (str, Path)):
        path = Path(source)
        challenges = _validate_entries(_read_json(path), Challenge, str(path))
    else:
        challenges = _validate_entries(list(source), Challenge, "<inline>")

    logger.info(f"Loaded {len(challenges)} challenge definitions")
    return challenges
