"""정적 콘텐츠 저장소 - 위치/보상 테이블, 레시피, 월드 이벤트 JSON 로드"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from wasteland.core.errors import LocationNotFoundError, UnknownRecipeError
from wasteland.core.item.models import (
    ItemCategory,
    Location,
    Rarity,
    Recipe,
    RewardEntry,
    WorldEvent,
    parse_stats,
)
from wasteland.core.logging import get_logger

logger = get_logger(__name__)

LOCATIONS_FILE = "locations.json"
RECIPES_FILE = "recipes.json"
EVENTS_FILE = "events.json"


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _parse_entry(raw: dict) -> RewardEntry:
    category = ItemCategory(raw["category"])
    weight = float(raw["weight"])
    if weight <= 0:
        raise ValueError(f"weight must be positive: {weight}")
    return RewardEntry(
        item_id=raw["item_id"],
        name=raw["name"],
        category=category,
        weight=weight,
        rarity=Rarity(raw["rarity"]),
        stats=parse_stats(category, raw.get("stats")),
    )


class ContentRegistry:
    """
    정적 콘텐츠 저장소. 로드 후 불변으로 취급.
    radius_m이 없는 위치는 default_radius_m을 사용한다.
    """

    def __init__(self, default_radius_m: float = 150.0) -> None:
        self._default_radius_m = default_radius_m
        self._locations: dict[str, Location] = {}
        self._recipes: dict[str, Recipe] = {}
        self._events: list[WorldEvent] = []

    def load_directory(self, directory: str | Path) -> int:
        """locations/recipes/events JSON 일괄 로드. 반환: 로드된 총 수량."""
        directory = Path(directory)
        count = self.load_locations(directory / LOCATIONS_FILE)
        count += self.load_recipes(directory / RECIPES_FILE)
        events_path = directory / EVENTS_FILE
        if events_path.exists():
            count += self.load_events(events_path)
        return count

    def load_locations(self, path: str | Path) -> int:
        """위치 배열 로드. 잘못된 항목이 있는 위치는 경고 후 건너뛴다."""
        path = Path(path)
        count = 0
        for raw in _read_json(path):
            try:
                location = Location(
                    location_id=raw["location_id"],
                    name=raw["name"],
                    lat=float(raw["lat"]),
                    lng=float(raw["lng"]),
                    radius_m=float(raw.get("radius_m") or self._default_radius_m),
                    loot_table=tuple(_parse_entry(e) for e in raw.get("loot_table", [])),
                )
            except (KeyError, ValueError) as e:
                logger.warning(
                    "Failed to load location: %s - %s", raw.get("location_id", "?"), e
                )
                continue
            self._locations[location.location_id] = location
            count += 1

        logger.info("Loaded %d locations from %s", count, path)
        return count

    def load_recipes(self, path: str | Path) -> int:
        path = Path(path)
        count = 0
        for raw in _read_json(path):
            try:
                category = ItemCategory(raw["category"])
                recipe = Recipe(
                    recipe_id=raw["recipe_id"],
                    name=raw["name"],
                    category=category,
                    rarity=Rarity(raw["rarity"]),
                    stats=parse_stats(category, raw.get("stats")),
                    requires={k: int(v) for k, v in raw["requires"].items()},
                )
            except (KeyError, ValueError) as e:
                logger.warning(
                    "Failed to load recipe: %s - %s", raw.get("recipe_id", "?"), e
                )
                continue
            self._recipes[recipe.recipe_id] = recipe
            count += 1

        logger.info("Loaded %d recipes from %s", count, path)
        return count

    def load_events(self, path: str | Path) -> int:
        path = Path(path)
        events = [
            WorldEvent(
                name=raw["name"],
                location_id=raw["location_id"],
                bonus_caps=int(raw.get("bonus_caps", 0)),
                risk_hp=int(raw.get("risk_hp", 0)),
            )
            for raw in _read_json(path)
        ]
        self._events.extend(events)
        logger.info("Loaded %d events from %s", len(events), path)
        return len(events)

    def register_location(self, location: Location) -> None:
        """동적 등록 (테스트/운영 도구용). 기존 id면 경고 후 덮어쓴다."""
        if location.location_id in self._locations:
            logger.warning("Overwriting existing location: %s", location.location_id)
        self._locations[location.location_id] = location

    def register_recipe(self, recipe: Recipe) -> None:
        if recipe.recipe_id in self._recipes:
            logger.warning("Overwriting existing recipe: %s", recipe.recipe_id)
        self._recipes[recipe.recipe_id] = recipe

    def get_location(self, location_id: str) -> Optional[Location]:
        return self._locations.get(location_id)

    def require_location(self, location_id: str) -> Location:
        location = self._locations.get(location_id)
        if location is None:
            raise LocationNotFoundError(location_id)
        return location

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes.get(recipe_id)

    def require_recipe(self, recipe_id: str) -> Recipe:
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            raise UnknownRecipeError(recipe_id)
        return recipe

    @property
    def locations(self) -> list[Location]:
        return list(self._locations.values())

    @property
    def recipes(self) -> list[Recipe]:
        return list(self._recipes.values())

    @property
    def events(self) -> list[WorldEvent]:
        return list(self._events)
