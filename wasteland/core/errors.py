"""게임 규칙 위반 예외 계층

모든 예외는 GameError를 상속한다.
Store 트랜잭션 안에서 발생하면 작업 사본은 폐기된다 (상태 변경 없음).
API 계층은 http_status를 그대로 응답 코드로 사용한다.
"""

from typing import Any


class GameError(Exception):
    """게임 규칙 예외 기본 클래스"""

    code: str = "game-error"
    http_status: int = 400

    def __init__(self, message: str, **extras: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extras = extras

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code, **self.extras}


# === validation ===


class ValidationError(GameError):
    """필수 필드 누락 등 호출자 오류"""

    code = "validation"


class InvalidFactionError(ValidationError):
    def __init__(self, faction: str) -> None:
        super().__init__("Invalid faction", faction=faction)


class NotEquippableError(ValidationError):
    code = "not-equippable"

    def __init__(self, item_id: str, category: str) -> None:
        super().__init__(
            "Item is not equippable", item_id=item_id, category=category
        )


# === not-found ===


class NotFoundError(GameError):
    code = "not-found"
    http_status = 404


class LocationNotFoundError(NotFoundError):
    def __init__(self, location_id: str) -> None:
        super().__init__("Unknown location", location_id=location_id)


class UnknownRecipeError(NotFoundError):
    code = "unknown-recipe"
    http_status = 400

    def __init__(self, recipe_id: str) -> None:
        super().__init__("Unknown recipe", recipe_id=recipe_id)


class ItemNotFoundError(NotFoundError):
    code = "item-not-found"
    http_status = 400

    def __init__(self, item_id: str) -> None:
        super().__init__("Item not found", item_id=item_id)


# === rate-limited / forbidden ===


class CooldownActiveError(GameError):
    code = "cooldown-active"
    http_status = 429

    def __init__(self, remaining_ms: int) -> None:
        super().__init__("Cooldown active", remaining_ms=remaining_ms)
        self.remaining_ms = remaining_ms


class OutOfRangeError(GameError):
    code = "out-of-range"
    http_status = 403

    def __init__(self, distance_m: float, allowed_m: float) -> None:
        super().__init__("Out of range", distance_m=distance_m, allowed_m=allowed_m)
        self.distance_m = distance_m
        self.allowed_m = allowed_m


# === insufficient-resources ===


class MissingMaterialsError(GameError):
    code = "missing-materials"

    def __init__(self, material_id: str, missing: int) -> None:
        super().__init__(
            f"Missing {material_id} x{missing}",
            material_id=material_id,
            missing=missing,
        )
        self.material_id = material_id
        self.missing = missing
