"""월드 이벤트 - UTC 시각 기반 순환 + 수령 보정"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

from wasteland.core.item.models import WorldEvent


@dataclass(frozen=True)
class EventModifier:
    """수령 1회에 적용되는 이벤트 보정"""

    event_name: Optional[str] = None
    bonus_caps: int = 0
    risk_hp: int = 0


NO_MODIFIER = EventModifier()


def active_event(
    events: Sequence[WorldEvent], now_ms: int
) -> Optional[WorldEvent]:
    """현재 UTC 시(hour) 기준 활성 이벤트. 2개면 짝/홀 교대."""
    if not events:
        return None
    hour = datetime.fromtimestamp(now_ms / 1000, tz=timezone.utc).hour
    return events[hour % len(events)]


def resolve_modifier(
    events: Sequence[WorldEvent],
    event_name: Optional[str],
    location_id: str,
) -> EventModifier:
    """요청에 명시된 이벤트가 해당 위치에 묶여 있으면 보정 반환."""
    if not event_name:
        return NO_MODIFIER
    for event in events:
        if event.name == event_name and event.location_id == location_id:
            return EventModifier(
                event_name=event.name,
                bonus_caps=event.bonus_caps,
                risk_hp=event.risk_hp,
            )
    return NO_MODIFIER
