"""이벤트 유형 상수"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # claim
    CLAIM_COMPLETED = "claim_completed"
    CLAIM_SETTLED = "claim_settled"

    # progression
    PLAYER_LEVELED_UP = "player_leveled_up"
    REPUTATION_CHANGED = "reputation_changed"

    # item
    ITEM_CRAFTED = "item_crafted"
    ITEM_EQUIPPED = "item_equipped"
