import time


def now_ms() -> int:
    """현재 epoch 밀리초"""
    return int(time.time() * 1000)
