"""플레이어 저장소 테스트: get-or-create, 원자성, 지갑 단위 직렬화"""

import threading
import time

import pytest

from wasteland.db.models import PlayerModel
from wasteland.services.player_store import (
    InMemoryPlayerStore,
    KeyedLocks,
    SqlPlayerStore,
    build_player_store,
)


@pytest.fixture(params=["memory", "database"])
def any_store(request, session_factory):
    if request.param == "memory":
        return InMemoryPlayerStore()
    return SqlPlayerStore(session_factory)


class TestGetOrCreate:
    def test_creates_default_player(self, any_store):
        player = any_store.get_or_create("w1")
        assert player.wallet == "w1"
        assert player.caps == 0
        assert player.level == 1
        assert any_store.exists("w1")

    def test_returns_copy(self, any_store):
        player = any_store.get_or_create("w1")
        player.caps = 999
        assert any_store.get_or_create("w1").caps == 0

    def test_unknown_wallet_not_created_by_exists(self, any_store):
        assert not any_store.exists("ghost")


class TestTransaction:
    def test_commit_on_normal_exit(self, any_store):
        with any_store.transaction("w1") as player:
            player.caps += 25
            player.faction_rep["vault"] = 3
        stored = any_store.get_or_create("w1")
        assert stored.caps == 25
        assert stored.faction_rep["vault"] == 3

    def test_exception_discards_changes(self, any_store):
        with any_store.transaction("w1") as player:
            player.caps = 10

        with pytest.raises(RuntimeError):
            with any_store.transaction("w1") as player:
                player.caps = 500
                player.level = 9
                raise RuntimeError("rule violation")

        stored = any_store.get_or_create("w1")
        assert stored.caps == 10
        assert stored.level == 1

    def test_same_wallet_serialized(self, any_store):
        """동시 증가가 유실되지 않음"""
        any_store.get_or_create("w1")

        def bump():
            for _ in range(20):
                with any_store.transaction("w1") as player:
                    caps = player.caps
                    time.sleep(0)
                    player.caps = caps + 1

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert any_store.get_or_create("w1").caps == 80

    def test_other_wallet_not_blocked(self):
        store = InMemoryPlayerStore()
        done = threading.Event()

        with store.transaction("w1"):
            worker = threading.Thread(
                target=lambda: (store.get_or_create("w2"), done.set())
            )
            worker.start()
            assert done.wait(timeout=2)
        worker.join()


class TestSqlPersistence:
    def test_row_written(self, session_factory, db_session):
        store = SqlPlayerStore(session_factory)
        with store.transaction("w1") as player:
            player.caps = 40
            player.last_claim_ms = 1_700_000_000_000

        row = db_session.get(PlayerModel, "w1")
        assert row.caps == 40
        assert row.last_claim_ms == 1_700_000_000_000
        assert row.gear["head"] is None


class TestKeyedLocks:
    def test_same_key_same_lock(self):
        locks = KeyedLocks()
        assert locks.get("a") is locks.get("a")
        assert locks.get("a") is not locks.get("b")
        assert len(locks) == 2


class TestBuildPlayerStore:
    def test_memory(self):
        assert build_player_store("memory").name == "memory"

    def test_database(self, session_factory):
        assert build_player_store("database", session_factory).name == "database"

    def test_database_requires_session_factory(self):
        with pytest.raises(ValueError):
            build_player_store("database")

    def test_unknown_falls_back_to_memory(self):
        assert build_player_store("redis").name == "memory"
