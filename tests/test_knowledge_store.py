"""Tests for the knowledge store (cache, write-through, pending bookkeeping)."""

import asyncio

import pytest

from grocery.common.knowledge_repository import InMemoryKnowledgeRepository
from grocery.common.schemas.grocery import Category, KnowledgeRecord, KnowledgeSource
from grocery.domain.categorization.knowledge_store import KnowledgeStore
from grocery.domain.categorization.normalizer import normalize
from grocery.domain.categorization.seed_data import SEED_KNOWLEDGE, seed_records


class RecordingRepository(InMemoryKnowledgeRepository):
    """Yields to the event loop inside every write so upserts interleave."""

    def __init__(self):
        super().__init__()
        self.writes = []

    async def upsert(self, record):
        await asyncio.sleep(0)
        self.writes.append(record)
        await asyncio.sleep(0)
        await super().upsert(record)


class FailingRepository(InMemoryKnowledgeRepository):
    async def upsert(self, record):
        raise RuntimeError("database down")


class TestUpsert:
    @pytest.mark.asyncio
    async def test_insert_then_get(self, store):
        record = await store.upsert("milk", Category.DAIRY, "Refrigerate", 5, 7, KnowledgeSource.AI)

        assert store.get("milk") == record
        assert record.storage_advice == "Refrigerate"
        assert record.shelf_life_days_min == 5
        assert record.source == KnowledgeSource.AI
        assert "milk" in store
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_overwrite_replaces_every_field(self, store):
        first = await store.upsert("kale", Category.PRODUCE, "Crisper drawer", 3, 7, KnowledgeSource.USER)
        second = await store.upsert("kale", Category.SPECIALTY, None, None, None, KnowledgeSource.AI)

        current = store.get("kale")
        assert current == second
        assert current.category == Category.SPECIALTY
        assert current.storage_advice is None
        assert current.shelf_life_days_min is None
        assert current.source == KnowledgeSource.AI
        assert current.updated_at >= first.updated_at

    @pytest.mark.asyncio
    async def test_user_overwrites_ai_and_back(self, store):
        await store.upsert("tofu", Category.PANTRY, "a", 1, 2, KnowledgeSource.AI)
        await store.upsert("tofu", Category.DAIRY, "b", 3, 4, KnowledgeSource.USER)
        assert store.get("tofu").source == KnowledgeSource.USER
        await store.upsert("tofu", Category.PRODUCE, "c", 5, 6, KnowledgeSource.AI)
        assert store.get("tofu").category == Category.PRODUCE

    @pytest.mark.asyncio
    async def test_writes_through_to_repository(self):
        repository = InMemoryKnowledgeRepository()
        store = KnowledgeStore(repository=repository)

        record = await store.upsert("eggs", Category.DAIRY, None, 21, 35, KnowledgeSource.SEED)

        assert await repository.get("eggs") == record

    @pytest.mark.asyncio
    async def test_failed_write_leaves_memory_untouched(self):
        store = KnowledgeStore(repository=FailingRepository())

        with pytest.raises(RuntimeError):
            await store.upsert("eggs", Category.DAIRY, None, None, None, KnowledgeSource.AI)

        assert store.get("eggs") is None

    def test_get_missing(self, store):
        assert store.get("nothing") is None
        assert "nothing" not in store


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_upserts_same_key(self):
        repository = RecordingRepository()
        store = KnowledgeStore(repository=repository)

        await asyncio.gather(*(
            store.upsert("milk", Category.DAIRY, f"advice {i}", i, i + 1, KnowledgeSource.AI)
            for i in range(20)
        ))

        final = store.get("milk")
        assert final is not None
        # Memory and storage agree on the last writer
        assert repository.writes[-1] == final
        assert await repository.get("milk") == final
        # Record is internally consistent (no mixed fields from different writers)
        assert final.storage_advice == f"advice {final.shelf_life_days_min}"
        assert final.shelf_life_days_max == final.shelf_life_days_min + 1

    @pytest.mark.asyncio
    async def test_concurrent_upserts_different_keys(self):
        repository = RecordingRepository()
        store = KnowledgeStore(repository=repository)
        names = [f"item {i}" for i in range(15)]

        await asyncio.gather(*(
            store.upsert(name, Category.PANTRY, name, 1, 2, KnowledgeSource.AI)
            for name in names
        ))

        assert len(store) == len(names)
        for name in names:
            assert store.get(name).storage_advice == name


class TestPending:
    def test_mark_and_clear(self, store):
        assert not store.is_pending("milk")

        store.mark_pending("milk")
        assert store.is_pending("milk")
        assert store.pending_names() == ["milk"]

        store.clear_pending("milk")
        assert not store.is_pending("milk")
        assert store.pending_names() == []

    def test_counts_overlapping_lookups(self, store):
        store.mark_pending("milk")
        store.mark_pending("milk")
        store.clear_pending("milk")
        assert store.is_pending("milk")
        store.clear_pending("milk")
        assert not store.is_pending("milk")

    def test_clear_unknown_is_noop(self, store):
        store.clear_pending("never marked")
        assert store.pending_names() == []


class TestLoadAndSeed:
    @pytest.mark.asyncio
    async def test_load_hydrates_from_repository(self):
        repository = InMemoryKnowledgeRepository()
        await repository.upsert(KnowledgeRecord(
            normalized_name="oat milk",
            category=Category.DAIRY,
            source=KnowledgeSource.USER,
        ))
        store = KnowledgeStore(repository=repository)

        loaded = await store.load()

        assert loaded == 1
        assert store.get("oat milk").category == Category.DAIRY

    @pytest.mark.asyncio
    async def test_seed_if_empty(self, store):
        seeded = await store.seed_if_empty(seed_records())

        assert seeded == len(SEED_KNOWLEDGE)
        milk = store.get("milk")
        assert milk.category == Category.DAIRY
        assert milk.storage_advice == "Refrigerate at 40°F or below"
        assert (milk.shelf_life_days_min, milk.shelf_life_days_max) == (5, 7)
        assert milk.source == KnowledgeSource.SEED

    @pytest.mark.asyncio
    async def test_seed_skipped_when_populated(self, store):
        await store.upsert("milk", Category.OTHER, None, None, None, KnowledgeSource.USER)

        seeded = await store.seed_if_empty(seed_records())

        assert seeded == 0
        assert store.get("milk").category == Category.OTHER
        assert store.get("eggs") is None

    def test_seed_names_are_normalized(self):
        for name, *_ in SEED_KNOWLEDGE:
            assert normalize(name) == name
