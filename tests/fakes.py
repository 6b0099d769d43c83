"""Fakes for the pipeline's capability and persistence seams."""

import asyncio
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from grocery.common.schemas.grocery import Category, KnowledgeRecord, KnowledgeSource


class FakeEnricher:
    """Enricher returning canned knowledge; optional per-name gates and failures."""

    def __init__(
        self,
        gates: Optional[Dict[str, asyncio.Event]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ):
        self.gates = gates or {}
        self.failures = failures or {}
        self.calls: List[str] = []

    async def enrich(self, name: str, hint: Optional[Category]) -> KnowledgeRecord:
        self.calls.append(name)
        if name in self.gates:
            await self.gates[name].wait()
        if name in self.failures:
            raise self.failures[name]
        return KnowledgeRecord(
            normalized_name=name,
            category=hint or Category.OTHER,
            storage_advice=f"{name} advice",
            shelf_life_days_min=3,
            shelf_life_days_max=5,
            source=KnowledgeSource.AI,
        )


class FakeFreeformParser:
    def __init__(self, result=None, error: Optional[Exception] = None):
        self.result = result or []
        self.error = error
        self.calls: List[str] = []

    async def parse_freeform(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


def session_factory_for(db):
    """Session factory yielding a mocked AsyncSession."""

    @asynccontextmanager
    async def factory():
        yield db

    return factory
