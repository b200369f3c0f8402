"""Shared fakes: manual clock, manual scheduler, recording history."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from loot_history.catalog import ItemCatalog
from loot_history.config import AppConfig
from loot_history.entry import EntryBuilder, LootEntry
from loot_history.identity import GuidRoster, StaticLocalIdentity


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeScheduler:
    """Collects callbacks; run_pending() fires them like the timer would."""

    def __init__(self) -> None:
        self.pending: list[tuple[float, Callable[[], None]]] = []

    def after(self, delay: float, callback: Callable[[], None]) -> None:
        self.pending.append((delay, callback))

    def run_pending(self) -> int:
        callbacks, self.pending = self.pending, []
        for _, callback in callbacks:
            callback()
        return len(callbacks)


class RecordingHistory:
    def __init__(self) -> None:
        self.entries: list[LootEntry] = []
        self.show_calls = 0
        self.refresh_calls = 0

    def add_entry(self, entry: LootEntry) -> None:
        self.entries.append(entry)

    def show(self) -> None:
        self.show_calls += 1

    def refresh(self) -> None:
        self.refresh_calls += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def recorder():
    return RecordingHistory()


@pytest.fixture
def catalog():
    return ItemCatalog()


@pytest.fixture
def config():
    return AppConfig(player_name="Jaina", player_class="MAGE")


@pytest.fixture
def builder(catalog, scheduler, recorder, config, clock):
    return EntryBuilder(
        catalog=catalog,
        scheduler=scheduler,
        recorder=recorder,
        config=config,
        clock=clock,
    )


@pytest.fixture
def local_identity():
    return StaticLocalIdentity("Jaina", "MAGE")


@pytest.fixture
def roster():
    r = GuidRoster()
    r.remember("Player-1403-0A1B2C3D", "WARRIOR")
    return r
