"""End-to-end tests: loot message in, history entry out."""

import pytest

from loot_history.chat_loot import LootHistoryChat
from loot_history.events import CHAT_MSG_LOOT, EventBus, parse_event_line
from loot_history.templates import get_templates

GUID = "Player-1403-0A1B2C3D"
CLOTH = "|cff1eff00|Hitem:2589::::::::60:::::|h[Linen Cloth]|h|r"


@pytest.fixture
def chat(builder, local_identity, roster, clock):
    return LootHistoryChat(
        templates=get_templates("enUS"),
        builder=builder,
        local_identity=local_identity,
        roster=roster,
        clock=clock,
    )


@pytest.fixture
def bus(chat):
    b = EventBus()
    chat.initialize(b)
    return b


class TestProcessMessage:
    """Test the full message pipeline."""

    def test_other_player_with_class(self, chat, recorder):
        entry = chat.process_message("Player receives loot: [Sword of Dawn].", GUID)
        assert entry is not None
        assert entry.winner == "Player"
        assert entry.winner_class == "WARRIOR"
        assert entry.item_link == "[Sword of Dawn]"
        assert entry.quantity == 1
        assert recorder.entries == [entry]

    def test_self_loot_uses_local_identity(self, chat):
        entry = chat.process_message("You receive item: [Ore]x5.")
        assert entry is not None
        assert entry.winner == "Jaina"
        assert entry.winner_class == "MAGE"
        assert entry.item_link == "[Ore]"
        assert entry.quantity == 5

    def test_unknown_guid_leaves_class_unset(self, chat):
        entry = chat.process_message("Thrall receives loot: [Ore].", "Player-1-FFFFFFFF")
        assert entry.winner == "Thrall"
        assert entry.winner_class is None

    def test_no_guid(self, chat):
        entry = chat.process_message("Thrall receives loot: [Ore].")
        assert entry.winner_class is None

    def test_non_loot_ignored(self, chat, recorder):
        assert chat.process_message("Thrall has come online.") is None
        assert recorder.entries == []

    def test_no_config_is_noop(self, chat, builder, recorder):
        builder.config = None
        assert chat.process_message("You receive loot: [Ore].") is None
        assert recorder.entries == []
        assert len(chat.dedup) == 0


class TestDuplicateAnnouncements:
    """Test that one pickup announced twice gives one entry."""

    def test_loot_and_pushed_line_collapse(self, chat, recorder, clock):
        chat.process_message(f"You receive loot: {CLOTH}x2.")
        clock.advance(0.1)
        chat.process_message(f"You receive item: {CLOTH}x2.")
        assert len(recorder.entries) == 1

    def test_same_item_later_recorded_again(self, chat, recorder, clock):
        chat.process_message(f"You receive loot: {CLOTH}.")
        clock.advance(2.5)
        chat.process_message(f"You receive loot: {CLOTH}.")
        assert len(recorder.entries) == 2

    def test_different_players_same_item(self, chat, recorder):
        chat.process_message(f"You receive loot: {CLOTH}.")
        chat.process_message(f"Thrall receives loot: {CLOTH}.", GUID)
        assert [e.winner for e in recorder.entries] == ["Jaina", "Thrall"]

    def test_filtered_item_still_arms_dedup(self, chat, recorder, config):
        config.min_quality = 3
        chat.process_message(f"You receive loot: {CLOTH}.")
        assert recorder.entries == []
        assert len(chat.dedup) == 1


class TestLifecycle:
    """Test initialize / shutdown."""

    def test_initialize_registers_one_handler(self, chat, bus):
        assert bus.handler_count(CHAT_MSG_LOOT) == 1

    def test_reinitialize_keeps_one_handler(self, chat, bus):
        chat.initialize(bus)
        assert bus.handler_count(CHAT_MSG_LOOT) == 1

    def test_event_dispatch_records_entry(self, bus, recorder):
        bus.dispatch(CHAT_MSG_LOOT, "Player receives loot: [Sword of Dawn].", GUID)
        assert len(recorder.entries) == 1
        assert recorder.entries[0].winner_class == "WARRIOR"

    def test_shutdown_unregisters_and_clears(self, chat, bus, recorder):
        bus.dispatch(CHAT_MSG_LOOT, "You receive loot: [Ore].", None)
        assert len(chat.dedup) == 1
        chat.shutdown()
        assert not bus.is_registered(CHAT_MSG_LOOT)
        assert len(chat.dedup) == 0
        bus.dispatch(CHAT_MSG_LOOT, "You receive loot: [Cloth].", None)
        assert len(recorder.entries) == 1

    def test_backfill_survives_shutdown(self, chat, bus, scheduler, catalog):
        bus.dispatch(CHAT_MSG_LOOT, "You receive loot: [Sword of Dawn].", None)
        chat.shutdown()
        catalog.learn("Sword of Dawn", 4)
        assert scheduler.run_pending() == 1


class TestChatLogFeed:
    """Test chat log lines decoded and dispatched through the bus."""

    def _feed(self, bus, line):
        event = parse_event_line(line)
        if event is not None:
            name, args = event
            bus.dispatch(name, *args)

    def test_player_chat_not_recorded(self, bus, recorder):
        self._feed(bus, "2/15 21:30:45.123  [Party] Bob-Realm: You receive loot: [Thunderfury].")
        self._feed(bus, "2/15 21:30:45.500  [Guild] Bob-Realm: Thrall receives loot: [Ashbringer].")
        assert recorder.entries == []

    def test_system_line_recorded(self, bus, recorder):
        self._feed(bus, "2/15 21:30:45.123  [Party] Bob-Realm: You receive loot: [Thunderfury].")
        self._feed(bus, "2/15 21:30:46.000  Thrall receives loot: [Ashbringer].")
        assert len(recorder.entries) == 1
        assert recorder.entries[0].winner == "Thrall"
        assert recorder.entries[0].item_link == "[Ashbringer]"
