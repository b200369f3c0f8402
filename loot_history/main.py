"""WoWLootHistory — entry point."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv
from PyQt6.QtCore import QCoreApplication, QObject, QTimer, pyqtSignal, pyqtSlot

from loot_history.catalog import ItemCatalog
from loot_history.chat_loot import LootHistoryChat
from loot_history.config import AppConfig, resolve_chatlog_path, resolve_config_path
from loot_history.entry import EntryBuilder
from loot_history.events import GET_ITEM_INFO_RECEIVED, PLAYER_INFO, EventBus, parse_event_line
from loot_history.history import LootHistory, format_entry
from loot_history.identity import GuidRoster, StaticLocalIdentity
from loot_history.scheduler import QtScheduler
from loot_history.templates import get_templates
from loot_history.watcher import FeedWatcher

_LOG_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
logger = logging.getLogger(__name__)


class LineRelay(QObject):
    """Moves feed lines from the watcher thread onto the Qt main thread.

    line_received is emitted from the watcher thread; the queued connection
    runs _dispatch_line on the thread that owns the relay.
    """

    line_received = pyqtSignal(str)

    def __init__(self, bus: EventBus) -> None:
        super().__init__()
        self._bus = bus
        self.line_received.connect(self._dispatch_line)

    @pyqtSlot(str)
    def _dispatch_line(self, line: str) -> None:
        event = parse_event_line(line)
        if event is None:
            return
        name, args = event
        self._bus.dispatch(name, *args)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=_LOG_FMT,
        handlers=[
            logging.FileHandler("wlh_app.log", encoding="utf-8", mode="w"),
        ],
    )
    if debug:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(_LOG_FMT))
        logging.getLogger().addHandler(console_handler)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a loot history from WoW loot messages")
    parser.add_argument("--config", help="config.json path (default: $WLH_CONFIG or config.json)")
    parser.add_argument("--feed", help="chat log or addon dump to watch")
    parser.add_argument("--from-start", action="store_true", help="replay lines already in the feed")
    parser.add_argument("--debug", action="store_true", help="log to console at DEBUG")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    config = AppConfig.load(args.config or resolve_config_path()).with_env_overrides()
    _setup_logging(args.debug or config.show_debug_console)

    app = QCoreApplication(sys.argv)

    bus = EventBus()
    catalog = ItemCatalog()
    roster = GuidRoster()
    history = LootHistory(max_entries=config.history_size)

    def on_history_change(h: LootHistory) -> None:
        if h.visible and len(h):
            logger.info("History: %s", format_entry(h.entries()[-1]))

    history.subscribe(on_history_change)

    builder = EntryBuilder(
        catalog=catalog,
        scheduler=QtScheduler(),
        recorder=history,
        config=config,
    )
    chat = LootHistoryChat(
        templates=get_templates(config.locale),
        builder=builder,
        local_identity=StaticLocalIdentity(config.player_name, config.player_class),
        roster=roster,
    )

    bus.register_event(GET_ITEM_INFO_RECEIVED, catalog.learn)
    bus.register_event(PLAYER_INFO, roster.remember)
    chat.initialize(bus)

    relay = LineRelay(bus)
    feed_path = Path(args.feed) if args.feed else resolve_chatlog_path(config)
    watcher = FeedWatcher(feed_path, relay.line_received.emit)
    watcher.start(from_end=not args.from_start)

    def shutdown() -> None:
        logger.info("Shutting down...")
        watcher.stop()
        chat.shutdown()
        for entry in history.entries():
            logger.info("  %s", format_entry(entry))
        app.quit()

    signal.signal(signal.SIGINT, lambda *_: shutdown())
    # Give the interpreter a chance to run the SIGINT handler
    wake_timer = QTimer()
    wake_timer.start(500)
    wake_timer.timeout.connect(lambda: None)

    logger.info("WoWLootHistory started (locale %s, feed %s)", config.locale, feed_path)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
