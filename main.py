import sys
from typing import List

# --- Settings/Logging ---
from trade_analyzer.logging.setup import setup_logging
from trade_analyzer.config.settings import settings

setup_logging()

from loguru import logger

# --- End Settings/Logging ---

# Data Models and Core Logic Imports
from trade_analyzer.models.defaults import default_teams
from trade_analyzer.models.team import Team
from trade_analyzer.normalization.upgrader import load_saved_teams
from trade_analyzer.state.trade_state import TradeState
from trade_analyzer.storage.json_store import JsonFileStore, save_teams
from trade_analyzer.presentation.summary_view import render_summary

from rich import print


def load_state(store: JsonFileStore) -> TradeState:
    """Builds the trade state from saved data, seeding defaults when there is none."""
    saved = load_saved_teams(store.get_item(settings.storage_key))
    if saved is None:
        logger.info("No valid saved teams; starting from the default teams.")
        teams = default_teams()
    else:
        logger.info(f"Restored {len(saved)} team(s) from {store.path}.")
        teams = saved

    state = TradeState(teams)

    def persist(current: List[Team]) -> None:
        save_teams(store, settings.storage_key, current)

    state.on_change(persist)
    return state


def main(argv: List[str]) -> None:
    """Main entry point for the application."""
    logger.info("Starting Multi-Team Trade Analyzer")
    store = JsonFileStore(settings.storage_path)

    if "--reset" in argv:
        logger.info("Resetting saved teams to defaults.")
        store.remove_item(settings.storage_key)

    state = load_state(store)
    save_teams(store, settings.storage_key, state.teams)

    print(render_summary(state.summary, state.teams))


if __name__ == "__main__":
    try:
        main(sys.argv[1:])
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
