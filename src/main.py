"""Console entry point: `console-chess` (or `python -m src.main`)"""

import argparse
import logging
import sys
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from src.console.controller import CommandController
from src.console.views import InputView, OutputView
from src.core.config import Settings
from src.core.exceptions import RepositoryError
from src.db.database import create_session_factory
from src.db.sql_repository import SQLGameRepository
from src.services.chess_service import ChessGameService
from src.services.game_recorder import GameRecorder

logger = logging.getLogger(__name__)


def build_settings(argv: Optional[list[str]] = None) -> Settings:
    """Environment first, command line flags override"""
    parser = argparse.ArgumentParser(description="Play chess in the console.")
    parser.add_argument(
        "--database-url", default=None, help="SQLAlchemy URL of the game store"
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Keep the game in memory only (nothing is saved or resumed)",
    )
    parser.add_argument("--log-level", default=None, help="e.g. DEBUG, INFO, WARNING")
    args = parser.parse_args(argv)

    overrides: dict[str, object] = {}
    if args.database_url is not None:
        overrides["database_url"] = args.database_url
    if args.no_persist:
        overrides["persist"] = False
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    try:
        settings = Settings.from_env()
        return Settings(**(settings.model_dump() | overrides))
    except ValidationError as e:
        messages = "; ".join(error["msg"].removeprefix("Value error, ") for error in e.errors())
        parser.error(messages)


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    settings = build_settings(argv)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    service = ChessGameService()
    input_view, output_view = InputView(), OutputView()
    if not settings.persist:
        CommandController(input_view, output_view, service).run()
        return 0

    try:
        session_factory = create_session_factory(settings.database_url)
    except SQLAlchemyError as e:
        logger.error("Cannot open game store %s: %s", settings.database_url, e)
        return 1

    with session_factory() as db:
        recorder = GameRecorder(SQLGameRepository(db))
        try:
            CommandController(input_view, output_view, service, recorder).run()
        except RepositoryError as e:
            logger.error("Game store unavailable: %s", e)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
