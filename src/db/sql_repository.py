"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Phase
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            squares=dict(game.squares),
            side_to_move=game.side_to_move,
            phase=game.phase,
            end_reason=game.end_reason,
        )
        self.db.add(game_db)
        self._commit()
        self.db.refresh(game_db)
        logger.debug("Created game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the snapshot of an existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.squares = dict(game.squares)
        game_db.side_to_move = game.side_to_move
        game_db.phase = game.phase
        game_db.end_reason = game.end_reason
        self._commit()
        self.db.refresh(game_db)
        logger.debug("Updated game %s (%s)", game_id, game.phase)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self._commit()
        logger.debug("Deleted game %s", game_id)
        return game_model

    def latest_unfinished_game(self) -> tuple[UUID, GameModel] | None:
        """Most recently updated game that has not ended."""
        query = (
            select(DBGame)
            .where(DBGame.phase != Phase.ENDED.value)
            .order_by(DBGame.updated_at.desc())
            .limit(1)
        )
        game_db = self._scalar(query)
        if game_db is None:
            return None
        return game_db.id, self._to_model(game_db)

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self._scalar(query)

    def _scalar(self, query) -> DBGame | None:
        try:
            return self.db.scalar(query)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Could not read from the database: {e}") from e

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Could not write to the database: {e}") from e

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            squares=dict(game_db.squares),
            side_to_move=game_db.side_to_move,
            phase=game_db.phase,
            end_reason=game_db.end_reason,
        )
