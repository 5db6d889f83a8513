"""Keeps the repository in sync with the game the service is playing."""

import logging
from typing import Optional
from uuid import UUID

from src.core.shared_types import Phase
from src.db.repository import GameRepository
from src.services.chess_service import ChessGameService

logger = logging.getLogger(__name__)


class GameRecorder:
    """Saves snapshots of one game under one ID. A restart keeps writing to the same record."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository
        self.game_id: Optional[UUID] = None

    def resume(self, service: ChessGameService) -> bool:
        """Load the latest unfinished game into the service. Returns False if there is nothing to resume."""
        found = self.repo.latest_unfinished_game()
        if found is None:
            return False
        game_id, model = found
        service.restore(model)
        self.game_id = game_id
        logger.info("Resumed game %s", game_id)
        return True

    def save(self, service: ChessGameService) -> None:
        """Nothing is stored before the first game started"""
        if service.phase == Phase.NOT_STARTED:
            return
        model = service.snapshot()
        if self.game_id is not None and self.repo.update_game(self.game_id, model) is not None:
            return
        _, self.game_id = self.repo.create_game(model)
