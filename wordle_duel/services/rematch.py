"""
Rematch Negotiator

Two-sided opt-in before a finished room is restarted.
"""

from typing import Set


class RematchNegotiator:
    """Collects rematch requests until every participant has asked."""

    def __init__(self, participants: int = 2):
        self.participants = participants
        self._requested: Set[str] = set()

    def request(self, player_id: str) -> bool:
        """
        Record a request.

        Returns:
            bool: True once every participant has requested a rematch
        """
        self._requested.add(player_id)
        return len(self._requested) >= self.participants

    def has_requested(self, player_id: str) -> bool:
        return player_id in self._requested

    def reset(self) -> None:
        self._requested.clear()
