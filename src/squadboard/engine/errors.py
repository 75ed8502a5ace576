"""Exception taxonomy for the stats engine and its collaborators.

Every exception carries a technical ``message`` (logged) and a
``user_message`` suitable for showing on the dashboard.
"""

from __future__ import annotations

from typing import Iterable


class StatsEngineError(Exception):
    """Base exception for all squadboard errors."""

    def __init__(self, message: str, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message = user_message or message


class InvalidInputError(StatsEngineError):
    """Raised when a raw stats record has no usable player identifier."""

    def __init__(self, reason: str = "missing player identifier") -> None:
        super().__init__(
            f"Invalid stats record: {reason}",
            "A stats record could not be read because it has no player.",
        )


class AggregationError(StatsEngineError):
    """Raised when one or more players of a comparison could not be built."""

    def __init__(self, player_ids: Iterable[str], reason: str = "") -> None:
        self.player_ids: tuple[str, ...] = tuple(player_ids)
        joined = ", ".join(pid or "<empty>" for pid in self.player_ids)
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Aggregation failed for player(s) {joined}{detail}",
            f"Could not load stats for: {joined}.",
        )


class InvalidMetricError(StatsEngineError):
    """Raised when ranking is requested on an unsupported metric key."""

    def __init__(self, metric_key: object, supported: Iterable[str] = ()) -> None:
        self.metric_key = metric_key
        allowed = ", ".join(supported)
        suffix = f" (expected one of: {allowed})" if allowed else ""
        super().__init__(
            f"Unsupported metric {metric_key!r}{suffix}",
            f"Cannot sort by {metric_key!r}.",
        )


class InvalidContextError(StatsEngineError):
    """Raised when a period, mode or shard parameter is not recognised."""

    def __init__(self, parameter: str, value: object, allowed: Iterable[str]) -> None:
        self.parameter = parameter
        self.value = value
        allowed_list = ", ".join(allowed)
        super().__init__(
            f"Invalid {parameter} {value!r} (expected one of: {allowed_list})",
            f"Unknown {parameter} '{value}'. Choose one of: {allowed_list}.",
        )


class ComparisonRequestError(StatsEngineError):
    """Raised when a comparison request has the wrong shape (e.g. too many players)."""


class NotFoundError(StatsEngineError):
    """Raised by a stats source when no stats exist for a player/context."""

    def __init__(self, player_id: str, detail: str = "") -> None:
        self.player_id = player_id
        suffix = f" ({detail})" if detail else ""
        super().__init__(
            f"No stats found for player {player_id}{suffix}",
            f"No stats available for player {player_id}.",
        )


class UpstreamUnavailableError(StatsEngineError):
    """Raised by a stats source on transport failure."""

    def __init__(self, player_id: str, reason: str = "") -> None:
        self.player_id = player_id
        self.reason = reason
        super().__init__(
            f"Stats upstream unavailable for player {player_id}: {reason}",
            "The stats service is unavailable. Please try again later.",
        )
