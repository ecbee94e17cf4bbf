# Area: Games
"""
rps_client._games.poller — Periodic reconciliation
==================================================

Cancellable periodic task that re-pulls the open-game and my-game
listings into ``AppState.snapshot``.

At most one reconciliation is in flight at a time:
- a periodic tick that fires while one is running is skipped
- an explicit refresh() while one is running marks a follow-up run
  and waits for it, so callers never see data older than their request

A failed reconciliation is logged and the previous snapshot is kept.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..enums import GameStatus
from .lifecycle import LifecycleTracker, StatusChange
from .repository import GameRepository
from .state import AppState, GameSnapshot

logger = logging.getLogger("rps_client.poller")

DEFAULT_POLL_INTERVAL_SECONDS = 9.0

ChangeListener = Callable[[StatusChange], None]


class LifecyclePoller:
    """
    Keeps one account's game snapshot fresh.

    Args:
        state: Application state whose snapshot this poller owns
        repository: Read side of the contract
        interval_seconds: Tick period
        tracker: Status tracker guarding against stale records
    """

    def __init__(
        self,
        state: AppState,
        repository: GameRepository,
        interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        tracker: Optional[LifecycleTracker] = None,
    ):
        self.state = state
        self.repository = repository
        self.interval_seconds = interval_seconds
        self.tracker = tracker or LifecycleTracker()
        self.skipped_ticks = 0
        self.reconciliations = 0
        self._listeners: List[ChangeListener] = []
        self._inflight: Optional[asyncio.Task] = None
        self._rerun = False
        self._loop_task: Optional[asyncio.Task] = None

    # ── Public API ─────────────────────────────────────────────

    def add_listener(self, listener: ChangeListener) -> None:
        """Call listener for every observed status change."""
        self._listeners.append(listener)

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def is_refreshing(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def start(self) -> None:
        """Start ticking. No-op if already running."""
        if self.is_running:
            return
        self._loop_task = asyncio.create_task(self._tick_loop())
        logger.info(f"Poller started for {self.state.account} (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop ticking and cancel any reconciliation in flight."""
        tasks = [t for t in (self._loop_task, self._inflight) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._loop_task = None
        self._inflight = None
        if self.state.snapshot.refreshing:
            self.state.snapshot = replace(self.state.snapshot, refreshing=False)
        logger.info("Poller stopped.")

    async def refresh(self) -> GameSnapshot:
        """
        Reconcile now and return the resulting snapshot.

        Joins the reconciliation in flight and schedules one more run
        after it, instead of starting a second overlapping one.
        """
        if self.is_refreshing:
            self._rerun = True
        else:
            self._inflight = asyncio.create_task(self._run())
        await asyncio.shield(self._inflight)
        return self.state.snapshot

    # ── Internals ──────────────────────────────────────────────

    async def _tick_loop(self) -> None:
        while True:
            self._tick()
            await asyncio.sleep(self.interval_seconds)

    def _tick(self) -> bool:
        """Start a reconciliation unless one is in flight."""
        if self.is_refreshing:
            self.skipped_ticks += 1
            logger.debug("Tick skipped: reconciliation still in flight")
            return False
        self._inflight = asyncio.create_task(self._run())
        return True

    async def _run(self) -> None:
        while True:
            self._rerun = False
            await self._reconcile()
            if not self._rerun:
                break

    async def _reconcile(self) -> None:
        """Single reconciliation: list both views, merge, publish."""
        account = self.state.account
        self.state.snapshot = replace(self.state.snapshot, refreshing=True)
        try:
            open_ids, games = await asyncio.gather(
                self.repository.open_game_ids(),
                self.repository.list_all_games(),
            )
            scanned = {game.id for game in games}
            unscanned = [i for i in open_ids if i not in scanned]
            if unscanned:
                games += await self.repository.get_games(unscanned)
        except Exception as e:
            logger.error(f"Reconciliation failed: {e}", exc_info=True)
            self.state.snapshot = replace(
                self.state.snapshot, refreshing=False, last_error=str(e)
            )
            return

        # Swap stale records before filtering by account
        games, changes = self.tracker.reconcile(games)
        by_id = {game.id: game for game in games}
        open_games = [
            by_id[i] for i in dict.fromkeys(open_ids)
            if i in by_id and by_id[i].status is GameStatus.OPEN
        ]
        my_games = [game for game in games if game.involves(account)]
        visible = {game.id for game in open_games} | {game.id for game in my_games}

        self.state.snapshot = GameSnapshot(
            open_games=tuple(open_games),
            my_games=tuple(my_games),
            refreshed_at=datetime.now(timezone.utc),
            refreshing=False,
            last_error=None,
        )
        self.reconciliations += 1
        logger.debug(
            f"Reconciled: {len(open_games)} open, {len(my_games)} mine"
        )
        self._notify([c for c in changes if c.game_id in visible])

    def _notify(self, changes: List[StatusChange]) -> None:
        for change in changes:
            logger.info(
                "Game %s: %s -> %s",
                change.game_id,
                change.previous.value if change.previous else "new",
                change.current.value,
            )
            for listener in self._listeners:
                try:
                    listener(change)
                except Exception as e:
                    logger.error(f"Status listener error: {e}", exc_info=True)
