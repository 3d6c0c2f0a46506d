"""
Compute boundary for the minimax search.

The search is CPU bound (a depth-4 search takes seconds), so it never runs on
the request path directly: requests are handed to a worker pool and come
back through a Future. Every fault is turned into a failure response here,
nothing escapes into the host.
"""
import logging
import threading
import time
from concurrent.futures import Future, ProcessPoolExecutor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Dict, Optional

import config
from models.errors import SearchAlreadyPending, StructuralInconsistency, ValidationError
from schemas.game_schema import SearchRequest, parse
from .ai_service import search
from .transition import assert_reachable

logger = logging.getLogger(__name__)


_pool = None
_pool_lock = threading.Lock()


def get_pool():
    """Get or create the global search pool."""
    global _pool
    with _pool_lock:
        if _pool is None:
            if config.AI_EXECUTOR == "thread":
                _pool = ThreadPoolExecutor(max_workers=config.AI_MAX_WORKERS,
                                           thread_name_prefix="ai-search")
            else:
                _pool = ProcessPoolExecutor(max_workers=config.AI_MAX_WORKERS)
            logger.info("Started %s search pool with %s workers",
                        config.AI_EXECUTOR, config.AI_MAX_WORKERS)
        return _pool


def shutdown_pool():
    """Shutdown the global search pool."""
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.shutdown(wait=False)
            _pool = None


def failure(error) -> dict:
    return {"success": False, "error": str(error)}


def run_search(request: dict) -> dict:
    """
    Run one search request: {state, depth, previousPosition?}.

    Returns {success: True, move, score} or {success: False, error}.
    """
    started = time.perf_counter()
    try:
        req = parse(SearchRequest, request)
        state = req.state.to_domain()
        assert_reachable(state)
        previous = req.previousPosition.to_domain() if req.previousPosition else None
        result = search(state, req.depth, previous)
    except ValidationError as e:
        logger.warning("Rejected search request: %s", e)
        return failure(e)
    except StructuralInconsistency as e:
        logger.critical("Corrupt state reached the search: %s", e)
        return failure(e)
    except Exception as e:
        logger.exception("Search failed")
        return failure(f"{type(e).__name__}: {e}")

    elapsed = (time.perf_counter() - started) * 1000
    logger.info("Search depth=%s finished in %.0fms, score=%s",
                req.depth, elapsed, result.score)
    return {
        "success": True,
        "move": result.move.to_dict() if result.move else None,
        "score": result.score,
    }


class SearchWorker:
    """
    Hands search requests to the pool, at most one outstanding per game.

    There is no cancellation: a submitted search runs to completion.
    """

    def __init__(self, executor=None):
        self._executor = executor
        self._pending: Dict[str, Future] = {}
        self._lock = threading.Lock()

    @property
    def executor(self):
        return self._executor if self._executor is not None else get_pool()

    def is_pending(self, game_id: str) -> bool:
        with self._lock:
            future = self._pending.get(game_id)
            return future is not None and not future.done()

    def submit(self, game_id: str, request: dict) -> Future:
        with self._lock:
            current = self._pending.get(game_id)
            if current is not None and not current.done():
                raise SearchAlreadyPending(f"A search is already running for game {game_id}")
            future = self.executor.submit(run_search, request)
            self._pending[game_id] = future

        future.add_done_callback(lambda f: self._release(game_id, f))
        return future

    def _release(self, game_id, future):
        with self._lock:
            if self._pending.get(game_id) is future:
                del self._pending[game_id]

    def request_move(self, game_id: str, request: dict, timeout: Optional[float] = None) -> dict:
        """Submit and wait. Pool faults and timeouts come back as failure responses."""
        future = self.submit(game_id, request)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            logger.warning("Search for game %s still running after %ss", game_id, timeout)
            return failure(f"Search did not finish within {timeout}s")
        except Exception as e:
            logger.exception("Search pool failure for game %s", game_id)
            return failure(f"{type(e).__name__}: {e}")


default_worker = SearchWorker()
