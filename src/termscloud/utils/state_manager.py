"""
In-Memory State Management for Cloud Sessions.

A cloud session holds the terms a user has accumulated, the running listing
total from research runs, and the "analysis in progress" flag that gates
duplicate submissions. State lives only in this process: nothing is persisted
and a restart starts every user from an empty cloud. Sessions idle for longer
than CLOUD_TTL_SECONDS are dropped; one with an analysis in flight is kept.

All access goes through the functions below, which serialize on a module lock
because FastAPI runs sync route handlers in a thread pool.
"""

import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Dict, List

from termscloud.config import settings
from termscloud.utils.exceptions import AnalysisInProgressError, CloudNotFoundError
from termscloud.utils.logger import get_logger
from termscloud.utils.term_merging import merge_terms

logger = get_logger(__name__)

# {cloud_id: {terms, total_listings, is_analyzing, created_at, updated_at}}
cloud_states: Dict[str, Dict[str, Any]] = {}
_lock = threading.Lock()


def _expire_idle() -> None:
    """Drop sessions not accessed within the TTL. Caller holds _lock."""
    cutoff = datetime.now() - timedelta(seconds=settings.CLOUD_TTL_SECONDS)
    expired = [
        cloud_id
        for cloud_id, state in cloud_states.items()
        if state["updated_at"] < cutoff and not state["is_analyzing"]
    ]
    for cloud_id in expired:
        del cloud_states[cloud_id]
    if expired:
        logger.info(
            "Expired idle clouds", extra={"extra_fields": {"count": len(expired)}}
        )


def _get(cloud_id: str) -> Dict[str, Any]:
    _expire_idle()
    state = cloud_states.get(cloud_id)
    if state is None:
        raise CloudNotFoundError()
    state["updated_at"] = datetime.now()
    return state


def create_cloud() -> str:
    """Create an empty cloud session.

    Returns:
        str: The new cloud_id (UUID4).
    """
    cloud_id = str(uuid.uuid4())
    now = datetime.now()
    with _lock:
        _expire_idle()
        cloud_states[cloud_id] = {
            "terms": [],
            "total_listings": 0,
            "is_analyzing": False,
            "created_at": now,
            "updated_at": now,
        }
    logger.info("Created cloud", extra={"extra_fields": {"cloud_id": cloud_id}})
    return cloud_id


def get_cloud(cloud_id: str) -> Dict[str, Any]:
    """Get a snapshot of a cloud session.

    Raises:
        CloudNotFoundError: If the cloud does not exist.
    """
    with _lock:
        state = _get(cloud_id)
        return {**state, "terms": list(state["terms"])}


def delete_cloud(cloud_id: str) -> None:
    """Drop a cloud session.

    Raises:
        CloudNotFoundError: If the cloud does not exist.
    """
    with _lock:
        _get(cloud_id)
        del cloud_states[cloud_id]
    logger.info("Deleted cloud", extra={"extra_fields": {"cloud_id": cloud_id}})


def add_terms(
    cloud_id: str, new_terms: List[Dict[str, Any]], total_listings: int = 0
) -> List[Dict[str, Any]]:
    """Merge terms into a cloud and add to its listing total.

    Returns:
        The cloud's merged terms.

    Raises:
        CloudNotFoundError: If the cloud does not exist.
    """
    with _lock:
        state = _get(cloud_id)
        state["terms"] = merge_terms(state["terms"], new_terms)
        state["total_listings"] += total_listings
        state["updated_at"] = datetime.now()
        return list(state["terms"])


def reset_cloud(cloud_id: str) -> bool:
    """Clear a cloud's terms and listing total.

    Returns:
        bool: False when the cloud was already empty.

    Raises:
        CloudNotFoundError: If the cloud does not exist.
    """
    with _lock:
        state = _get(cloud_id)
        if not state["terms"]:
            return False
        state["terms"] = []
        state["total_listings"] = 0
        state["updated_at"] = datetime.now()
    logger.info("Reset cloud", extra={"extra_fields": {"cloud_id": cloud_id}})
    return True


@contextmanager
def analysis_slot(cloud_id: str):
    """Hold a cloud's single analysis slot for the duration of the block.

    Raises:
        CloudNotFoundError: If the cloud does not exist.
        AnalysisInProgressError: If another analysis holds the slot.
    """
    with _lock:
        state = _get(cloud_id)
        if state["is_analyzing"]:
            raise AnalysisInProgressError()
        state["is_analyzing"] = True

    try:
        yield
    finally:
        with _lock:
            # The cloud may have been deleted while the analysis ran
            if cloud_id in cloud_states:
                cloud_states[cloud_id]["is_analyzing"] = False
                cloud_states[cloud_id]["updated_at"] = datetime.now()
