"""Base service class with execution logging and error handling."""
from abc import ABC
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from src.utils.logger import logger


class BaseService(ABC):
    """
    Base class for all services.

    Provides execution logging through the track_execution context manager:
    start, completion with duration, and failures with traceback.
    """

    def __init__(self):
        self.service_name = self.__class__.__name__

    @contextmanager
    def track_execution(
        self,
        method_name: str,
        user_id: Optional[int] = None,
        triggered_by: str = "system",
        input_params: Optional[Dict[str, Any]] = None,
        expected_errors: tuple = (),
    ):
        """
        Context manager to log service method execution.

        Usage:
            with self.track_execution("submit", user_id=42, triggered_by="user"):
                return self.do_work()

        Args:
            method_name: Name of the method being executed
            user_id: Telegram ID of the user who triggered the execution
            triggered_by: How it was triggered ('user', 'system', 'cli', 'webhook')
            input_params: Parameters worth recording in the log line
            expected_errors: Exception types logged as warnings without traceback
        """
        started_at = datetime.utcnow()
        label = f"[{self.service_name}.{method_name}]"
        context = f"triggered_by={triggered_by}"
        if user_id is not None:
            context += f", user={user_id}"
        if input_params:
            context += f", params={input_params}"

        logger.info(f"{label} Starting execution ({context})")
        try:
            yield

        except expected_errors as e:
            logger.warning(f"{label} Rejected: {e}")
            raise

        except Exception as e:
            duration_ms = int((datetime.utcnow() - started_at).total_seconds() * 1000)
            logger.error(
                f"{label} Failed after {duration_ms}ms: {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise

        duration_ms = int((datetime.utcnow() - started_at).total_seconds() * 1000)
        logger.info(f"{label} Completed successfully ({duration_ms}ms)")
