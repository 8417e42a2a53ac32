"""Tests for BaseService."""

import pytest
from unittest.mock import patch

from src.exceptions import NotFoundError
from src.services.base_service import BaseService


class MockServiceForTesting(BaseService):
    """Mock service implementation for testing BaseService."""

    def test_method(self):
        """Test method that uses execution tracking."""
        with self.track_execution("test_method", user_id=42, triggered_by="cli"):
            return {"result": "success"}

    def test_method_with_error(self):
        """Test method that raises an error."""
        with self.track_execution("test_method_with_error"):
            raise ValueError("Test error")

    def test_method_with_expected_error(self):
        with self.track_execution(
            "test_method_with_expected_error", expected_errors=(NotFoundError,)
        ):
            raise NotFoundError("Team not found: team_x")


@pytest.fixture
def mock_service():
    return MockServiceForTesting()


@pytest.mark.unit
class TestBaseService:
    """Test suite for BaseService."""

    def test_service_name_is_class_name(self, mock_service):
        assert mock_service.service_name == "MockServiceForTesting"

    @patch("src.services.base_service.logger")
    def test_track_execution_logs_start_and_completion(self, mock_logger, mock_service):
        result = mock_service.test_method()

        assert result == {"result": "success"}
        messages = [call.args[0] for call in mock_logger.info.call_args_list]
        assert "[MockServiceForTesting.test_method] Starting execution" in messages[0]
        assert "user=42" in messages[0]
        assert "triggered_by=cli" in messages[0]
        assert "Completed successfully" in messages[1]

    @patch("src.services.base_service.logger")
    def test_track_execution_logs_failure_with_traceback(self, mock_logger, mock_service):
        with pytest.raises(ValueError, match="Test error"):
            mock_service.test_method_with_error()

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["exc_info"] is True
        assert "ValueError: Test error" in mock_logger.error.call_args.args[0]

    @patch("src.services.base_service.logger")
    def test_expected_errors_log_warning_only(self, mock_logger, mock_service):
        with pytest.raises(NotFoundError):
            mock_service.test_method_with_expected_error()

        mock_logger.warning.assert_called_once()
        mock_logger.error.assert_not_called()
