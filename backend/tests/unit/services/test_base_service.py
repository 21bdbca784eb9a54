from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
from sqlalchemy.exc import OperationalError

from consultation_app.core.exceptions import ServiceException
from consultation_app.services import base as base_module
from consultation_app.services.base import BaseService


class _SampleService(BaseService):
    @BaseService.measure_operation("succeed")
    def succeed(self) -> str:
        return "ok"

    @BaseService.measure_operation("explode")
    def explode(self) -> None:
        raise RuntimeError("boom")


class TestTransaction:
    def test_commits_on_success(self) -> None:
        db = Mock()
        service = BaseService(db)

        with service.transaction():
            pass

        db.commit.assert_called_once()
        db.rollback.assert_not_called()

    def test_sqlalchemy_error_becomes_service_exception(self) -> None:
        db = Mock()
        service = BaseService(db)

        with pytest.raises(ServiceException):
            with service.transaction():
                raise OperationalError("SELECT 1", {}, Exception("db down"))

        db.rollback.assert_called_once()
        db.commit.assert_not_called()

    def test_other_errors_roll_back_and_propagate(self) -> None:
        db = Mock()
        service = BaseService(db)

        with pytest.raises(ValueError):
            with service.transaction():
                raise ValueError("bad")

        db.rollback.assert_called_once()


class TestMeasureOperation:
    def test_records_success_and_failure(self, monkeypatch) -> None:
        service = _SampleService(Mock())
        fake_prometheus = Mock()
        monkeypatch.setattr(base_module, "prometheus_metrics", fake_prometheus)

        assert service.succeed() == "ok"
        with pytest.raises(RuntimeError):
            service.explode()

        calls = [c.kwargs for c in fake_prometheus.record_service_operation.call_args_list]
        assert [(c["operation"], c["status"], c["error_type"]) for c in calls] == [
            ("succeed", "success", None),
            ("explode", "error", "RuntimeError"),
        ]
        assert all(c["service"] == "_SampleService" for c in calls)

    def test_logs_slow_operations(self) -> None:
        service = _SampleService(Mock())

        with patch("consultation_app.services.base.time.time", side_effect=[0.0, 2.0]):
            with patch.object(service.logger, "warning") as mock_warning:
                assert service.succeed() == "ok"

        mock_warning.assert_called_once()

    def test_prometheus_failure_does_not_break_operation(self, monkeypatch) -> None:
        service = _SampleService(Mock())

        class FakePrometheus:
            def record_service_operation(self, **_kwargs) -> None:
                raise RuntimeError("metrics down")

        monkeypatch.setattr(base_module, "prometheus_metrics", FakePrometheus())

        with patch.object(base_module.logger, "debug") as mock_debug:
            assert service.succeed() == "ok"

        mock_debug.assert_called_once()

    def test_marks_wrapped_function(self) -> None:
        assert _SampleService.succeed._operation_name == "succeed"
        assert _SampleService.succeed._is_measured is True
