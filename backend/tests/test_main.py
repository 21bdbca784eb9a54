from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from consultation_app.main import create_tables, metrics_payload
from consultation_app.monitoring.prometheus_metrics import prometheus_metrics


def test_create_tables_builds_schema():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    create_tables(engine)

    assert set(inspect(engine).get_table_names()) >= {
        "user_accounts",
        "consultation_reqs",
        "consultations",
        "awaiting_payments",
        "maintenances",
    }
    engine.dispose()


def test_metrics_payload_exposes_domain_counters():
    prometheus_metrics.inc_consultation_request_refusal("INVALID_CANDIDATE")

    body, content_type = metrics_payload()

    assert b'consultation_request_refusals_total{code="INVALID_CANDIDATE"}' in body
    assert content_type.startswith("text/plain")
