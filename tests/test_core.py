import pytest
from pydantic import ValidationError

from app.core.config import ProdSettings
from app.core.exceptions import DataStoreUnavailableError, InvalidExportFieldError
from app.core.monitoring import scrub_event


def test_prod_settings_rewrite_heroku_database_url():
    prod = ProdSettings(_env_file=None, DATABASE_URL="postgres://u:p@db:5432/invoices", ADMIN_API_KEY="s3cret")

    assert prod.DATABASE_URL == "postgresql://u:p@db:5432/invoices"
    assert prod.LOG_FORMAT == "json"


def test_prod_settings_reject_placeholder_admin_key():
    with pytest.raises(ValidationError, match="ADMIN_API_KEY"):
        ProdSettings(_env_file=None, DATABASE_URL="postgresql://u:p@db/invoices", ADMIN_API_KEY="change_me_admin_key")


def test_prod_settings_require_database_url():
    with pytest.raises(ValidationError, match="DATABASE_URL"):
        ProdSettings(_env_file=None, DATABASE_URL="", ADMIN_API_KEY="s3cret")


def test_exception_payloads():
    assert InvalidExportFieldError("nope", ("created_at", "billing_period")).to_dict()["error"]["code"] == "EXP001"
    error = DataStoreUnavailableError("abc123")
    assert error.status_code == 503
    assert error.to_dict()["error"]["details"] == {"cid": "abc123"}


def test_scrub_event_filters_query_string():
    event = {"request": {"url": "http://x/dashboard", "query_string": "q=jane@example.com"}}

    assert scrub_event(event, {})["request"]["query_string"] == "[filtered]"
    assert scrub_event({"message": "boom"}, {}) == {"message": "boom"}
