"""
Tests for job loading, merging and logging setup.
"""
import logging

import pytest

from xl9045qi.hoteldesk import data
from xl9045qi.hoteldesk.config import AUDIT_LOGGER, configure_logging, default_job, load_job, merge
from xl9045qi.hoteldesk.database import HDDatabase
from xl9045qi.hoteldesk.errors import ConfigurationError


class TestJob:
    """Test load_job and merge."""

    def test_defaults(self):
        """Without a file the packaged defaults are used."""
        job = load_job()
        assert job['billing']['tax_rate'] == 0.10
        assert job['ids']['room'] == 101
        assert job['security']['max_login_attempts'] == 3

    def test_default_job_is_a_copy(self):
        """Changing a returned job does not leak into the defaults."""
        job = default_job()
        job['ids']['room'] = 1
        assert data.job['ids']['room'] == 101

    def test_merge_is_deep(self):
        """Nested keys are merged, not replaced."""
        merged = merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}

    def test_job_file_overrides(self, tmp_path):
        """Keys in the job file replace defaults; the rest stays."""
        path = tmp_path / "hotel.job.yaml"
        path.write_text("job:\n  hotel:\n    name: Seaside Inn\n  billing:\n    tax_rate: 0.08\n")
        job = load_job(str(path))
        assert job['hotel']['name'] == "Seaside Inn"
        assert job['hotel']['contact'] == data.job['hotel']['contact']
        assert job['billing']['tax_rate'] == 0.08
        assert job['billing']['currency_symbol'] == "$"

    def test_missing_file(self, tmp_path):
        """An unreadable job file is a ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_job(str(tmp_path / "missing.yaml"))
        assert exc_info.value.code == "SYS-001"

    @pytest.mark.parametrize("text", ["job: [1, 2]\n", "- a\n- b\n", "job: {unclosed\n"])
    def test_bad_contents(self, tmp_path, text):
        """A job file must be YAML with a 'job' mapping."""
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(ConfigurationError):
            load_job(str(path))

    def test_store_uses_configured_tax(self, job, reservation):
        """The configured tax rate is the default for new bills."""
        job['billing']['tax_rate'] = 0.2
        db = HDDatabase(job)
        bill_id = db.create_bill(reservation)
        assert db.find_bill(bill_id).tax_rate == 0.2


@pytest.fixture
def reset_logging():
    """Remove the handlers configure_logging installs."""
    yield
    for name in ("xl9045qi.hoteldesk", AUDIT_LOGGER):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


@pytest.mark.usefixtures("reset_logging")
class TestLogging:
    """Test configure_logging."""

    def test_handlers_installed_once(self, job):
        """Calling twice does not duplicate handlers."""
        configure_logging(job)
        configure_logging(job)
        assert len(logging.getLogger("xl9045qi.hoteldesk").handlers) == 2
        assert len(logging.getLogger(AUDIT_LOGGER).handlers) == 1

    def test_audit_file_receives_reservations(self, job, db, reservation):
        """Reservation changes are written to the audit log."""
        configure_logging(job)
        db.cancel_reservation(reservation)
        for handler in logging.getLogger(AUDIT_LOGGER).handlers:
            handler.flush()
        with open(job['logging']['audit_file'], encoding="utf-8") as f:
            assert f"Reservation #{reservation} cancelled" in f.read()
