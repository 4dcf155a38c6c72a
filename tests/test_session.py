"""
Tests for login sessions and role checks.
"""
import pytest

from xl9045qi.hoteldesk.errors import AuthenticationError, AuthorizationError
from xl9045qi.hoteldesk.models import Department
from xl9045qi.hoteldesk.session import login, require_admin, require_manager


class TestLogin:
    """Test opening a session."""

    def test_login_success(self, db, manager):
        """A valid login returns a session describing the employee."""
        session = login(db, "robert@hotel.com", "default123")
        assert session.employee_id == manager
        assert session.name == "Robert Wilson"
        assert session.department == Department.MANAGEMENT
        assert session.is_admin
        assert session.is_manager

    def test_login_failure(self, db, manager):
        """Wrong passwords raise AuthenticationError with the EMP-001 code."""
        with pytest.raises(AuthenticationError) as exc_info:
            login(db, "robert@hotel.com", "wrong")
        assert exc_info.value.code == "EMP-001"
        assert "robert@hotel.com" in exc_info.value.message

    def test_unknown_user(self, db):
        """An empty store accepts nobody."""
        with pytest.raises(AuthenticationError):
            login(db, "nobody@hotel.com", "default123")

    def test_session_is_immutable(self, db, receptionist):
        """Sessions are values; their fields cannot be reassigned."""
        session = login(db, "lisa@hotel.com", "default123")
        with pytest.raises(AttributeError):
            session.is_manager = True


class TestRoles:
    """Test admin and manager checks."""

    def test_admin_passes_both(self, db, manager):
        """Management staff pass admin and manager checks."""
        session = login(db, "robert@hotel.com", "default123")
        require_admin(session, "backup data")
        require_manager(session, "add room")

    def test_receptionist_is_refused(self, db, receptionist):
        """Front desk staff without a manager title are refused."""
        session = login(db, "lisa@hotel.com", "default123")
        assert not session.is_admin
        with pytest.raises(AuthorizationError) as exc_info:
            require_admin(session, "add employee")
        assert "add employee" in exc_info.value.message
        with pytest.raises(AuthorizationError):
            require_manager(session, "add room")

    def test_supervisor_is_manager_not_admin(self, db):
        """A supervisor outside Management passes manager checks only."""
        db.add_employee("David Miller", "Housekeeping Supervisor", Department.HOUSEKEEPING, "Morning",
                        2800.0, "+1-555-0203", "303 Birch St", "2023-06-20")
        session = login(db, "david@hotel.com", "default123")
        require_manager(session, "revenue report")
        with pytest.raises(AuthorizationError):
            require_admin(session, "restore data")
