import logging
from dataclasses import dataclass

from xl9045qi.hoteldesk.config import AUDIT_LOGGER
from xl9045qi.hoteldesk.errors import AuthenticationError, AuthorizationError
from xl9045qi.hoteldesk.models import Department

logger = logging.getLogger(__name__)
audit = logging.getLogger(AUDIT_LOGGER)


@dataclass(frozen=True)
class Session:
    """Who is logged in at the desk. Passed to every action that needs a role check."""
    employee_id: int
    name: str
    email: str
    department: Department
    is_manager: bool

    @property
    def is_admin(self) -> bool:
        return self.department == Department.MANAGEMENT


def login(db, email: str, password: str) -> Session:
    """Authenticate an employee against the store and open a session.

    Raises:
        AuthenticationError: If no employee matches the email and password.
    """
    employee = db.authenticate_employee(email, password)
    if employee is None:
        audit.warning("Failed login for %s", email)
        raise AuthenticationError(email)

    audit.info("Employee #%d (%s) logged in", employee.id, employee.email)
    return Session(employee_id=employee.id, name=employee.name, email=employee.email,
                   department=employee.department, is_manager=employee.is_manager())

def logout(session: Session):
    audit.info("Employee #%d (%s) logged out", session.employee_id, session.email)

def require_admin(session: Session, operation: str):
    if not session.is_admin:
        logger.warning("%s denied '%s' (admin required)", session.email, operation)
        raise AuthorizationError(operation, "Management")

def require_manager(session: Session, operation: str):
    if not (session.is_manager or session.is_admin):
        logger.warning("%s denied '%s' (manager required)", session.email, operation)
        raise AuthorizationError(operation, "Manager")
