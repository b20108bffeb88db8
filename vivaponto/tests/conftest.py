"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from vivaponto.main import app
from vivaponto.db.base import Base
from vivaponto.core.deps import get_db
from vivaponto.core.security import hash_password
from vivaponto.db.session import enable_sqlite_foreign_keys

# Import all models to ensure they're registered with Base.metadata
from vivaponto.models import (
    AdjustmentRequest,
    AuditLog,
    Role,
    Shift,
    TimeRecord,
    User,
    UserShiftHistory,
)  # noqa


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

enable_sqlite_foreign_keys(engine)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_PASSWORD = "adminpass123"
EMPLOYEE_PASSWORD = "emppass123"


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def shift(db):
    """Standard 08:00-17:00 shift with a one hour break (480 minutes)"""
    shift = Shift(
        name="Comercial",
        start_time="08:00",
        break_start="12:00",
        break_end="13:00",
        end_time="17:00",
        total_minutes=480,
    )
    db.add(shift)
    db.commit()
    db.refresh(shift)
    return shift


@pytest.fixture
def admin_user(db):
    """Create an administrator"""
    admin = User(
        name="Admin",
        email="admin@test.com",
        cpf="11111111111",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=Role.ADMIN.value,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def employee_user(db, shift):
    """Create an employee on the standard shift"""
    employee = User(
        name="Maria Souza",
        email="maria@test.com",
        cpf="22222222222",
        password_hash=hash_password(EMPLOYEE_PASSWORD),
        role=Role.EMPLOYEE.value,
        shift_id=shift.id,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def other_employee(db):
    """Create an employee without a shift"""
    employee = User(
        name="Joao Lima",
        email="joao@test.com",
        cpf="33333333333",
        password_hash=hash_password(EMPLOYEE_PASSWORD),
        role=Role.EMPLOYEE.value,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def get_auth_token(client, email, password):
    """Helper to get auth token"""
    response = client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": password}
    )
    return response.json()["access_token"]


@pytest.fixture
def admin_headers(client, admin_user):
    token = get_auth_token(client, admin_user.email, ADMIN_PASSWORD)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_headers(client, employee_user):
    token = get_auth_token(client, employee_user.email, EMPLOYEE_PASSWORD)
    return {"Authorization": f"Bearer {token}"}
