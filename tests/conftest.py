import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_TO_FILE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-unistay-tests"

from datetime import datetime, timezone  # noqa: E402
from decimal import Decimal  # noqa: E402
from itertools import count  # noqa: E402
from typing import Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from unistay.api.deps import get_rate_limiter  # noqa: E402
from unistay.db.init_db import drop_db, init_db  # noqa: E402
from unistay.db.session import get_db  # noqa: E402
from unistay.main import app  # noqa: E402
from unistay.models import Booking, Hostel, Review, RoomType, University, User  # noqa: E402
from unistay.models.enums import BookingStatus, UserRole  # noqa: E402
from tests.helpers import make_sqlite_engine  # noqa: E402

_sequence = count(1)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    engine = make_sqlite_engine(poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    drop_db(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


class Factory:
    """Creates committed rows with sensible defaults."""

    def __init__(self, session):
        self.session = session

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        return obj

    def user(self, role: UserRole = UserRole.STUDENT, *, is_verified: bool = True, **kwargs) -> User:
        n = next(_sequence)
        defaults = dict(
            email=f"{role.value}{n}@example.com",
            first_name=role.value.title().replace("_", ""),
            last_name=f"User{n}",
            role=role,
            is_verified=is_verified,
            is_active=True,
        )
        defaults.update(kwargs)
        return self._save(User(**defaults))

    def student(self, **kwargs) -> User:
        return self.user(UserRole.STUDENT, **kwargs)

    def owner(self, **kwargs) -> User:
        return self.user(UserRole.HOSTEL_OWNER, **kwargs)

    def admin(self, **kwargs) -> User:
        return self.user(UserRole.ADMIN, **kwargs)

    def university(self, **kwargs) -> University:
        n = next(_sequence)
        defaults = dict(name=f"University {n}", short_code=f"U{n}", is_active=True)
        defaults.update(kwargs)
        return self._save(University(**defaults))

    def hostel(self, owner: User, **kwargs) -> Hostel:
        n = next(_sequence)
        defaults = dict(
            owner_id=owner.id,
            name=f"Hostel {n}",
            address=f"{n} Campus Road",
            description="Close to the main gate",
            is_active=True,
        )
        defaults.update(kwargs)
        return self._save(Hostel(**defaults))

    def room_type(
        self,
        hostel: Hostel,
        *,
        price_per_month: str = "300000",
        total_count: int = 1,
        available_count: Optional[int] = None,
        **kwargs,
    ) -> RoomType:
        defaults = dict(
            hostel_id=hostel.id,
            name="Single",
            capacity=1,
            price_per_month=Decimal(price_per_month),
            total_count=total_count,
            available_count=total_count if available_count is None else available_count,
            amenities=["wifi"],
        )
        defaults.update(kwargs)
        return self._save(RoomType(**defaults))

    def booking(
        self,
        student: User,
        room_type: RoomType,
        *,
        status: BookingStatus = BookingStatus.PENDING,
        **kwargs,
    ) -> Booking:
        defaults = dict(
            student_id=student.id,
            hostel_id=room_type.hostel_id,
            room_type_id=room_type.id,
            start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            end_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
            total_price=Decimal(room_type.price_per_month) * 2,
            status=status,
        )
        defaults.update(kwargs)
        return self._save(Booking(**defaults))

    def review(self, student: User, hostel: Hostel, rating: int = 4, **kwargs) -> Review:
        return self._save(Review(student_id=student.id, hostel_id=hostel.id, rating=rating, **kwargs))


@pytest.fixture()
def factory(db_session) -> Factory:
    return Factory(db_session)


@pytest.fixture()
def marketplace(factory):
    """
    One owner with one hostel and a single-unit room type, two students
    and an admin.
    """
    owner = factory.owner()
    hostel = factory.hostel(owner)
    room_type = factory.room_type(hostel, price_per_month="300000", total_count=1)
    return {
        "owner": owner,
        "hostel": hostel,
        "room_type": room_type,
        "student": factory.student(),
        "other_student": factory.student(),
        "admin": factory.admin(),
    }


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rate_limiter] = lambda: None
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
