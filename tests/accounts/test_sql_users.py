from datetime import datetime, timezone
from uuid import uuid4

import pytest

from src.accounts.domain.models.user import User, UserRole
from src.accounts.exceptions import DuplicateEmailError, DuplicateSupervisorError
from src.accounts.infra.db.bootstrap import init_sql_repositories
from src.accounts.infra.db.models import Base
from src.accounts.infra.db.session import create_engine_for_url, create_sqlalchemy_session_factory
from src.accounts.infra.db.sql_users import SqlUserRepository


def _user(email="a@b.com", role=UserRole.MEMBER, company_name="Acme"):
    return User(
        id=uuid4(),
        full_name="A",
        email=email,
        password="$2b$04$hash",
        role=role,
        company_name=company_name,
        created_at=datetime.now(timezone.utc),
    )


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'users.db'}"


@pytest.fixture
def repository(database_url):
    engine = create_engine_for_url(database_url)
    Base.metadata.create_all(engine)
    yield SqlUserRepository(create_sqlalchemy_session_factory(engine))
    engine.dispose()


def test_add_and_lookup_round_trip(repository):
    user = _user()
    repository.add(user)

    loaded = repository.get_by_email("a@b.com")
    assert loaded is not None
    assert loaded.id == user.id
    assert loaded.role == UserRole.MEMBER
    assert loaded.profile_pic == ""
    assert repository.get(user.id).email == "a@b.com"
    assert repository.get_by_email("A@B.COM") is None


def test_unique_email_enforced_by_store(repository):
    repository.add(_user())

    with pytest.raises(DuplicateEmailError):
        repository.add(_user(company_name="Other"))


def test_one_supervisor_per_company_enforced_by_store(repository):
    repository.add(_user(email="boss@acme.com", role=UserRole.SUPERVISOR, company_name="Acme"))

    with pytest.raises(DuplicateSupervisorError):
        repository.add(_user(email="boss2@acme.com", role=UserRole.SUPERVISOR, company_name="ACME"))

    # Members and other companies are unaffected.
    repository.add(_user(email="member@acme.com", role=UserRole.MEMBER, company_name="acme"))
    repository.add(_user(email="boss@globex.com", role=UserRole.SUPERVISOR, company_name="Globex"))


def test_find_supervisor_for_company_is_case_insensitive(repository):
    boss = _user(email="boss@acme.com", role=UserRole.SUPERVISOR, company_name="Acme")
    repository.add(boss)
    repository.add(_user(email="member@globex.com", company_name="Globex"))

    assert repository.find_supervisor_for_company("aCmE").id == boss.id
    assert repository.find_supervisor_for_company("Globex") is None


def test_init_sql_repositories_switches_store(account_service, database_url):
    assert init_sql_repositories(database_url, service=account_service, enabled=True) is True
    assert isinstance(account_service.users, SqlUserRepository)

    result = account_service.signup(
        full_name="A",
        email="a@b.com",
        password="Abc12345",
        role="member",
        company_name="Acme",
    )
    assert account_service.users.get(result.user.id) is not None
    assert account_service.login(email="a@b.com", password="Abc12345").user.id == result.user.id


def test_init_sql_repositories_is_noop_when_disabled(account_service, database_url):
    before = account_service.users
    assert init_sql_repositories(database_url, service=account_service, enabled=False) is False
    assert account_service.users is before
