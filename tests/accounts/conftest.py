import pytest
from httpx import ASGITransport, AsyncClient

from src.accounts.infra.db.inmemory import InMemoryUserRepository
from src.accounts.infra.storage.profile_pics import LocalProfilePicStorageBackend
from src.accounts.main import app
from src.accounts.security import CredentialHasher, TokenIssuer
from src.accounts.services.accounts.service import AccountService, get_account_service

TEST_SECRET = "test-signing-secret"


@pytest.fixture
def account_service(tmp_path):
    """Fresh service per test: empty in-memory store, cheap bcrypt cost."""

    service = AccountService(
        InMemoryUserRepository(),
        CredentialHasher(rounds=4),
        TokenIssuer(TEST_SECRET),
        storage=LocalProfilePicStorageBackend(tmp_path / "uploads", "/uploads"),
        max_upload_bytes=1024,
    )
    app.dependency_overrides[get_account_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_account_service, None)


@pytest.fixture
async def client(account_service):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def signing_secret():
    return TEST_SECRET
