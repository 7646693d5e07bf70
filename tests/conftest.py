"""Root pytest configuration and shared fixtures.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests (no files, no HTTP)
    │   ├── gatehouse_auth/
    │   ├── application/
    │   ├── infrastructure/
    │   ├── config/
    │   └── presentation/
    └── integration/       # SQLite files and the full HTTP stack
        ├── persistence/
        └── api/

Password hashing uses deliberately cheap Argon2 parameters so the suite
stays fast; production parameters are exercised in a single test.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from gatehouse.container import Container
from gatehouse.infrastructure.persistence.memory import InMemoryAccountRepository
from gatehouse.presentation.api.app import API_V1_PREFIX, create_app
from gatehouse.presentation.cli.app import generate_key_pair
from gatehouse_auth import KeyPair, PasswordHashingService
from gatehouse_config import Settings, clear_settings_cache

TEST_NAME = "your_name"
TEST_EMAIL = "your@email.com"
TEST_PASSWORD = "stR0ngP4ssw0rd!"


def fast_hasher() -> PasswordHasher:
    """Argon2id with minimal cost, for tests only."""
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture(autouse=True)
def _isolated_settings_cache() -> Iterator[None]:
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(scope="session")
def rsa_pem_pair() -> tuple[bytes, bytes]:
    """PEM-encoded (private, public) RSA key pair shared by the session."""
    return generate_key_pair()


@pytest.fixture(scope="session")
def key_pair(rsa_pem_pair: tuple[bytes, bytes]) -> KeyPair:
    return KeyPair.from_rsa_pem(*rsa_pem_pair)


@pytest.fixture(scope="session")
def other_key_pair() -> KeyPair:
    """A second, unrelated key pair."""
    return KeyPair.from_rsa_pem(*generate_key_pair())


@pytest.fixture
def key_files(tmp_path: Path, rsa_pem_pair: tuple[bytes, bytes]) -> tuple[Path, Path]:
    private_path = tmp_path / "private_key.pem"
    public_path = tmp_path / "public_key.pem"
    private_path.write_bytes(rsa_pem_pair[0])
    public_path.write_bytes(rsa_pem_pair[1])
    return private_path, public_path


@pytest.fixture
def password_service() -> PasswordHashingService:
    return PasswordHashingService(fast_hasher())


@pytest.fixture
def test_settings(tmp_path: Path, key_files: tuple[Path, Path]) -> Settings:
    """Settings isolated from any .env file on the machine."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'gatehouse.db'}",
        jwt_private_keyfile=key_files[0],
        jwt_public_keyfile=key_files[1],
        api_cookie_secure=False,
        password_hash_workers=2,
    )


@pytest.fixture
def account_repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def container(
    test_settings: Settings,
    account_repository: InMemoryAccountRepository,
    key_pair: KeyPair,
    password_service: PasswordHashingService,
) -> Container:
    """Service graph around the in-memory repository."""
    return Container.build(
        settings=test_settings,
        repository=account_repository,
        keys=key_pair,
        password_service=password_service,
    )


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def test_client(container: Container) -> Iterator[TestClient]:
    """Test client running the full app (lifespan included)."""
    app = create_app(container=container)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def signup_payload() -> dict:
    return {"name": TEST_NAME, "email": TEST_EMAIL, "password": TEST_PASSWORD}
