"""Shared pytest fixtures for all tests."""

import pytest

from chunkstore.chunk_store import ChunkStore
from chunkstore.content_addresser import Sha256Addresser
from chunkstore.file_assembler import FileAssembler
from cli.client import StorageClient
from cli.config import Config
from service.config import Settings
from service.container import build_services

SCENARIO_CHUNK_SIZE = 50


@pytest.fixture
def store():
    """Empty, unlimited, non-verifying chunk store."""
    return ChunkStore()


@pytest.fixture
def assembler(store):
    """
    FileAssembler over the store fixture with the 50-byte chunk size.

    Returns:
        FileAssembler instance
    """
    return FileAssembler(store, addresser=Sha256Addresser(), chunk_size=SCENARIO_CHUNK_SIZE)


@pytest.fixture
def scenario_content():
    """130 bytes of a fixed pattern: two full 50-byte chunks and a 30-byte tail."""
    pattern = b"0123456789abcdefghijklmnopqrstuvwxyz"
    return (pattern * 4)[:130]


@pytest.fixture
def settings():
    """Settings with cheap bcrypt hashing and a small account limit."""
    return Settings(chunk_size=SCENARIO_CHUNK_SIZE, storage_limit=1000, bcrypt_rounds=4)


@pytest.fixture
def services(settings):
    return build_services(settings)


@pytest.fixture
def alice(services):
    """
    Registered user 'alice'.

    Returns:
        user_id of alice
    """
    return services.auth.register_user("alice", "alicepass").user_id


@pytest.fixture
def bob(services):
    return services.auth.register_user("bob", "bobpass").user_id


@pytest.fixture
def client(services):
    return StorageClient(services)


@pytest.fixture
def logged_in_client(client):
    """StorageClient with user 'carol' registered and logged in."""
    client.register("carol", "carolpass")
    client.login("carol", "carolpass")
    return client


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .dedupcloud directory
    """
    config_dir = tmp_path / '.dedupcloud'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path
