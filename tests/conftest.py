"""Pytest configuration and fixtures for backend tests.

This module provides shared fixtures for testing the migration trigger,
including legacy pool configuration, stubbed Cognito clients and sample
trigger events.
"""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

# Add backend source to path for imports
BACKEND_DIR = Path(__file__).resolve().parents[1] / 'backend'
sys.path.insert(0, str(BACKEND_DIR / 'src'))


# --- Configuration Fixtures ---


@pytest.fixture
def legacy_env() -> dict[str, str]:
    """Environment for a same-account legacy pool."""
    return {
        'AWS_REGION': 'eu-west-1',
        'OLD_USER_POOL_REGION': 'us-east-1',
        'OLD_USER_POOL_ID': 'us-east-1_legacy',
        'OLD_CLIENT_ID': 'legacy-client-id',
    }


@pytest.fixture
def legacy_config():
    """Configuration pointing at a same-account legacy pool."""
    from app.migration.config import LegacyDirectoryConfig

    return LegacyDirectoryConfig(
        region='us-east-1',
        user_pool_id='us-east-1_legacy',
        client_id='legacy-client-id',
    )


@pytest.fixture(autouse=True)
def _clear_caches():
    """Drop cached boto3 clients between tests."""
    from app.services.aws_clients import clear_client_cache

    clear_client_cache()
    yield
    clear_client_cache()


# --- Legacy Pool Fixtures ---


def make_client_error(code: str, operation: str) -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError(
        {'Error': {'Code': code, 'Message': f'{code} raised by legacy pool'}},
        operation,
    )


def make_get_user_response(username: str, attributes: dict[str, str]) -> dict[str, Any]:
    """Build an AdminGetUser response body."""
    return {
        'Username': username,
        'UserAttributes': [
            {'Name': name, 'Value': value} for name, value in attributes.items()
        ],
        'UserStatus': 'CONFIRMED',
        'Enabled': True,
    }


class FakeLegacyPool:
    """Stand-in for the legacy pool keyed by username."""

    def __init__(self) -> None:
        self.users: dict[str, tuple[str, dict[str, str]]] = {}
        self.cognito = MagicMock(name='cognito-idp')
        self.cognito.admin_initiate_auth.side_effect = self._initiate_auth
        self.cognito.admin_get_user.side_effect = self._get_user

    def add_user(self, username: str, password: str, **attributes: str) -> None:
        self.users[username] = (password, attributes)

    def _initiate_auth(self, **params: Any) -> dict[str, Any]:
        auth = params['AuthParameters']
        stored = self.users.get(auth['USERNAME'])
        if stored is None:
            raise make_client_error('UserNotFoundException', 'AdminInitiateAuth')
        if stored[0] != auth['PASSWORD']:
            raise make_client_error('NotAuthorizedException', 'AdminInitiateAuth')
        return {'AuthenticationResult': {'AccessToken': 'token'}}

    def _get_user(self, **params: Any) -> dict[str, Any]:
        stored = self.users.get(params['Username'])
        if stored is None:
            raise make_client_error('UserNotFoundException', 'AdminGetUser')
        return make_get_user_response(params['Username'], stored[1])


class StaticCredentials:
    """Credential provider returning a prebuilt client."""

    def __init__(self, client: Any) -> None:
        self._client = client
        self.requests: list[tuple[str, Any]] = []

    def client(self, service: str, region_name: Any) -> Any:
        self.requests.append((service, region_name))
        return self._client


@pytest.fixture
def legacy_pool() -> FakeLegacyPool:
    """Legacy pool holding alice (with sub) and bob (without sub)."""
    pool = FakeLegacyPool()
    pool.add_user(
        'alice',
        'correct123',
        email='a@x.com',
        preferred_username='alice',
        sub='123',
    )
    pool.add_user('bob', 'bobpass', email='b@y.com', preferred_username='bob')
    pool.add_user('carol', 'carolpass', preferred_username='carol', sub='456')
    return pool


@pytest.fixture
def directory(legacy_config, legacy_pool):
    """LegacyDirectoryClient wired to the fake legacy pool."""
    from app.migration.legacy_directory import LegacyDirectoryClient

    return LegacyDirectoryClient(legacy_config, StaticCredentials(legacy_pool.cognito))


# --- Trigger Event Fixtures ---


def make_trigger_event(
    trigger_source: str,
    username: str,
    password: str | None = None,
) -> dict[str, Any]:
    """Build a Cognito user migration trigger event."""
    request: dict[str, Any] = {'validationData': None, 'clientMetadata': None}
    if password is not None:
        request['password'] = password
    return {
        'version': '1',
        'triggerSource': trigger_source,
        'region': 'eu-west-1',
        'userPoolId': 'eu-west-1_new',
        'userName': username,
        'callerContext': {'awsSdkVersion': 'aws-sdk-unknown', 'clientId': 'new-client'},
        'request': request,
        'response': {
            'userAttributes': None,
            'finalUserStatus': None,
            'messageAction': None,
            'desiredDeliveryMediums': None,
            'forceAliasCreation': None,
        },
    }


@pytest.fixture
def lambda_context() -> MagicMock:
    """Minimal Lambda context."""
    context = MagicMock()
    context.aws_request_id = 'req-0001'
    return context


@pytest.fixture
def user_migration_handler() -> ModuleType:
    """Import the user migration Lambda entrypoint from its file."""
    path = BACKEND_DIR / 'lambda' / 'auth' / 'user_migration' / 'handler.py'
    spec = importlib.util.spec_from_file_location('user_migration_handler', path)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


# --- Mock Fixtures ---


@pytest.fixture
def mock_boto3_client(mocker):
    """Mock boto3 client for AWS service calls."""
    mock = mocker.patch('boto3.client')
    return mock
