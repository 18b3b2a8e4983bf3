"""Pytest configuration and shared fixtures."""

import asyncio
from datetime import datetime, timezone

import pytest


@pytest.fixture
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


# =============================================================================
# Environment and Configuration Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake AWS credentials so no test can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)


@pytest.fixture
def test_env(monkeypatch):
    """Set up test environment variables and drop the cached settings."""
    import cloudy.config

    test_vars = {
        "ANCHOR_REGION": "us-east-1",
        "LOG_LEVEL": "DEBUG",
        "ENVIRONMENT": "test",
        "REQUEST_TIMEOUT_SECONDS": "30",
        "MAX_CONCURRENT_REGIONS": "4",
    }
    for key, value in test_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setattr(cloudy.config, "_settings", None)
    return test_vars


# =============================================================================
# Fake Provider Client
# =============================================================================

class FakeAWSClient:
    """
    In-memory stand-in for AWSClient.

    ``records`` maps a method name to the raw records it returns and
    ``failures`` maps a method name to the exception it raises. Every call
    is appended to ``calls``.
    """

    def __init__(self, region, records=None, failures=None, delay=0.0):
        self.region = region
        self.records = records or {}
        self.failures = failures or {}
        self.delay = delay
        self.calls = []

    async def _respond(self, method):
        self.calls.append(method)
        if self.delay:
            await asyncio.sleep(self.delay)
        if method in self.failures:
            raise self.failures[method]
        return list(self.records.get(method, []))

    async def describe_ec2_instances(self):
        return await self._respond("describe_ec2_instances")

    async def list_s3_buckets(self):
        return await self._respond("list_s3_buckets")

    async def describe_rds_instances(self):
        return await self._respond("describe_rds_instances")

    async def list_lambda_functions(self):
        return await self._respond("list_lambda_functions")

    async def list_ecs_cluster_arns(self):
        return await self._respond("list_ecs_cluster_arns")

    async def describe_ecs_clusters(self, cluster_arns):
        return await self._respond("describe_ecs_clusters")

    async def list_iam_users(self):
        return await self._respond("list_iam_users")


class FakeClientFactory:
    """
    Stand-in for RegionalClientFactory handing out FakeAWSClients.

    Per-region ``records``, ``failures`` and ``delays`` configure the
    client built for that region; unknown regions get an empty client.
    """

    def __init__(self, records=None, failures=None, delays=None):
        self.records = records or {}
        self.failures = failures or {}
        self.delays = delays or {}
        self.clients = {}

    def get_client(self, region):
        if region not in self.clients:
            self.clients[region] = FakeAWSClient(
                region,
                records=self.records.get(region),
                failures=self.failures.get(region),
                delay=self.delays.get(region, 0.0),
            )
        return self.clients[region]

    @property
    def calls(self):
        """Every (api_region, method) call made through this factory."""
        return [
            (region, method)
            for region, client in self.clients.items()
            for method in client.calls
        ]


@pytest.fixture
def fake_factory():
    """Build FakeClientFactory instances: fake_factory(records=..., failures=...)."""
    return FakeClientFactory


# =============================================================================
# Test Data Fixtures
# =============================================================================

@pytest.fixture
def sample_records():
    """Provide raw boto3 records, one per listing method."""
    created = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    return {
        "describe_ec2_instances": [
            {
                "InstanceId": "i-1234567890abcdef0",
                "InstanceType": "t3.medium",
                "State": {"Name": "running"},
                "VpcId": "vpc-0a1b2c3d",
                "SubnetId": "subnet-0a1b2c3d",
                "PrivateIpAddress": "10.0.0.12",
                "Tags": [
                    {"Key": "Name", "Value": "web-1"},
                    {"Key": "Environment", "Value": "production"},
                ],
            },
        ],
        "list_s3_buckets": [
            {"Name": "logs-bucket", "CreationDate": created},
        ],
        "describe_rds_instances": [
            {
                "DBInstanceIdentifier": "orders-db",
                "DBInstanceClass": "db.t3.micro",
                "Engine": "postgres",
                "EngineVersion": "15.4",
                "DBInstanceStatus": "available",
                "Endpoint": {"Address": "orders-db.abc.rds.amazonaws.com", "Port": 5432},
            },
        ],
        "list_lambda_functions": [
            {
                "FunctionName": "resize-images",
                "FunctionArn": "arn:aws:lambda:us-east-1:123456789012:function:resize-images",
                "Runtime": "python3.12",
                "Handler": "app.handler",
                "MemorySize": 256,
                "Timeout": 30,
                "State": "Active",
            },
        ],
        "list_ecs_cluster_arns": [
            "arn:aws:ecs:us-east-1:123456789012:cluster/default",
        ],
        "describe_ecs_clusters": [
            {
                "clusterArn": "arn:aws:ecs:us-east-1:123456789012:cluster/default",
                "clusterName": "default",
                "status": "ACTIVE",
                "activeServicesCount": 2,
                "runningTasksCount": 5,
                "pendingTasksCount": 0,
                "tags": [{"key": "team", "value": "platform"}],
            },
        ],
        "list_iam_users": [
            {
                "UserName": "alice",
                "UserId": "AIDAEXAMPLE1",
                "Arn": "arn:aws:iam::123456789012:user/alice",
                "Path": "/",
                "CreateDate": created,
            },
        ],
    }


# =============================================================================
# Pytest Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "property: marks tests as property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests by directory
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "property" in str(item.fspath):
            item.add_marker(pytest.mark.property)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
