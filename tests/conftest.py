import pytest


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests without AWS")
    config.addinivalue_line(
        "markers", "integration: tests against a moto DynamoDB table"
    )
