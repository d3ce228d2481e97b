import pytest
from loguru import logger


@pytest.fixture
def log_records():
    """Collects every loguru record emitted while the test runs."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def log_lines(log_records):
    """Returns a callable giving the (level, message) pairs logged so far."""
    def lines():
        return [(record["level"].name, record["message"]) for record in log_records]

    return lines
