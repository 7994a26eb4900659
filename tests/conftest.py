"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    mock_helius_client,
    movement_store,
    whale_registry,
    tracker,
    offline_tracker,
    pattern_config,
    sample_helius_transaction,
)
