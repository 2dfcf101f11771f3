"""Integration tests for the melcloud_optimizer library.

These tests log in to the real MELCloud service and only read data.
They are marked with @pytest.mark.integration and skipped by default.

To run integration tests:
    pytest tests/integration -v -m integration

Environment variables read from .env:
    MELCLOUD_USER: Account email
    MELCLOUD_PASS: Account password
    DEVICE_ID: Device to read state from (optional, defaults to the first device)
    MELCLOUD_API_BASE_URL: API base URL (optional, defaults to production)
"""
