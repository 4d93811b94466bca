"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest


@pytest.fixture
def test_date():
    return date(2025, 1, 15)


@pytest.fixture
def assignments_csv_rows():
    return [
        {
            "RequestId": "req-1", "PropertyCode": "PROP001", "UnitNumber": "101",
            "WorkerEmail": "hvac@test.com", "ScheduledDate": "2025-01-15",
            "Status": "Scheduled", "IsEmergency": "No", "WorkOrderNumber": "WO-001",
        },
        {
            "RequestId": "req-2", "PropertyCode": "PROP001", "UnitNumber": "102",
            "WorkerEmail": "plumber@test.com", "ScheduledDate": "2025-01-15",
            "Status": "InProgress", "IsEmergency": "Yes", "WorkOrderNumber": "WO-002",
        },
    ]
