"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from ipms.models import Idea


@pytest.fixture
def make_idea():
    """Factory for unsaved Idea rows at a given stage/status."""

    def _make(stage: str = "L1", status: str = "pending", **fields) -> Idea:
        submitted = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)
        values = {
            "idea_id": "7d1f2c8e-0b7a-4a53-9d55-3f0c6f2a9b11",
            "title": "Automate invoice matching",
            "category": "process-improvement",
            "priority": "medium",
            "submitter_name": "Jordan Park",
            "submission_date": submitted,
            "evaluation_stage": stage,
            "stage_status": status,
            "created_at": "2026-03-02T09:30:00Z",
            "updated_at": "2026-03-02T09:30:00Z",
        }
        values.update(fields)
        return Idea(**values)

    return _make
