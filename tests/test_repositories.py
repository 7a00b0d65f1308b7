"""Repository timestamp formatting - database session mocked."""

import re
from unittest.mock import AsyncMock, MagicMock

from ipms.storage import repositories

ISO_MICROS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}Z$")


def _session():
    db = MagicMock()
    db.flush = AsyncMock()
    return db


async def test_created_and_touched_ideas_share_one_timestamp_format():
    db = _session()
    idea = await repositories.create_idea(db, title="Reuse pallet wrap", submitter_name="Jordan Park")
    assert ISO_MICROS.match(idea.created_at)
    assert ISO_MICROS.match(idea.updated_at)

    await repositories.touch_idea(db, idea)
    assert ISO_MICROS.match(idea.updated_at)
    assert idea.updated_at >= idea.created_at


async def test_comment_and_department_timestamps_match_idea_format():
    db = _session()
    comment = await repositories.create_comment(db, "7d1f2c8e-0b7a-4a53-9d55-3f0c6f2a9b11", author_name="Sam", content="+1")
    department = await repositories.create_department(db, name="Operations", code="OPS")
    assert ISO_MICROS.match(comment.created_at)
    assert ISO_MICROS.match(department.created_at)
