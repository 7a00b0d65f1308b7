#!/usr/bin/env python3
"""
Seed script: creates demo departments and a few ideas at different stages.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ipms.database import async_session_maker
from ipms.engine.commands import SubmitL1Triage, SubmitL2Evaluation, SubmitL3BusinessCase
from ipms.schemas.idea import SubmitIdeaRequest
from ipms.services.workflow import submit_evaluation, submit_idea
from ipms.storage import repositories

DEPARTMENTS = [
    {"name": "Operations", "code": "OPS", "head_name": "Dana Whitfield"},
    {"name": "Engineering", "code": "ENG", "head_name": "Ravi Menon"},
    {"name": "Finance", "code": "FIN", "head_name": "Li Wei"},
]


async def seed():
    async with async_session_maker() as session:
        dept_ids = {}
        for dept in DEPARTMENTS:
            existing = await repositories.get_department_by_code(session, dept["code"])
            if existing:
                print(f"Department {dept['code']} already exists, using existing.")
                dept_ids[dept["code"]] = existing.department_id
            else:
                created = await repositories.create_department(session, **dept)
                dept_ids[dept["code"]] = created.department_id
        await session.commit()

        fresh = await submit_idea(
            session,
            SubmitIdeaRequest(
                title="Shared scheduling board for maintenance crews",
                submitter_name="Priya Natarajan",
                category="process-improvement",
                department_id=dept_ids["OPS"],
                problem_statement="Crews double-book the same equipment windows.",
            ),
        )

        screened = await submit_idea(
            session,
            SubmitIdeaRequest(
                title="Heat recovery on compressor line 2",
                submitter_name="Tom Becker",
                category="sustainability",
                priority="high",
                department_id=dept_ids["ENG"],
            ),
        )
        await submit_evaluation(
            session, screened.idea_id, SubmitL1Triage(triaged_by="Ravi Menon", decision="approve")
        )
        await submit_evaluation(
            session,
            screened.idea_id,
            SubmitL2Evaluation(
                reviewer_name="Ravi Menon", novelty=4, feasibility=3.5, alignment=4, impact=4.5
            ),
        )
        await submit_evaluation(
            session,
            screened.idea_id,
            SubmitL3BusinessCase(
                assessed_by="Li Wei",
                estimated_cost=120000,
                expected_savings=180000,
                implementation_timeline="6 months",
            ),
        )
        await session.commit()

    print("Seed complete!")
    print(f"New submission (L1): {fresh.idea_id}")
    print(f"Awaiting executive review (L4): {screened.idea_id}")


if __name__ == "__main__":
    asyncio.run(seed())
