import os

# Keep tests away from any real database or AWS account
os.environ["DATABASE_URL"] = ""
os.environ.setdefault("AWS_REGION", "us-east-1")

import pytest

from app.schemas.ai import StoredResponse


@pytest.fixture
def make_record():
    counter = {"id": 0}

    def _make(category, prompt, answer="cached answer", role=None):
        counter["id"] += 1
        return StoredResponse(
            id=counter["id"], category=category, prompt=prompt, answer=answer, role=role
        )

    return _make
