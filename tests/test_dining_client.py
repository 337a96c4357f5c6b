"""Dining client fallback and passthrough."""

from __future__ import annotations

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from campus_housing.services.common import ExternalServiceError
from campus_housing.services.integrations import DiningClient


class FakeResponse:
    def __init__(self, status_code, content, headers):
        self.status_code = status_code
        self.content = content
        self.headers = CaseInsensitiveDict(headers)


class FakeSession:
    def __init__(self, answers):
        self.answers = answers
        self.requests = []

    def get(self, url, headers=None, timeout=None):
        self.requests.append((url, headers, timeout))
        answer = self.answers.get(url)
        if answer is None:
            raise requests.ConnectionError(f"cannot reach {url}")
        return answer


def test_falls_back_to_next_candidate():
    session = FakeSession({
        "http://second:8001/api/dining/menus/today": FakeResponse(
            503, b"down", {"Content-Type": "text/plain", "X-Internal": "1"}
        ),
    })
    client = DiningClient(base_urls=["http://first:8001", "http://second:8001/"], timeout=2, session=session)

    upstream = client.get_today_menus(student_id="7")

    assert upstream.status_code == 503
    assert upstream.content == b"down"
    assert upstream.headers == {"Content-Type": "text/plain"}
    assert [r[0] for r in session.requests] == [
        "http://first:8001/api/dining/menus/today",
        "http://second:8001/api/dining/menus/today",
    ]
    assert session.requests[-1][1]["X-Student-ID"] == "7"
    assert session.requests[-1][2] == 2


def test_no_candidate_answers():
    client = DiningClient(base_urls=["http://first:8001"], session=FakeSession({}))
    with pytest.raises(ExternalServiceError):
        client.get_today_menus()
