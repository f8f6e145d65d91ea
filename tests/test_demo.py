import json
import logging
from types import SimpleNamespace

import numpy as np
import requests

from numorder import NumberSequence, demo, style
from numorder.config import DemoConfig
from numorder.demo import run_demo

POSTS = [
    {"userId": 1, "id": 1, "title": "first title", "body": "first body"},
    {"userId": 1, "id": 2, "title": "second title", "body": "second body"},
    {"userId": 2, "id": 3, "title": "third title", "body": "third body"},
]


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.urls = []

    def get(self, url):
        self.urls.append(url)
        return self.response


def _logger(caplog):
    caplog.set_level(logging.INFO, logger="tests.demo")
    return logging.getLogger("tests.demo")


def _messages(caplog):
    return [r.getMessage() for r in caplog.records]


def test_full_demo_with_posts(caplog):
    client = FakeClient({"status": "200 OK", "text": json.dumps(POSTS)})
    cfg = DemoConfig(url="http://posts.test/", count=5000, seed=11)

    result = run_demo(cfg, np.random.default_rng(cfg.seed), client=client, log=_logger(caplog))

    assert client.urls == ["http://posts.test/"]
    assert result.status == "200 OK"
    assert result.error is None
    assert result.posts == 3
    assert result.count == 5000
    assert result.descending is True
    messages = _messages(caplog)
    assert messages[0] == "Running demo..."
    assert "Got 200 OK!" in messages
    assert "Got 3 posts!" in messages
    assert style.red("This is red!") in messages
    assert style.underline("This is underlined!") in messages
    assert style.reverse("This is reversed!") in messages
    assert style.red("second title") in messages
    assert style.blue("third body") in messages
    assert style.green(1) in messages
    assert messages[-1] == "Done!"
    assert messages.index("Sorting...") < messages.index("Reversing...")


def test_max_posts_limits_listing(caplog):
    client = FakeClient({"status": "200 OK", "text": json.dumps(POSTS)})
    cfg = DemoConfig(count=10, max_posts=1)

    result = run_demo(cfg, np.random.default_rng(0), client=client, log=_logger(caplog))

    messages = _messages(caplog)
    assert result.posts == 3
    assert style.red("first title") in messages
    assert style.red("second title") not in messages


def test_http_error_still_sorts(caplog):
    client = FakeClient({"error": "503 Service Unavailable"})
    cfg = DemoConfig(count=100)

    result = run_demo(cfg, np.random.default_rng(0), client=client, log=_logger(caplog))

    assert result.error == "503 Service Unavailable"
    assert result.posts == 0
    assert result.descending is True
    assert any("503" in m for m in _messages(caplog))


def test_undecodable_body(caplog):
    client = FakeClient({"status": "200 OK", "text": "<html>"})

    result = run_demo(DemoConfig(count=10), np.random.default_rng(0), client=client, log=_logger(caplog))

    assert result.error.startswith("invalid JSON")
    assert result.posts == 0


def test_skip_http_never_calls_client(caplog):
    client = FakeClient({"status": "200 OK", "text": "[]"})
    cfg = DemoConfig(count=0, skip_http=True)

    result = run_demo(cfg, np.random.default_rng(0), client=client, log=_logger(caplog))

    assert client.urls == []
    assert result.status is None
    assert result.count == 0
    assert result.descending is True


def test_same_seed_generates_same_numbers(caplog, monkeypatch):
    generated = []
    original = NumberSequence.random

    def capture(n, rng):
        seq = original(n, rng)
        generated.append(seq.values.copy())
        return seq

    monkeypatch.setattr(demo.NumberSequence, "random", capture)
    cfg = DemoConfig(count=1000, skip_http=True)
    log = _logger(caplog)

    a = run_demo(cfg, np.random.default_rng(5), log=log)
    b = run_demo(cfg, np.random.default_rng(5), log=log)
    c = run_demo(cfg, np.random.default_rng(6), log=log)

    assert a.count == b.count == c.count == 1000
    assert a.descending and b.descending and c.descending
    assert np.array_equal(generated[0], generated[1])
    assert not np.array_equal(generated[0], generated[2])


def test_owned_client_session_is_closed(caplog, monkeypatch):
    sessions = []

    class RecordingSession:
        def __init__(self):
            self.closed = False
            sessions.append(self)

        def get(self, url, headers=None, timeout=None):
            return SimpleNamespace(
                status_code=200, reason="OK", text=json.dumps(POSTS), headers={"Content-Type": "application/json"}
            )

        def close(self):
            self.closed = True

    monkeypatch.setattr(requests, "Session", RecordingSession)

    result = run_demo(DemoConfig(count=10), np.random.default_rng(0), log=_logger(caplog))

    assert result.posts == 3
    assert len(sessions) == 1
    assert sessions[0].closed is True
