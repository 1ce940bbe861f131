"""Tests for the HTTP surface."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

import main


@pytest.fixture
def client():
    return TestClient(main.app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_render_block(client):
    response = client.post(
        "/render-block",
        json={
            "html": '<h3 id="hello-world">Hello world</h3>',
            "block": {"blockName": "core/heading", "attrs": {"level": 3}},
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["annotated"] is True
    assert 'data-wp-block-name="core/heading"' in body["html"]


@pytest.mark.parametrize("strategy", ["tree", "tag_scanner"])
def test_render_block_strategy_override(client, strategy):
    response = client.post(
        "/render-block",
        json={
            "html": "<p>Hi</p>",
            "block": {"name": "core/paragraph", "attributes": {"dropCap": False}},
            "strategy": strategy,
        },
    )
    html = response.json()["html"]
    if strategy == "tag_scanner":
        assert 'data-wp-block="{&quot;dropCap&quot;:false}"' in html
    else:
        assert "data-wp-block='{\"dropCap\":false}'" in html


def test_render_block_fallback_returns_input(client):
    response = client.post(
        "/render-block",
        json={"html": "no markup here", "block": {"blockName": "core/paragraph"}},
    )
    assert response.status_code == 200
    assert response.json() == {"html": "no markup here", "annotated": False}


def test_render_block_rejects_extra_fields(client):
    response = client.post(
        "/render-block",
        json={"html": "<p>x</p>", "block": {}, "unexpected": 1},
    )
    assert response.status_code == 422


def test_render_block_rejects_unknown_strategy(client):
    response = client.post(
        "/render-block",
        json={"html": "<p>x</p>", "block": {}, "strategy": "dom"},
    )
    assert response.status_code == 422


def test_structured_formatter_includes_extras():
    import logging

    record = logging.LogRecord("annotator", logging.WARNING, __file__, 1, "annotation fallback", None, None)
    record.block_name = "core/heading"
    record.strategy = "tree"
    payload = json.loads(main.StructuredFormatter().format(record))
    assert payload["message"] == "annotation fallback"
    assert payload["block_name"] == "core/heading"
    assert payload["strategy"] == "tree"
    assert "reason" not in payload
