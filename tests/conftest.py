"""Shared fixtures for the annotator tests."""

from __future__ import annotations

import json

import pytest

from annotator.config import AnnotatorConfig
from models.result import Strategy
from parsing.tag_scanner import TagScanner


@pytest.fixture(params=[Strategy.TREE, Strategy.TAG_SCANNER], ids=["tree", "tag_scanner"])
def config(request) -> AnnotatorConfig:
    """An ``AnnotatorConfig`` for each strategy."""
    return AnnotatorConfig(strategy=request.param)


def _validate_processed_blocks(
    processed: str, expected_blocks: list[dict], process_name: str = ""
) -> None:
    """Check tags and block attributes rather than exact output bytes.

    Each expected block gives its root ``tag``, block ``name``, the
    ``attributes`` its ``data-wp-block`` JSON must contain, and the
    ``inner_tags`` that follow the root in document order.
    """
    scanner = TagScanner(processed)

    for block in expected_blocks:
        assert scanner.next_tag(), f"{process_name} | Expected tag {block['tag']}, none found."
        assert scanner.get_tag() == block["tag"], process_name
        assert scanner.get_attribute("data-wp-block-name") == block["name"], process_name

        raw = scanner.get_attribute("data-wp-block")
        assert isinstance(raw, str), f"{process_name} | Missing data-wp-block."
        parsed = json.loads(raw)
        for key, value in block["attributes"].items():
            assert key in parsed, f"{process_name} | Expected attribute {key}."
            assert parsed[key] == value, process_name

        for inner_tag in block["inner_tags"]:
            assert scanner.next_tag(), process_name
            assert scanner.get_tag() == inner_tag, process_name
            assert scanner.get_attribute("data-wp-block-name") is None, process_name

    assert not scanner.next_tag(), f"{process_name} | No more tags expected."


@pytest.fixture
def validate_blocks():
    return _validate_processed_blocks
