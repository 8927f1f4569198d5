"""Tests for repository id generation."""

import pytest

from rulem.core.repository_id import generate_repository_id, slugify_name, unique_repository_id


@pytest.mark.parametrize(
    ("name", "slug"),
    [
        ("My Rules", "my-rules"),
        ("  __Team/Rules v2__ ", "team-rules-v2"),
        ("***", "repo"),
        ("Ünïcode", "n-code"),
    ],
)
def test_slugify_name(name: str, slug: str) -> None:
    assert slugify_name(name) == slug


def test_generate_repository_id_appends_timestamp() -> None:
    assert generate_repository_id("My Rules", 1705329000) == "my-rules-1705329000"


def test_unique_repository_id_keeps_free_id() -> None:
    assert unique_repository_id("My Rules", 100, {"other-100"}) == "my-rules-100"


def test_unique_repository_id_bumps_suffix_on_collision() -> None:
    existing = {"my-rules-100", "my-rules-101"}
    assert unique_repository_id("My Rules", 100, existing) == "my-rules-102"


def test_names_differing_only_in_punctuation_get_distinct_ids() -> None:
    first = unique_repository_id("My Rules", 100, set())
    second = unique_repository_id("my-rules", 100, {first})
    assert first != second
