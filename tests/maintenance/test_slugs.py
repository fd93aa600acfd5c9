"""Tests for slug generation and category sorting."""

import json
from pathlib import Path

import pytest

from conftest import make_tool, write_primary
from tool_directory.maintenance.slugs import (
    normalize_dataset,
    slugify,
    title_sort_key,
    update_slugs,
)


@pytest.mark.parametrize(
    "title,expected",
    [
        ("ChatGPT", "chatgpt"),
        ("  Stable Diffusion XL ", "stable-diffusion-xl"),
        ("Notion AI (Beta)!", "notion-ai-beta"),
        ("--C++ -- Tools--", "c-tools"),
        ("snake_case tool", "snake_case-tool"),
        ("Café Écrit", "caf-crit"),
        ("Tab\tand\nnewline", "tab-and-newline"),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_title_sort_key_is_case_and_accent_insensitive():
    titles = ["beta", "Alpha", "Écrire", "alpha", "delta"]
    assert sorted(titles, key=title_sort_key) == ["alpha", "Alpha", "beta", "delta", "Écrire"]


def test_normalize_generates_missing_slugs_and_sorts():
    data = {
        "tools": [
            {
                "category": "Chat",
                "content": [
                    make_tool("Perplexity", "https://p.ai"),
                    make_tool("Claude", "https://c.ai", "claude"),
                    make_tool("ChatGPT", "https://o.ai", ""),
                ],
            },
            {"category": "Code", "content": [make_tool("Aider", slug="aider")]},
        ]
    }
    update = normalize_dataset(data)

    content = data["tools"][0]["content"]
    assert [t["title"] for t in content] == ["ChatGPT", "Claude", "Perplexity"]
    assert [t["slug"] for t in content] == ["chatgpt", "claude", "perplexity"]
    assert update.generated == [("Perplexity", "perplexity"), ("ChatGPT", "chatgpt")]
    assert update.sorted_categories == ["Chat"]
    assert update.modified


def test_normalize_already_tidy_dataset():
    data = {"tools": [{"category": "Chat", "content": [make_tool("A", slug="a"), make_tool("B", slug="b")]}]}
    update = normalize_dataset(data)
    assert not update.modified


def test_normalize_rejects_missing_tools():
    with pytest.raises(ValueError, match="'tools' array"):
        normalize_dataset({"categories": []})


def test_update_slugs_writes_file(data_root: Path):
    path = write_primary(data_root, {"Chat": [make_tool("Zed"), make_tool("Ärger Bot")]})

    update = update_slugs(path)

    assert update.modified
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [t["title"] for t in data["tools"][0]["content"]] == ["Ärger Bot", "Zed"]
    assert [t["slug"] for t in data["tools"][0]["content"]] == ["rger-bot", "zed"]
    # Unicode is written unescaped with two-space indentation
    text = path.read_text(encoding="utf-8")
    assert "Ärger Bot" in text
    assert '\n  "tools"' in text


def test_update_slugs_dry_run_leaves_file(data_root: Path):
    path = write_primary(data_root, {"Chat": [make_tool("B"), make_tool("A")]})
    before = path.read_text(encoding="utf-8")

    update = update_slugs(path, dry_run=True)

    assert update.modified
    assert path.read_text(encoding="utf-8") == before


def test_update_slugs_then_validate_is_stable(data_root: Path):
    path = write_primary(data_root, {"Chat": [make_tool("B"), make_tool("A")]})
    update_slugs(path)
    assert not update_slugs(path).modified


def test_update_slugs_invalid_json(data_root: Path):
    path = data_root / "tools.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to parse dataset"):
        update_slugs(path)
