"""Shared pytest configuration and fixtures for tools dataset testing."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

REF = "?ref=riseofmachine.com"


def make_tool(title: str, url: Optional[str] = None, slug: Optional[str] = None) -> Dict[str, Any]:
    """Build a raw tool dict the way it appears in tools.json."""
    tool: Dict[str, Any] = {"title": title}
    if slug is not None:
        tool["slug"] = slug
    if url is not None:
        tool["url"] = url
    return tool


def write_primary(data_root: Path, categories: Dict[str, List[Any]]) -> Path:
    """Write a primary dataset with the given {category: [tools]} mapping."""
    data_root.mkdir(parents=True, exist_ok=True)
    path = data_root / "tools.json"
    payload = {"tools": [{"category": name, "content": tools} for name, tools in categories.items()]}
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def write_split(data_root: Path, name: str, body: Any) -> Path:
    """Write one split category file; ``body`` is dumped as JSON unless it is a str."""
    split_dir = data_root / "tools"
    split_dir.mkdir(parents=True, exist_ok=True)
    path = split_dir / name
    text = body if isinstance(body, str) else json.dumps(body)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Empty site data directory."""
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture
def clean_data_root(data_root: Path) -> Path:
    """Data directory whose primary and split files pass every check."""
    write_primary(
        data_root,
        {
            "Chat": [
                make_tool("ChatGPT", f"https://chat.openai.com/{REF}", "chatgpt"),
                make_tool("Claude", f"https://claude.ai/{REF}", "claude"),
            ],
            "Image": [make_tool("Midjourney", f"https://midjourney.com/{REF}", "midjourney")],
        },
    )
    write_split(data_root, "video.json", [make_tool("Runway", f"https://runwayml.com/{REF}", "runway")])
    return data_root
