"""Unit tests for album assembly."""

import json

import pytest

from cloudinary_gallery.models import ConfigurationError, NormalizedItem
from cloudinary_gallery.utils.album_utils import (
    DEFAULT_COVER_OVERRIDES,
    assemble_albums,
    format_folder_name,
    load_cover_overrides,
    select_cover,
)


def make_items(count, prefix="img"):
    """Create distinct normalized items."""
    return [
        NormalizedItem(url=f"https://cdn/{prefix}{i}.jpg", original_url=f"https://cdn/{prefix}{i}.jpg")
        for i in range(count)
    ]


def test_format_folder_name():
    """Test folder name to title conversion."""
    test_cases = [
        ("2024-sol_april", "2024 Sol April"),
        ("summer", "Summer"),
        ("2025, SOL November", "2025, SOL November"),
        ("a-b_c", "A B C"),
        ("", ""),
    ]

    for folder, expected in test_cases:
        assert format_folder_name(folder) == expected


def test_select_cover_override():
    """Test that a valid override picks the cover."""
    items = make_items(3)
    assert select_cover(items, "F", {"F": 2}) is items[2]


def test_select_cover_out_of_range():
    """Test that out of range overrides fall back to the first item."""
    items = make_items(3)
    assert select_cover(items, "F", {"F": 5}) is items[0]
    assert select_cover(items, "F", {"F": -1}) is items[0]


def test_select_cover_absent_and_zero():
    """Test that a missing override and an explicit zero both give the first item."""
    items = make_items(3)
    assert select_cover(items, "F", {}) is items[0]
    assert select_cover(items, "F", {"F": 0}) is items[0]


def test_assemble_skips_empty_folders():
    """Test that only folders with items become albums."""
    items = make_items(3)
    albums = assemble_albums({"A": items, "B": []}, {})

    assert len(albums) == 1
    assert albums[0].folder == "A"
    assert albums[0].title == "A"
    assert len(albums[0].items) == 3
    assert albums[0].cover_item in albums[0].items


def test_assemble_sorts_titles_descending():
    """Test that albums are ordered by title, newest year first."""
    albums = assemble_albums(
        {
            "2023-april": make_items(1, "a"),
            "2024-april": make_items(1, "b"),
            "2022-april": make_items(1, "c"),
        },
        {},
    )

    assert [album.title for album in albums] == ["2024 April", "2023 April", "2022 April"]


def test_assemble_sort_is_not_numeric_aware():
    """Test that titles compare as plain strings."""
    albums = assemble_albums({"9": make_items(1), "10": make_items(1)}, {})
    assert [album.title for album in albums] == ["9", "10"]


def test_assemble_uses_default_covers():
    """Test that the built-in cover list applies when no overrides are given."""
    folder = "2021, SOL November"
    items = make_items(4)
    albums = assemble_albums({folder: items})

    assert DEFAULT_COVER_OVERRIDES[folder] == 2
    assert albums[0].cover_item is items[2]


def test_album_to_dict():
    """Test the album JSON shape."""
    items = make_items(2)
    album = assemble_albums({"trip": items}, {"trip": 1})[0]

    assert album.to_dict() == {
        "title": "Trip",
        "folder": "trip",
        "coverImage": {"url": "https://cdn/img1.jpg", "originalUrl": "https://cdn/img1.jpg", "isVideo": False},
        "images": [item.to_dict() for item in items],
    }


def test_load_cover_overrides(tmp_path):
    """Test reading overrides from a JSON file."""
    path = tmp_path / "covers.json"
    path.write_text(json.dumps({"trip": 3, "home": 0}), encoding="utf-8")

    assert load_cover_overrides(str(path)) == {"trip": 3, "home": 0}


@pytest.mark.parametrize("content", ["[1, 2]", '{"trip": "3"}', '{"trip": true}', "not json"])
def test_load_cover_overrides_invalid(tmp_path, content):
    """Test that malformed override files are rejected."""
    path = tmp_path / "covers.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_cover_overrides(str(path))


def test_load_cover_overrides_missing_file(tmp_path):
    """Test that a missing override file is a configuration error."""
    with pytest.raises(ConfigurationError):
        load_cover_overrides(str(tmp_path / "missing.json"))
