"""Tests for manifest loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from conversion.errors import ConfigurationError, ManifestError
from orchestrator.manifest import load_manifest, parse_manifest

ALBUM = {
    "original_folder_pathname": "src/Album",
    "converted_folder_pathname": "out/Album",
    "album_art_file_pathname": "src/Album/cover.jpg",
    "common_metadata": {"artist": "X", "album": "Album"},
    "unique_metadata": {
        "02.wav": {"title": "Second", "track": 2},
        "01.wav": {"title": "First", "track": 1},
    },
}


def test_load_json_manifest(write_manifest) -> None:
    albums = load_manifest(str(write_manifest({"Album": ALBUM})))

    assert len(albums) == 1
    album = albums[0]
    assert album.name == "Album"
    assert album.source_root == "src/Album"
    assert album.destination_root == "out/Album"
    assert album.art_path == "src/Album/cover.jpg"
    assert album.common_metadata == {"artist": "X", "album": "Album"}
    assert list(album.iter_tracks()) == [
        ("01.wav", {"title": "First", "track": "1"}),
        ("02.wav", {"title": "Second", "track": "2"}),
    ]


def test_optional_keys_default(write_manifest) -> None:
    data = {
        "Album": {
            "original_folder_pathname": "src",
            "converted_folder_pathname": "out",
            "unique_metadata": {"a.mp3": {}},
        }
    }
    album = load_manifest(str(write_manifest(data)))[0]
    assert album.art_path is None
    assert album.common_metadata == {}
    assert album.tracks == {"a.mp3": {}}


def test_albums_are_sorted_by_name() -> None:
    albums = parse_manifest({"b": ALBUM, "a": ALBUM, "C": ALBUM})
    assert [album.name for album in albums] == ["C", "a", "b"]


def test_load_yaml_manifest(tmp_path: Path) -> None:
    path = tmp_path / "convert_data.yaml"
    path.write_text(
        "Album:\n"
        "  original_folder_pathname: src\n"
        "  converted_folder_pathname: out\n"
        "  common_metadata:\n"
        "    date: 1999\n"
        "  unique_metadata:\n"
        "    a.mp3:\n"
        "      title: A\n",
        encoding="utf-8",
    )
    album = load_manifest(str(path))[0]
    assert album.common_metadata == {"date": "1999"}
    assert album.tracks == {"a.mp3": {"title": "A"}}


def test_missing_required_key_is_reported(write_manifest) -> None:
    data = {"Album": {"original_folder_pathname": "src", "unique_metadata": {}}}
    with pytest.raises(ManifestError, match="converted_folder_pathname"):
        load_manifest(str(write_manifest(data)))


@pytest.mark.parametrize("value", [True, None, ["x"], {"nested": "x"}])
def test_non_text_tag_values_are_rejected(value) -> None:
    data = {
        "Album": {
            "original_folder_pathname": "src",
            "converted_folder_pathname": "out",
            "unique_metadata": {"a.mp3": {"title": value}},
        }
    }
    with pytest.raises(ManifestError):
        parse_manifest(data)


def test_top_level_must_be_mapping() -> None:
    with pytest.raises(ManifestError):
        parse_manifest(["not", "a", "mapping"])


def test_invalid_json_is_manifest_error(tmp_path: Path) -> None:
    path = tmp_path / "convert_data.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestError, match="Failed to deserialize"):
        load_manifest(str(path))


def test_missing_file_is_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Failed to open file"):
        load_manifest(str(tmp_path / "nope.json"))


@pytest.mark.parametrize(
    "key", ["original_folder_pathname", "converted_folder_pathname", "album_art_file_pathname"]
)
@pytest.mark.parametrize("value", [None, 42, ["src"]])
def test_folder_values_must_be_strings(key: str, value) -> None:
    album = dict(ALBUM)
    album[key] = value
    if key == "album_art_file_pathname" and value is None:
        assert parse_manifest({"Album": album})[0].art_path is None
        return
    with pytest.raises(ManifestError, match=key):
        parse_manifest({"Album": album})


def test_null_folder_in_json_is_rejected(write_manifest) -> None:
    album = dict(ALBUM, original_folder_pathname=None)
    with pytest.raises(ManifestError, match="original_folder_pathname must be a path string"):
        load_manifest(str(write_manifest({"Album": album})))
