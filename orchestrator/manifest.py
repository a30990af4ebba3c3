#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Conversion manifest loading.

A manifest maps album names to album entries:

    {
      "Album Name": {
        "original_folder_pathname": "music/src/Album",
        "converted_folder_pathname": "music/flac/Album",
        "album_art_file_pathname": "music/src/Album/cover.jpg",
        "common_metadata": {"album": "Album Name", "artist": "Someone"},
        "unique_metadata": {
          "01.wav": {"title": "First", "track": "1"}
        }
      }
    }

JSON is the default format; files ending in .yaml/.yml are read as YAML.
"""

import json
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from conversion.errors import ManifestError

DEFAULT_MANIFEST_PATH = "convert_data.json"

REQUIRED_KEYS = (
    'original_folder_pathname',
    'converted_folder_pathname',
    'unique_metadata',
)


@dataclass
class AlbumEntry:
    """One album from the manifest"""
    name: str
    source_root: str
    destination_root: str
    art_path: Optional[str] = None
    common_metadata: Dict[str, str] = field(default_factory=dict)
    tracks: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def iter_tracks(self) -> Iterator[Tuple[str, Dict[str, str]]]:
        """Yield (basename, track metadata) sorted by basename"""
        for basename in sorted(self.tracks):
            yield basename, self.tracks[basename]


def _tag_map(value: Any, where: str) -> Dict[str, str]:
    """Validate a tag -> value mapping, stringifying numeric values"""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(f"{where}: expected a mapping of tag to value")

    tags = {}
    for tag, data in value.items():
        if isinstance(data, bool) or not isinstance(data, (str, int, float)):
            raise ManifestError(f"{where}: value for tag '{tag}' must be text")
        tags[str(tag)] = str(data)
    return tags


def parse_album(name: str, data: Any) -> AlbumEntry:
    """Build an AlbumEntry from its raw manifest mapping"""
    if not isinstance(data, dict):
        raise ManifestError(f"[{name}]: album entry must be a mapping")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ManifestError(f"[{name}]: missing required keys: {', '.join(missing)}")

    tracks_raw = data['unique_metadata']
    if not isinstance(tracks_raw, dict):
        raise ManifestError(f"[{name}]: unique_metadata must map file names to tags")

    for key in ('original_folder_pathname', 'converted_folder_pathname'):
        if not isinstance(data[key], str):
            raise ManifestError(f"[{name}]: {key} must be a path string")

    art_path = data.get('album_art_file_pathname')
    if art_path is not None and not isinstance(art_path, str):
        raise ManifestError(f"[{name}]: album_art_file_pathname must be a path string")

    return AlbumEntry(
        name=name,
        source_root=data['original_folder_pathname'],
        destination_root=data['converted_folder_pathname'],
        art_path=art_path,
        common_metadata=_tag_map(data.get('common_metadata'), f"[{name}] common_metadata"),
        tracks={
            str(basename): _tag_map(tags, f"[{name}] {basename}")
            for basename, tags in tracks_raw.items()
        },
    )


def parse_manifest(data: Any) -> List[AlbumEntry]:
    """Convert a decoded manifest into AlbumEntry objects sorted by album name"""
    if not isinstance(data, dict):
        raise ManifestError("Manifest must map album names to album entries")
    return [parse_album(str(name), data[name]) for name in sorted(data, key=str)]


def load_manifest(path: str = DEFAULT_MANIFEST_PATH) -> List[AlbumEntry]:
    """
    Read and parse a manifest file.

    Raises:
        ManifestError: if the file cannot be opened or decoded, or its
            structure does not match the expected shape
    """
    manifest_path = Path(path)

    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            if manifest_path.suffix.lower() in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as e:
        raise ManifestError(f"Failed to open file: {manifest_path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ManifestError(f"Failed to deserialize {manifest_path}: {e}") from e

    return parse_manifest(data)
