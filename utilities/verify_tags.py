"""
Tag Verifier - Check converted files against the manifest

For every track in the manifest, opens the converted file and compares
its tags with the merged album/track metadata.

Detects:
- Converted files that do not exist yet
- Files mutagen cannot read
- Tags that are missing or hold a different value
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

import mutagen

from conversion.commands import merge_metadata
from conversion.overwrite import destination_exists
from conversion.paths import resolve
from orchestrator.manifest import AlbumEntry


class IssueType(Enum):
    MISSING_FILE = "missing_file"
    UNREADABLE = "unreadable"
    MISSING_TAG = "missing_tag"
    MISMATCH = "mismatch"


@dataclass
class TagIssue:
    album: str
    path: str
    issue_type: IssueType
    tag: Optional[str] = None
    expected: Optional[str] = None
    actual: Optional[str] = None

    def describe(self) -> str:
        if self.issue_type is IssueType.MISSING_FILE:
            return f"{self.path}: not converted"
        if self.issue_type is IssueType.UNREADABLE:
            return f"{self.path}: unreadable ({self.actual})"
        if self.issue_type is IssueType.MISSING_TAG:
            return f"{self.path}: missing tag '{self.tag}' (expected '{self.expected}')"
        return f"{self.path}: tag '{self.tag}' is '{self.actual}', expected '{self.expected}'"


def read_tags(path: str) -> Dict[str, str]:
    """Read tags with lower-cased names, keeping the first value of each"""
    audio = mutagen.File(path, easy=True)
    if audio is None:
        raise ValueError("unsupported format")

    tags = {}
    for key, value in (audio.tags or {}).items():
        if isinstance(value, list):
            value = value[0] if value else ''
        tags[key.lower()] = str(value)
    return tags


class TagVerifier:
    """Compare converted files with the metadata they should carry."""

    def __init__(self, extension: str = "flac"):
        self.extension = extension
        self.issues: List[TagIssue] = []
        self.checked = 0

    def check_track(self, album: AlbumEntry, basename: str, metadata: Dict[str, str]) -> List[TagIssue]:
        target = resolve(album.source_root, album.destination_root, basename, self.extension)
        path = target.destination_path

        if not destination_exists(path):
            return [TagIssue(album.name, path, IssueType.MISSING_FILE)]

        try:
            tags = read_tags(path)
        except Exception as e:
            return [TagIssue(album.name, path, IssueType.UNREADABLE, actual=str(e))]

        issues = []
        for tag, expected in metadata.items():
            actual = tags.get(tag.lower())
            if actual is None:
                issues.append(TagIssue(album.name, path, IssueType.MISSING_TAG, tag, expected))
            elif actual != expected:
                issues.append(TagIssue(album.name, path, IssueType.MISMATCH, tag, expected, actual))
        return issues

    def verify(self, albums: Iterable[AlbumEntry]) -> List[TagIssue]:
        """Check every track and print a per-album report"""
        self.issues = []
        self.checked = 0

        for album in albums:
            print(f"\n[{album.name}]")
            for basename, tags in album.iter_tracks():
                metadata = merge_metadata(album.common_metadata, tags)
                found = self.check_track(album, basename, metadata)
                self.checked += 1
                if found:
                    for issue in found:
                        print(f"  [ISSUE] {issue.describe()}")
                else:
                    print(f"  [OK] {basename}")
                self.issues.extend(found)

        return self.issues
