#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Batch conversion driver.

Walks the manifest album by album and track by track, strictly in order:
resolve paths, ask the overwrite arbiter, build the transcoder command and
run it. Any fatal error stops the whole batch.
"""

import os
import shlex
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, TextIO

from conversion.commands import DEFAULT_TOOL, build_invocation, merge_metadata
from conversion.errors import FilesystemError
from conversion.overwrite import Decision, OverwriteArbiter
from conversion.paths import resolve
from utilities.album_art import AlbumArtResolver

from .manifest import AlbumEntry
from .runner import ProcessRunner


@dataclass
class ConversionSummary:
    """Running tally of a batch"""
    converted: int = 0
    skipped: int = 0


class BatchConverter:
    """
    Converts every track listed in a manifest.

    Progress is written as "[Album]" headers followed by one
    "<file>: Converted" or "<file>: Skipped" line per track.
    """

    def __init__(
        self,
        arbiter: OverwriteArbiter,
        runner: Optional[ProcessRunner] = None,
        art: Optional[AlbumArtResolver] = None,
        extension: str = "flac",
        copy: bool = False,
        tool: str = DEFAULT_TOOL,
        dry_run: bool = False,
        stdout: Optional[TextIO] = None
    ):
        self.arbiter = arbiter
        self.runner = runner or ProcessRunner()
        self.art = art or AlbumArtResolver()
        self.extension = extension
        self.copy = copy
        self.tool = tool
        self.dry_run = dry_run
        self.stdout = stdout

    def _write(self, text: str) -> None:
        out = self.stdout or sys.stdout
        out.write(text)
        out.flush()

    def print_configuration(self, manifest_path: str) -> None:
        """Echo the effective settings before processing starts"""
        self._write(
            "[Configurations]\n"
            f"convert_data_file_pathname = {manifest_path}\n"
            f"overwrite = {self.arbiter.policy.label}\n"
            f"copy = {str(self.copy).lower()}\n"
            f"extension = {self.extension}\n"
        )

    def run(self, albums: Iterable[AlbumEntry]) -> ConversionSummary:
        """Convert all albums in order and print the final counts"""
        summary = ConversionSummary()

        for album in albums:
            self.convert_album(album, summary)

        self._write(f"\nConverted: {summary.converted}, Skipped: {summary.skipped}\n")
        return summary

    def convert_album(self, album: AlbumEntry, summary: ConversionSummary) -> None:
        self._write(f"\n[{album.name}]\n")

        if not self.dry_run:
            try:
                os.makedirs(album.destination_root, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    f"Failed to create directory: {album.destination_root}: {e}"
                ) from e

        art_path = self.art.resolve(album.art_path, dry_run=self.dry_run)

        for basename, tags in album.iter_tracks():
            metadata = merge_metadata(album.common_metadata, tags)
            if self.convert_track(album, art_path, basename, metadata):
                summary.converted += 1
            else:
                summary.skipped += 1

    def convert_track(
        self,
        album: AlbumEntry,
        art_path: Optional[str],
        basename: str,
        metadata: Dict[str, str]
    ) -> bool:
        """
        Convert one track.

        Returns:
            True if the track was converted, False if it was skipped
        """
        self._write(f"{basename}: ")

        target = resolve(album.source_root, album.destination_root, basename, self.extension)

        decision = self.arbiter.decide(target)
        if self.arbiter.prompted:
            # The menu interrupted the progress line
            self._write(f"\n{target.source_name}: ")

        if decision is Decision.SKIP:
            self._write("Skipped\n")
            return False

        cmd = build_invocation(
            target.source_path,
            target.destination_path,
            art_path,
            metadata,
            overwrite=True,
            copy_mode=self.copy,
            tool=self.tool
        )

        if self.dry_run:
            self._write(f"{shlex.join(cmd)}\n")
            return True

        self.runner.run(cmd)
        self._write("Converted\n")
        return True
