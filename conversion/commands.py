#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Transcoder command assembly.

Builds the ffmpeg argument list for one track. Output is a plain list of
strings and is identical for identical inputs: metadata is always emitted
in ascending tag order.
"""

from typing import Dict, List, Mapping, Optional

DEFAULT_TOOL = "ffmpeg"

# Second input is the picture stream, attached as cover art
ART_STREAM_ARGS = ["-map", "0:a", "-map", "1:v", "-disposition:1", "attached_pic"]


def merge_metadata(
    common: Optional[Mapping[str, str]],
    track: Optional[Mapping[str, str]]
) -> Dict[str, str]:
    """Overlay per-track tags on the album's common tags, sorted by tag"""
    merged = dict(common or {})
    merged.update(track or {})
    return dict(sorted(merged.items()))


def _option_args(
    metadata: Mapping[str, str],
    overwrite: bool,
    copy_mode: bool
) -> List[str]:
    args = []

    if overwrite:
        args.append("-y")

    if copy_mode:
        args.extend(["-codec", "copy"])

    for tag in sorted(metadata):
        args.extend(["-metadata:g", f"{tag}={metadata[tag]}"])

    return args


def build_plain(
    source_path: str,
    destination_path: str,
    metadata: Mapping[str, str],
    overwrite: bool,
    copy_mode: bool,
    tool: str = DEFAULT_TOOL
) -> List[str]:
    """Command that converts a track and writes its metadata"""
    return (
        [tool, "-i", source_path]
        + _option_args(metadata, overwrite, copy_mode)
        + [destination_path]
    )


def build_with_art(
    source_path: str,
    destination_path: str,
    art_path: str,
    metadata: Mapping[str, str],
    overwrite: bool,
    copy_mode: bool,
    tool: str = DEFAULT_TOOL
) -> List[str]:
    """Command that converts a track, embeds album art and writes metadata"""
    return (
        [tool, "-i", source_path, "-i", art_path]
        + ART_STREAM_ARGS
        + _option_args(metadata, overwrite, copy_mode)
        + [destination_path]
    )


def build_invocation(
    source_path: str,
    destination_path: str,
    art_path: Optional[str],
    metadata: Mapping[str, str],
    overwrite: bool,
    copy_mode: bool,
    tool: str = DEFAULT_TOOL
) -> List[str]:
    """Pick the plain or album-art command depending on whether art is set"""
    if art_path is None:
        return build_plain(source_path, destination_path, metadata, overwrite, copy_mode, tool)
    return build_with_art(
        source_path, destination_path, art_path, metadata, overwrite, copy_mode, tool
    )
