#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Path resolution for a single track conversion.
Maps an album's source/destination roots and a track basename to the
source file and the converted file with its new extension.
"""

import os
from dataclasses import dataclass

from .errors import PathError


def _as_text(path: str) -> str:
    """Return path unchanged if it can be encoded as UTF-8, else raise PathError"""
    try:
        path.encode('utf-8')
    except UnicodeEncodeError as e:
        raise PathError(f"Path is not valid Unicode: {path!r}") from e
    return path


def replace_extension(path: str, extension: str) -> str:
    """
    Replace the extension of the final path segment.

    The extension is the text after the last '.' of the file name. A file
    name whose only dot is the leading one (".hidden") has no extension.
    An empty extension strips the existing one.
    """
    head, name = os.path.split(path)
    dot = name.rfind('.')
    stem = name[:dot] if dot > 0 else name
    if extension:
        stem = f"{stem}.{extension}"
    return os.path.join(head, stem) if head else stem


@dataclass(frozen=True)
class ConversionTarget:
    """Paths involved in converting one track"""
    source_root: str
    destination_root: str
    source_basename: str
    destination_extension: str

    def __post_init__(self):
        _as_text(self.source_path)
        _as_text(self.destination_path)

    @property
    def source_path(self) -> str:
        return os.path.join(self.source_root, self.source_basename)

    @property
    def destination_path(self) -> str:
        joined = os.path.join(self.destination_root, self.source_basename)
        return replace_extension(joined, self.destination_extension)

    @property
    def source_name(self) -> str:
        """Final segment of the source path, used for progress output"""
        return os.path.basename(self.source_path)

    @property
    def destination_name(self) -> str:
        return os.path.basename(self.destination_path)


def resolve(
    source_root: str,
    destination_root: str,
    basename: str,
    dest_extension: str
) -> ConversionTarget:
    """
    Build a ConversionTarget and check both derived paths are valid text.

    Raises:
        PathError: if either path contains characters that cannot be encoded
    """
    return ConversionTarget(source_root, destination_root, basename, dest_extension)
