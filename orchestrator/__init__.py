# Batch Conversion Orchestration
# Configuration, manifest loading and the per-track conversion loop

from .config import ConfigManager
from .manifest import AlbumEntry, load_manifest, parse_manifest
from .runner import ProcessRunner
from .batch import BatchConverter, ConversionSummary

__all__ = [
    'ConfigManager',
    'AlbumEntry',
    'load_manifest',
    'parse_manifest',
    'ProcessRunner',
    'BatchConverter',
    'ConversionSummary'
]
