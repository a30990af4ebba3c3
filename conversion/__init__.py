# Conversion Core
# Path resolution, overwrite decisions and transcoder command assembly

from .errors import (
    ConversionError,
    ConfigurationError,
    PathError,
    ManifestError,
    FilesystemError,
    ExternalToolError,
    InputProtocolError,
    OperatorInputClosed,
    OperatorExit,
)
from .paths import ConversionTarget, resolve
from .overwrite import (
    OverwritePolicy,
    OverwriteResponse,
    Decision,
    ConsolePrompt,
    OverwriteArbiter,
    destination_exists,
)
from .commands import DEFAULT_TOOL, merge_metadata, build_plain, build_with_art, build_invocation

__all__ = [
    'ConversionError',
    'ConfigurationError',
    'PathError',
    'ManifestError',
    'FilesystemError',
    'ExternalToolError',
    'InputProtocolError',
    'OperatorInputClosed',
    'OperatorExit',
    'ConversionTarget',
    'resolve',
    'OverwritePolicy',
    'OverwriteResponse',
    'Decision',
    'ConsolePrompt',
    'OverwriteArbiter',
    'destination_exists',
    'DEFAULT_TOOL',
    'merge_metadata',
    'build_plain',
    'build_with_art',
    'build_invocation',
]
