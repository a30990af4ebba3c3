#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception hierarchy for batch conversion.
Everything except InputProtocolError aborts the whole run.
"""


class ConversionError(Exception):
    """Base class for conversion failures"""


class ConfigurationError(ConversionError):
    """Invalid configuration or manifest content"""


class PathError(ConfigurationError):
    """A derived path cannot be represented as text"""


class ManifestError(ConfigurationError):
    """Manifest file is unreadable or missing required keys"""


class FilesystemError(ConversionError):
    """Existence check or directory creation failed"""


class ExternalToolError(ConversionError):
    """The transcoder could not be run or exited with a failure status"""

    def __init__(self, message: str, stderr: str = "", returncode=None):
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message)


class InputProtocolError(ConversionError):
    """Operator typed something that is not a recognised response"""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unrecognised response: {text!r}")


class OperatorInputClosed(ConversionError):
    """Operator input stream ended while a response was expected"""


class OperatorExit(Exception):
    """
    Operator chose to exit the program.
    Not a ConversionError: the run ends with status 0.
    """
