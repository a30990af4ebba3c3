#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Runs transcoder commands and turns failures into ExternalToolError.
"""

import subprocess
from typing import List, Optional

from conversion.errors import ExternalToolError


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode('utf-8', errors='replace')


class ProcessRunner:
    """Executes one command at a time, capturing its output"""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        """
        Run cmd and wait for it to finish.

        Raises:
            ExternalToolError: if the executable is missing, times out, or
                exits with a non-zero status
        """
        try:
            result = subprocess.run(cmd, capture_output=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise ExternalToolError(f"Failed to execute process: {cmd[0]}: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise ExternalToolError(
                f"Command timed out after {self.timeout}s: {cmd[0]}",
                stderr=_decode(e.stderr)
            ) from e
        except OSError as e:
            raise ExternalToolError(f"Failed to execute process: {cmd[0]}: {e}") from e

        if result.returncode != 0:
            stderr = _decode(result.stderr)
            raise ExternalToolError(
                f"Command execution failed.\n\n--- Error Message ---\n{stderr}",
                stderr=stderr,
                returncode=result.returncode
            )

        return result
