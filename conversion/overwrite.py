#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Overwrite decisions for converted files that already exist.

The arbiter owns the run-wide OverwritePolicy. While the policy is
ASK_EACH_TIME the operator is prompted for every existing destination;
an "all-yes"/"all-no" answer pins the policy for the rest of the run.
Decisions must be made one track at a time, in manifest order.
"""

import os
import sys
from enum import Enum
from typing import Callable, Optional, TextIO

from .errors import FilesystemError, InputProtocolError, OperatorExit, OperatorInputClosed
from .paths import ConversionTarget


class OverwritePolicy(Enum):
    """Run-wide overwrite setting"""
    ALWAYS_YES = "yes"
    ALWAYS_NO = "no"
    ASK_EACH_TIME = "undecided"

    @property
    def label(self) -> str:
        """Name shown in the configuration banner"""
        return {
            OverwritePolicy.ALWAYS_YES: "Yes",
            OverwritePolicy.ALWAYS_NO: "No",
            OverwritePolicy.ASK_EACH_TIME: "Undecided",
        }[self]


class OverwriteResponse(Enum):
    """Answer to a single overwrite prompt"""
    YES = "yes"
    NO = "no"
    ALL_YES = "all-yes"
    ALL_NO = "all-no"
    EXIT = "exit"


class Decision(Enum):
    PROCEED = "proceed"
    SKIP = "skip"


OVERWRITE_MENU = """
The file already exists at the file output destination.
Please select one of the following.

"yes": Overwrite the file.
"no": Skip the file without overwriting it.
"all-yes": Overwrite all remaining files.
"all-no": Skip without overwriting for all remaining files.
"exit": Exit this program."""

INPUT_PROMPT = "\nPlease input: "

INVALID_CHOICE = (
    'Please choose one of the following options: '
    '{"yes", "no", "all-yes", "all-no", "exit"}.'
)


def parse_response(text: str) -> OverwriteResponse:
    """
    Match one line of operator input against the literal response tokens.

    Raises:
        InputProtocolError: for anything other than yes/no/all-yes/all-no/exit
    """
    try:
        return OverwriteResponse(text.strip())
    except ValueError:
        raise InputProtocolError(text) from None


class ConsolePrompt:
    """
    Line-oriented overwrite prompt.

    Prints the menu once, then reads lines until a recognised response is
    given. Input and output streams are injectable for testing.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout

    def __call__(self) -> OverwriteResponse:
        stdin = self.stdin or sys.stdin
        stdout = self.stdout or sys.stdout

        print(OVERWRITE_MENU, file=stdout)

        while True:
            stdout.write(INPUT_PROMPT)
            stdout.flush()

            line = stdin.readline()
            if not line:
                raise OperatorInputClosed("Input closed while waiting for an overwrite choice.")

            try:
                return parse_response(line)
            except InputProtocolError:
                print(INVALID_CHOICE, file=stdout)


def destination_exists(path: str) -> bool:
    """
    Check whether a converted file is already present.

    Only "not found" counts as absent; any other OS error is raised.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise FilesystemError(f"Failed to check {path}: {e}") from e
    return True


class OverwriteArbiter:
    """
    Decides whether each track should be converted.

    Attributes:
        policy: Current run-wide policy, mutated by all-yes/all-no answers
        prompt: Callable returning the operator's response
        exists: Callable reporting whether a destination path exists
    """

    def __init__(
        self,
        policy: OverwritePolicy = OverwritePolicy.ASK_EACH_TIME,
        prompt: Optional[Callable[[], OverwriteResponse]] = None,
        exists: Callable[[str], bool] = destination_exists
    ):
        self.policy = policy
        self.prompt = prompt or ConsolePrompt()
        self.exists = exists
        self.prompted = False

    def decide(self, target: ConversionTarget) -> Decision:
        """
        Decide PROCEED or SKIP for one track.

        Sets ``prompted`` when the operator was asked, so callers can
        re-print progress output interrupted by the menu.

        Raises:
            OperatorExit: if the operator chose "exit"
            FilesystemError: if the existence check fails
        """
        self.prompted = False

        if not self.exists(target.destination_path):
            return Decision.PROCEED

        if self.policy is OverwritePolicy.ALWAYS_YES:
            return Decision.PROCEED
        if self.policy is OverwritePolicy.ALWAYS_NO:
            return Decision.SKIP

        response = self.prompt()
        self.prompted = True

        if response is OverwriteResponse.EXIT:
            raise OperatorExit()
        if response is OverwriteResponse.ALL_YES:
            self.policy = OverwritePolicy.ALWAYS_YES
        elif response is OverwriteResponse.ALL_NO:
            self.policy = OverwritePolicy.ALWAYS_NO

        if response in (OverwriteResponse.YES, OverwriteResponse.ALL_YES):
            return Decision.PROCEED
        return Decision.SKIP
