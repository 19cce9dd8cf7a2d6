# ============================================================================
# Copyright (c) 2007 Jason Evans <jasone@canonware.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ============================================================================
"""
The lrtutor package implements the following exception classes:

  * AnyException
  * SpecError
  * GrammarSyntaxError
  * AutomatonError
  * ParsingError

Grammar validation problems are normally reported as Diagnostic values
rather than raised, and parse failures are recorded in the parse trace.
The exceptions below are reserved for the cases where a caller asked for
something that cannot be answered with data.
"""

from __future__ import annotations


# ============================================================================
# Begin exceptions.
#
class AnyException(Exception):
    """
    Top-level class for all exceptions raised within the lrtutor package.
    """


class SpecError(AnyException):
    """
    Grammar specification error.  SpecError arises when BNF text or a
    Grammar cannot be turned into an automaton.
    """


class GrammarSyntaxError(SpecError):
    """
    A line of BNF text could not be parsed.  The 0-based line number of the
    offending line is available as the line attribute.
    """

    def __init__(self, message: str, line: int) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __reduce__(self) -> tuple[type, tuple[str, int]]:
        return (type(self), (self.message, self.line))


class AutomatonError(AnyException):
    """
    Internal consistency error.  AutomatonError arises when the table
    builder cannot find a destination state that the automaton construction
    guarantees to exist.  It indicates a bug, not bad input.
    """


class ParsingError(AnyException):
    """
    Parser driver misuse, such as feeding tokens to a parser that has
    already accepted or halted.  Input that is not in the language is not
    an exception; it ends the trace with a diagnostic string.
    """


#
# End exceptions.
# ============================================================================
