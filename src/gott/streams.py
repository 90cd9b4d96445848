"""Template input and rendered output.

``-`` stands for stdin (input) or stdout (output); anything else is a path.
Streams passed in for ``-`` must be binary (``sys.stdin.buffer`` /
``sys.stdout.buffer``).
"""

from __future__ import annotations

import sys
from typing import BinaryIO, Optional

import structlog

from .core import OutputError, TemplateInputError

STDIO = "-"

logger = structlog.get_logger()


def read_template(source: str, stdin: Optional[BinaryIO] = None) -> str:
    """Read the whole template and decode it as strict UTF-8."""
    try:
        if source == STDIO:
            data = (stdin if stdin is not None else sys.stdin.buffer).read()
        else:
            with open(source, "rb") as fh:
                data = fh.read()
    except OSError as e:
        where = "stdin" if source == STDIO else f"file {source!r}"
        raise TemplateInputError(source, f"error reading template from {where}: {e}") from e

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TemplateInputError(source, f"template file {source!r} contains invalid utf-8") from e

    logger.debug("template.loaded", source=source, size=len(data))
    return text


def write_output(destination: str, text: str, stdout: Optional[BinaryIO] = None) -> None:
    """Write *text* as UTF-8, creating or truncating *destination*."""
    # Arguments and environment values decoded with surrogateescape round-trip
    # to their original bytes.
    data = text.encode("utf-8", errors="surrogateescape")
    try:
        if destination == STDIO:
            out = stdout if stdout is not None else sys.stdout.buffer
            out.write(data)
            out.flush()
        else:
            with open(destination, "wb") as fh:
                fh.write(data)
    except OSError as e:
        raise OutputError(destination, f"failed writing output {destination!r}: {e}") from e

    logger.debug("output.written", destination=destination, size=len(data))
