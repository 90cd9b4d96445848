"""
Command-line interface for gott.

Usage:
    gott [-f TEMPLATE] [-o OUTPUT] [-d NAME[:TYPE[:TYPE]]=VALUE ...]
    gott -v

Examples:
    gott -f page.j2 -o page.html -d title="Release notes"
    gott -d 'config:json:file=/etc/config.json' < app.conf.j2
    echo '{% if IsRelease %}RELEASE{% else %}DEBUG{% endif %}' | gott -d 'IsRelease:bool:env=IS_RELEASE'
"""
import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

import structlog

from . import __version__
from .casters import CASTER_DESCRIPTIONS
from .context import build_context
from .core import GottError
from .factory import build_default_renderer
from .streams import STDIO, read_template, write_output

logger = structlog.get_logger()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _epilog() -> str:
    lines = ["Variable types:"]
    for name, description in sorted(CASTER_DESCRIPTIONS.items()):
        lines.append(f"  {name:<8}- {description}")
    lines += [
        "",
        "Variable definition examples:",
        "  -d 'name=John'                          define string \"name\" as \"John\"",
        "  -d 'debug:bool=false'                   define boolean \"debug\" as false",
        "  -d 'config:json:file=/etc/config.json'  read the file, parse it as json, bind to \"config\"",
        "  -d 'IsRelease:bool:env=IS_RELEASE'      read $IS_RELEASE, parse it as bool, bind to \"IsRelease\"",
        "  -d 'a=1' -d 'b=2'                       define multiple variables",
        "",
        "  Read types right to left: NAME:A:B=VALUE applies B to VALUE, then A, then binds NAME.",
        "  Variables are top-level template names, e.g. {% if IsRelease %}RELEASE{% else %}DEBUG{% endif %}",
    ]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gott",
        description="Render a Jinja2 template with typed variables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_epilog(),
    )

    parser.add_argument("-d", dest="definitions", action="append", default=[],
                        metavar="DEFINITION",
                        help="Define a variable: NAME[:TYPE[:TYPE]]=VALUE (repeatable)")
    parser.add_argument("-f", dest="input", default=STDIO, metavar="PATH",
                        help="Template file, or - for stdin (default: -)")
    parser.add_argument("-o", dest="output", default=STDIO, metavar="PATH",
                        help="Output file, or - for stdout (default: -)")
    parser.add_argument("-v", dest="version", action="store_true",
                        help="Print the version and exit")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on undefined template variables")
    parser.add_argument("--trim-blocks", action="store_true",
                        help="Remove the first newline after a block tag")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS,
                        help="Diagnostics written to stderr (default: WARNING)")

    return parser


def configure_logging(level: str, stream: Optional[TextIO] = None) -> None:
    """Route structlog output to stderr, filtered at *level*."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream if stream is not None else sys.stderr),
        cache_logger_on_first_use=False,
    )


def run_cli(args: Sequence[str], stdin=None, stdout=None, stderr: Optional[TextIO] = None) -> int:
    """Run the CLI with given arguments. Returns exit code.

    *stdin*/*stdout* are binary streams used for ``-``; *stderr* is a text
    stream receiving error messages and logs.
    """
    err = stderr if stderr is not None else sys.stderr
    opts = build_parser().parse_args(list(args))

    if opts.version:
        out = stdout if stdout is not None else sys.stdout.buffer
        out.write(f"{__version__}\n".encode("utf-8"))
        out.flush()
        return 0

    configure_logging(opts.log_level, err)

    try:
        renderer = build_default_renderer(
            strict_undefined=opts.strict,
            trim_blocks=opts.trim_blocks,
        )
        text = read_template(opts.input, stdin)
        template = renderer.compile(text, opts.input)
        context = build_context(opts.definitions, renderer.casters)
        rendered = renderer.execute(template, context, opts.input)
        write_output(opts.output, rendered, stdout)
    except GottError as e:
        logger.debug("cli.failed", error_type=type(e).__name__)
        message = " ".join(str(e).splitlines())
        print(f"gott: {message}", file=err)
        return 1

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_cli(sys.argv[1:] if argv is None else argv)
