"""
Default formatter resolution from the project's ``.rspec`` file.

The options file may contain ERB-style template tags, which are rendered
with jinja2 configured for ``<% %>`` delimiters:

    <%= EXPR %>    replaced by the value of EXPR
    <%# ... %>     comment, removed together with its content
    <% ... %>      statement block

The rendered text is read as one whitespace-separated token stream (line
breaks carry no meaning) and scanned for formatter and output declarations.
"""

import os
from enum import Enum
from pathlib import Path

from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment

from ...core.interfaces.logger import ILogger
from ...core.models.run import FormatterDirective

OPTIONS_FILE_NAME = ".rspec"
DEFAULT_FORMATTER = "progress"

_FORMAT_FLAGS = ("-f", "--format")
_OUTPUT_FLAGS = ("-o", "--out")

_TEMPLATES = SandboxedEnvironment(
    block_start_string="<%",
    block_end_string="%>",
    variable_start_string="<%=",
    variable_end_string="%>",
    comment_start_string="<%#",
    comment_end_string="%>",
    autoescape=False,
)


class _ScanState(Enum):
    SCAN = "scan"
    FORMAT_VALUE = "format_value"
    OUTPUT_VALUE = "output_value"


def _is_flag(token: str) -> bool:
    return token.startswith("-") and token != "-"


def render_options_template(text: str) -> str:
    """
    Render template tags in options file content.

    Raises:
        jinja2.TemplateError: If the template is malformed
        Exception: Whatever an expression raises while it is evaluated
    """
    return _TEMPLATES.from_string(text).render(ENV=dict(os.environ))


def scan_directives(tokens: list[str]) -> tuple[list[FormatterDirective], str | None]:
    """
    Scan a token stream for formatter and output declarations.

    An output declaration attaches to the closest preceding formatter that
    has no output yet. Outputs that precede every formatter are dropped, but
    the first output seen is returned separately for the progress fallback.
    A formatter or output flag followed by another flag has no value and
    is ignored.

    Returns:
        (directives in declaration order, first output path seen or None)
    """
    directives: list[FormatterDirective] = []
    first_output: str | None = None
    state = _ScanState.SCAN

    def add_output(path: str) -> None:
        nonlocal first_output
        if first_output is None:
            first_output = path
        if directives and directives[-1].output is None:
            directives[-1] = directives[-1].model_copy(update={"output": path})

    for token in tokens:
        if state is not _ScanState.SCAN and _is_flag(token):
            # The pending flag got no value; read this token as a flag
            state = _ScanState.SCAN

        if state is _ScanState.FORMAT_VALUE:
            directives.append(FormatterDirective(name=token))
            state = _ScanState.SCAN
        elif state is _ScanState.OUTPUT_VALUE:
            add_output(token)
            state = _ScanState.SCAN
        elif token in _FORMAT_FLAGS:
            state = _ScanState.FORMAT_VALUE
        elif token in _OUTPUT_FLAGS:
            state = _ScanState.OUTPUT_VALUE
        elif token.startswith("--format="):
            if name := token.partition("=")[2]:
                directives.append(FormatterDirective(name=name))
        elif token.startswith("--out="):
            if path := token.partition("=")[2]:
                add_output(path)
        elif token.startswith("-f") and not token.startswith("--"):
            directives.append(FormatterDirective(name=token[2:]))

    # A flag left waiting for its value at the end of the stream is ignored
    return directives, first_output


class FormatterResolver:
    """
    Resolves the formatter flags a project wants by default.

    Falls back, in order: formatters declared in ``.rspec``, then the
    progress formatter writing to the first declared output, then the bare
    progress formatter.
    """

    def __init__(self, project_root: Path | str | None = None, logger: ILogger | None = None) -> None:
        """
        Initialize resolver.

        Args:
            project_root: Directory holding ``.rspec`` (defaults to cwd at resolve time)
            logger: Logger for internal diagnostics
        """
        self._project_root = Path(project_root) if project_root is not None else None
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def options_file(self) -> Path:
        """Location of the project options file."""
        return (self._project_root or Path.cwd()) / OPTIONS_FILE_NAME

    def resolve(self) -> list[str]:
        """
        Resolve formatter flags.

        Returns:
            Flag strings such as ``-f progress`` or ``-f html -o out.html``,
            in declaration order
        """
        default = [FormatterDirective(name=DEFAULT_FORMATTER).render()]
        path = self.options_file
        if not path.is_file():
            self.logger.debug("No options file at %s, using %s", path, default)
            return default

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning("Failed to read options file %s: %s", path, e)
            return default

        try:
            rendered = render_options_template(text)
        except TemplateError as e:
            self.logger.warning("Failed to render options file %s: %s", path, e)
            return default
        except Exception as e:
            # Expressions can fail at render time with any error (1 / 0, 'a' + 1)
            self.logger.warning("Error evaluating options file %s: %s", path, e)
            return default

        directives, first_output = scan_directives(rendered.split())
        if directives:
            flags = [directive.render() for directive in directives]
        elif first_output:
            flags = [FormatterDirective(name=DEFAULT_FORMATTER, output=first_output).render()]
        else:
            flags = default

        self.logger.debug("Resolved formatters from %s: %s", path, flags)
        return flags


def resolve_formatters(project_root: Path | str | None = None) -> list[str]:
    """Resolve formatter flags for the project at ``project_root``."""
    return FormatterResolver(project_root).resolve()
