import json

import click
from beartype.typing import Any, List, Optional, Tuple

from fieldlog import __version__
from fieldlog.config import LoggingConfig
from fieldlog.context import Context
from fieldlog.errors import FieldLogError
from fieldlog.logger import Logger

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])
LEVEL_CHOICES = ["error", "info", "debug"]


class Environment:
    """Per-invocation state shared by the commands."""

    def __init__(self):
        self._logger: Optional[Logger] = None

    @property
    def logger(self) -> Logger:
        if self._logger is None:
            self._logger = Logger()
        return self._logger

    @staticmethod
    def elog(msg: str, new_line=True):
        """Logs a message to stderr."""
        click.echo(msg, err=True, nl=new_line)


pass_environment = click.make_pass_decorator(Environment, ensure=True)


def parse_assignments(context: click.Context, param: click.Parameter, values) -> List[Tuple[str, str]]:
    pairs = []
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected NAME=VALUE, got '{item}'.", ctx=context, param=param)
        pairs.append((name, value))
    return pairs


def decode_value(value: str, json_values: bool) -> Any:
    if not json_values:
        return value
    try:
        return json.loads(value)
    except ValueError:
        return value


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, prog_name="fieldlog")
def cli():
    """Emit structured log records configured from the environment"""


@cli.command()
@click.argument("message")
@click.option("-l", "--level", type=click.Choice(LEVEL_CHOICES), default="info", show_default=True, help="Severity.")
@click.option(
    "-f",
    "--field",
    "fields",
    multiple=True,
    callback=parse_assignments,
    metavar="NAME=VALUE",
    help="Field to attach. Can be repeated.",
)
@click.option(
    "-s",
    "--sensitive-field",
    "sensitive_fields",
    multiple=True,
    callback=parse_assignments,
    metavar="NAME=VALUE",
    help="Field redacted outside the development environment. Can be repeated.",
)
@click.option(
    "-g",
    "--global-field",
    "global_fields",
    multiple=True,
    callback=parse_assignments,
    metavar="NAME=VALUE",
    help="Field registered on the logger before emitting. Can be repeated.",
)
@click.option("--json-values", is_flag=True, help="Decode field values as JSON when possible.")
@click.option("--error", "error_text", metavar="TEXT", help="Attach an error and report it.")
@click.option("--dsn", envvar="SENTRY_DSN", metavar="DSN", help="Enable error reporting to this Sentry DSN.")
@click.pass_context
@pass_environment
def emit(
    environment: Environment,
    context: click.Context,
    message: str,
    level: str,
    fields: List[Tuple[str, str]],
    sensitive_fields: List[Tuple[str, str]],
    global_fields: List[Tuple[str, str]],
    json_values: bool,
    error_text: Optional[str],
    dsn: Optional[str],
):
    """Emit one record with MESSAGE"""
    try:
        logger = environment.logger.enable_error_reporting(dsn)
        for name, value in global_fields:
            logger.set_global_field(name, decode_value(value, json_values))

        log_context = Context(logger)
        for name, value in fields:
            log_context.with_field(name, decode_value(value, json_values))
        for name, value in sensitive_fields:
            log_context.with_sensitive_field(name, decode_value(value, json_values))
        if error_text:
            log_context.with_error(error_text)

        getattr(log_context, level)(message)
    except FieldLogError as e:
        environment.elog(f"Error: {e}")
        context.exit(1)


@cli.command()
@click.pass_context
@pass_environment
def config(environment: Environment, context: click.Context):
    """Show the configuration derived from the environment"""
    logging_config = LoggingConfig.from_env()
    click.echo(json.dumps(logging_config.describe(), indent=2))

    is_valid, error_message = logging_config.validate()
    if not is_valid:
        environment.elog(f"Error: {error_message}")
        context.exit(1)
