"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from mdblocks.config import Settings, load_config
from mdblocks.core.emit import emit_markdown, tokens_to_json, tokens_to_yaml
from mdblocks.core.models import BaseToken
from mdblocks.core.tokenize.tokenizer import tokenize_blocks
from mdblocks.core.utils.data_format import STRUCTURED_FORMATS
from mdblocks.crud.database import init_db, make_engine
from mdblocks.crud.preferences import StructuredDataPreference
from mdblocks.crud.sql_repo import SQLPreferenceRepo
from mdblocks.errors import ConfigError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and install the log handler."""
    try:
        settings = load_config(overrides=overrides)
    except ConfigError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level)
    return settings


def _read_tokens(path: str) -> list[BaseToken]:
    p = Path(path)
    if not p.is_file():
        _fail(f"File not found: {path}")
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Could not read {path}", e)
    return tokenize_blocks(text)


def _preference(session: Session) -> StructuredDataPreference:
    return StructuredDataPreference(SQLPreferenceRepo(session))


def tokenize_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to tokenize")],
    fmt: Annotated[Optional[str], typer.Option("--format", help="json or yaml")] = None,
    ):
    """Print the block token tree of a markdown file."""
    settings = _settings(overrides={"output_format": fmt})
    tokens = _read_tokens(path)
    if settings.output_format == "yaml":
        typer.echo(tokens_to_yaml(tokens), nl=False)
    else:
        typer.echo(tokens_to_json(tokens))


def roundtrip_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to re-emit")],
    ):
    """Tokenize a markdown file and print it re-emitted from its tokens."""
    _settings()
    typer.echo(emit_markdown(_read_tokens(path)))


def prefs_get_cmd():
    """Show the stored structured-data format preference."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        value = _preference(session).get()
    typer.echo(value or "(none)")


def prefs_set_cmd(
    fmt: Annotated[str, typer.Argument(help="json or yaml")],
    ):
    """Store the preferred format for auto-detected structured data."""
    if fmt not in STRUCTURED_FORMATS:
        _fail(f"Unsupported format {fmt!r}; expected one of: {', '.join(STRUCTURED_FORMATS)}")
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        preference = _preference(session)
        preference.set(fmt)
        if preference.get() != fmt:
            _fail("Could not store structured data format preference")
    typer.echo(f"Structured data format set to {fmt}")


def prefs_clear_cmd():
    """Remove the stored structured-data format preference."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        _preference(session).clear()
    typer.echo("Structured data format preference cleared")
