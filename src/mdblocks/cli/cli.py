"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdblocks.cli.commands import prefs_clear_cmd, prefs_get_cmd, prefs_set_cmd, roundtrip_cmd, tokenize_cmd


app = typer.Typer(name="mdblocks", no_args_is_help=True, help="Markdown block tokenizer and code island tools")
prefs_app = typer.Typer(no_args_is_help=True, help="Manage the structured-data display preference")

app.command(name="tokenize")(tokenize_cmd)
app.command(name="roundtrip")(roundtrip_cmd)

prefs_app.command(name="get")(prefs_get_cmd)
prefs_app.command(name="set")(prefs_set_cmd)
prefs_app.command(name="clear")(prefs_clear_cmd)
app.add_typer(prefs_app, name="prefs")
