"""CLI entrypoint: Typer app definition and command registration"""

import typer

from lantern.cli.commands import check_cmd, present_cmd, print_cmd, themes_cmd


app = typer.Typer(name="lantern", no_args_is_help=True, help="Markdown slide decks in the terminal")

app.command(name="present")(present_cmd)
app.command(name="print")(print_cmd)
app.command(name="check")(check_cmd)
app.command(name="themes")(themes_cmd)
