import typer

from styled_fmt.cli.fmt import fmt

app = typer.Typer(
    name="styled-fmt",
    help="styled-fmt: format CSS inside styled-components tagged templates.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("fmt")(fmt)


def main() -> None:
    app()
