from goraph.cli import cli

cli()
