from pgbootstrap.cli import cli

cli()
