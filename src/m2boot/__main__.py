from m2boot.cli import cli

cli()
