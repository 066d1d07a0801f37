from gitguard.cli import cli

cli()
