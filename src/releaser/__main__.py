from releaser.main import cli

cli()
