from library_catalog.main import cli

cli()
