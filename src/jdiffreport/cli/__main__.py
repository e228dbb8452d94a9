from jdiffreport.cli.main import cli

cli()
