from winpkg.cli.main import app

app(prog_name="winpkg")
