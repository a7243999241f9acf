from autorelease.cli import app

app(prog_name="autorelease")
