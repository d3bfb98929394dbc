from replaycalc.cli import app

app()
