"""Allow ``python -m jobfit_cli``."""

from jobfit_cli.main import app

app()
