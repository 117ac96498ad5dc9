"""Allow ``python -m blockconv``."""

from blockconv.cli import app

if __name__ == "__main__":
    app()
