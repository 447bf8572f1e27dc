"""Entry point for running voxroute as a module: python -m voxroute"""

from voxroute.cli.commands import app

if __name__ == "__main__":
    app()
