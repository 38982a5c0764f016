"""
Entry point for running the portfolio CLI as a module.

Usage:
    python -m portfolio show --owner alice
    python -m portfolio --help
"""

from portfolio.app.main import main

if __name__ == "__main__":
    main()
