"""Allow ``python -m docsrc``."""

from .cli.main import main

main()
