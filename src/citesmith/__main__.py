"""Allow ``python -m citesmith``."""

from citesmith.ui.cli import main


main()
