"""Allow ``python -m go_template_sh``."""

from go_template_sh.cli import main

main()
