# ABOUTME: Allows running the client with `python -m c14`
# ABOUTME: Delegates to the CLI entry point

from c14.cli import main

main()
