import sys

from mayan_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
