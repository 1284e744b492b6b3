"""Allow ``python -m dwgraph``."""

from dwgraph.cli import main

if __name__ == "__main__":
    main()
