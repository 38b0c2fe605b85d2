"""Allow ``python -m tracetint``."""

from tracetint.cli import main

if __name__ == "__main__":
    main()
