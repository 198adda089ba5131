"""Allow running as ``python -m cmdloader``."""

from cmdloader.cli import main

if __name__ == "__main__":
    main()
