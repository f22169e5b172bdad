"""Allow running the package as ``python -m topoengine``."""

from topoengine.cli import main

if __name__ == "__main__":
    main()
