"""Allow running axcess as ``python -m axcess``."""

from axcess import main

if __name__ == "__main__":
    main()
