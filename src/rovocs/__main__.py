"""Entry point for `python -m rovocs`."""

from rovocs.cli import main

if __name__ == "__main__":
    main()
