"""Package entry point for ``python -m subtitle_engine``."""

from subtitle_engine.cli import main

if __name__ == "__main__":
    main()
