"""Allow ``python -m cheap_ruler``."""

from .cli import main

if __name__ == "__main__":
    main()
