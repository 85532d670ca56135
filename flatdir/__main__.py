"""Allow ``python -m flatdir``."""

from flatdir import main

if __name__ == "__main__":
    main()
