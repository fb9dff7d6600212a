import sys

from version_settings.main import main

if __name__ == "__main__":
    sys.exit(main())
