import sys

from t9dict.cli import main

if __name__ == "__main__":
    sys.exit(main())
