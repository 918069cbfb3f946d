import sys

from cascade_harvest.cli import main

if __name__ == "__main__":
    sys.exit(main())
