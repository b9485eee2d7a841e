# main.py
import sys

from pathpos.cmd.track import main

if __name__ == "__main__":
    sys.exit(main())
