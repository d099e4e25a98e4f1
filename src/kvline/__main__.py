import sys

from kvline.cli import main

sys.exit(main())
