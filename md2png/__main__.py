import sys

from md2png.cli import main

sys.exit(main())
