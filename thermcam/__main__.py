import sys

from thermcam.cli import main

sys.exit(main())
