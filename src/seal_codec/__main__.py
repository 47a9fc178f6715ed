import sys

from seal_codec.cli import main

sys.exit(main())
