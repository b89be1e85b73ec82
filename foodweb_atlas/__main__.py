import sys

from foodweb_atlas.cli import main

sys.exit(main())
