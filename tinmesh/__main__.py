import sys

from tinmesh.cli import main

sys.exit(main())
