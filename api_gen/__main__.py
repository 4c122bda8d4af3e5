import sys

from api_gen.cli import main

sys.exit(main())
