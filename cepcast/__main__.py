import sys

from cepcast.cli import main

sys.exit(main())
