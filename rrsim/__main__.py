import sys

from rrsim.main import main

sys.exit(main())
