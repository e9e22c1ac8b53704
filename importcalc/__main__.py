import sys

from importcalc.main import main

sys.exit(main())
